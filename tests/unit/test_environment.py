# encoding: utf-8
"""test_environment.py

Unit tests for bofh.environment modules
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from bofh.environment import APPLICATION, Environment, getenv, parsing
from bofh.environment.base import _find_envfile
from bofh.environment.config import ConfigSection, option


class TestConfigOption:
    """Test the ConfigOption descriptor"""

    def test_default(self) -> None:
        """Test the default is returned until a value is set"""

        class TestSection(ConfigSection):
            _section_name = 'test'
            value: int = option(5, 'test option')

        section = TestSection()
        assert section.value == 5
        section.value = 6
        assert section.value == 6
        section.reset()
        assert section.value == 5

    def test_dict_access(self) -> None:
        """Test dashes and underscores both work as keys"""

        class TestSection(ConfigSection):
            _section_name = 'test'
            test_key: str = option('value', 'test option')

        section = TestSection()
        assert section['test-key'] == 'value'
        section['test_key'] = 'other'
        assert section.test_key == 'other'
        assert 'test-key' in section
        assert list(section) == ['test_key']

    def test_parse_by_default_type(self) -> None:
        """Test values are parsed after the type of the default"""

        class TestSection(ConfigSection):
            _section_name = 'test'
            flag: bool = option(False, 'a boolean')
            count: int = option(0, 'a number')
            name: str = option('', 'a string')

        options = TestSection.options()
        assert options['flag'].parse('yes') is True
        assert options['count'].parse('12') == 12
        assert options['name'].parse("'quoted'") == 'quoted'

    def test_format(self) -> None:
        """Test values are written back in INI form"""

        class TestSection(ConfigSection):
            _section_name = 'test'
            flag: bool = option(False, 'a boolean')
            name: str = option('', 'a string')

        options = TestSection.options()
        assert options['flag'].format(True) == 'true'
        assert options['name'].format('bofh> ') == "'bofh> '"


class TestParsing:
    """Test the value readers"""

    @pytest.mark.parametrize('value', ['true', 'TRUE', 'yes', 'on', 'enable', '1'])
    def test_boolean_true(self, value: str) -> None:
        assert parsing.boolean(value) is True

    @pytest.mark.parametrize('value', ['false', 'no', 'off', 'disable', '0'])
    def test_boolean_false(self, value: str) -> None:
        assert parsing.boolean(value) is False

    def test_boolean_other(self) -> None:
        assert parsing.boolean('maybe') is False

    def test_url(self) -> None:
        assert parsing.url('"https://bofh.example.org:8000/"') == 'https://bofh.example.org:8000/'
        with pytest.raises(TypeError):
            parsing.url('ftp://bofh.example.org/')
        with pytest.raises(TypeError):
            parsing.url('bofh.example.org')

    def test_positive(self) -> None:
        assert parsing.positive('0') == 0
        assert parsing.positive('30') == 30
        with pytest.raises(TypeError):
            parsing.positive('-1')
        with pytest.raises(ValueError):
            parsing.positive('soon')

    def test_path(self) -> None:
        assert parsing.path("''") == ''
        assert parsing.path('~/ca.pem') == os.path.join(os.path.expanduser('~'), 'ca.pem')

    def test_prompt_keeps_spaces(self) -> None:
        assert parsing.prompt("'bofh> '") == 'bofh> '
        assert parsing.prompt('"> "') == '> '
        assert parsing.prompt('bofh>') == 'bofh>'

    def test_level(self) -> None:
        assert parsing.level("'debug'") == 'DEBUG'
        with pytest.raises(TypeError):
            parsing.level('loud')


class TestEnvfile:
    """Test where the configuration file is looked for"""

    def test_explicit(self) -> None:
        """Test bofh_envfile wins"""
        with patch.dict(os.environ, {'bofh_envfile': '/etc/bofh.env'}):
            assert _find_envfile() == '/etc/bofh.env'

    def test_xdg(self) -> None:
        """Test XDG_CONFIG_HOME is used when set"""
        with patch.dict(os.environ, {'XDG_CONFIG_HOME': '/xdg'}):
            os.environ.pop('bofh_envfile', None)
            assert _find_envfile() == '/xdg/bofh/bofh.env'

    def test_home(self) -> None:
        """Test the fallback under the home directory"""
        with patch.dict(os.environ, {}):
            os.environ.pop('bofh_envfile', None)
            os.environ.pop('XDG_CONFIG_HOME', None)
            assert _find_envfile() == os.path.join(os.path.expanduser('~'), '.config', 'bofh', 'bofh.env')


class TestEnvironment:
    """Test loading of the configuration"""

    def setup_method(self) -> None:
        Environment.reset()

    def teardown_method(self) -> None:
        Environment.reset()

    def test_singleton(self) -> None:
        """Test every access returns the same object"""
        assert getenv() is Environment()
        assert APPLICATION == 'bofh'

    def test_defaults(self, tmp_path: Path) -> None:
        """Test defaults without file nor environment"""
        with patch.dict(os.environ, {}, clear=True):
            Environment.setup(str(tmp_path / 'missing.env'))
        env = getenv()
        assert env.connection.url == 'https://cerebrum-uio-test.uio.no:8000/'
        assert env.connection.timeout == 0
        assert env.connection.retries == 1
        assert env.connection.insecure is False
        assert env.shell.prompt == 'bofh> '
        assert env.shell.vi is False
        assert env.log.level == 'WARNING'
        assert env.log.destination == 'stderr'

    def test_ini_file(self, tmp_path: Path) -> None:
        """Test values from the INI file"""
        envfile = tmp_path / 'bofh.env'
        envfile.write_text(
            '[bofh.connection]\n'
            'url = http://localhost:8000/\n'
            'timeout = 10\n'
            '[bofh.shell]\n'
            "prompt = 'admin> '\n"
            'vi = true\n'
        )
        with patch.dict(os.environ, {}, clear=True):
            Environment.setup(str(envfile))
        env = getenv()
        assert env.connection.url == 'http://localhost:8000/'
        assert env.connection.timeout == 10
        assert env.shell.prompt == 'admin> '
        assert env.shell.vi is True

    def test_environment_wins(self, tmp_path: Path) -> None:
        """Test environment variables override the INI file"""
        envfile = tmp_path / 'bofh.env'
        envfile.write_text('[bofh.connection]\ntimeout = 10\nretries = 2\n')
        environ = {'bofh.connection.timeout': '20', 'bofh_connection_retries': '4'}
        with patch.dict(os.environ, environ, clear=True):
            Environment.setup(str(envfile))
        env = getenv()
        assert env.connection.timeout == 20
        assert env.connection.retries == 4

    def test_dotted_before_underscore(self, tmp_path: Path) -> None:
        """Test the dotted variable wins over the underscore one"""
        environ = {'bofh.shell.vi': 'true', 'bofh_shell_vi': 'false'}
        with patch.dict(os.environ, environ, clear=True):
            Environment.setup(str(tmp_path / 'missing.env'))
        assert getenv().shell.vi is True

    def test_invalid_value(self, tmp_path: Path) -> None:
        """Test a value that does not parse names the option"""
        with patch.dict(os.environ, {'bofh_connection_timeout': 'soon'}, clear=True):
            with pytest.raises(ValueError, match='connection.timeout'):
                Environment.setup(str(tmp_path / 'missing.env'))

    def test_setup_once(self, tmp_path: Path) -> None:
        """Test setup() only loads the configuration the first time"""
        with patch.dict(os.environ, {'bofh_connection_retries': '3'}, clear=True):
            Environment.setup(str(tmp_path / 'missing.env'))
        with patch.dict(os.environ, {'bofh_connection_retries': '5'}, clear=True):
            Environment.setup(str(tmp_path / 'missing.env'))
        assert getenv().connection.retries == 3

    def test_iter_ini_diff(self) -> None:
        """Test --diff output only lists changed values"""
        getenv().connection.retries = 3
        lines = list(Environment.iter_ini(diff=True))
        assert lines == ['\n[bofh.connection]', 'retries = 3']

    def test_iter_env(self) -> None:
        """Test environment form of the values"""
        getenv().shell.vi = True
        lines = list(Environment.iter_env(diff=True))
        assert lines == ['bofh.shell.vi=true']

    def test_default_lists_every_option(self) -> None:
        """Test default() documents every option"""
        lines = list(Environment.default())
        assert len(lines) == sum(len(section.options()) for _, section in getenv().items())
        assert any(line.startswith('bofh.connection.url') for line in lines)
