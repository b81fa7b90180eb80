import pytest

from bofh.environment import Environment
from bofh.logger import log


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line('markers', 'fuzz: property based tests driven by hypothesis')


@pytest.fixture(autouse=True)
def _quiet_log():
    """Every test starts with logging disabled and the default configuration."""
    Environment.reset()
    log.disable()
    yield
    log.restore()
    Environment.reset()
