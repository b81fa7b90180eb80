"""formatter.py

Render command results and messages for the terminal.

bofhd answers run_command with a string, a number, a mapping or a list of
mappings (one per row). Strings are printed as the server wrote them, the
other shapes are laid out as key/value pairs or a table.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from bofh.cli.colors import Colors

MAX_COL_WIDTH = 40
NOT_SET = '<not set>'


def _nested(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def _scalar(value: Any) -> str:
    if value is None:
        return NOT_SET
    if isinstance(value, bool):
        return 'yes' if value else 'no'
    # xmlrpc dateTime values, decoded with use_builtin_types
    if isinstance(value, datetime):
        return value.strftime('%Y-%m-%d %H:%M:%S')
    if isinstance(value, bytes):
        return value.decode('utf-8', 'replace')
    return str(value)


def _indent(text: str, width: int = 2) -> str:
    return '\n'.join(f'{" " * width}{line}' for line in text.split('\n'))


def _cell(value: Any) -> str:
    text = _scalar(value)
    if len(text) > MAX_COL_WIDTH:
        return text[: MAX_COL_WIDTH - 3] + '...'
    return text


class OutputFormatter:
    """Turn server answers and shell messages into printable text"""

    def __init__(self, use_color: bool = True):
        self.use_color = use_color and Colors.supports_color()

    def _paint(self, codes: str, text: str) -> str:
        return f'{codes}{text}{Colors.RESET}' if self.use_color else text

    def _label(self, label: str, color: str, message: str) -> str:
        return f'{self._paint(Colors.BOLD + color, label)} {message}'

    def format_error(self, message: str) -> str:
        return self._label('Error:', Colors.RED, message)

    def format_warning(self, message: str) -> str:
        return self._label('Warning:', Colors.YELLOW, message)

    def format_info(self, message: str) -> str:
        return self._label('Info:', Colors.CYAN, message)

    def format_motd(self, motd: str) -> str:
        return self._paint(Colors.DIM, motd)

    def format_result(self, data: Any) -> str:
        """Text for the answer of a command, empty when there is nothing to show"""
        if data is None:
            return ''
        if isinstance(data, str):
            return data.rstrip('\n')
        return self._text(data)

    def _text(self, data: Any) -> str:
        if isinstance(data, dict):
            return self._pairs(data)
        if not isinstance(data, (list, tuple)):
            return _scalar(data)

        if not data:
            return '(empty list)'
        if all(isinstance(_, dict) for _ in data):
            return self._rows(list(data))
        if not any(_nested(_) for _ in data):
            return '\n'.join(_scalar(_) for _ in data)

        lines = []
        for index, item in enumerate(data):
            lines.append(f'[{index}]:')
            lines.append(_indent(self._text(item)))
        return '\n'.join(lines)

    def _rows(self, rows: list[dict[str, Any]]) -> str:
        # a lone row, or rows holding lists or mappings, do not fit in cells
        if len(rows) == 1 or any(_nested(value) for row in rows for value in row.values()):
            return '\n\n'.join(self._pairs(row) for row in rows)
        return self._table(rows)

    def _table(self, rows: list[dict[str, Any]]) -> str:
        """One row per mapping, one column per key seen in any of them"""
        columns = list(dict.fromkeys(key for row in rows for key in row))
        widths = {
            key: min(MAX_COL_WIDTH, max([len(str(key))] + [len(_scalar(row[key])) for row in rows if key in row]))
            for key in columns
        }

        header = '  '.join(str(key).ljust(widths[key]) for key in columns)
        lines = [
            self._paint(Colors.BOLD, header),
            '  '.join('-' * widths[key] for key in columns),
        ]
        for row in rows:
            lines.append('  '.join(_cell(row.get(key)).ljust(widths[key]) for key in columns).rstrip())
        return '\n'.join(lines)

    def _pairs(self, data: dict[str, Any]) -> str:
        if not data:
            return '(empty)'

        # plain values first, nested ones after, each sorted by key
        keys = sorted(data, key=lambda _: (_nested(data[_]), str(_)))
        width = max(len(str(_)) for _ in keys)

        lines = []
        for key in keys:
            name = str(key).ljust(width)
            value = data[key]
            if not _nested(value):
                lines.append(f'{name}: {_scalar(value)}')
            elif not value:
                lines.append(f'{name}: {self._text(value)}')
            else:
                lines.append(f'{name}:')
                lines.append(_indent(self._text(value)))
        return '\n'.join(lines)
