"""Minimal formatter used by the bundled handlers.

Formatting is pluggable per handler: anything with `format(record) -> str`
can be passed to `Handler.set_formatter`.
"""
from __future__ import annotations

import io
import time
import traceback
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from logtree.records import LogRecord

__all__ = ['BASIC_FORMAT', 'Formatter']

BASIC_FORMAT = '%(levelname)s:%(name)s:%(message)s'

_STYLES = {
    '%': ('%(message)s', '%(asctime)'),
    '{': ('{message}', '{asctime'),
}

_FIELDS = ('name', 'levelno', 'levelname', 'pathname', 'filename', 'module',
           'lineno', 'func_name', 'created', 'msecs', 'thread', 'thread_name',
           'process')


class Formatter:
    """Turn a record into text with a %- or {}-style template.
    """

    default_time_format = '%Y-%m-%d %H:%M:%S'
    default_msec_format = '%s,%03d'

    def __init__(self, fmt: str | None = None, datefmt: str | None = None,
                 style: str = '%') -> None:
        if style not in _STYLES:
            raise ValueError(f'Style must be one of: {",".join(_STYLES)}')
        self.style = style
        self.fmt = fmt or (BASIC_FORMAT if style == '%' else _STYLES[style][0])
        self.datefmt = datefmt

    def uses_time(self) -> bool:
        return _STYLES[self.style][1] in self.fmt

    def format_time(self, record: LogRecord, datefmt: str | None = None) -> str:
        ct = time.localtime(record.created)
        if datefmt:
            return time.strftime(datefmt, ct)
        s = time.strftime(self.default_time_format, ct)
        return self.default_msec_format % (s, record.msecs)

    def format_exception(self, exc_info: Any) -> str:
        sio = io.StringIO()
        traceback.print_exception(exc_info[0], exc_info[1], exc_info[2], file=sio)
        return sio.getvalue().rstrip('\n')

    def _mapping(self, record: LogRecord) -> dict[str, Any]:
        values = dict(record.extra)
        values.update({k: getattr(record, k) for k in _FIELDS})
        values['message'] = record.get_message()
        if self.uses_time():
            values['asctime'] = self.format_time(record, self.datefmt)
        return values

    def format(self, record: LogRecord) -> str:
        values = self._mapping(record)
        if self.style == '%':
            s = self.fmt % values
        else:
            s = self.fmt.format(**values)
        if record.exc_info:
            s = f'{s}\n{self.format_exception(record.exc_info)}'
        if record.stack_info:
            s = f'{s}\n{record.stack_info.rstrip()}'
        return s
