"""Log records - immutable snapshots of one logging event.
"""
from __future__ import annotations

import os
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from logtree.levels import get_level_name

__all__ = ['LogRecord', 'RESERVED_ATTRS', 'make_record']

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True, eq=False)
class LogRecord:
    """One accepted log call.

    Created once by the record factory and read-only afterwards. Keys of
    `extra` can also be read as attributes (`record.user`).
    """
    name: str
    levelno: int
    pathname: str
    lineno: int
    msg: Any
    args: Any = ()
    exc_info: Any = None
    func_name: str | None = None
    stack_info: str | None = None
    created: float = field(default_factory=time.time)
    thread: int | None = field(default_factory=threading.get_ident)
    thread_name: str | None = field(default_factory=lambda: threading.current_thread().name)
    process: int | None = field(default_factory=os.getpid)
    extra: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    @property
    def levelname(self) -> str:
        return get_level_name(self.levelno)

    @property
    def filename(self) -> str:
        return os.path.basename(self.pathname)

    @property
    def module(self) -> str:
        return os.path.splitext(self.filename)[0]

    @property
    def msecs(self) -> float:
        return (self.created - int(self.created)) * 1000

    def get_message(self) -> str:
        """Merge args into the message template.

        Formatters call this; the record itself never stores the result.
        """
        msg = str(self.msg)
        if self.args:
            msg = msg % self.args
        return msg

    def __getattr__(self, key: str) -> Any:
        if key == 'extra':
            raise AttributeError(key)
        try:
            return self.extra[key]
        except KeyError:
            raise AttributeError(
                f'{type(self).__name__!r} object has no attribute {key!r}') from None

    def __repr__(self) -> str:
        return f'<LogRecord: {self.name}, {self.levelno}, {self.pathname}, {self.lineno}, "{self.msg}">'


RESERVED_ATTRS = frozenset(
    {f for f in LogRecord.__dataclass_fields__ if f != 'extra'}
    | {'levelname', 'filename', 'module', 'msecs', 'message', 'asctime', 'extra'}
)


def make_record(name: str, level: int, pathname: str, lineno: int, msg: Any,
                args: Any, exc_info: Any, func: str | None = None,
                sinfo: str | None = None,
                extra: Mapping[str, Any] | None = None) -> LogRecord:
    """Default record factory.

    Raises KeyError when `extra` tries to shadow a record attribute.
    """
    # log('%(a)s %(b)s', {'a': 1, 'b': 2})
    if (args and len(args) == 1 and isinstance(args[0], Mapping) and args[0]):
        args = args[0]
    if extra:
        for key in extra:
            if key in RESERVED_ATTRS:
                raise KeyError(f'Attempt to overwrite {key!r} in LogRecord')
        extra = MappingProxyType(dict(extra))
    else:
        extra = _EMPTY
    return LogRecord(
        name=name,
        levelno=level,
        pathname=pathname,
        lineno=lineno,
        msg=msg,
        args=args,
        exc_info=exc_info,
        func_name=func,
        stack_info=sinfo,
        extra=extra,
    )
