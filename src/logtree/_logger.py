"""Logger nodes - the named tree that gates and dispatches records.

Users get these from `logtree.get_logger`, never by constructing them.
"""
from __future__ import annotations

import sys
import traceback
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from logtree._internal import is_internal_frame, lock
from logtree.filters import Filterer
from logtree.handlers import Handler
from logtree.levels import CRITICAL, DEBUG, ERROR, INFO, NOTSET, WARNING
from logtree.levels import check_level, get_level_name
from logtree.records import LogRecord

if TYPE_CHECKING:
    from logtree._manager import Manager
    from logtree.adapter import LoggerAdapter

__all__ = ['Logger', 'PlaceHolder', 'RootLogger']


class PlaceHolder:
    """Registry stand-in for a name with registered descendants only.

    Sits in the parent chain as a transparent link: no level, no handlers,
    always propagates. Holds the children to rewire once a real logger
    takes the name.
    """

    _level = NOTSET
    _propagate = propagate = True
    handlers: tuple[Handler, ...] = ()

    def __init__(self, name: str) -> None:
        self.name = name
        self.parent: Logger | PlaceHolder | None = None
        self.logger_map: dict[Logger | PlaceHolder, None] = {}

    def append(self, alogger: Logger | PlaceHolder) -> None:
        if alogger not in self.logger_map:
            self.logger_map[alogger] = None

    def __repr__(self) -> str:
        return f'<PlaceHolder {self.name} ({len(self.logger_map)} children)>'


class Logger(Filterer):
    """One named node in the logger tree.

    Writes to `level`, `disabled` and `propagate` take the process lock;
    level and disabled changes clear every cache in the tree.
    """

    manager: Manager

    def __init__(self, name: str, level: int | str = NOTSET) -> None:
        super().__init__()
        self.name = name
        self._level = check_level(level)
        self.parent: Logger | PlaceHolder | None = None
        self._propagate = True
        self._disabled = False
        self.handlers: list[Handler] = []
        self._cache: dict[int, bool] = {}

    #
    # Configuration
    #

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, level: int | str) -> None:
        self.set_level(level)

    def set_level(self, level: int | str) -> None:
        """Set the threshold; the whole tree's caches are cleared.
        """
        level = check_level(level)
        with lock:
            self._level = level
            self.manager.clear_cache()

    @property
    def disabled(self) -> bool:
        return self._disabled

    @disabled.setter
    def disabled(self, value: bool) -> None:
        with lock:
            self._disabled = bool(value)
            self.manager.clear_cache()

    @property
    def propagate(self) -> bool:
        return self._propagate

    @propagate.setter
    def propagate(self, value: bool) -> None:
        with lock:
            self._propagate = bool(value)

    def add_handler(self, hdlr: Handler) -> None:
        if not isinstance(hdlr, Handler):
            raise TypeError(f'Expected a Handler, got {type(hdlr).__name__}')
        with lock:
            if hdlr not in self.handlers:
                self.handlers = [*self.handlers, hdlr]

    def remove_handler(self, hdlr: Handler) -> None:
        with lock:
            if hdlr in self.handlers:
                self.handlers = [h for h in self.handlers if h is not hdlr]

    def has_handlers(self) -> bool:
        """Whether any handler is reachable from here by propagation.
        """
        c: Logger | PlaceHolder | None = self
        while c:
            if c.handlers:
                return True
            if not c.propagate:
                break
            c = c.parent
        return False

    def get_child(self, suffix: str) -> Logger:
        """get_logger('a').get_child('b.c') is get_logger('a.b.c')
        """
        if self.manager.root is not self:
            suffix = '.'.join((self.name, suffix))
        return self.manager.get_logger(suffix)

    def bind(self, **context: Any) -> LoggerAdapter:
        """Return an adapter that adds `context` to every record.
        """
        from logtree.adapter import LoggerAdapter
        return LoggerAdapter(self, context)

    #
    # Gating
    #

    def get_effective_level(self) -> int:
        """Level of the nearest node (self first) with one set.
        """
        logger: Logger | PlaceHolder | None = self
        while logger:
            if logger._level:
                return logger._level
            logger = logger.parent
        return NOTSET

    def is_enabled_for(self, level: int) -> bool:
        if self._disabled:
            return False
        if self.manager.disable >= level:
            return False
        with lock:
            try:
                return self._cache[level]
            except KeyError:
                is_enabled = self._cache[level] = (
                    level >= self.get_effective_level()
                )
                return is_enabled

    #
    # Record creation
    #

    def find_caller(self, stack_info: bool = False,
                    stacklevel: int = 1) -> tuple[str, int, str, str | None]:
        """Locate the calling frame outside this package.

        Returns filename, line number, function name and optional stack.
        """
        f = sys._getframe(0)
        while stacklevel > 0:
            next_f = f.f_back
            if next_f is None:
                break
            f = next_f
            if not is_internal_frame(f):
                stacklevel -= 1
        co = f.f_code
        sinfo = None
        if stack_info:
            sinfo = 'Stack (most recent call last):\n' + ''.join(
                traceback.format_stack(f)).rstrip('\n')
        return co.co_filename, f.f_lineno, co.co_name, sinfo

    def make_record(self, name: str, level: int, fn: str, lno: int, msg: Any,
                    args: Any, exc_info: Any, func: str | None = None,
                    extra: Mapping[str, Any] | None = None,
                    sinfo: str | None = None) -> LogRecord:
        factory = self.manager.get_record_factory()
        return factory(name, level, fn, lno, msg, args, exc_info, func, sinfo, extra)

    def _log(self, level: int, msg: Any, args: Any, exc_info: Any = None,
             extra: Mapping[str, Any] | None = None, stack_info: bool = False,
             stacklevel: int = 1) -> None:
        fn, lno, func, sinfo = self.find_caller(stack_info, stacklevel)
        if exc_info:
            if isinstance(exc_info, BaseException):
                exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
            elif not isinstance(exc_info, tuple):
                exc_info = sys.exc_info()
        record = self.make_record(self.name, level, fn, lno, msg, args,
                                  exc_info, func, extra, sinfo)
        self.handle(record)

    #
    # Dispatch
    #

    def handle(self, record: LogRecord) -> None:
        """Run logger filters, then pass the record up the tree.
        """
        if self._disabled:
            return
        if not self.filter(record):
            return
        self.call_handlers(record)

    def call_handlers(self, record: LogRecord) -> None:
        """Offer the record to each handler from here to the root.

        Stops after a node with propagate off. When nothing emitted, the
        manager's last resort handler gets the record.
        """
        c: Logger | PlaceHolder | None = self
        found = 0
        while c:
            for hdlr in c.handlers:
                if record.levelno >= hdlr.level and hdlr.handle(record):
                    found += 1
            if not c._propagate:
                break
            c = c.parent
        if found == 0:
            self.manager.handle_unhandled(record)

    #
    # Logging methods
    #

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if self.is_enabled_for(DEBUG):
            self._log(DEBUG, msg, args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if self.is_enabled_for(INFO):
            self._log(INFO, msg, args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if self.is_enabled_for(WARNING):
            self._log(WARNING, msg, args, **kwargs)

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if self.is_enabled_for(ERROR):
            self._log(ERROR, msg, args, **kwargs)

    def exception(self, msg: Any, *args: Any, exc_info: Any = True, **kwargs: Any) -> None:
        """Log an error with the exception being handled."""
        self.error(msg, *args, exc_info=exc_info, **kwargs)

    def critical(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if self.is_enabled_for(CRITICAL):
            self._log(CRITICAL, msg, args, **kwargs)

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not isinstance(level, int):
            raise TypeError('level must be an integer')
        if self.is_enabled_for(level):
            self._log(level, msg, args, **kwargs)

    # Aliases
    warn = warning
    fatal = critical

    def __repr__(self) -> str:
        return f'<{type(self).__name__} {self.name} ({get_level_name(self.get_effective_level())})>'


class RootLogger(Logger):
    """Top of the tree. Always present, never a placeholder.
    """

    def __init__(self, level: int | str) -> None:
        super().__init__('', level)

    def __repr__(self) -> str:
        return f'<{type(self).__name__} ({get_level_name(self.get_effective_level())})>'

