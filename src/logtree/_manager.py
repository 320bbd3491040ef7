"""Manager - the registry that owns the logger tree.

One manager exists per process (see `get_manager`). It resolves dotted names
to nodes, keeps placeholders for ancestors that do not exist yet, and owns
the global disable threshold and the replaceable logger/record factories.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

from logtree import config as config_log
from logtree import errors
from logtree import handlers
from logtree._internal import lock
from logtree._logger import Logger, PlaceHolder, RootLogger
from logtree.levels import NOTSET, check_level
from logtree.records import LogRecord, make_record

__all__ = [
    'Manager',
    'get_logger_class',
    'get_manager',
    'get_record_factory',
    'set_logger_class',
    'set_record_factory',
]

_logger_class: type[Logger] = Logger
_record_factory: Callable[..., LogRecord] = make_record

_UNSET: Any = object()


class Manager:
    """Name registry plus process-wide gating state.

    `clear_cache` sweeps every node. A cached answer depends on the whole
    ancestor chain and the disable threshold, so no narrower invalidation
    is sound.
    """

    def __init__(self, rootnode: RootLogger) -> None:
        self.root = rootnode
        self.root.manager = self
        self.disable = NOTSET
        self.emitted_no_handler_warning = False
        self.logger_dict: dict[str, Logger | PlaceHolder] = {}
        self.logger_class: type[Logger] | None = None
        self.record_factory: Callable[..., LogRecord] | None = None
        self._last_resort: Any = _UNSET

    @property
    def last_resort(self) -> handlers.Handler | None:
        if self._last_resort is _UNSET:
            return handlers.last_resort
        return self._last_resort

    @last_resort.setter
    def last_resort(self, hdlr: handlers.Handler | None) -> None:
        if hdlr is not None and not isinstance(hdlr, handlers.Handler):
            raise TypeError(f'Expected a Handler or None, got {type(hdlr).__name__}')
        self._last_resort = hdlr

    def get_logger(self, name: str) -> Logger:
        """Return the logger for `name`, creating it if needed.

        Creating a name held by a placeholder splices the new node into
        the placeholder's place in the chain.
        """
        if not isinstance(name, str):
            raise TypeError('A logger name must be a string')
        if not name:
            return self.root
        with lock:
            rv = self.logger_dict.get(name)
            if isinstance(rv, Logger):
                return rv
            ph = rv
            rv = (self.logger_class or _logger_class)(name)
            rv.manager = self
            self.logger_dict[name] = rv
            if isinstance(ph, PlaceHolder):
                self._fixup_children(ph, rv)
                # Descendants may now inherit the new node's level
                self.clear_cache()
            else:
                self._fixup_parents(rv)
            return rv

    def set_logger_class(self, klass: type[Logger] | None) -> None:
        if klass is not None and not issubclass(klass, Logger):
            raise TypeError(f'logger not derived from Logger: {klass.__name__}')
        self.logger_class = klass

    def set_record_factory(self, factory: Callable[..., LogRecord] | None) -> None:
        self.record_factory = factory

    def get_record_factory(self) -> Callable[..., LogRecord]:
        return self.record_factory or _record_factory

    def set_disable(self, level: int | str) -> None:
        """Drop every call at or below `level`, on every logger.
        """
        level = check_level(level)
        with lock:
            self.disable = level
            self.clear_cache()

    def clear_cache(self) -> None:
        with lock:
            for logger in self.logger_dict.values():
                if isinstance(logger, Logger):
                    logger._cache.clear()
            self.root._cache.clear()

    def handle_unhandled(self, record: LogRecord) -> None:
        """Dispatch that reached no handler goes to the last resort.
        """
        hdlr = self.last_resort
        if hdlr is not None:
            if record.levelno >= hdlr.level:
                hdlr.emit_locked(record)
                self.emitted_no_handler_warning = True
        elif not self.emitted_no_handler_warning:
            self.emitted_no_handler_warning = True
            errors.report_error(self, record, f'No handlers could be found for logger {record.name!r}')

    def _fixup_parents(self, node: Logger | PlaceHolder) -> None:
        """Link `node` to the entry for its immediate dotted prefix.

        A missing prefix gets a placeholder, linked the same way in turn, so
        every prefix of a registered name is itself registered.
        """
        while True:
            i = node.name.rfind('.')
            if i <= 0:
                node.parent = self.root
                return
            substr = node.name[:i]
            obj = self.logger_dict.get(substr)
            if obj is None:
                obj = self.logger_dict[substr] = PlaceHolder(substr)
                obj.append(node)
                node.parent = obj
                node = obj
                continue
            if isinstance(obj, PlaceHolder):
                obj.append(node)
            node.parent = obj
            return

    def _fixup_children(self, ph: PlaceHolder, alogger: Logger) -> None:
        """Put `alogger` where `ph` was: same parent, same children.

        Only children still pointing at the placeholder are rewired.
        """
        parent = ph.parent
        if isinstance(parent, PlaceHolder):
            parent.logger_map.pop(ph, None)
            parent.append(alogger)
        alogger.parent = parent
        for c in ph.logger_map:
            if c.parent is ph:
                c.parent = alogger

    def __repr__(self) -> str:
        return f'<Manager ({len(self.logger_dict)} names)>'


def _initial_root() -> RootLogger:
    return RootLogger(config_log.log.root_level or 'WARNING')


_manager = Manager(_initial_root())
Logger.manager = _manager
if config_log.log.disable:
    _manager.set_disable(config_log.log.disable)


def get_manager() -> Manager:
    """Get the process-wide manager."""
    return _manager


def set_logger_class(klass: type[Logger]) -> None:
    """Use `klass` for loggers created from now on, process-wide.
    """
    global _logger_class
    if not issubclass(klass, Logger):
        raise TypeError(f'logger not derived from Logger: {klass.__name__}')
    _logger_class = klass


def get_logger_class() -> type[Logger]:
    return _logger_class


def set_record_factory(factory: Callable[..., LogRecord]) -> None:
    """Build records with `factory` from now on, process-wide.
    """
    global _record_factory
    _record_factory = factory


def get_record_factory() -> Callable[..., LogRecord]:
    return _record_factory
