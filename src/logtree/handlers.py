"""Handlers - sink-facing units that receive records from the logger tree.

Every handler has its own level, filter chain, formatter and lock. The lock
is held only around `emit`, so a slow sink never blocks unrelated handlers.
"""
from __future__ import annotations

import atexit
import sys
import threading
import weakref
from typing import IO, TYPE_CHECKING, Any

from loguru import logger as _loguru

from logtree import config as config_log
from logtree import errors
from logtree._internal import is_internal_frame, lock
from logtree.filters import Filterer
from logtree.formatters import Formatter
from logtree.levels import NOTSET, check_level, get_level_name

if TYPE_CHECKING:
    from logtree.records import LogRecord

__all__ = [
    'Handler',
    'LoguruHandler',
    'NullHandler',
    'StreamHandler',
    'last_resort',
    'shutdown',
]

_default_formatter = Formatter()

# Weak references to every live handler, in creation order, for shutdown
_handler_list: list[weakref.ref] = []


def _remove_handler_ref(wr: weakref.ref) -> None:
    with lock:
        if wr in _handler_list:
            _handler_list.remove(wr)


def _add_handler_ref(handler: Handler) -> None:
    with lock:
        _handler_list.append(weakref.ref(handler, _remove_handler_ref))


class Handler(Filterer):
    """Base handler. Subclasses implement `emit`.
    """

    def __init__(self, level: int | str = NOTSET) -> None:
        super().__init__()
        self.level = check_level(level)
        self.formatter: Any = None
        self.lock = threading.RLock()
        self._closed = False
        _add_handler_ref(self)

    def set_level(self, level: int | str) -> None:
        self.level = check_level(level)

    def set_formatter(self, fmt: Any) -> None:
        self.formatter = fmt

    def format(self, record: LogRecord) -> str:
        fmt = self.formatter or _default_formatter
        return fmt.format(record)

    def emit(self, record: LogRecord) -> None:
        """Write the record to the sink. Called with the lock held.
        """
        raise NotImplementedError('emit must be implemented by Handler subclasses')

    def acquire(self) -> None:
        self.lock.acquire()

    def release(self) -> None:
        self.lock.release()

    def handle(self, record: LogRecord) -> bool:
        """Gate by level and filters, then emit under the lock.

        Returns whether the record was emitted.
        """
        if record.levelno < self.level:
            return False
        if not self.filter(record):
            return False
        self.emit_locked(record)
        return True

    def emit_locked(self, record: LogRecord) -> None:
        """Emit with the lock held; sink failures go to `handle_error`.
        """
        with self.lock:
            try:
                self.emit(record)
            except Exception:
                self.handle_error(record)

    def handle_error(self, record: LogRecord) -> None:
        """Report a failed emit. Must be called from an `except` block.
        """
        errors.report_error(self, record, 'Handler error')

    def flush(self) -> None:
        """Force buffered output out. Nothing is buffered here.
        """

    def close(self) -> None:
        """Release sink resources. Safe to call more than once.
        """
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __repr__(self) -> str:
        return f'<{type(self).__name__} ({get_level_name(self.level)})>'


class StreamHandler(Handler):
    """Write formatted records to a text stream (stderr by default).
    """

    terminator = '\n'

    def __init__(self, stream: IO[str] | None = None, level: int | str = NOTSET) -> None:
        super().__init__(level)
        if stream is None:
            stream = sys.stderr
        self.stream = stream

    def flush(self) -> None:
        with self.lock:
            if self.stream and hasattr(self.stream, 'flush'):
                self.stream.flush()

    def emit(self, record: LogRecord) -> None:
        msg = self.format(record)
        self.stream.write(msg + self.terminator)
        self.flush()

    def set_stream(self, stream: IO[str]) -> IO[str] | None:
        """Swap the stream, flushing the old one. Returns the old stream.
        """
        if stream is self.stream:
            return None
        with self.lock:
            result = self.stream
            self.flush()
            self.stream = stream
        return result

    def __repr__(self) -> str:
        name = str(getattr(self.stream, 'name', ''))
        if name:
            name += ' '
        return f'<{type(self).__name__} {name}({get_level_name(self.level)})>'


class NullHandler(Handler):
    """Accept records and drop them.

    Attach to a library's top logger to keep the last resort quiet.
    """

    def emit(self, record: LogRecord) -> None:
        pass


class LoguruHandler(Handler):
    """Forward records into loguru's sinks.

    Custom level names loguru does not know fall back to the numeric level.
    The record's extra mapping and logger name are bound on the message.
    """

    def __init__(self, level: int | str = NOTSET) -> None:
        super().__init__(level)
        self.formatter = Formatter('%(message)s')

    def emit(self, record: LogRecord) -> None:
        try:
            level = _loguru.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Point loguru at the frame that made the log call
        frame, depth = sys._getframe(0), 0
        while frame and is_internal_frame(frame):
            frame = frame.f_back
            depth += 1

        _loguru.bind(**{**record.extra, 'logger_name': record.name}).opt(
            depth=depth, exception=record.exc_info or None
        ).log(level, self.format(record))


class _StderrHandler(StreamHandler):
    """Resolve sys.stderr at emit time, so redirection is honored.
    """

    def __init__(self, level: int | str = NOTSET) -> None:
        Handler.__init__(self, level)

    @property
    def stream(self) -> IO[str]:
        return sys.stderr


# Used when a dispatch reaches no handler at all
last_resort = _StderrHandler(config_log.log.last_resort_level)


def shutdown(handler_list: list[weakref.ref] | None = None) -> None:
    """Flush and close every live handler, newest first.

    A failing handler is reported and does not stop the rest.
    """
    if handler_list is None:
        handler_list = _handler_list
    for wr in reversed(handler_list[:]):
        h = wr()
        if h is None:
            continue
        h.acquire()
        try:
            h.flush()
            h.close()
        except Exception:
            errors.report_error(h, message='Shutdown error')
        finally:
            h.release()


atexit.register(shutdown)
