"""One-shot logging configuration and decorator utilities.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import wraps
from typing import IO, Any

from logtree._internal import lock
from logtree._manager import get_manager
from logtree.formatters import Formatter
from logtree.handlers import Handler, StreamHandler
from logtree.levels import DEBUG, INFO, check_level

__all__ = [
    'class_logger',
    'configure_logging',
    'log_exception',
    'set_level',
]


def configure_logging(
    level: int | str | None = None,
    handlers: Iterable[Handler] | None = None,
    stream: IO[str] | None = None,
    fmt: str | None = None,
    datefmt: str | None = None,
    style: str = '%',
    force: bool = False,
) -> None:
    """Attach default handlers to the root logger.

    Does nothing when root already has handlers, unless `force` is set, in
    which case the existing root handlers are removed and closed first.

    Args:
        level: Root logger level
        handlers: Handlers to attach; those without a formatter get one
            built from fmt/datefmt/style
        stream: Stream for the default StreamHandler (exclusive with handlers)
        fmt: Format string for the formatter
        datefmt: Date format for the formatter
        style: '%' or '{'
        force: Replace existing root handlers
    """
    if handlers is not None and stream is not None:
        raise ValueError("'stream' and 'handlers' should not be specified together")
    root = get_manager().root
    with lock:
        if force:
            for h in root.handlers:
                root.remove_handler(h)
                h.close()
        if root.handlers:
            return
        if handlers is None:
            handlers = [StreamHandler(stream)]
        formatter = Formatter(fmt, datefmt, style)
        for h in handlers:
            if h.formatter is None:
                h.set_formatter(formatter)
            root.add_handler(h)
        if level is not None:
            root.set_level(level)


def set_level(levelname: int | str) -> None:
    """Set the root logger level. Accepts WARN as an alias for WARNING.
    """
    get_manager().root.set_level(check_level(levelname))


def class_logger(cls: type, enable: bool | str = False) -> type:
    """Add logger attribute to a class.

    The logger is named after the class's module and qualified name.
    """
    logger = get_manager().get_logger(cls.__module__ + '.' + cls.__name__)
    if enable == 'debug':
        logger.set_level(DEBUG)
    elif enable == 'info':
        logger.set_level(INFO)
    cls._should_log_debug = lambda self: logger.is_enabled_for(DEBUG)
    cls._should_log_info = lambda self: logger.is_enabled_for(INFO)
    cls.logger = logger
    return cls


def log_exception(logger: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that logs exceptions and re-raises them.

    Works with Logger and LoggerAdapter instances.
    """
    def wrapper(fn: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(fn)
        def wrapped_fn(*args: Any, **kwargs: Any) -> Any:
            try:
                return fn(*args, **kwargs)
            except Exception as exc:
                if hasattr(logger, 'exception'):
                    logger.exception(str(exc))
                raise
        return wrapped_fn
    return wrapper
