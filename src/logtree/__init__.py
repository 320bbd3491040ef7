"""Hierarchical, level-filtered logging core.

Public API - users should only import from this module.

Usage:
    import logtree

    # Attach a stderr handler to the root logger (once)
    logtree.configure_logging(level='INFO')

    # Module-level logging goes to the root logger
    logtree.info('Application started')

    # Named loggers form a tree on the dots in their names
    db_logger = logtree.get_logger('app.database')
    db_logger.debug('Query executed')

    # Bound context is merged into every record
    req_logger = logtree.get_logger('app.web', request_id='abc123')
    req_logger.info('Processing request')

    # Route accepted records into loguru sinks
    logtree.get_logger('app').add_handler(logtree.LoguruHandler())
"""
from __future__ import annotations

from typing import Any

from logtree._logger import Logger, PlaceHolder, RootLogger
from logtree._manager import Manager, get_logger_class, get_manager
from logtree._manager import get_record_factory, set_logger_class
from logtree._manager import set_record_factory
from logtree.adapter import LoggerAdapter
from logtree.filters import Filter, Filterer, LevelFilter
from logtree.formatters import BASIC_FORMAT, Formatter
from logtree.handlers import Handler, LoguruHandler, NullHandler
from logtree.handlers import StreamHandler, shutdown
from logtree.levels import CRITICAL, DEBUG, ERROR, INFO, NOTSET, WARNING
from logtree.levels import add_level_name, check_level, get_level_name
from logtree.levels import get_level_number
from logtree.loggers import StderrStreamLogger
from logtree.records import LogRecord, make_record
from logtree.setup import class_logger, configure_logging, log_exception
from logtree.setup import set_level

root = get_manager().root


def get_logger(name: str | None = None, **context: Any) -> Logger | LoggerAdapter:
    """Get a logger by dotted name, optionally bound to context.

    Args:
        name: Logger name; None or '' is the root logger
        **context: Extra attributes merged into every record

    Returns
        The Logger node, or a LoggerAdapter over it when context is given

    Examples
        >>> log = get_logger('mymodule')
        >>> log is get_logger('mymodule')
        True

        >>> log = get_logger('web', user='john')
        >>> log.extra
        {'user': 'john'}
    """
    logger = get_manager().get_logger(name or '')
    if context:
        return LoggerAdapter(logger, context)
    return logger


def disable(level: int | str = CRITICAL) -> None:
    """Drop every log call at or below `level`, on every logger.

    disable(NOTSET) turns it off again.
    """
    get_manager().set_disable(level)


# Module-level convenience functions
def debug(msg: Any, *args: Any, **kwargs: Any) -> None:
    """Log a debug message on the root logger."""
    root.debug(msg, *args, **kwargs)


def info(msg: Any, *args: Any, **kwargs: Any) -> None:
    """Log an info message on the root logger."""
    root.info(msg, *args, **kwargs)


def warning(msg: Any, *args: Any, **kwargs: Any) -> None:
    """Log a warning message on the root logger."""
    root.warning(msg, *args, **kwargs)


def error(msg: Any, *args: Any, **kwargs: Any) -> None:
    """Log an error message on the root logger."""
    root.error(msg, *args, **kwargs)


def exception(msg: Any, *args: Any, **kwargs: Any) -> None:
    """Log an error message with exception info."""
    root.exception(msg, *args, **kwargs)


def critical(msg: Any, *args: Any, **kwargs: Any) -> None:
    """Log a critical message on the root logger."""
    root.critical(msg, *args, **kwargs)


def log(level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
    """Log at an arbitrary level on the root logger."""
    root.log(level, msg, *args, **kwargs)


# Aliases
warn = warning
fatal = critical


__all__ = [
    # Levels
    'CRITICAL',
    'ERROR',
    'WARNING',
    'INFO',
    'DEBUG',
    'NOTSET',
    'add_level_name',
    'check_level',
    'get_level_name',
    'get_level_number',
    # Configuration
    'configure_logging',
    'set_level',
    'disable',
    # Logger access
    'get_logger',
    'get_manager',
    'root',
    'Logger',
    'RootLogger',
    'PlaceHolder',
    'Manager',
    'LoggerAdapter',
    'get_logger_class',
    'set_logger_class',
    # Records
    'LogRecord',
    'make_record',
    'get_record_factory',
    'set_record_factory',
    # Filters, formatters, handlers
    'Filter',
    'Filterer',
    'LevelFilter',
    'BASIC_FORMAT',
    'Formatter',
    'Handler',
    'StreamHandler',
    'NullHandler',
    'LoguruHandler',
    'shutdown',
    # Logging methods
    'debug',
    'info',
    'warning',
    'warn',
    'error',
    'exception',
    'critical',
    'fatal',
    'log',
    # Utilities
    'StderrStreamLogger',
    'class_logger',
    'log_exception',
]
