"""Logger adapter - bind fixed context to a logger without touching it.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from logtree.levels import CRITICAL, DEBUG, ERROR, INFO, WARNING

if TYPE_CHECKING:
    from logtree._logger import Logger
    from logtree._manager import Manager

__all__ = ['LoggerAdapter']


class LoggerAdapter:
    """Merge a fixed extra mapping into every call on `logger`.

    Gating is the wrapped logger's; call-site `extra` wins on key collision.

    >>> from logtree import get_logger
    >>> request_log = LoggerAdapter(get_logger('web'), {'request_id': 'abc'})
    >>> request_log.info('Processing request')  # doctest: +SKIP
    """

    def __init__(self, logger: Logger, extra: Mapping[str, Any] | None = None) -> None:
        self.logger = logger
        self.extra = dict(extra or {})

    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        """Return the message and kwargs with the merged extra mapping.
        """
        kwargs['extra'] = {**self.extra, **(kwargs.get('extra') or {})}
        return msg, kwargs

    def bind(self, **context: Any) -> LoggerAdapter:
        """Return a new adapter with additional context."""
        return type(self)(self.logger, {**self.extra, **context})

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if self.is_enabled_for(level):
            msg, kwargs = self.process(msg, kwargs)
            self.logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(DEBUG, msg, *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(INFO, msg, *args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(WARNING, msg, *args, **kwargs)

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(ERROR, msg, *args, **kwargs)

    def exception(self, msg: Any, *args: Any, exc_info: Any = True, **kwargs: Any) -> None:
        self.log(ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def critical(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(CRITICAL, msg, *args, **kwargs)

    # Aliases
    warn = warning
    fatal = critical

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.is_enabled_for(level)

    def get_effective_level(self) -> int:
        return self.logger.get_effective_level()

    def has_handlers(self) -> bool:
        return self.logger.has_handlers()

    @property
    def manager(self) -> Manager:
        return self.logger.manager

    @property
    def name(self) -> str:
        return self.logger.name

    def __repr__(self) -> str:
        return f'<{type(self).__name__} {self.logger.name} {self.extra!r}>'
