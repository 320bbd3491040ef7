"""Record filters shared by loggers and handlers.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from logtree import errors
from logtree._internal import lock

if TYPE_CHECKING:
    from logtree.records import LogRecord

__all__ = ['Filter', 'Filterer', 'LevelFilter']


class Filter:
    """Pass records from a logger and its descendants only.

    >>> from logtree.records import make_record
    >>> f = Filter('a.b')
    >>> f.filter(make_record('a.b.c', 20, '', 0, 'x', (), None))
    True
    >>> f.filter(make_record('a.bb', 20, '', 0, 'x', (), None))
    False
    """

    def __init__(self, name: str = '') -> None:
        self.name = name
        self.nlen = len(name)

    def filter(self, record: LogRecord) -> bool:
        if self.nlen == 0:
            return True
        if self.name == record.name:
            return True
        if not record.name.startswith(self.name):
            return False
        return record.name[self.nlen] == '.'


class LevelFilter:
    """Pass records whose level falls in [low, high].

    Useful on a handler to split ranges across sinks.
    """

    def __init__(self, low: int = 0, high: int | None = None) -> None:
        self.low = low
        self.high = high

    def filter(self, record: LogRecord) -> bool:
        if record.levelno < self.low:
            return False
        return self.high is None or record.levelno <= self.high


def _as_predicate(filt: Any) -> Callable[[LogRecord], Any]:
    """Normalize a filter object or bare callable to a predicate.
    """
    method = getattr(filt, 'filter', None)
    if callable(method):
        return method
    if callable(filt):
        return filt
    raise TypeError(f'Filter must be callable or have a filter() method: {filt!r}')


class Filterer:
    """Base for objects that own an ordered filter chain.

    The chain is replaced, not mutated, so readers iterate a snapshot.
    """

    def __init__(self) -> None:
        self.filters: list[Any] = []

    def add_filter(self, filt: Any) -> None:
        _as_predicate(filt)
        with lock:
            if filt not in self.filters:
                self.filters = [*self.filters, filt]

    def remove_filter(self, filt: Any) -> None:
        with lock:
            if filt in self.filters:
                self.filters = [f for f in self.filters if f is not filt]

    def filter(self, record: LogRecord) -> bool:
        """Apply every filter in order; all must pass.

        A filter that raises is reported and counts as a rejection.
        """
        for filt in self.filters:
            try:
                if not _as_predicate(filt)(record):
                    return False
            except Exception:
                errors.report_error(self, record, 'Filter error')
                return False
        return True


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
