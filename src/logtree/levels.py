"""Severity levels and the bidirectional level name table.
"""
from __future__ import annotations

from logtree._internal import lock

__all__ = [
    'CRITICAL',
    'DEBUG',
    'ERROR',
    'INFO',
    'NOTSET',
    'WARNING',
    'add_level_name',
    'check_level',
    'get_level_name',
    'get_level_number',
]

CRITICAL = 50
ERROR = 40
WARNING = 30
INFO = 20
DEBUG = 10
NOTSET = 0

_level_to_name: dict[int, str] = {
    CRITICAL: 'CRITICAL',
    ERROR: 'ERROR',
    WARNING: 'WARNING',
    INFO: 'INFO',
    DEBUG: 'DEBUG',
    NOTSET: 'NOTSET',
}
_name_to_level: dict[str, int] = {v: k for k, v in _level_to_name.items()}

# Accepted on lookup, never returned as a canonical name
_ALIASES = {'WARN': WARNING, 'FATAL': CRITICAL}


def add_level_name(level: int, name: str) -> None:
    """Register `name` for `level`, replacing any previous pairing.

    >>> add_level_name(25, 'NOTICE')
    >>> get_level_name(25), get_level_number('NOTICE')
    ('NOTICE', 25)
    """
    if not isinstance(level, int) or isinstance(level, bool):
        raise TypeError(f'Level not an integer: {level!r}')
    name = str(name)
    with lock:
        old_name = _level_to_name.get(level)
        if old_name is not None and old_name != name:
            _name_to_level.pop(old_name, None)
        old_level = _name_to_level.get(name)
        if old_level is not None and old_level != level:
            _level_to_name.pop(old_level, None)
        _level_to_name[level] = name
        _name_to_level[name] = level


def get_level_name(level: int) -> str:
    """Return the registered name for `level`, or 'Level <n>'.
    """
    name = _level_to_name.get(level)
    if name is not None:
        return name
    return f'Level {level}'


def get_level_number(name: str) -> int:
    """Return the integer for a registered level name.

    Unknown names are a configuration error.
    """
    try:
        return _name_to_level[name]
    except KeyError:
        pass
    try:
        return _ALIASES[name]
    except KeyError:
        raise ValueError(f'Unknown level: {name!r}') from None


def check_level(level: int | str) -> int:
    """Normalize an int or level name to an int.
    """
    if isinstance(level, bool):
        raise TypeError(f'Level not an integer or a valid string: {level!r}')
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        if level in _name_to_level:
            return _name_to_level[level]
        return get_level_number(level.upper())
    raise TypeError(f'Level not an integer or a valid string: {level!r}')


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
