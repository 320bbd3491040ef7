"""Process-wide lock and frame helpers shared across the package.
"""
import os
import threading

__all__ = ['is_internal_frame', 'lock']

# Guards the logger tree, level caches and the handler registry. Reentrant:
# level changes trigger cache sweeps while a configuration call may already
# hold it.
lock = threading.RLock()

_srcdir = os.path.normcase(os.path.dirname(os.path.abspath(__file__)))


def is_internal_frame(frame) -> bool:
    """True when `frame` executes code from this package."""
    filename = os.path.normcase(os.path.abspath(frame.f_code.co_filename))
    return os.path.dirname(filename) == _srcdir
