"""Side channel for failures inside the logging machinery.

Handler emit errors, raising filters and shutdown failures never reach the
code that made the log call. They are written through loguru's own sinks
instead, so a broken handler cannot recurse back into the tree.
"""
from __future__ import annotations

import sys
from typing import Any

from loguru import logger as _loguru

from logtree import config as config_log

__all__ = ['enabled', 'report_error']

# Flip off to drop error reports entirely
enabled: bool = config_log.log.report_errors


def report_error(owner: Any, record: Any = None, message: str = 'Logging error') -> None:
    """Report the exception currently being handled on behalf of `owner`.

    The exception being handled, if any, is attached.
    """
    if not enabled:
        return
    exc = sys.exc_info()[1]
    where = f' (record from {record.name!r}, line {record.lineno})' if record is not None else ''
    _loguru.opt(exception=exc, depth=1).warning('{} in {!r}{}', message, owner, where)
