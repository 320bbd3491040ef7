"""Stream loggers for capturing output."""
from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any

from logtree.levels import INFO, check_level

if TYPE_CHECKING:
    from logtree._logger import Logger

__all__ = ['StderrStreamLogger']


class StderrStreamLogger:
    """Patch over stderr to log print statements to INFO.

    Placeholders isatty and fileno mimic python stream.
    stderr still accessible at sys.__stderr__

    Works with Logger and LoggerAdapter instances alike.
    """

    def __init__(self, logger: Logger | Any, level: int | str = INFO) -> None:
        self.logger = logger
        self.level = check_level(level)

    def write(self, buf: str) -> None:
        """Write buffer lines to logger."""
        for line in buf.rstrip().splitlines():
            self.logger.log(self.level, line.rstrip())

    def flush(self) -> None:
        """Nothing is buffered."""

    def isatty(self) -> bool:
        """Return False as this is not a TTY.
        """
        return False

    def fileno(self) -> int:
        """Raise UnsupportedOperation as this is not a real file.
        """
        raise io.UnsupportedOperation('fileno')
