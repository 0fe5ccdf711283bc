"""
Reporter sinks used by the compatibility checker.

The checker only needs `warn`, `error` and `info`. `LoggingReporter` writes to
the standard logging module, `BufferedReporter` additionally keeps every
message so it can be returned to API callers.
"""

import logging
from typing import List, Tuple

logger = logging.getLogger(__name__)


class Reporter:
    def warn(self, message: str) -> None:
        raise NotImplementedError

    def error(self, message: str) -> None:
        raise NotImplementedError

    def info(self, message: str) -> None:
        raise NotImplementedError

    def emit(self, level: str, message: str) -> None:
        """Dispatches a (level, message) pair recorded in a check result."""
        getattr(self, level)(message)


class LoggingReporter(Reporter):
    def __init__(self, log: logging.Logger = None):
        self.log = log or logger

    def warn(self, message: str) -> None:
        self.log.warning(message)

    def error(self, message: str) -> None:
        self.log.error(message)

    def info(self, message: str) -> None:
        self.log.info(message)


class BufferedReporter(LoggingReporter):
    def __init__(self, log: logging.Logger = None):
        super().__init__(log)
        self.buffer: List[Tuple[str, str]] = []

    def warn(self, message: str) -> None:
        self.buffer.append(("warn", message))
        super().warn(message)

    def error(self, message: str) -> None:
        self.buffer.append(("error", message))
        super().error(message)

    def info(self, message: str) -> None:
        self.buffer.append(("info", message))
        super().info(message)

    def get_buffer(self) -> List[Tuple[str, str]]:
        return list(self.buffer)
