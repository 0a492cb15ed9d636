"""Log manager writing formatted messages to a file, the console and memory."""

from __future__ import annotations

import enum
import os
import time
from collections import deque
from dataclasses import dataclass, field
from typing import ClassVar

DEFAULT_LOG_FILE = os.path.join("resources", "..", "logs.txt")
MAX_INTERNAL_LOG_COUNT = 100


class LogType(enum.IntEnum):
    """Severity of a log message."""

    NORMAL = 0
    WARNING = 1
    ERROR = 2


def format_log(message: str, log_type: LogType = LogType.NORMAL) -> str:
    """Format one log line with a timestamp and severity tag."""
    stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
    tag = ""
    if log_type == LogType.WARNING:
        tag = "[warning]"
    elif log_type == LogType.ERROR:
        tag = "[error]"
    return f"#{stamp}{tag}: {message}\n"


def log_to_file(file_name: str, message: str, log_type: LogType = LogType.NORMAL) -> None:
    """Append a formatted message to ``file_name``; a file that cannot be opened is skipped."""
    try:
        with open(file_name, "a", encoding="utf-8") as f:
            f.write(format_log(message, log_type))
    except OSError:
        return


@dataclass
class LogManager:
    """Collects log messages; in development also echoes them to the console."""

    MAX_INTERNAL_LOG_COUNT: ClassVar[int] = MAX_INTERNAL_LOG_COUNT

    name: str = ""
    development: bool = True
    first_log_already_placed: bool = False
    internal_logs: deque = field(
        default_factory=lambda: deque(maxlen=MAX_INTERNAL_LOG_COUNT)
    )

    def init(self, name: str) -> None:
        """Set the log file; an empty name means the default file."""
        self.name = name
        self.first_log_already_placed = False

    def log(self, message: str, log_type: LogType = LogType.NORMAL) -> None:
        """Log according to the build mode."""
        if self.development:
            self.log_internally(message, log_type)
            self.log_to_file(message, log_type)
            self.log_to_console(message, log_type)
        else:
            self.log_to_file(message, log_type)
            self.log_internally(message, log_type)

    def log_to_file(self, message: str, log_type: LogType = LogType.NORMAL) -> None:
        """Write to the log file, clearing it on the first write."""
        if not self.name:
            self.name = DEFAULT_LOG_FILE
        if not self.first_log_already_placed:
            self.first_log_already_placed = True
            try:
                with open(self.name, "w", encoding="utf-8"):
                    pass
            except OSError:
                pass
        log_to_file(self.name, message, log_type)

    def log_internally(self, message: str, log_type: LogType = LogType.NORMAL) -> None:
        """Keep the message in memory, dropping the oldest past the limit."""
        self.internal_logs.append(format_log(message, log_type))

    def log_to_console(self, message: str, log_type: LogType = LogType.NORMAL) -> None:
        """Print the formatted message to standard output."""
        print(format_log(message, log_type), end="")


_logs_manager = LogManager()


def log(message: str, log_type: LogType = LogType.NORMAL) -> None:
    """Log through the shared log manager."""
    _logs_manager.log(message, log_type)


def get_logs_manager() -> LogManager:
    """Return the shared log manager."""
    return _logs_manager