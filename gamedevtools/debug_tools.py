"""Developer logging helpers, on-screen message queue and null-safety checks."""

from __future__ import annotations

import enum
import logging
import os
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, TypeVar

T = TypeVar("T")

FATAL_USER_MESSAGE = (
    "The game has encountered an error and has crashed. "
    "We appreciate your assistance in submitting a crash report."
)
TIMESTAMP_FORMAT = "%Y.%m.%d-%H.%M.%S"
SCREEN_MESSAGE_DURATION = 15.0
TODO_SCREEN_DURATION = 5.0
DEFAULT_LOG_FILE = Path("DeveloperLogs.txt")


class FatalError(RuntimeError):
    """Raised where a fatal log entry terminates the program."""


class ScreenColor(enum.Enum):
    """Colours available for on-screen debug messages, as RGB tuples."""

    RED = (255, 0, 0)
    GREEN = (0, 255, 0)
    BLUE = (0, 0, 255)
    CYAN = (0, 255, 255)
    MAGENTA = (255, 0, 255)
    YELLOW = (255, 255, 0)
    WHITE = (255, 255, 255)

    @classmethod
    def from_name(cls, name: str) -> ScreenColor:
        """Look up a colour by name, ignoring case; unknown names give white."""
        try:
            return cls[str(name).upper()]
        except KeyError:
            return cls.WHITE


@dataclass(frozen=True)
class ScreenMessage:
    """A message queued for display on screen."""

    text: str
    duration: float
    color: ScreenColor


@dataclass(frozen=True)
class _Location:
    file: str
    line: int
    function: str

    @classmethod
    def of_caller(cls) -> _Location:
        """Location of whoever called the public method that called this."""
        frame = sys._getframe(2)
        return cls(frame.f_code.co_filename, frame.f_lineno, frame.f_code.co_name)


class DebugTools:
    """Logging front end with caller context, screen messages and null checks."""

    def __init__(
        self,
        debug_mode: bool = True,
        log_file: str | os.PathLike[str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.debug_mode = debug_mode
        self.log_file = Path(log_file) if log_file is not None else DEFAULT_LOG_FILE
        self.logger = logger if logger is not None else logging.getLogger("gamedevtools")
        self.screen_messages: list[ScreenMessage] = []

    def log(self, message: str) -> str:
        self.logger.info(message)
        return message

    def log_info(self, message: str) -> str:
        self.logger.info(message)
        return message

    def log_verbose(self, message: str) -> str:
        self.logger.debug(message)
        return message

    def log_silent(self, message: str) -> str:
        self.logger.info(message)
        return message

    def log_warning(self, message: str) -> str:
        self.logger.warning(message)
        return message

    def log_warning_value(self, name: str, value: Any) -> str:
        """Log ``name: value`` as a warning, formatting floats and ints as printf does."""
        if isinstance(value, float):
            text = f"{name}: {value:f}"
        elif isinstance(value, int) and not isinstance(value, bool):
            text = f"{name}: {value:d}"
        else:
            text = f"{name}: {value}"
        self.logger.warning(text)
        return text

    def log_error(self, message: str) -> str:
        where = _Location.of_caller()
        text = f"{where.file}:{where.line}: {where.function}: {message}"
        self.logger.error(text)
        return text

    def log_fatal(self, message: str) -> None:
        where = _Location.of_caller()
        text = f"{where.function} ({where.file}:{where.line}): {message}"
        self.logger.critical(text)
        raise FatalError(text)

    def log_fatal_user(self) -> None:
        self.logger.critical(FATAL_USER_MESSAGE)
        raise FatalError(FATAL_USER_MESSAGE)

    def log_todo(self, message: str) -> str:
        where = _Location.of_caller()
        text = _todo_text(message, where)
        self.logger.warning(text)
        return text

    def log_on_screen(self, message: str, color: str) -> ScreenMessage:
        entry = ScreenMessage(str(message), SCREEN_MESSAGE_DURATION, ScreenColor.from_name(color))
        self.screen_messages.append(entry)
        return entry

    def log_todo_on_screen(self, message: str) -> ScreenMessage:
        where = _Location.of_caller()
        entry = ScreenMessage(_todo_text(message, where), TODO_SCREEN_DURATION, ScreenColor.YELLOW)
        self.screen_messages.append(entry)
        return entry

    def log_to_file(self, message: str) -> bool:
        """Append a timestamped entry with caller context to the log file."""
        where = _Location.of_caller()
        timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
        text = (
            f"[{timestamp}] {message}\n"
            f"File: {os.path.basename(where.file)}\n"
            f"Function: {where.function}\n"
            f"Line: {where.line}\n"
        )
        try:
            with open(self.log_file, "a", encoding="utf-8", newline="") as handle:
                handle.write(text)
        except OSError:
            self.logger.error("Failed to write to log file: %s", self.log_file)
            return False
        self.logger.info("Logged to file: %s", text)
        return True

    def safe_check(self, obj: Any, name: str = "object") -> bool:
        """Return whether ``obj`` is set; report it otherwise, fatally outside debug mode."""
        if obj is not None:
            return True
        self._report_invalid(name, _Location.of_caller())
        return False

    def safe_check_multiple(self, objects: Mapping[str, Any] | Iterable[Any]) -> bool:
        """Check each object; a mapping supplies names, otherwise positions are used."""
        where = _Location.of_caller()
        if isinstance(objects, Mapping):
            named = list(objects.items())
        else:
            named = [(f"objects[{index}]", obj) for index, obj in enumerate(objects)]
        all_valid = True
        for name, obj in named:
            if obj is None:
                all_valid = False
                self._report_invalid(name, where)
        return all_valid

    def safe_get(self, value: T | None, context_name: str, value_name: str) -> T | None:
        where = _Location.of_caller()
        detail = f"[File: {where.file}, Line: {where.line}, Function: {where.function}]"
        if value is None:
            self.logger.error(
                "%s: %s is null! %s Ensure it is set before accessing.",
                context_name,
                value_name,
                detail,
            )
            return None
        self.logger.debug("%s: %s retrieved successfully. %s", context_name, value_name, detail)
        return value

    def _report_invalid(self, name: str, where: _Location) -> None:
        if not self.debug_mode:
            self.log_fatal_user()
        self.logger.error(
            "Invalid object: %s | Function: %s | File: %s | Line: %d",
            name,
            where.function,
            where.file,
            where.line,
        )


def _todo_text(message: str, where: _Location) -> str:
    return f"TODO: {message}\nFunction: {where.function}\nFile: {where.file}\nLine: {where.line}"


def maps_equal(map_a: Mapping[Any, Any], map_b: Mapping[Any, Any]) -> bool:
    """True when both maps hold the same keys with equal values."""
    if len(map_a) != len(map_b):
        return False
    missing = object()
    return all(map_b.get(key, missing) is not missing and map_b[key] == value
               for key, value in map_a.items())