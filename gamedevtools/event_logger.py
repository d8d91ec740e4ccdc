"""Thread-safe recorder of gameplay events with search and CSV export."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger("gamedevtools.event_logger")

TIMESTAMP_FORMAT = "%Y.%m.%d-%H.%M.%S"
CSV_HEADER = "GameTime,EventName,Context,UTC_Timestamp\n"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class GameplayEventEntry:
    """One recorded event: name, context, game time and UTC wall-clock time."""

    event_name: str
    context: str = ""
    game_time: float = 0.0
    timestamp: datetime = field(default_factory=_utc_now)

    @property
    def timestamp_text(self) -> str:
        return self.timestamp.strftime(TIMESTAMP_FORMAT)


def sanitize_for_csv(value: str) -> str:
    """Quote a field containing commas or quotes, doubling embedded quotes."""
    if '"' in value or "," in value:
        return '"' + value.replace('"', '""') + '"'
    return value


class GameplayEventLogger:
    """Records gameplay events; ``clock`` supplies the current game time in seconds."""

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock
        self._events: list[GameplayEventEntry] = []
        self._lock = threading.Lock()

    def log_event(self, event_name: str, context: str = "") -> GameplayEventEntry | None:
        """Record an event; an empty name is rejected with a warning and returns None."""
        if not event_name:
            logger.warning("[GameplayEventLogger] LogEvent called with empty EventName.")
            return None
        game_time = float(self._clock()) if self._clock is not None else 0.0
        entry = GameplayEventEntry(event_name, context, game_time)
        with self._lock:
            self._events.append(entry)
        logger.debug(
            "[GameplayEventLogger] Event Logged: '%s' | Context: '%s' | GameTime: %.3f | UTC: %s",
            event_name,
            context,
            game_time,
            entry.timestamp_text,
        )
        return entry

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def dump_to_log(self) -> None:
        with self._lock:
            logger.info("---- Gameplay Event Log Dump Start ----")
            for entry in self._events:
                logger.info(
                    "GameTime: %.3f | Event: %s | Context: %s | UTC: %s",
                    entry.game_time,
                    entry.event_name,
                    entry.context,
                    entry.timestamp_text,
                )
            logger.info("---- Gameplay Event Log Dump End ----")

    def export_csv(self, file_path: str | os.PathLike[str]) -> bool:
        """Write all events to a CSV file; False when empty or the write fails."""
        with self._lock:
            if not self._events:
                logger.warning("[GameplayEventLogger] No events to export.")
                return False
            rows = [CSV_HEADER]
            rows.extend(
                f"{entry.game_time:.3f},{sanitize_for_csv(entry.event_name)},"
                f"{sanitize_for_csv(entry.context)},{entry.timestamp_text}\n"
                for entry in self._events
            )
        try:
            with open(file_path, "w", encoding="utf-8", newline="") as handle:
                handle.write("".join(rows))
        except OSError:
            logger.error("[GameplayEventLogger] Failed to save CSV to path: %s", file_path)
            return False
        return True

    def events(self) -> list[GameplayEventEntry]:
        with self._lock:
            return list(self._events)

    def search_by_name(self, term: str) -> list[GameplayEventEntry]:
        """Events whose name contains ``term``, ignoring case."""
        needle = term.lower()
        with self._lock:
            return [e for e in self._events if needle in e.event_name.lower()]

    def search_by_context(self, term: str) -> list[GameplayEventEntry]:
        """Events whose context contains ``term``, ignoring case."""
        needle = term.lower()
        with self._lock:
            return [e for e in self._events if needle in e.context.lower()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)