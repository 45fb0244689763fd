"""
Event log for the Land Registry.

Keeps an in-memory sequence of emitted notifications, fans them out to
subscribers and optionally appends them to a JSONL audit file.
"""

import fcntl
import json
import logging
import os
import threading
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from .models import EventName, RegistryEvent

logger = logging.getLogger(__name__)

Subscriber = Callable[[RegistryEvent], None]


class EventLog:
    """
    Thread-safe notification log.

    Events are kept in emission order. When ``log_file`` is set every
    event is also appended to it as one JSON line.
    """

    def __init__(self, log_file: Path | None = None):
        """
        Initialize the event log.

        Args:
            log_file: Optional JSONL file to append events to
        """
        self._log_file = Path(log_file) if log_file else None
        if self._log_file:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)

        self._lock = threading.RLock()
        self._events: list[RegistryEvent] = []
        self._subscribers: list[Subscriber] = []

    @property
    def log_file(self) -> Path | None:
        return self._log_file

    @property
    def events(self) -> list[RegistryEvent]:
        """Return a copy of all events emitted so far."""
        with self._lock:
            return list(self._events)

    def names(self) -> list[EventName]:
        """Return the names of all events in emission order."""
        with self._lock:
            return [e.name for e in self._events]

    def subscribe(self, callback: Subscriber) -> None:
        """Register a callback invoked for every emitted event."""
        with self._lock:
            self._subscribers.append(callback)

    def emit(self, event: RegistryEvent) -> RegistryEvent:
        """
        Record an event and deliver it to subscribers.

        A failing subscriber or an unwritable log file is logged and
        skipped; neither fails the operation that emitted the event.
        """
        with self._lock:
            self._events.append(event)
            subscribers = list(self._subscribers)

        if self._log_file:
            try:
                self._append(event)
            except OSError as e:
                logger.warning(f"Could not write event {event.name.value} to {self._log_file}: {e}")

        for callback in subscribers:
            try:
                callback(event)
            except Exception as e:
                logger.warning(f"Event subscriber failed for {event.name.value}: {e}")

        return event

    def _append(self, event: RegistryEvent) -> None:
        """Append an event to the JSONL file under an advisory lock."""
        line = event.to_log_line() + "\n"
        with self._lock:
            with open(self._log_file, "a", encoding="utf-8") as f:
                try:
                    fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                except (AttributeError, OSError):
                    # fcntl not available or lock failed
                    pass

                try:
                    f.write(line)
                    f.flush()
                    os.fsync(f.fileno())
                finally:
                    try:
                        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
                    except (AttributeError, OSError):
                        pass


def read_log(path: Path) -> list[RegistryEvent]:
    """
    Load events back from a JSONL audit file.

    Lines that cannot be parsed are skipped with a warning.
    """
    path = Path(path)
    if not path.exists():
        return []

    events = []
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), 1):
        if not line.strip():
            continue
        try:
            events.append(RegistryEvent(**json.loads(line)))
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning(f"Skipping malformed audit line {lineno} in {path}: {e}")
    return events
