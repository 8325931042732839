"""In-memory history of settled search texts."""

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from itertools import islice

from debounced_input.domain.constants import EVENT_LOG_MAXLEN


@dataclass(frozen=True)
class SettledEvent:
    """A search text that settled after its quiet period."""

    session_id: str
    text: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


class EventLog:
    """Bounded history of settled events; the oldest drop off once `maxlen` is hit."""

    def __init__(self, maxlen: int = EVENT_LOG_MAXLEN) -> None:
        self._buffer: deque[SettledEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def record(self, event: SettledEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def get_recent(self, limit: int = 50, session_id: str | None = None) -> list[SettledEvent]:
        """Newest-first slice of the history.

        With `session_id`, only that session's events count toward `limit`.
        """
        with self._lock:
            newest_first = reversed(list(self._buffer))
        matching = (
            e for e in newest_first if session_id is None or e.session_id == session_id
        )
        return list(islice(matching, limit))
