import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from debounced_input.application.debounced_value import DebouncedSearch
from debounced_input.domain.constants import DEBOUNCE_SECONDS, MAX_SESSIONS
from debounced_input.domain.models import SearchSessionState
from debounced_input.infrastructure.event_log import EventLog, SettledEvent
from debounced_input.infrastructure.scheduler import Scheduler, ThreadingScheduler
from debounced_input.logging_config import get_logger

logger = get_logger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session id is unknown or already closed."""


class SessionLimitError(RuntimeError):
    """Raised when creating a session would exceed the configured maximum."""


@dataclass
class _Session:
    session_id: str
    search: DebouncedSearch
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


class SearchSessionService:
    """Own one DebouncedSearch per remote search field."""

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        event_log: EventLog | None = None,
        default_debounce_seconds: float = DEBOUNCE_SECONDS,
        max_sessions: int = MAX_SESSIONS,
    ) -> None:
        self._scheduler = scheduler or ThreadingScheduler()
        self._event_log = event_log or EventLog()
        self._default_debounce_seconds = default_debounce_seconds
        self._max_sessions = max_sessions
        self._sessions: dict[str, _Session] = {}
        self._lock = threading.Lock()

    def create_session(self, debounce_seconds: float | None = None) -> SearchSessionState:
        """Open a new search session with its own debouncer."""
        delay = self._default_debounce_seconds if debounce_seconds is None else debounce_seconds
        session_id = uuid.uuid4().hex

        with self._lock:
            if len(self._sessions) >= self._max_sessions:
                raise SessionLimitError(f"Session limit reached ({self._max_sessions})")
            search = DebouncedSearch(
                delay=delay,
                scheduler=self._scheduler,
                on_debounced=lambda text: self._on_debounced(session_id, text),
            )
            session = _Session(session_id=session_id, search=search)
            self._sessions[session_id] = session

        logger.info("Opened search session %s (debounce=%.3fs)", session_id, delay)
        return self._to_state(session)

    def update_text(self, session_id: str, text: str) -> SearchSessionState:
        """Forward a live text change into the session's debouncer."""
        session = self._get(session_id)
        session.search.text = text
        return self._to_state(session)

    def get_session(self, session_id: str) -> SearchSessionState:
        return self._to_state(self._get(session_id))

    def close_session(self, session_id: str) -> None:
        """Dispose the session's debouncer and forget it."""
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError(session_id)
        session.search.dispose()
        logger.info("Closed search session %s", session_id)

    def close_all(self) -> None:
        """Dispose every session. Called during shutdown."""
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.search.dispose()
        logger.info("Closed %d search sessions", len(sessions))

    def get_recent_events(
        self, limit: int = 50, session_id: str | None = None
    ) -> list[SettledEvent]:
        """Return recent settled search texts, newest first."""
        return self._event_log.get_recent(limit, session_id=session_id)

    @property
    def active_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _get(self, session_id: str) -> _Session:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def _on_debounced(self, session_id: str, text: str) -> None:
        self._event_log.record(SettledEvent(session_id=session_id, text=text))
        logger.info("Search settled for %s: %r", session_id, text)

    @staticmethod
    def _to_state(session: _Session) -> SearchSessionState:
        debouncer = session.search.debouncer
        return SearchSessionState(
            session_id=session.session_id,
            text=session.search.text,
            debounced_text=session.search.debounced_text,
            pending=debouncer.is_pending,
            settle_count=debouncer.settle_count,
            debounce_seconds=debouncer.delay,
            created_at=session.created_at,
        )
