import os

from debounced_input.application.search_session_service import SearchSessionService
from debounced_input.domain.constants import DEBOUNCE_SECONDS, MAX_SESSIONS
from debounced_input.domain.models import DebounceConfig
from debounced_input.infrastructure.event_log import EventLog
from debounced_input.logging_config import get_logger

logger = get_logger(__name__)

_session_service: SearchSessionService | None = None


def initialize_services() -> None:
    """Initialize all services at startup. Called from FastAPI lifespan."""
    get_session_service()


def get_session_service() -> SearchSessionService:
    """Return the singleton SearchSessionService, creating it on first call."""
    global _session_service  # noqa: PLW0603
    if _session_service is None:
        # Reject a negative interval at startup, not on every new session
        config = DebounceConfig(
            debounce_seconds=float(os.getenv("DEBOUNCE_SECONDS", str(DEBOUNCE_SECONDS)))
        )
        max_sessions = int(os.getenv("MAX_SESSIONS", str(MAX_SESSIONS)))
        logger.info(
            "Initializing SearchSessionService (debounce=%.3fs, max_sessions=%d)",
            config.debounce_seconds,
            max_sessions,
        )
        _session_service = SearchSessionService(
            event_log=EventLog(),
            default_debounce_seconds=config.debounce_seconds,
            max_sessions=max_sessions,
        )

    return _session_service


def set_session_service(service: SearchSessionService) -> None:
    """Override the SearchSessionService singleton (for testing)."""
    global _session_service  # noqa: PLW0603
    _session_service = service
