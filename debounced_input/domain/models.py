from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from debounced_input.domain.constants import (
    DEBOUNCE_SECONDS,
    MAX_DEBOUNCE_SECONDS,
    MAX_TEXT_LENGTH,
)


# --- Core Configuration ---


class DebounceConfig(BaseModel):
    """Quiet-period configuration for a Debouncer. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    debounce_seconds: float = Field(default=DEBOUNCE_SECONDS, ge=0)


# --- Search Sessions ---


class SessionCreateRequest(BaseModel):
    """Request body for POST /sessions."""

    debounce_seconds: float | None = Field(
        default=None,
        ge=0,
        le=MAX_DEBOUNCE_SECONDS,
        description="Quiet period for this session. Server default when omitted.",
    )


class SearchTextUpdate(BaseModel):
    """Request body for PUT /sessions/{session_id}/text."""

    text: str = Field(max_length=MAX_TEXT_LENGTH)


class SearchSessionState(BaseModel):
    """Live and settled search text for one session."""

    session_id: str
    text: str
    debounced_text: str
    pending: bool
    settle_count: int
    debounce_seconds: float
    created_at: datetime


# --- Settled Events ---


class SettledEventItem(BaseModel):
    """A single settled search value."""

    session_id: str
    text: str
    timestamp: datetime


class SettledEventsResponse(BaseModel):
    """Response from GET /sessions/events."""

    events: list[SettledEventItem]
    total: int


# --- Health ---


class HealthResponse(BaseModel):
    """Response from GET /health."""

    status: str
    timestamp: str
    active_sessions: int
