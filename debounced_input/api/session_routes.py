from fastapi import APIRouter, HTTPException, Query, Response

from debounced_input.api.dependencies import get_session_service
from debounced_input.application.search_session_service import (
    SessionLimitError,
    SessionNotFoundError,
)
from debounced_input.domain.models import (
    SearchSessionState,
    SearchTextUpdate,
    SessionCreateRequest,
    SettledEventItem,
    SettledEventsResponse,
)
from debounced_input.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

_NOT_FOUND = {404: {"description": "Unknown or closed session"}}


def _session_not_found(session_id: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={
            "error_code": "SESSION_NOT_FOUND",
            "detail": f"Search session {session_id} does not exist or was closed.",
        },
    )


@router.post(
    "",
    response_model=SearchSessionState,
    status_code=201,
    summary="Open a debounced search session",
    responses={429: {"description": "Too many open sessions"}},
)
def create_session(request: SessionCreateRequest | None = None) -> SearchSessionState:
    """Create a search session with its own quiet period."""
    service = get_session_service()
    debounce_seconds = request.debounce_seconds if request is not None else None

    try:
        return service.create_session(debounce_seconds)
    except SessionLimitError:
        logger.warning("Rejected new session: limit reached")
        raise HTTPException(
            status_code=429,
            detail={
                "error_code": "SESSION_LIMIT_REACHED",
                "detail": "Too many open search sessions. Close one and retry.",
            },
        )


@router.get(
    "/events",
    response_model=SettledEventsResponse,
    summary="Get recently settled search texts",
)
def get_settled_events(
    limit: int = Query(default=50, ge=1, le=100),
    session_id: str | None = Query(default=None),
) -> SettledEventsResponse:
    """Return the most recent settled search texts, newest first."""
    service = get_session_service()
    events = service.get_recent_events(limit, session_id=session_id)
    return SettledEventsResponse(
        events=[
            SettledEventItem(session_id=e.session_id, text=e.text, timestamp=e.timestamp)
            for e in events
        ],
        total=len(events),
    )


@router.get(
    "/{session_id}",
    response_model=SearchSessionState,
    summary="Get live and settled text for a session",
    responses=_NOT_FOUND,
)
def get_session(session_id: str) -> SearchSessionState:
    service = get_session_service()
    try:
        return service.get_session(session_id)
    except SessionNotFoundError:
        raise _session_not_found(session_id)


@router.put(
    "/{session_id}/text",
    response_model=SearchSessionState,
    summary="Push a live text change",
    responses=_NOT_FOUND,
)
def update_text(session_id: str, update: SearchTextUpdate) -> SearchSessionState:
    """Record the latest field text; it settles after the quiet period."""
    service = get_session_service()
    try:
        return service.update_text(session_id, update.text)
    except SessionNotFoundError:
        raise _session_not_found(session_id)


@router.delete(
    "/{session_id}",
    status_code=204,
    summary="Close a session and cancel its pending settle",
    responses=_NOT_FOUND,
)
def close_session(session_id: str) -> Response:
    service = get_session_service()
    try:
        service.close_session(session_id)
    except SessionNotFoundError:
        raise _session_not_found(session_id)
    return Response(status_code=204)
