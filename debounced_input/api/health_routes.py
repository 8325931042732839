from datetime import datetime, timezone

from fastapi import APIRouter

from debounced_input.api.dependencies import get_session_service
from debounced_input.domain.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Health check endpoint")
def health_check() -> HealthResponse:
    """Return service health status and the number of open search sessions."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(tz=timezone.utc).isoformat(),
        active_sessions=get_session_service().active_count,
    )
