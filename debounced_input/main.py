from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from debounced_input.api.dependencies import get_session_service, initialize_services
from debounced_input.api.health_routes import router as health_router
from debounced_input.api.session_routes import router as session_router
from debounced_input.logging_config import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Initialize services on startup, dispose every debouncer on shutdown."""
    logger.info("Starting up: initializing services")
    initialize_services()

    yield

    logger.info("Shutting down")
    get_session_service().close_all()


app = FastAPI(
    title="Debounced Input",
    description="Coalesce live search-field edits into settled queries",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(session_router)
