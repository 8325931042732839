import pytest
from fastapi.testclient import TestClient

from debounced_input.main import app
from tests.fixtures.virtual_scheduler import VirtualScheduler


@pytest.fixture()
def client() -> TestClient:
    """Provide a FastAPI test client."""
    return TestClient(app)


@pytest.fixture()
def scheduler() -> VirtualScheduler:
    """Provide a scheduler driven by virtual time."""
    return VirtualScheduler()
