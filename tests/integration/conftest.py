"""Integration test fixtures.

Integration tests wire the real API, services, tasks and orchestrator
together; only the provider layer is replaced by scripted clients, so no
external service is required.
"""

import pytest
from fastapi.testclient import TestClient

from leadgen_inference.api import dependencies
from leadgen_inference.main import app
from leadgen_inference.persistence.repository import InMemoryDecisionMakerRepository


@pytest.fixture
def repository() -> InMemoryDecisionMakerRepository:
    return InMemoryDecisionMakerRepository()


@pytest.fixture
def api_client(test_settings, repository, make_orchestrator):
    """TestClient factory with scripted providers injected.

    Usage:
        def test_something(api_client, scripted_client):
            client = api_client(scripted_client("openai", ["..."]))
    """

    def _make(primary, secondary=None, settings=None):
        orchestrator = make_orchestrator(primary, secondary)
        app.dependency_overrides[dependencies.get_orchestrator] = lambda: orchestrator
        app.dependency_overrides[dependencies.get_repository] = lambda: repository
        app.dependency_overrides[dependencies.get_settings] = lambda: settings or test_settings
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
