import pytest


@pytest.fixture
def anyio_backend():
    """The service relies on asyncio primitives; run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture
def fake_openai_client():
    """Reusable fake upstream client returning a fixed completion."""
    from tests.fixtures.mock_clients import FakeOpenAIClient
    from tests.fixtures.responses import make_completion
    return FakeOpenAIClient(responses=[make_completion("Keep your easy runs easy.")])


@pytest.fixture
def completion_service(fake_openai_client):
    """CompletionService wired to the fake upstream client."""
    from services.completion_service import CompletionService
    return CompletionService(
        client_provider=lambda: fake_openai_client,
        model="gpt-4o-mini",
        default_temperature=0.6,
        timeout=5.0
    )


@pytest.fixture
def conversation_store():
    """Fresh unbounded store."""
    from services.conversation_store import ConversationStore
    return ConversationStore()


@pytest.fixture
def configured_app(conversation_store, completion_service):
    """App with every router, a fresh store and the fake upstream."""
    from fastapi.testclient import TestClient
    from main import app
    from routes.deps import get_completion_service, get_conversation_store

    app.dependency_overrides[get_completion_service] = lambda: completion_service
    app.dependency_overrides[get_conversation_store] = lambda: conversation_store

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
