"""Shared test fixtures for backend tests."""

import json
from unittest.mock import patch

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from taskchat.core.database import get_session
from taskchat.services.llm.openai import OpenAIProvider

# In-memory SQLite with StaticPool so all connections (including threads) share one DB
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def get_test_session():
    with Session(test_engine) as session:
        yield session


@pytest.fixture(autouse=True)
def setup_test_db():
    """Create all tables before each test, drop after."""
    import taskchat.models  # noqa: F401 - register models
    SQLModel.metadata.create_all(test_engine)
    yield
    SQLModel.metadata.drop_all(test_engine)


def completion_chunk(content: str) -> bytes:
    """One upstream chunk in OpenAI's chat completion streaming format."""
    chunk = {
        "id": "chatcmpl-1",
        "object": "chat.completion.chunk",
        "choices": [{"index": 0, "delta": {"content": content}}],
    }
    return f"data: {json.dumps(chunk, ensure_ascii=False)}\n\n".encode()


def streaming_response(chunks: list[bytes], status_code: int = 200) -> httpx.Response:
    async def body():
        for chunk in chunks:
            yield chunk

    return httpx.Response(
        status_code, headers={"content-type": "text/event-stream"}, content=body()
    )


def parse_frames(body: str) -> list[str]:
    """Split a relayed SSE body into its ``data:`` payloads."""
    return [frame[len("data: "):] for frame in body.split("\n\n") if frame]


class FakeUpstream:
    """Stands in for the OpenAI API. Tests swap ``handler`` to change its answer."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler = lambda request: streaming_response(
            [completion_chunk("Hello"), completion_chunk(" there"), b"data: [DONE]\n\n"]
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def provider(self, api_key: str) -> OpenAIProvider:
        return OpenAIProvider(api_key, transport=httpx.MockTransport(self))


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(upstream):
    """FastAPI TestClient with the database and the AI vendor patched."""
    with (
        patch("taskchat.core.database.engine", test_engine),
        patch("taskchat.api.chat.engine", test_engine),
        patch("taskchat.api.chat.get_llm_provider", upstream.provider),
    ):
        from taskchat.main import app

        # Use FastAPI's dependency override for get_session
        app.dependency_overrides[get_session] = get_test_session

        with TestClient(app) as c:
            yield c

        app.dependency_overrides.clear()


@pytest.fixture
def session_client(client):
    """Client holding a session cookie."""
    response = client.post("/api/session/")
    assert response.status_code == 200
    return client
