"""
Pytest configuration and shared fixtures for the test suite.
Ensures proper Python path and provides common fixtures for unit and integration tests.
"""
import json
import os
import sys
from pathlib import Path

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Keep the app from creating a database file or cluttering stdout during tests.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOG_CONSOLE", "false")

# Add project root and src to Python path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
src_path = project_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


PROXY_URL = "https://proxy.test/functions/v1"
GATEWAY_URL = "https://gateway.test/v1/chat/completions"


def _data_line(content: str) -> bytes:
    payload = {"choices": [{"delta": {"content": content}}]}
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n".encode("utf-8")


@pytest.fixture
def data_line():
    """Factory: one event-stream data line carrying a chat-completion delta."""
    return _data_line


@pytest.fixture
def done_line() -> bytes:
    return b"data: [DONE]\n"


# ----- Streaming bodies -----
@pytest.fixture
def sse_body():
    """
    Factory for an async byte body delivered chunk by chunk.
    ``pulled`` records the index of every chunk the reader asked for; with
    ``hang=True`` the body never ends after its last chunk.
    """
    import asyncio

    def _make(chunks, pulled=None, hang=False):
        async def body():
            for i, chunk in enumerate(chunks):
                if pulled is not None:
                    pulled.append(i)
                yield chunk
            if hang:
                await asyncio.Event().wait()

        return body()

    return _make


@pytest.fixture
def mentor_client_factory():
    """Build a MentorClient whose HTTP traffic goes to ``handler`` (httpx.MockTransport)."""
    from mentor.client.client import MentorClient

    def _make(handler, **kwargs):
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        kwargs.setdefault("api_key", "pk-test")
        kwargs.setdefault("idle_timeout", 5.0)
        return MentorClient(PROXY_URL, http_client=http, **kwargs)

    return _make


@pytest.fixture
def gateway_factory():
    """Build a GatewayClient whose upstream calls go to ``handler``."""
    from infra.llm.gateway import GatewayClient

    def _make(handler):
        return GatewayClient(
            api_key="gw-test-key",
            url=GATEWAY_URL,
            model="test-model",
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

    return _make


# ----- In-memory DB (for tests that need DB without touching real DB) -----
@pytest.fixture
def in_memory_engine():
    """Create an in-memory SQLite engine for tests."""
    return create_engine("sqlite:///:memory:", echo=False)


@pytest.fixture
def db_session(in_memory_engine):
    """Create an in-memory database session. Uses api.config.Base for schema."""
    from api.config import Base
    from api.models import models  # noqa: F401
    Base.metadata.create_all(in_memory_engine)
    SessionLocal = sessionmaker(bind=in_memory_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def gateway_completion():
    """Factory: a non-streaming chat completion whose first choice calls ``name`` with ``arguments``."""

    def _make(name: str, arguments) -> dict:
        if not isinstance(arguments, str):
            arguments = json.dumps(arguments)
        return {
            "choices": [
                {
                    "message": {
                        "role": "assistant",
                        "tool_calls": [{"type": "function", "function": {"name": name, "arguments": arguments}}],
                    }
                }
            ]
        }

    return _make
