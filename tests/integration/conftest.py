"""
Integration test fixtures. Overrides get_db for API tests with in-memory DB
and get_gateway with a gateway client backed by httpx.MockTransport.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


@pytest.fixture
def override_get_db():
    """Create in-memory engine and session factory for API tests."""
    from api.config import Base
    from api.models import models  # noqa: F401
    # One shared connection: TestClient runs sync work on other threads.
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    return _get_db


@pytest.fixture
def api_client(override_get_db):
    """FastAPI TestClient with in-memory DB override."""
    from fastapi.testclient import TestClient
    from api.api import app
    from api.config import get_db
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def use_gateway(gateway_factory):
    """
    Route gateway traffic to ``handler`` for the duration of the test:
        use_gateway(lambda request: httpx.Response(...))
    """
    from api.api import app
    from api.utils.gateway import get_gateway

    def _install(handler):
        gateway = gateway_factory(handler)
        app.dependency_overrides[get_gateway] = lambda: gateway
        return gateway

    yield _install
    app.dependency_overrides.pop(get_gateway, None)
