"""
Pytest configuration and shared fixtures.

Every test runs against a fresh in-memory SQLite database.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cvgenius.main import app
from cvgenius.db.base import Base
import cvgenius.db.models  # noqa: F401
from cvgenius.db.models.subscription import Subscription
from cvgenius.core.auth_dependency import get_db
from cvgenius.core.security import create_access_token


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """Create test client with a clean rate limiter."""
    app.state.rate_limiter.reset()
    return TestClient(app)


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user id."""
    def _headers(user_id: str = "user_1") -> dict:
        token = create_access_token({"sub": user_id})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def make_subscription(db_session):
    """Create a subscription row for a user."""
    def _make(user_id: str = "user_1", plan_type: str = "free", status: str = "active") -> Subscription:
        sub = Subscription(user_id=user_id, plan_type=plan_type, status=status)
        db_session.add(sub)
        db_session.commit()
        return sub
    return _make
