"""
Shared fixtures: an in-memory database per test and a signed-in client.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.services import account_service


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()
    
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sign_in(client):
    """Sign in through the API; returns (user_id, auth headers)."""
    def _sign_in(email, display_name=None):
        response = client.post(
            "/api/auth/google",
            json={"email": email, "display_name": display_name or email.split("@")[0]}
        )
        assert response.status_code == 200
        body = response.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['access_token']}"}
    return _sign_in


@pytest.fixture
def make_user(db):
    def _make_user(email, display_name=None):
        return account_service.create_or_update_by_email(db, email, display_name or email.split("@")[0])
    return _make_user


@pytest.fixture
def befriend(db):
    """Link two users through the request/accept handshake."""
    def _befriend(a_id, b_id):
        account_service.send_friend_request(db, a_id, b_id)
        account_service.accept_request(db, b_id, a_id)
    return _befriend
