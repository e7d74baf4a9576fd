import os

# must be set before the app's config module is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ADMIN_EMAILS"] = "admin@example.com"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from consultancy_api.auth import make_token
from consultancy_api.db import Base, get_db
from consultancy_api.main import app
from consultancy_api.models import User

engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    # not entered as a context manager: startup would touch the app's own engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def lenient_client(client):
    """Returns the 500 response for unhandled errors instead of re-raising them."""
    return TestClient(app, raise_server_exceptions=False)


def _make_user(db, name, email, is_admin=False):
    u = User(name=name, email=email, is_admin=is_admin)
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture
def user(db):
    return _make_user(db, "Ada", "ada@example.com")


@pytest.fixture
def other_user(db):
    return _make_user(db, "Bo", "bo@example.com")


@pytest.fixture
def admin(db):
    return _make_user(db, "Admin", "admin@example.com", is_admin=True)


def bearer(u):
    return {"Authorization": f"Bearer {make_token(u.id, u.is_admin)}"}


@pytest.fixture
def auth_headers(user):
    return bearer(user)


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture
def other_headers(other_user):
    return bearer(other_user)
