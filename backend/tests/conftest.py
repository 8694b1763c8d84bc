"""
Shared fixtures

Settings are read at import time, so the environment is prepared before any
``ftplayer`` module is imported.
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from ftplayer.core.database import Base, SessionLocal, engine, get_db
from ftplayer.core.security import create_access_token, get_password_hash
from ftplayer.main import app
from ftplayer.models import User, FtpServer, ServerType
from ftplayer.providers import registry


@pytest.fixture
def db():
    """A real session on a fresh in-memory database"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(email="alice@example.com", name="Alice", password="secret123"):
        user = User(name=name, email=email, password_hash=get_password_hash(password))
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def other_user(make_user):
    return make_user(email="bob@example.com", name="Bob")


@pytest.fixture
def make_server(db):
    def _make_server(owner, name="Circle", server_type=ServerType.circle_ftp, **fields):
        server = FtpServer(
            user_id=owner.id,
            name=name,
            server_type=server_type,
            isp_provider=fields.pop("isp_provider", "Circle Network"),
            config=registry.snapshot_config(server_type),
            **fields
        )
        db.add(server)
        db.commit()
        db.refresh(server)
        return server
    return _make_server


@pytest.fixture
def server(make_server, user):
    return make_server(user)


def auth_headers_for(user):
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(user):
    return auth_headers_for(user)


@pytest.fixture
def other_auth_headers(other_user):
    return auth_headers_for(other_user)
