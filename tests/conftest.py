"""Shared fixtures: in-memory SQLite database, fast bcrypt, FastAPI test client."""

import os

# Configure before any messagely module reads the environment
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from messagely.api.deps import get_hasher, get_token_issuer
from messagely.core import user as user_store
from messagely.core.auth import AuthFlow
from messagely.core.rate_limit import limiter
from messagely.core.security import PasswordHasher, TokenIssuer
from messagely.infra.database import get_db, init_db, make_engine
from messagely.main import app

TEST_SECRET = "test-secret"

ALICE = {
    "username": "alice",
    "password": "wonderland",
    "first_name": "Alice",
    "last_name": "Liddell",
    "phone": "+14155550101",
}
BOB = {
    "username": "bob",
    "password": "builder",
    "first_name": "Bob",
    "last_name": "Builder",
    "phone": "+14155550102",
}
CAROL = {
    "username": "carol",
    "password": "christmas",
    "first_name": "Carol",
    "last_name": "Singer",
    "phone": "+14155550103",
}


@pytest.fixture
def engine():
    engine = make_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
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
def hasher():
    return PasswordHasher(work_factor=4)


@pytest.fixture
def issuer():
    return TokenIssuer(secret=TEST_SECRET)


@pytest.fixture
def auth_flow(hasher, issuer):
    return AuthFlow(hasher, issuer)


@pytest.fixture
def users(db, hasher):
    """alice, bob and carol registered directly through the store."""
    for fields in (ALICE, BOB, CAROL):
        user_store.register(db, hasher, dict(fields))
    return {"alice": ALICE, "bob": BOB, "carol": CAROL}


@pytest.fixture
def client(session_factory, hasher, issuer):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_hasher] = lambda: hasher
    app.dependency_overrides[get_token_issuer] = lambda: issuer
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
