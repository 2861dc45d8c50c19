"""
Pytest configuration and shared fixtures.
"""

import os

# Keep the app module away from the on-disk database and the default secret
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.core.security import TokenClaims, TokenService, get_token_service
from jobboard.db.base import Base
from jobboard.db.session import get_db
from jobboard.main import app
from jobboard.models import Company, Job, Role, User
from jobboard.services import store

TEST_SECRET = "test-secret"


@pytest.fixture
def engine():
    """In-memory SQLite shared across threads for the duration of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret_key=TEST_SECRET, algorithm="HS256", expire_minutes=60)


@pytest.fixture
def client(session_factory, tokens):
    """TestClient wired to the in-memory database and the test signing key."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: tokens
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============== Data helpers ==============


def make_user(db, email: str, role: Role = Role.JOBSEEKER, name: str = "Test User") -> User:
    """Insert a user directly; the password hash is irrelevant here."""
    return store.create_user(db, name=name, email=email, password="not-a-real-hash", role=role.value)


def claims_for(user: User) -> TokenClaims:
    return TokenClaims(id=user.id, role=Role(user.role), company_id=user.company_id)


def make_company(db, owner: User, name: str = "Acme") -> Company:
    return store.create_company_for_owner(
        db,
        owner,
        {
            "name": name,
            "description": "Tools for every trade",
            "industry": "Manufacturing",
            "website": f"https://{name.lower()}.example",
        },
    )


def make_job(db, company: Company, title: str = "Backend Engineer", **fields) -> Job:
    data = {
        "title": title,
        "description": "build APIs",
        "requirements": "node",
    }
    data.update(fields)
    return store.create_job(db, company, data)


def auth_header(token: str) -> dict:
    return {"x-auth-token": f"Bearer {token}"}


def register_and_login(
    client: TestClient,
    email: str,
    role: str = "jobseeker",
    password: str = "secret123",
    name: str = "Test User",
) -> str:
    """Register through the API and return a fresh token."""
    response = client.post(
        "/api/users",
        json={"name": name, "email": email, "password": password, "role": role},
    )
    assert response.status_code == 200, response.text
    response = client.post("/api/users/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def create_company_via_api(client: TestClient, token: str, name: str = "Acme") -> dict:
    response = client.post(
        "/api/companies",
        json={
            "name": name,
            "description": "Tools for every trade",
            "industry": "Manufacturing",
            "website": f"https://{name.lower()}.example",
        },
        headers=auth_header(token),
    )
    assert response.status_code == 201, response.text
    return response.json()


def company_account(client: TestClient, email: str, name: str = "Acme") -> tuple[str, dict]:
    """Register a company user, create their company, return (fresh token, company)."""
    token = register_and_login(client, email, role="company")
    body = create_company_via_api(client, token, name=name)
    return body["token"], body["company"]


def post_job(client: TestClient, token: str, title: str = "Backend Engineer", **fields) -> dict:
    data = {"title": title, "description": "build APIs", "requirements": "node"}
    data.update(fields)
    response = client.post("/api/jobs", json=data, headers=auth_header(token))
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def company_token_and_id(client) -> tuple[str, str]:
    token, company = company_account(client, "owner@acme.example")
    return token, company["id"]
