import os

# Settings are read once at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEFAULT_ADMIN_PASSWORD", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from helpdesk.application.services.auth_service import create_access_token, create_user
from helpdesk.domain.models.enums import UserRole
from helpdesk.domain.models.user import User
from helpdesk.infrastructure.database import Base, build_engine, get_db
from helpdesk.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from helpdesk.main import app

PASSWORD = "secret123"


@pytest.fixture(scope="function")
def engine():
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    import helpdesk.domain.models  # noqa: F401

    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    users = SQLAlchemyUserRepository(db, User)
    counter = {"n": 0}

    def _make(role=UserRole.USER, name=None, email=None, phone=None):
        counter["n"] += 1
        n = counter["n"]
        return create_user(
            users,
            name=name or f"{role.value} {n}",
            email=email or f"{role.value.lower()}{n}@example.com",
            password=PASSWORD,
            role=role,
            phone=phone,
        )

    return _make


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def customer(make_user):
    return make_user(UserRole.USER, name="Ivan Petrov")


@pytest.fixture
def other_customer(make_user):
    return make_user(UserRole.USER, name="Olga Smirnova")


@pytest.fixture
def manager(make_user):
    return make_user(UserRole.MANAGER, name="Maria Manager")


@pytest.fixture
def other_manager(make_user):
    return make_user(UserRole.MANAGER, name="Pavel Manager")


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN, name="Anna Admin")


@pytest.fixture
def customer_headers(customer):
    return auth_headers(customer)


@pytest.fixture
def other_customer_headers(other_customer):
    return auth_headers(other_customer)


@pytest.fixture
def manager_headers(manager):
    return auth_headers(manager)


@pytest.fixture
def other_manager_headers(other_manager):
    return auth_headers(other_manager)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def new_order(client, customer_headers):
    """Create an order as ``customer`` and return its JSON."""

    def _create(name="Laptop Repair", **extra):
        payload = {"name": name, "description": "Screen flickers after boot", **extra}
        response = client.post("/api/Orders/create", json=payload, headers=customer_headers)
        assert response.status_code == 201, response.text
        return response.json()["order"]

    return _create
