import os

# Settings are read at import time; configure before importing the app.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from records_api.core.security import hash_password
from records_api.database import get_session
from records_api.main import app
from records_api.models.customer import Customer
from records_api.models.invoice import Invoice, Job
from records_api.models.user import User
from records_api.repositories.customer_repo import CustomerRepository
from records_api.repositories.invoice_repo import InvoiceRepository
from records_api.repositories.user_repo import UserRepository
from tests.fixtures_data import PASSWORD, USER_PROFILE


@pytest.fixture(scope="session")
def password_hash() -> str:
    # bcrypt is slow on purpose; hash the shared test password once
    return hash_password(PASSWORD)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_session():
        with Session(engine) as request_session:
            yield request_session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session, password_hash):
    repo = UserRepository()

    def _make_user(email: str, **overrides) -> User:
        data = {**USER_PROFILE, "email": email, "password": password_hash}
        data.update(overrides)
        return repo.create(session, User(**data))

    return _make_user


@pytest.fixture
def make_customer(session):
    repo = CustomerRepository()
    counter = {"n": 0}

    def _make_customer(owner: User | None, **overrides) -> Customer:
        counter["n"] += 1
        data = {
            "name": f"Customer {counter['n']}",
            "city": "Test City",
            "invoice_amount": Decimal("125.50"),
            "user_id": owner.id if owner is not None else None,
        }
        data.update(overrides)
        return repo.create(session, Customer(**data))

    return _make_customer


@pytest.fixture
def make_invoice(session):
    repo = InvoiceRepository()

    def _make_invoice(owner: User, customer: Customer, **overrides) -> Invoice:
        data = {
            "description": "Quarterly treatment",
            "jobs": [Job.ANT.value],
            "amount": Decimal("99.99"),
            "customer_id": customer.id,
            "user_id": owner.id,
        }
        data.update(overrides)
        return repo.create(session, Invoice(**data))

    return _make_invoice


@pytest.fixture
def user(make_user) -> User:
    return make_user(
        "testuser@example.ca",
        permissions=[
            "customer:read",
            "customer:update",
            "invoice:read",
            "user:read",
            "user:update",
        ],
    )


@pytest.fixture
def other_user(make_user) -> User:
    return make_user(
        "otheruser@example.ca",
        permissions=["customer:read", "customer:update", "invoice:read"],
    )


@pytest.fixture
def admin(make_user) -> User:
    return make_user("testadminuser@example.ca", is_admin=True, permissions=[])
