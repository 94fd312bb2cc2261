import os

# Settings are read at import time, point them at a throwaway database first
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["ENVIRONMENT"] = "local"
os.environ["SECRET_KEY"] = "fakebooks-test-secret-key-not-for-production"
os.environ.pop("FIRST_WORKER_EMAIL", None)
os.environ.pop("FIRST_WORKER_PASSWORD", None)

from collections.abc import Generator  # noqa: E402
from datetime import date, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from fakebooks import crud  # noqa: E402
from fakebooks.core.db import engine  # noqa: E402
from fakebooks.main import app  # noqa: E402
from fakebooks.models import (  # noqa: E402
    Customer,
    CustomerCreate,
    Invoice,
    InvoiceCreate,
    LineItemCreate,
    User,
    UserCreate,
)

WORKER_EMAIL = "pat@example.com"
WORKER_PASSWORD = "correct-horse-battery"


@pytest.fixture
def db() -> Generator[Session, None, None]:
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def worker(db: Session) -> User:
    return crud.create_user(
        session=db,
        user_create=UserCreate(
            email=WORKER_EMAIL,
            password=WORKER_PASSWORD,
            name="Pat Worker",
            phone="555-0100",
            hourly_rate=42.5,
        ),
    )


def log_in(client: TestClient) -> None:
    response = client.post(
        "/login",
        data={"email": WORKER_EMAIL, "password": WORKER_PASSWORD},
        follow_redirects=False,
    )
    assert response.status_code == 303


@pytest.fixture
def auth_client(client: TestClient, worker: User) -> TestClient:
    log_in(client)
    return client


@pytest.fixture
def error_client(db: Session, worker: User) -> TestClient:
    """Logged in client that returns 500 pages instead of re-raising server errors."""
    c = TestClient(app, raise_server_exceptions=False)
    log_in(c)
    return c


@pytest.fixture
def customer(db: Session) -> Customer:
    return crud.create_customer(
        session=db,
        customer_in=CustomerCreate(name="Santa Monica Widgets", email="billing@smw.example.com"),
    )


@pytest.fixture
def invoice(db: Session, customer: Customer) -> Invoice:
    return crud.create_invoice(
        session=db,
        invoice_in=InvoiceCreate(
            customer_id=customer.id,
            invoice_date=date(2023, 5, 1),
            due_date=date.today() + timedelta(days=10),
            line_items=[
                LineItemCreate(description="Widget", quantity=3, unit_price=25.0),
                LineItemCreate(description="Setup", quantity=1, unit_price=100.0),
            ],
        ),
    )
