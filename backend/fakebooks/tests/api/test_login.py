from fastapi.testclient import TestClient
from sqlmodel import Session

from fakebooks.core.config import settings
from fakebooks.models import User

PASSWORD = "correct-horse-battery"


def test_anonymous_requests_redirect_to_login(client: TestClient):
    response = client.get("/sales/invoices", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/login?redirectTo=/sales/invoices"


def test_login_page_renders(client: TestClient):
    response = client.get("/login?redirectTo=/workers")

    assert response.status_code == 200
    assert 'name="redirectTo" value="/workers"' in response.text


def test_login_rejects_bad_credentials(client: TestClient, worker: User):
    response = client.post(
        "/login",
        data={"email": "pat@example.com", "password": "wrong-password", "redirectTo": "/"},
    )

    assert response.status_code == 400
    assert "Invalid email or password" in response.text
    assert settings.SESSION_COOKIE_NAME not in response.cookies


def test_login_requires_fields(client: TestClient, db: Session):
    response = client.post("/login", data={"email": "nope", "password": ""})

    assert response.status_code == 400
    assert "Email is invalid" in response.text
    assert "Password is required" in response.text


def test_login_sets_session_and_follows_redirect(client: TestClient, worker: User):
    response = client.post(
        "/login",
        data={"email": "pat@example.com", "password": PASSWORD, "redirectTo": "/workers"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/workers"
    assert settings.SESSION_COOKIE_NAME in response.cookies

    workers_page = client.get("/workers")
    assert workers_page.status_code == 200
    assert "pat@example.com" in workers_page.text


def test_login_ignores_external_redirects(client: TestClient, worker: User):
    response = client.post(
        "/login",
        data={"email": "pat@example.com", "password": PASSWORD, "redirectTo": "//evil.example.com"},
        follow_redirects=False,
    )

    assert response.headers["location"] == "/"


def test_logged_in_user_skips_login_page(auth_client: TestClient):
    response = auth_client.get("/login", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"


def test_index_redirects_to_invoices(auth_client: TestClient):
    response = auth_client.get("/", follow_redirects=False)

    assert response.headers["location"] == "/sales/invoices"


def test_logout_clears_session(auth_client: TestClient):
    response = auth_client.post("/logout", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/login"
    assert auth_client.get("/workers", follow_redirects=False).status_code == 303


def test_token_for_deleted_user_counts_as_anonymous(auth_client: TestClient, db: Session, worker: User):
    db.delete(worker)
    db.commit()

    response = auth_client.get("/workers", follow_redirects=False)

    assert response.status_code == 303


def test_health_check(client: TestClient):
    response = client.get("/utils/health-check/")

    assert response.status_code == 200
    assert response.json() is True


def test_login_redirect_keeps_query_string(client: TestClient, worker: User):
    response = client.get("/sales/invoices/new?customerId=abc", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/login?redirectTo=/sales/invoices/new%3FcustomerId%3Dabc"

    response = client.post(
        "/login",
        data={"email": worker.email, "password": PASSWORD, "redirectTo": "/sales/invoices/new?customerId=abc"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/sales/invoices/new?customerId=abc"
