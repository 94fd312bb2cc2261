import html

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from fakebooks.models import User


def test_worker_list(auth_client: TestClient, worker: User):
    response = auth_client.get("/workers")

    assert response.status_code == 200
    assert "Create new worker" in response.text
    assert "pat@example.com" in response.text
    assert f"/workers/{worker.id}" in response.text


def test_worker_detail(auth_client: TestClient, worker: User):
    response = auth_client.get(f"/workers/{worker.id}")

    assert response.status_code == 200
    assert "Name: Pat Worker" in response.text
    assert "Email: pat@example.com" in response.text
    assert "Phone: 555-0100" in response.text
    assert "Start:" in response.text
    assert "Last Seen:" in response.text


def test_missing_worker_is_a_404(auth_client: TestClient):
    response = auth_client.get("/workers/nobody")

    assert response.status_code == 404
    assert 'No worker found with the ID of "nobody"' in html.unescape(response.text)


def test_create_worker(auth_client: TestClient, db: Session):
    response = auth_client.post(
        "/workers/new",
        data={
            "intent": "create",
            "email": "sam@example.com",
            "password": "sam-password",
            "name": "Sam",
            "hourlyRate": "30",
            "city": "Provo",
        },
        follow_redirects=False,
    )

    assert response.status_code == 303
    db.expire_all()
    sam = db.exec(select(User).where(User.email == "sam@example.com")).one()
    assert response.headers["location"] == f"/workers/{sam.id}"
    assert sam.hourly_rate == 30.0
    assert sam.city == "Provo"
    assert sam.phone is None
    assert sam.password is not None


def test_create_worker_validation(auth_client: TestClient, db: Session):
    response = auth_client.post(
        "/workers/new",
        data={"intent": "create", "email": "pat@example.com", "password": "long-enough", "name": "Dup"},
    )

    assert response.status_code == 400
    assert "A worker with this email already exists" in response.text

    response = auth_client.post(
        "/workers/new",
        data={"intent": "create", "email": "bad", "password": "short", "name": "", "hourlyRate": "x"},
    )

    assert response.status_code == 400
    assert "value is not a valid email address" in response.text
    assert "String should have at least 8 characters" in response.text
    assert "Must be a number" in response.text
    db.expire_all()
    assert len(db.exec(select(User)).all()) == 1


def test_update_worker(auth_client: TestClient, db: Session, worker: User):
    worker_id = worker.id

    response = auth_client.post(
        f"/workers/{worker_id}",
        data={
            "intent": "update-worker",
            "email": "pat@example.com",
            "name": "Patricia Worker",
            "phone": "",
            "hourlyRate": "50",
        },
        follow_redirects=False,
    )

    assert response.status_code == 303
    db.expire_all()
    updated = db.get(User, worker_id)
    assert updated.name == "Patricia Worker"
    assert updated.phone is None
    assert updated.hourly_rate == 50.0
    assert len(db.exec(select(User)).all()) == 1


def test_update_worker_validation(auth_client: TestClient, worker: User):
    response = auth_client.post(
        f"/workers/{worker.id}",
        data={"intent": "update-worker", "email": "pat@example.com", "name": ""},
    )

    assert response.status_code == 400
    assert "String should have at least 1 character" in response.text


def test_delete_other_worker(auth_client: TestClient, db: Session, worker: User):
    other = User(email="other@example.com", name="Other")
    db.add(other)
    db.commit()
    other_id = other.id

    response = auth_client.post(
        f"/workers/{other_id}", data={"intent": "delete-worker"}, follow_redirects=False
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/workers"
    db.expire_all()
    assert db.get(User, other_id) is None


def test_delete_self_logs_out(auth_client: TestClient, worker: User):
    response = auth_client.post(
        f"/workers/{worker.id}", data={"intent": "delete-worker"}, follow_redirects=False
    )

    assert response.headers["location"] == "/login"
    assert auth_client.get("/workers", follow_redirects=False).status_code == 303


def test_unsupported_worker_intent(error_client: TestClient, worker: User):
    response = error_client.post(f"/workers/{worker.id}", data={"intent": "promote"})

    assert response.status_code == 500
    assert "There was a problem. Sorry." in response.text
