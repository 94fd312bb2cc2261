import html

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from fakebooks.models import Customer, Invoice


def test_customer_list(auth_client: TestClient, customer: Customer):
    response = auth_client.get("/sales/customers")

    assert response.status_code == 200
    assert "Santa Monica Widgets" in response.text
    assert "billing@smw.example.com" in response.text


def test_customer_detail_lists_invoices(auth_client: TestClient, customer: Customer, invoice: Invoice):
    response = auth_client.get(f"/sales/customers/{customer.id}")

    assert response.status_code == 200
    assert f"/sales/invoices/{invoice.id}" in response.text
    assert "$175.00" in response.text


def test_missing_customer_is_a_404(auth_client: TestClient, db: Session):
    response = auth_client.get("/sales/customers/nobody")

    assert response.status_code == 404
    assert 'No customer found with the ID of "nobody"' in html.unescape(response.text)


def test_create_customer(auth_client: TestClient, db: Session):
    response = auth_client.post(
        "/sales/customers/new",
        data={"intent": "create", "name": "Acme", "email": "ap@acme.example.com"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    db.expire_all()
    customer = db.exec(select(Customer)).one()
    assert customer.name == "Acme"
    assert response.headers["location"] == f"/sales/customers/{customer.id}"


def test_create_customer_validation(auth_client: TestClient, db: Session):
    response = auth_client.post(
        "/sales/customers/new",
        data={"intent": "create", "name": "", "email": "nope"},
    )

    assert response.status_code == 400
    assert "String should have at least 1 character" in response.text
    assert "value is not a valid email address" in response.text
