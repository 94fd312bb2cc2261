import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, func, select

from fakebooks.core.security import get_dummy_hash, get_password_hash, verify_password
from fakebooks.invoicing import InvoiceDerivedData, get_invoice_derived_data
from fakebooks.models import (
    Customer,
    CustomerCreate,
    Deposit,
    DepositCreate,
    Invoice,
    InvoiceCreate,
    LineItem,
    Password,
    User,
    UserCreate,
    UserUpdate,
    get_datetime_utc,
)

logger = logging.getLogger(__name__)


# Workers


def get_user_by_id(*, session: Session, user_id: str) -> User | None:
    return session.get(User, user_id)


def get_user_by_email(*, session: Session, email: str) -> User | None:
    statement = select(User).where(User.email == email)
    session_user = session.exec(statement).first()
    return session_user


def get_all_users(*, session: Session) -> list[User]:
    statement = select(User).order_by(col(User.email))
    return list(session.exec(statement).all())


def create_user(*, session: Session, user_create: UserCreate) -> User:
    db_obj = User.model_validate(user_create.model_dump(exclude={"password"}))
    db_obj.password = Password(hash=get_password_hash(user_create.password))
    session.add(db_obj)
    session.commit()
    session.refresh(db_obj)
    logger.info("Created worker %s", db_obj.id)
    return db_obj


def update_user(*, session: Session, db_user: User, user_in: UserUpdate) -> User:
    user_data = user_in.model_dump(exclude_unset=True)
    db_user.sqlmodel_update(user_data, update={"updated_at": get_datetime_utc()})
    session.add(db_user)
    session.commit()
    session.refresh(db_user)
    logger.info("Updated worker %s", db_user.id)
    return db_user


def delete_user_by_email(*, session: Session, email: str) -> User | None:
    db_user = get_user_by_email(session=session, email=email)
    if db_user:
        user_id = db_user.id
        session.delete(db_user)
        session.commit()
        logger.info("Deleted worker %s", user_id)
    return db_user


def verify_login(*, session: Session, email: str, password: str) -> User | None:
    db_user = get_user_by_email(session=session, email=email)
    if not db_user or not db_user.password:
        # Run a verification anyway so response time does not reveal whether
        # the email exists
        verify_password(password, get_dummy_hash())
        return None
    verified, updated_password_hash = verify_password(password, db_user.password.hash)
    if not verified:
        return None
    if updated_password_hash:
        db_user.password.hash = updated_password_hash
        session.add(db_user.password)
        session.commit()
        session.refresh(db_user)
    return db_user


# Customers


@dataclass(frozen=True)
class InvoiceListItem:
    id: str
    number: int
    customer_id: str
    customer_name: str
    total_amount: float
    due_status: str
    due_status_display: str


@dataclass(frozen=True)
class CustomerDetails:
    customer: Customer
    invoices: list[InvoiceListItem]


def get_customer_list_items(*, session: Session) -> list[Customer]:
    statement = select(Customer).order_by(col(Customer.name))
    return list(session.exec(statement).all())


def get_customer_by_id(*, session: Session, customer_id: str) -> Customer | None:
    return session.get(Customer, customer_id)


def get_customer_details(
    *, session: Session, customer_id: str, today: date | None = None
) -> CustomerDetails | None:
    customer = get_customer_by_id(session=session, customer_id=customer_id)
    if not customer:
        return None
    statement = (
        select(Invoice)
        .where(Invoice.customer_id == customer_id)
        .options(selectinload(Invoice.line_items), selectinload(Invoice.deposits))  # type: ignore[arg-type]
        .order_by(col(Invoice.number).desc())
    )
    invoices = session.exec(statement).all()
    return CustomerDetails(
        customer=customer,
        invoices=[_to_list_item(invoice, customer, today) for invoice in invoices],
    )


def create_customer(*, session: Session, customer_in: CustomerCreate) -> Customer:
    db_customer = Customer.model_validate(customer_in)
    session.add(db_customer)
    session.commit()
    session.refresh(db_customer)
    logger.info("Created customer %s", db_customer.id)
    return db_customer


# Invoices


@dataclass(frozen=True)
class InvoiceDetails:
    invoice: Invoice
    derived: InvoiceDerivedData

    # Shorthands used by the invoice page
    @property
    def total_amount(self) -> float:
        return self.derived.total_amount

    @property
    def due_status_display(self) -> str:
        return self.derived.due_status_display


def _to_list_item(invoice: Invoice, customer: Customer, today: date | None) -> InvoiceListItem:
    derived = get_invoice_derived_data(invoice, today)
    return InvoiceListItem(
        id=invoice.id,
        number=invoice.number,
        customer_id=customer.id,
        customer_name=customer.name,
        total_amount=derived.total_amount,
        due_status=derived.due_status.value,
        due_status_display=derived.due_status_display,
    )


def get_invoice_list_items(*, session: Session, today: date | None = None) -> list[InvoiceListItem]:
    statement = (
        select(Invoice)
        .options(
            selectinload(Invoice.customer),  # type: ignore[arg-type]
            selectinload(Invoice.line_items),  # type: ignore[arg-type]
            selectinload(Invoice.deposits),  # type: ignore[arg-type]
        )
        .order_by(col(Invoice.invoice_date).desc(), col(Invoice.number).desc())
    )
    invoices = session.exec(statement).all()
    return [
        _to_list_item(invoice, invoice.customer, today)
        for invoice in invoices
        if invoice.customer is not None
    ]


def get_invoice_details(
    *, session: Session, invoice_id: str, today: date | None = None
) -> InvoiceDetails | None:
    statement = (
        select(Invoice)
        .where(Invoice.id == invoice_id)
        .options(
            selectinload(Invoice.customer),  # type: ignore[arg-type]
            selectinload(Invoice.line_items),  # type: ignore[arg-type]
            selectinload(Invoice.deposits),  # type: ignore[arg-type]
        )
    )
    invoice = session.exec(statement).first()
    if not invoice:
        return None
    return InvoiceDetails(invoice=invoice, derived=get_invoice_derived_data(invoice, today))


def get_next_invoice_number(*, session: Session) -> int:
    current = session.exec(select(func.max(Invoice.number))).one()
    return (current or 0) + 1


def create_invoice(*, session: Session, invoice_in: InvoiceCreate) -> Invoice:
    extra: dict[str, Any] = {"number": get_next_invoice_number(session=session)}
    db_invoice = Invoice.model_validate(
        invoice_in.model_dump(exclude={"line_items"}, exclude_none=True), update=extra
    )
    db_invoice.line_items = [LineItem(**item.model_dump()) for item in invoice_in.line_items]
    session.add(db_invoice)
    session.commit()
    session.refresh(db_invoice)
    logger.info("Created invoice %s (#%s)", db_invoice.id, db_invoice.number)
    return db_invoice


# Deposits


def create_deposit(*, session: Session, deposit_in: DepositCreate) -> Deposit:
    db_deposit = Deposit.model_validate(deposit_in)
    session.add(db_deposit)
    session.commit()
    session.refresh(db_deposit)
    logger.info("Created deposit %s on invoice %s", db_deposit.id, db_deposit.invoice_id)
    return db_deposit


def get_deposit_details(*, session: Session, deposit_id: str) -> Deposit | None:
    return session.get(Deposit, deposit_id)


def delete_deposit(*, session: Session, deposit_id: str) -> Deposit | None:
    db_deposit = session.get(Deposit, deposit_id)
    if db_deposit:
        session.delete(db_deposit)
        session.commit()
        logger.info("Deleted deposit %s", deposit_id)
    return db_deposit
