import uuid
from datetime import date, datetime, timezone
from typing import Optional

from pydantic import EmailStr
from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


# Workers


# Shared properties
class UserBase(SQLModel):
    email: EmailStr = Field(unique=True, index=True, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    hourly_rate: float | None = Field(default=None, ge=0)
    street: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=255)
    state: str | None = Field(default=None, max_length=255)
    country: str | None = Field(default=None, max_length=255)
    postal_code: str | None = Field(default=None, max_length=20)


# Properties to receive from the new worker form
class UserCreate(UserBase):
    password: str = Field(min_length=8, max_length=128)


# Properties to receive from the worker profile form; the password is left alone
class UserUpdate(UserBase):
    email: EmailStr | None = Field(default=None, max_length=255)  # type: ignore
    name: str | None = Field(default=None, min_length=1, max_length=255)  # type: ignore


# Database model, database table inferred from class name
class User(UserBase, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    updated_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    password: Optional["Password"] = Relationship(
        back_populates="user",
        cascade_delete=True,
        sa_relationship_kwargs={"uselist": False},
    )


class Password(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    hash: str
    user_id: str = Field(
        foreign_key="user.id", unique=True, nullable=False, ondelete="CASCADE"
    )
    user: User | None = Relationship(back_populates="password")


# Customers


class CustomerBase(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr = Field(max_length=255)


class CustomerCreate(CustomerBase):
    pass


class Customer(CustomerBase, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    updated_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    invoices: list["Invoice"] = Relationship(back_populates="customer", cascade_delete=True)


# Invoices


class LineItemBase(SQLModel):
    description: str = Field(min_length=1, max_length=500)
    quantity: int = Field(gt=0)
    unit_price: float = Field(gt=0)


class LineItemCreate(LineItemBase):
    pass


class LineItem(LineItemBase, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    invoice_id: str = Field(
        foreign_key="invoice.id", nullable=False, ondelete="CASCADE"
    )
    invoice: Optional["Invoice"] = Relationship(back_populates="line_items")


class InvoiceBase(SQLModel):
    customer_id: str
    due_date: date


class InvoiceCreate(InvoiceBase):
    invoice_date: date | None = None
    line_items: list[LineItemCreate] = Field(default_factory=list)


class Invoice(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    number: int = Field(unique=True, index=True)
    invoice_date: date = Field(default_factory=date.today)
    due_date: date
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    customer_id: str = Field(
        foreign_key="customer.id", nullable=False, ondelete="CASCADE"
    )
    customer: Customer | None = Relationship(back_populates="invoices")
    line_items: list[LineItem] = Relationship(back_populates="invoice", cascade_delete=True)
    deposits: list["Deposit"] = Relationship(back_populates="invoice", cascade_delete=True)


# Deposits


class DepositBase(SQLModel):
    amount: float
    deposit_date: date
    note: str = Field(default="", max_length=1000)


class DepositCreate(DepositBase):
    invoice_id: str


class Deposit(DepositBase, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    invoice_id: str = Field(
        foreign_key="invoice.id", nullable=False, ondelete="CASCADE"
    )
    invoice: Invoice | None = Relationship(back_populates="deposits")
