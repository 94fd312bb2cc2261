"""
Derived invoice figures: totals, deposits and the due status shown next to
every invoice.
"""

import enum
from dataclasses import dataclass
from datetime import date

from fakebooks.models import Invoice


class DueStatus(str, enum.Enum):
    PAID = "paid"
    OVERPAID = "overpaid"
    OVERDUE = "overdue"
    DUE = "due"


@dataclass(frozen=True)
class InvoiceDerivedData:
    total_amount: float
    total_deposits: float
    days_to_due_date: int
    due_status: DueStatus
    due_status_display: str


def get_total_amount(invoice: Invoice) -> float:
    return sum(item.quantity * item.unit_price for item in invoice.line_items)


def get_total_deposits(invoice: Invoice) -> float:
    return sum(deposit.amount for deposit in invoice.deposits)


def get_due_status(total_amount: float, total_deposits: float, days_to_due_date: int) -> DueStatus:
    if total_amount == total_deposits:
        return DueStatus.PAID
    if total_deposits > total_amount:
        return DueStatus.OVERPAID
    if days_to_due_date < 0:
        return DueStatus.OVERDUE
    return DueStatus.DUE


def get_due_status_display(due_status: DueStatus, days_to_due_date: int) -> str:
    if due_status is DueStatus.PAID:
        return "Paid"
    if due_status is DueStatus.OVERPAID:
        return "Overpaid"
    if days_to_due_date == 0:
        return "Due Today"
    if days_to_due_date == 1:
        return "Due Tomorrow"
    if days_to_due_date < 0:
        days = -days_to_due_date
        return f"Overdue by {days} day" if days == 1 else f"Overdue by {days} days"
    return f"Due in {days_to_due_date} days"


def get_invoice_derived_data(invoice: Invoice, today: date | None = None) -> InvoiceDerivedData:
    """
    Compute the display figures for an invoice.

    `total_amount` is the line item total only; deposits are reported
    separately in `total_deposits` and are never subtracted from it.
    """
    today = today or date.today()
    days_to_due_date = (invoice.due_date - today).days
    total_amount = get_total_amount(invoice)
    total_deposits = get_total_deposits(invoice)
    due_status = get_due_status(total_amount, total_deposits, days_to_due_date)
    return InvoiceDerivedData(
        total_amount=total_amount,
        total_deposits=total_deposits,
        days_to_due_date=days_to_due_date,
        due_status=due_status,
        due_status_display=get_due_status_display(due_status, days_to_due_date),
    )
