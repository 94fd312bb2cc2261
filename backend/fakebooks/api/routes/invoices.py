from typing import Any

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import RedirectResponse

from fakebooks import crud
from fakebooks.api.deps import CurrentUser, SessionDep
from fakebooks.api.templating import templates
from fakebooks.crud import InvoiceDetails
from fakebooks.forms import (
    FieldErrors,
    has_errors,
    parse_amount,
    parse_date,
    validate_amount,
    validate_customer_id,
    validate_deposit_date,
    validate_deposit_note,
    validate_due_date,
    validate_line_item_description,
    validate_line_item_quantity,
    validate_line_item_unit_price,
)
from fakebooks.models import DepositCreate, InvoiceCreate, LineItemCreate

router = APIRouter()


def _not_found(invoice_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f'No invoice found with the ID of "{invoice_id}"')


@router.get("")
def read_invoices(request: Request, session: SessionDep, current_user: CurrentUser) -> Any:
    invoices = crud.get_invoice_list_items(session=session)
    return templates.TemplateResponse(
        request,
        "sales/invoices.html",
        {"current_user": current_user, "invoices": invoices},
    )


# New invoice


def _blank_line_item() -> dict[str, str]:
    return {"description": "", "quantity": "1", "unit_price": ""}


def _render_new_invoice(
    request: Request,
    session: SessionDep,
    current_user: CurrentUser,
    values: dict[str, Any],
    errors: FieldErrors,
    line_item_errors: list[FieldErrors],
    status_code: int = 200,
) -> Any:
    customers = crud.get_customer_list_items(session=session)
    return templates.TemplateResponse(
        request,
        "sales/invoice_new.html",
        {
            "current_user": current_user,
            "customers": customers,
            "values": values,
            "errors": errors,
            "line_item_errors": line_item_errors,
        },
        status_code=status_code,
    )


@router.get("/new")
def new_invoice(
    request: Request,
    session: SessionDep,
    current_user: CurrentUser,
    customerId: str | None = None,
) -> Any:
    values = {
        "customer_id": customerId or "",
        "due_date": "",
        "line_items": [_blank_line_item()],
    }
    return _render_new_invoice(request, session, current_user, values, {}, [{}])


@router.post("/new")
def create_invoice(
    request: Request,
    session: SessionDep,
    current_user: CurrentUser,
    intent: str | None = Form(None),
    customerId: str = Form(""),
    dueDate: str = Form(""),
    description: list[str] = Form([]),
    quantity: list[str] = Form([]),
    unitPrice: list[str] = Form([]),
) -> Any:
    if intent is None:
        raise HTTPException(status_code=400, detail="intent required")
    if not (len(description) == len(quantity) == len(unitPrice)):
        raise HTTPException(status_code=400, detail="line item fields are incomplete")

    raw_line_items = [
        {"description": d, "quantity": q, "unit_price": p}
        for d, q, p in zip(description, quantity, unitPrice)
    ]
    values: dict[str, Any] = {
        "customer_id": customerId,
        "due_date": dueDate,
        "line_items": raw_line_items or [_blank_line_item()],
    }

    if intent == "add-line-item":
        values["line_items"] = [*values["line_items"], _blank_line_item()]
        return _render_new_invoice(
            request, session, current_user, values, {}, [{} for _ in values["line_items"]]
        )
    if intent != "create":
        raise ValueError(f"Unsupported intent: {intent}")

    due_date = parse_date(dueDate)
    errors: FieldErrors = {
        "customer_id": validate_customer_id(customerId),
        "due_date": validate_due_date(due_date),
        "line_items": None if raw_line_items else "Add at least one line item",
    }
    if customerId and not errors["customer_id"]:
        if crud.get_customer_by_id(session=session, customer_id=customerId) is None:
            errors["customer_id"] = "Please select a customer"

    line_items: list[LineItemCreate] = []
    line_item_errors: list[FieldErrors] = []
    for raw in raw_line_items:
        item_quantity = parse_amount(raw["quantity"])
        item_unit_price = parse_amount(raw["unit_price"])
        item_errors: FieldErrors = {
            "description": validate_line_item_description(raw["description"]),
            "quantity": validate_line_item_quantity(item_quantity),
            "unit_price": validate_line_item_unit_price(item_unit_price),
        }
        line_item_errors.append(item_errors)
        if not has_errors(item_errors):
            line_items.append(
                LineItemCreate(
                    description=raw["description"].strip(),
                    quantity=int(item_quantity or 0),
                    unit_price=item_unit_price or 0.0,
                )
            )

    if has_errors(errors) or any(has_errors(e) for e in line_item_errors) or due_date is None:
        return _render_new_invoice(
            request,
            session,
            current_user,
            values,
            errors,
            line_item_errors or [{}],
            status_code=400,
        )

    invoice = crud.create_invoice(
        session=session,
        invoice_in=InvoiceCreate(customer_id=customerId, due_date=due_date, line_items=line_items),
    )
    return RedirectResponse(f"/sales/invoices/{invoice.id}", status_code=303)


# Invoice detail


def _render_invoice(
    request: Request,
    current_user: CurrentUser,
    details: InvoiceDetails,
    errors: FieldErrors | None = None,
    values: dict[str, str] | None = None,
    status_code: int = 200,
) -> Any:
    invoice = details.invoice
    return templates.TemplateResponse(
        request,
        "sales/invoice_detail.html",
        {
            "current_user": current_user,
            "invoice": invoice,
            "customer": invoice.customer,
            "total_amount": details.total_amount,
            "due_display": details.due_status_display,
            "line_items": invoice.line_items,
            "deposits": sorted(invoice.deposits, key=lambda d: d.deposit_date),
            "errors": errors or {},
            "values": values or {},
        },
        status_code=status_code,
    )


@router.get("/{invoice_id}")
def read_invoice(
    invoice_id: str, request: Request, session: SessionDep, current_user: CurrentUser
) -> Any:
    details = crud.get_invoice_details(session=session, invoice_id=invoice_id)
    if not details:
        raise _not_found(invoice_id)
    return _render_invoice(request, current_user, details)


@router.post("/{invoice_id}")
def invoice_action(
    invoice_id: str,
    request: Request,
    session: SessionDep,
    current_user: CurrentUser,
    intent: str | None = Form(None),
    amount: str | None = Form(None),
    depositDate: str | None = Form(None),
    note: str | None = Form(None),
) -> Any:
    if intent is None:
        raise HTTPException(status_code=400, detail="intent required")
    if intent != "create-deposit":
        raise ValueError(f"Unsupported intent: {intent}")

    details = crud.get_invoice_details(session=session, invoice_id=invoice_id)
    if not details:
        raise _not_found(invoice_id)

    deposit_amount = parse_amount(amount)
    if deposit_amount is None:
        raise HTTPException(status_code=400, detail="amount must be a number")
    if depositDate is None:
        raise HTTPException(status_code=400, detail="depositDate is required")

    deposit_date = parse_date(depositDate)
    errors: FieldErrors = {
        "amount": validate_amount(deposit_amount),
        "deposit_date": validate_deposit_date(deposit_date),
        "note": validate_deposit_note(note or ""),
    }
    if has_errors(errors) or deposit_date is None:
        return _render_invoice(
            request,
            current_user,
            details,
            errors=errors,
            values={"amount": amount or "", "deposit_date": depositDate, "note": note or ""},
            status_code=400,
        )

    crud.create_deposit(
        session=session,
        deposit_in=DepositCreate(
            invoice_id=invoice_id,
            amount=deposit_amount,
            deposit_date=deposit_date,
            note=note or "",
        ),
    )
    return RedirectResponse(f"/sales/invoices/{invoice_id}", status_code=303)
