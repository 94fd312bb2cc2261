from typing import Any

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from fakebooks import crud
from fakebooks.api.deps import CurrentUser, SessionDep
from fakebooks.api.templating import templates
from fakebooks.forms import field_errors_from_validation
from fakebooks.models import CustomerCreate

router = APIRouter()


@router.get("")
def read_customers(request: Request, session: SessionDep, current_user: CurrentUser) -> Any:
    customers = crud.get_customer_list_items(session=session)
    return templates.TemplateResponse(
        request,
        "sales/customers.html",
        {"current_user": current_user, "customers": customers},
    )


@router.get("/new")
def new_customer(request: Request, current_user: CurrentUser) -> Any:
    return templates.TemplateResponse(
        request,
        "sales/customer_new.html",
        {"current_user": current_user, "values": {}, "errors": {}},
    )


@router.post("/new")
def create_customer(
    request: Request,
    session: SessionDep,
    current_user: CurrentUser,
    intent: str | None = Form(None),
    name: str = Form(""),
    email: str = Form(""),
) -> Any:
    if intent is None:
        raise HTTPException(status_code=400, detail="intent required")
    if intent != "create":
        raise ValueError(f"Unsupported intent: {intent}")

    values = {"name": name.strip(), "email": email.strip()}
    try:
        customer_in = CustomerCreate.model_validate(values)
    except ValidationError as exc:
        return templates.TemplateResponse(
            request,
            "sales/customer_new.html",
            {
                "current_user": current_user,
                "values": values,
                "errors": field_errors_from_validation(exc),
            },
            status_code=400,
        )
    customer = crud.create_customer(session=session, customer_in=customer_in)
    return RedirectResponse(f"/sales/customers/{customer.id}", status_code=303)


@router.get("/{customer_id}")
def read_customer(
    customer_id: str, request: Request, session: SessionDep, current_user: CurrentUser
) -> Any:
    details = crud.get_customer_details(session=session, customer_id=customer_id)
    if not details:
        raise HTTPException(
            status_code=404, detail=f'No customer found with the ID of "{customer_id}"'
        )
    return templates.TemplateResponse(
        request,
        "sales/customer_detail.html",
        {
            "current_user": current_user,
            "customer": details.customer,
            "invoices": details.invoices,
        },
    )
