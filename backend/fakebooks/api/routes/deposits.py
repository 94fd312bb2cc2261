from typing import Any

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import RedirectResponse

from fakebooks import crud
from fakebooks.api.deps import CurrentUser, SessionDep
from fakebooks.api.templating import templates

router = APIRouter()


def _not_found(deposit_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f'No deposit found with the ID of "{deposit_id}"')


@router.get("/{deposit_id}")
def read_deposit(
    deposit_id: str, request: Request, session: SessionDep, current_user: CurrentUser
) -> Any:
    deposit = crud.get_deposit_details(session=session, deposit_id=deposit_id)
    if not deposit:
        raise _not_found(deposit_id)
    return templates.TemplateResponse(
        request,
        "sales/deposit_detail.html",
        {"current_user": current_user, "deposit": deposit, "invoice": deposit.invoice},
    )


@router.post("/{deposit_id}")
def deposit_action(
    deposit_id: str,
    session: SessionDep,
    current_user: CurrentUser,
    intent: str | None = Form(None),
) -> Any:
    if intent is None:
        raise HTTPException(status_code=400, detail="intent required")
    if intent != "delete":
        raise ValueError(f"Unsupported intent: {intent}")
    deposit = crud.get_deposit_details(session=session, deposit_id=deposit_id)
    if not deposit:
        raise _not_found(deposit_id)
    invoice_id = deposit.invoice_id
    crud.delete_deposit(session=session, deposit_id=deposit_id)
    return RedirectResponse(f"/sales/invoices/{invoice_id}", status_code=303)
