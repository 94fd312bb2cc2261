from typing import Any

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from fakebooks import crud
from fakebooks.api.deps import CurrentUser, SessionDep
from fakebooks.api.templating import templates
from fakebooks.core.config import settings
from fakebooks.forms import FieldErrors, blank_to_none, field_errors_from_validation
from fakebooks.models import User, UserCreate, UserUpdate

router = APIRouter()

PROFILE_FIELDS = (
    "email",
    "name",
    "phone",
    "hourly_rate",
    "street",
    "city",
    "state",
    "country",
    "postal_code",
)


def _not_found(worker_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f'No worker found with the ID of "{worker_id}"')


def _profile_values(user: User) -> dict[str, str]:
    values = {}
    for field in PROFILE_FIELDS:
        value = getattr(user, field)
        values[field] = "" if value is None else str(value)
    return values


def _submitted_profile(
    email: str,
    name: str,
    phone: str,
    hourlyRate: str,
    street: str,
    city: str,
    state: str,
    country: str,
    postalCode: str,
) -> dict[str, str]:
    return {
        "email": email.strip(),
        "name": name.strip(),
        "phone": phone.strip(),
        "hourly_rate": hourlyRate.strip(),
        "street": street.strip(),
        "city": city.strip(),
        "state": state.strip(),
        "country": country.strip(),
        "postal_code": postalCode.strip(),
    }


@router.get("")
def read_workers(request: Request, session: SessionDep, current_user: CurrentUser) -> Any:
    users = crud.get_all_users(session=session)
    return templates.TemplateResponse(
        request,
        "workers/index.html",
        {"current_user": current_user, "users": users, "active_id": None},
    )


# New worker


def _render_new_worker(
    request: Request,
    session: SessionDep,
    current_user: CurrentUser,
    values: dict[str, str],
    errors: FieldErrors,
    status_code: int = 200,
) -> Any:
    return templates.TemplateResponse(
        request,
        "workers/new.html",
        {
            "current_user": current_user,
            "users": crud.get_all_users(session=session),
            "active_id": "new",
            "values": values,
            "errors": errors,
        },
        status_code=status_code,
    )


@router.get("/new")
def new_worker(request: Request, session: SessionDep, current_user: CurrentUser) -> Any:
    return _render_new_worker(request, session, current_user, {}, {})


@router.post("/new")
def create_worker(
    request: Request,
    session: SessionDep,
    current_user: CurrentUser,
    intent: str | None = Form(None),
    email: str = Form(""),
    password: str = Form(""),
    name: str = Form(""),
    phone: str = Form(""),
    hourlyRate: str = Form(""),
    street: str = Form(""),
    city: str = Form(""),
    state: str = Form(""),
    country: str = Form(""),
    postalCode: str = Form(""),
) -> Any:
    if intent is None:
        raise HTTPException(status_code=400, detail="intent required")
    if intent != "create":
        raise ValueError(f"Unsupported intent: {intent}")

    values = _submitted_profile(
        email, name, phone, hourlyRate, street, city, state, country, postalCode
    )
    try:
        user_in = UserCreate.model_validate(
            {
                **blank_to_none(values),
                "email": values["email"],
                "name": values["name"],
                "password": password,
            }
        )
    except ValidationError as exc:
        return _render_new_worker(
            request, session, current_user, values, field_errors_from_validation(exc), 400
        )
    if crud.get_user_by_email(session=session, email=user_in.email):
        errors: FieldErrors = {"email": "A worker with this email already exists"}
        return _render_new_worker(request, session, current_user, values, errors, 400)

    user = crud.create_user(session=session, user_create=user_in)
    return RedirectResponse(f"/workers/{user.id}", status_code=303)


# Worker detail


def _render_worker(
    request: Request,
    session: SessionDep,
    current_user: CurrentUser,
    worker: User,
    values: dict[str, str] | None = None,
    errors: FieldErrors | None = None,
    status_code: int = 200,
) -> Any:
    return templates.TemplateResponse(
        request,
        "workers/detail.html",
        {
            "current_user": current_user,
            "users": crud.get_all_users(session=session),
            "active_id": worker.id,
            "worker": worker,
            "values": values or _profile_values(worker),
            "errors": errors or {},
        },
        status_code=status_code,
    )


@router.get("/{worker_id}")
def read_worker(
    worker_id: str, request: Request, session: SessionDep, current_user: CurrentUser
) -> Any:
    worker = crud.get_user_by_id(session=session, user_id=worker_id)
    if not worker:
        raise _not_found(worker_id)
    return _render_worker(request, session, current_user, worker)


@router.post("/{worker_id}")
def worker_action(
    worker_id: str,
    request: Request,
    session: SessionDep,
    current_user: CurrentUser,
    intent: str | None = Form(None),
    email: str = Form(""),
    name: str = Form(""),
    phone: str = Form(""),
    hourlyRate: str = Form(""),
    street: str = Form(""),
    city: str = Form(""),
    state: str = Form(""),
    country: str = Form(""),
    postalCode: str = Form(""),
) -> Any:
    if intent is None:
        raise HTTPException(status_code=400, detail="intent required")
    worker = crud.get_user_by_id(session=session, user_id=worker_id)
    if not worker:
        raise _not_found(worker_id)

    if intent == "update-worker":
        values = _submitted_profile(
            email, name, phone, hourlyRate, street, city, state, country, postalCode
        )
        try:
            user_in = UserUpdate.model_validate(
                {**blank_to_none(values), "email": values["email"], "name": values["name"]}
            )
        except ValidationError as exc:
            return _render_worker(
                request,
                session,
                current_user,
                worker,
                values,
                field_errors_from_validation(exc),
                400,
            )
        existing = crud.get_user_by_email(session=session, email=str(user_in.email))
        if existing and existing.id != worker.id:
            errors: FieldErrors = {"email": "A worker with this email already exists"}
            return _render_worker(request, session, current_user, worker, values, errors, 400)
        crud.update_user(session=session, db_user=worker, user_in=user_in)
        return RedirectResponse(f"/workers/{worker_id}", status_code=303)

    if intent == "delete-worker":
        is_self = worker.id == current_user.id
        crud.delete_user_by_email(session=session, email=worker.email)
        if is_self:
            response = RedirectResponse("/login", status_code=303)
            response.delete_cookie(settings.SESSION_COOKIE_NAME)
            return response
        return RedirectResponse("/workers", status_code=303)

    raise ValueError(f"Unsupported intent: {intent}")
