import logging
from datetime import timedelta
from typing import Any

from fastapi import APIRouter, Form, Request
from fastapi.responses import RedirectResponse

from fakebooks import crud
from fakebooks.api.deps import OptionalUser, SessionDep
from fakebooks.api.templating import templates
from fakebooks.core.config import settings
from fakebooks.core.security import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_REDIRECT = "/"


def safe_redirect(to: str | None, default: str = DEFAULT_REDIRECT) -> str:
    """Only follow local redirects, never `//host` or absolute urls."""
    if not to or not to.startswith("/") or to.startswith("//"):
        return default
    return to


@router.get("/")
def index(current_user: OptionalUser) -> Any:
    if current_user is None:
        return RedirectResponse("/login", status_code=303)
    return RedirectResponse("/sales/invoices", status_code=303)


@router.get("/login")
def login_page(request: Request, current_user: OptionalUser, redirectTo: str | None = None) -> Any:
    if current_user is not None:
        return RedirectResponse(safe_redirect(redirectTo), status_code=303)
    return templates.TemplateResponse(
        request,
        "login.html",
        {"redirect_to": redirectTo or "", "email": "", "errors": {}},
    )


@router.post("/login")
def login(
    request: Request,
    session: SessionDep,
    email: str = Form(""),
    password: str = Form(""),
    redirectTo: str = Form(""),
) -> Any:
    errors: dict[str, str | None] = {}
    if "@" not in email:
        errors["email"] = "Email is invalid"
    if not password:
        errors["password"] = "Password is required"
    user = None
    if not errors:
        user = crud.verify_login(session=session, email=email, password=password)
        if user is None:
            logger.warning("Failed login attempt for %s", email)
            errors["email"] = "Invalid email or password"
    if user is None:
        return templates.TemplateResponse(
            request,
            "login.html",
            {"redirect_to": redirectTo, "email": email, "errors": errors},
            status_code=400,
        )

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    token = create_access_token(user.id, expires_delta=access_token_expires)
    response = RedirectResponse(safe_redirect(redirectTo), status_code=303)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=int(access_token_expires.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    logger.info("Worker %s logged in", user.id)
    return response


@router.post("/logout")
def logout() -> Any:
    response = RedirectResponse("/login", status_code=303)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response
