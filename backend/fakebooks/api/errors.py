"""
Exception handlers for the HTML routes.

Missing records surface as a 404 page carrying the route's message, malformed
submissions as a 400 page, anonymous requests as a redirect to the login form,
and anything else as the generic error page.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from fakebooks.api.deps import LoginRequired
from fakebooks.api.templating import templates

logger = logging.getLogger(__name__)


async def login_required_handler(request: Request, exc: LoginRequired) -> Response:
    return RedirectResponse(exc.login_url, status_code=303)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == 404:
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"message": exc.detail},
            status_code=404,
        )
    if exc.status_code >= 500:
        logger.error("HTTP %s on %s %s: %s", exc.status_code, request.method, request.url.path, exc.detail)
    return templates.TemplateResponse(
        request,
        "error.html",
        {"message": exc.detail, "status_code": exc.status_code},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    logger.error(
        "Unhandled exception in %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return templates.TemplateResponse(
        request,
        "error.html",
        {"message": "There was a problem. Sorry.", "status_code": 500},
        status_code=500,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LoginRequired, login_required_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
    logger.debug("Exception handlers registered")
