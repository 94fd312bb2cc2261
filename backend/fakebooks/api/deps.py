from collections.abc import Generator
from typing import Annotated
from urllib.parse import quote

from fastapi import Depends, Request
from sqlmodel import Session

from fakebooks import crud
from fakebooks.core.config import settings
from fakebooks.core.db import engine
from fakebooks.core.security import read_access_token
from fakebooks.models import User


class LoginRequired(Exception):
    """Raised by `require_user` for anonymous requests; answered with a redirect to /login."""

    def __init__(self, redirect_to: str) -> None:
        super().__init__(redirect_to)
        self.redirect_to = redirect_to

    @property
    def login_url(self) -> str:
        return f"/login?redirectTo={quote(self.redirect_to, safe='/')}"


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]


def get_optional_user(request: Request, session: SessionDep) -> User | None:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    user_id = read_access_token(token)
    if not user_id:
        return None
    return crud.get_user_by_id(session=session, user_id=user_id)


OptionalUser = Annotated[User | None, Depends(get_optional_user)]


def require_user(request: Request, user: OptionalUser) -> User:
    if user is None:
        redirect_to = request.url.path
        if request.url.query:
            redirect_to = f"{redirect_to}?{request.url.query}"
        raise LoginRequired(redirect_to)
    return user


CurrentUser = Annotated[User, Depends(require_user)]
