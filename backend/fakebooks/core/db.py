import logging

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from fakebooks import crud
from fakebooks.core.config import settings
from fakebooks.models import User, UserCreate

logger = logging.getLogger(__name__)


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {}
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # An in-memory database only exists for the connection that created it
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    **_engine_kwargs(settings.SQLALCHEMY_DATABASE_URI),
)


def create_db_and_tables() -> None:
    # Tables are created from the SQLModel metadata, models must be imported
    # before this runs (done above through fakebooks.models)
    SQLModel.metadata.create_all(engine)


def init_db(session: Session) -> None:
    """Seed the first worker so someone can log in to a fresh database."""
    if not settings.FIRST_WORKER_EMAIL or not settings.FIRST_WORKER_PASSWORD:
        return
    existing = session.exec(select(User)).first()
    if existing:
        return
    user_in = UserCreate(
        email=settings.FIRST_WORKER_EMAIL,
        password=settings.FIRST_WORKER_PASSWORD,
        name=settings.FIRST_WORKER_NAME,
    )
    user = crud.create_user(session=session, user_create=user_in)
    logger.info("Seeded first worker %s", user.email)
