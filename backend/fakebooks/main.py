import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from sqlmodel import Session

from fakebooks.api.errors import setup_exception_handlers
from fakebooks.api.main import api_router
from fakebooks.core.config import settings
from fakebooks.core.db import create_db_and_tables, engine, init_db
from fakebooks.core.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Starting %s (%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)
    create_db_and_tables()
    with Session(engine) as session:
        init_db(session)
    yield
    logger.info("Shutting down %s", settings.PROJECT_NAME)


app = FastAPI(
    title=settings.PROJECT_NAME,
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT == "local" else None,
    redoc_url=None,
)
setup_exception_handlers(app)
app.include_router(api_router)


def run() -> None:
    """Serve the app, equivalent to ``uvicorn fakebooks.main:app``."""
    uvicorn.run(
        "fakebooks.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "local",
    )
