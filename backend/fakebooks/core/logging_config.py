"""
Logging configuration.

Every module logs through ``logging.getLogger(__name__)``; this module only
installs the root handler and level once, when the application is created.
"""

import logging

from fakebooks.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    global _configured
    if _configured:
        return
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # Keep SQLAlchemy engine chatter out of INFO logs.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True
