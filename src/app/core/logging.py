"""
Logging Configuration

Configures the root logger once at startup. Modules log through
``logging.getLogger(__name__)``.
"""

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging from settings (idempotent)."""
    log_level = (level or settings.log_level).upper()
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(log_level)

    # SQLAlchemy echo output is controlled by DATABASE_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
