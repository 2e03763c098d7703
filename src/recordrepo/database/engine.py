from __future__ import annotations

from typing import Optional

import sqlalchemy as sa
from sqlalchemy import Engine, create_engine
from sqlalchemy.pool import StaticPool

from recordrepo.config import get_settings
from recordrepo.observability.logger import get_logger

logger = get_logger(__name__)


def create_database_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Build a sync engine for the SQLAlchemy store gateway.

    In-memory SQLite URLs share one connection so every gateway call sees
    the same database.
    """
    settings = get_settings()
    url = database_url or settings.DATABASE_URL
    echo = settings.DATABASE_ECHO if echo is None else echo

    kwargs: dict = {"echo": echo}
    parsed = sa.engine.make_url(url)
    if parsed.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
        kwargs["pool_recycle"] = 3600

    engine = create_engine(url, **kwargs)

    # Smoke test
    with engine.connect() as conn:
        conn.execute(sa.text("SELECT 1"))

    logger.info("Database engine created", backend=parsed.get_backend_name())
    return engine
