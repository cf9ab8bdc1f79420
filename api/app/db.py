"""
Event store: append-only writes of telemetry documents through SQLAlchemy.

A document is one row in the table named by its collection. The engine is
pooled and safe to share across concurrent requests.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from .models import Base

logger = logging.getLogger(__name__)


def db_health(engine: Engine) -> bool:
    # Simple connectivity check.
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


class EventStore:
    def __init__(self, engine: Engine):
        self.engine = engine

    def add(self, collection: str, document: Mapping[str, Any]) -> None:
        """Append one document to `collection`. Raises on any failure."""
        table = Base.metadata.tables.get(collection)
        if table is None:
            raise KeyError(f"unknown collection: {collection}")
        with self.engine.begin() as conn:
            conn.execute(table.insert().values(**document))


def init_event_store(database_url: str) -> EventStore | None:
    """
    Build the store and probe connectivity once. Returns None (telemetry
    disabled for the process lifetime) when the store cannot be reached.
    """
    try:
        # pool_pre_ping avoids stale connections when the DB is restarted.
        engine = create_engine(database_url, pool_pre_ping=True)
    except Exception as e:
        logger.warning("Event store init failed: %s", e)
        return None

    if not db_health(engine):
        logger.warning("Event store unreachable; telemetry disabled")
        engine.dispose()
        return None
    return EventStore(engine)
