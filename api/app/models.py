from datetime import datetime

import sqlalchemy as sa
from sqlalchemy import BigInteger, DateTime, Float, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Event(Base):
    """
    Telemetry for one analysis. Written once, never read or updated by the API.
    Sender domains are stored only as SHA-256 hex digests.
    """

    __tablename__ = "events"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(sa.Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    platform: Mapped[str] = mapped_column(Text, nullable=False)
    domain_hash: Mapped[str] = mapped_column(sa.String(64), nullable=False)
    verdict: Mapped[str] = mapped_column(Text, nullable=False, default="unknown")
    risk_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    cue_types: Mapped[list] = mapped_column(sa.JSON, nullable=False, default=list)
