"""solo_queue and solo_queue_ignores table models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    Enum,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class QueuedParticipant(Base):
    """One solo participant currently waiting in the queue."""

    __tablename__ = "solo_queue"
    __table_args__ = (
        UniqueConstraint("participant_id", name="uq_solo_queue_participant"),
        CheckConstraint("rating >= 0", name="ck_solo_queue_rating"),
        CheckConstraint("class_id >= 0", name="ck_solo_queue_class_id"),
        Index("idx_solo_queue_fifo", "joined_at_ms", "id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    participant_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    name: Mapped[str | None] = mapped_column(String(64), nullable=True)
    role: Mapped[str] = mapped_column(
        Enum("dps", "healer", name="solo_queue_role", native_enum=False),
        nullable=False,
    )
    dps_kind: Mapped[str | None] = mapped_column(
        Enum("melee", "ranged", name="solo_queue_dps_kind", native_enum=False),
        nullable=True,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    class_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    joined_at_ms: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class IgnoreEntry(Base):
    """Directed ignore edge: ``participant_id`` ignores ``ignored_id``."""

    __tablename__ = "solo_queue_ignores"
    __table_args__ = (
        UniqueConstraint("participant_id", "ignored_id", name="uq_solo_queue_ignore_pair"),
        CheckConstraint("participant_id <> ignored_id", name="ck_solo_queue_ignore_self"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    participant_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    ignored_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
