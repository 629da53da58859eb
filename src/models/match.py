"""solo_matches and solo_match_players table models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class SoloMatch(Base):
    """A match formed by one matchmaking tick."""

    __tablename__ = "solo_matches"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    config_name: Mapped[str] = mapped_column(String(128), nullable=False)
    formed_at_ms: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mmr_diff: Mapped[int] = mapped_column(Integer, nullable=False)
    used_fallback: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )

    players: Mapped[list[SoloMatchPlayer]] = relationship(
        back_populates="match",
        cascade="all, delete-orphan",
        order_by="SoloMatchPlayer.id",
    )


class SoloMatchPlayer(Base):
    """One participant's side assignment in a formed match."""

    __tablename__ = "solo_match_players"
    __table_args__ = (
        UniqueConstraint("match_id", "participant_id", name="uq_solo_match_player"),
        CheckConstraint("team IN (1, 2)", name="ck_solo_match_player_team"),
        Index("idx_solo_match_players_participant", "participant_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    match_id: Mapped[int] = mapped_column(ForeignKey("solo_matches.id"), nullable=False)
    participant_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    team: Mapped[int] = mapped_column(Integer, nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    waited_ms: Mapped[int] = mapped_column(BigInteger, nullable=False)

    match: Mapped[SoloMatch] = relationship(back_populates="players")
