"""Persistence helpers for the solo queue, ignore lists, and formed matches."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, or_, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from domain.matchmaking.common import Candidate, DpsKind, Role
from domain.matchmaking.partitioner import IgnoreGraph
from domain.matchmaking.pipeline import MatchmakingOutcome
from models import Base, IgnoreEntry, QueuedParticipant, SoloMatch, SoloMatchPlayer

_QUEUE_TABLES = (
    QueuedParticipant.__table__,
    IgnoreEntry.__table__,
    SoloMatch.__table__,
    SoloMatchPlayer.__table__,
)


def ensure_queue_schema(engine: Engine) -> None:
    """Create queue and match tables if they do not exist."""
    Base.metadata.create_all(bind=engine, tables=list(_QUEUE_TABLES), checkfirst=True)


def enqueue(
    session: Session,
    *,
    participant_id: int,
    role: Role,
    rating: int,
    joined_at_ms: int,
    class_id: int = 0,
    dps_kind: DpsKind | None = None,
    name: str | None = None,
) -> QueuedParticipant:
    """Add one participant to the queue; re-joining keeps the original join time."""
    if rating < 0:
        raise ValueError(f"rating must be >= 0, got {rating}")

    existing = session.execute(
        select(QueuedParticipant).where(QueuedParticipant.participant_id == participant_id)
    ).scalar_one_or_none()
    if existing is not None:
        existing.role = role.value
        existing.dps_kind = None if dps_kind is None else dps_kind.value
        existing.rating = rating
        existing.class_id = class_id
        if name is not None:
            existing.name = name
        session.flush()
        return existing

    entry = QueuedParticipant(
        participant_id=participant_id,
        name=name,
        role=role.value,
        dps_kind=None if dps_kind is None else dps_kind.value,
        rating=rating,
        class_id=class_id,
        joined_at_ms=joined_at_ms,
    )
    session.add(entry)
    session.flush()
    return entry


def dequeue(session: Session, participant_ids: Iterable[int]) -> int:
    """Remove participants from the queue and return how many rows were deleted."""
    ids = list(participant_ids)
    if not ids:
        return 0
    result = session.execute(
        delete(QueuedParticipant).where(QueuedParticipant.participant_id.in_(ids))
    )
    return int(result.rowcount or 0)


def add_ignore(session: Session, *, participant_id: int, ignored_id: int) -> None:
    if participant_id == ignored_id:
        raise ValueError("a participant cannot ignore themselves")

    existing = session.execute(
        select(IgnoreEntry).where(
            IgnoreEntry.participant_id == participant_id,
            IgnoreEntry.ignored_id == ignored_id,
        )
    ).scalar_one_or_none()
    if existing is None:
        session.add(IgnoreEntry(participant_id=participant_id, ignored_id=ignored_id))
        session.flush()


def list_queue(session: Session) -> list[QueuedParticipant]:
    """Queued rows in arrival order."""
    statement = select(QueuedParticipant).order_by(
        QueuedParticipant.joined_at_ms.asc(),
        QueuedParticipant.id.asc(),
    )
    return list(session.execute(statement).scalars())


def _to_candidate(entry: QueuedParticipant) -> Candidate:
    return Candidate(
        candidate_id=int(entry.participant_id),
        role=Role(entry.role),
        rating=int(entry.rating),
        join_time_ms=int(entry.joined_at_ms),
        class_id=int(entry.class_id),
        dps_kind=None if entry.dps_kind is None else DpsKind(entry.dps_kind),
    )


def load_candidates(session: Session) -> list[Candidate]:
    """Take a FIFO snapshot of the queue as immutable candidates."""
    return [_to_candidate(entry) for entry in list_queue(session)]


def load_ignore_graph(session: Session, participant_ids: Iterable[int]) -> IgnoreGraph:
    """Load every ignore edge touching the given participants."""
    ids = list(participant_ids)
    if not ids:
        return IgnoreGraph()
    statement = select(IgnoreEntry.participant_id, IgnoreEntry.ignored_id).where(
        or_(IgnoreEntry.participant_id.in_(ids), IgnoreEntry.ignored_id.in_(ids))
    )
    return IgnoreGraph((int(row[0]), int(row[1])) for row in session.execute(statement))


def record_match(
    session: Session,
    outcome: MatchmakingOutcome,
    *,
    config_name: str,
    formed_at_ms: int,
) -> SoloMatch:
    """Persist a formed match and remove its players from the queue.

    Runs inside the caller's transaction. Raises when a selected participant
    left the queue after the snapshot was taken, so the caller can roll back.
    """
    if not outcome.matched:
        raise ValueError(f"cannot record a tick without a match (reason={outcome.reason})")

    participant_ids = outcome.participant_ids
    removed = dequeue(session, participant_ids)
    if removed != len(participant_ids):
        raise ValueError(
            f"queue changed since snapshot: expected to remove {len(participant_ids)} "
            f"participants, removed {removed}"
        )

    match = SoloMatch(
        config_name=config_name,
        formed_at_ms=formed_at_ms,
        mmr_diff=outcome.mmr_diff,
        used_fallback=outcome.used_fallback,
    )
    for team_number, team in ((1, outcome.team1), (2, outcome.team2)):
        for candidate in team:
            match.players.append(
                SoloMatchPlayer(
                    participant_id=candidate.candidate_id,
                    team=team_number,
                    role=candidate.role.value,
                    rating=candidate.rating,
                    waited_ms=max(0, formed_at_ms - candidate.join_time_ms),
                )
            )
    session.add(match)
    session.flush()
    return match


__all__ = [
    "add_ignore",
    "dequeue",
    "enqueue",
    "ensure_queue_schema",
    "list_queue",
    "load_candidates",
    "load_ignore_graph",
    "record_match",
]
