"""Shared types for solo-queue matchmaking."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Composition role used for team quotas."""

    DPS = "dps"
    HEALER = "healer"


class DpsKind(str, Enum):
    """Optional refinement of a DPS candidate for class-stacking rules."""

    MELEE = "melee"
    RANGED = "ranged"


class NoMatchReason(str, Enum):
    """Why a matchmaking tick produced no match."""

    INSUFFICIENT_POOL = "insufficient_pool"
    UNBALANCED_COMPOSITION = "unbalanced_composition"
    NO_VALID_PARTITION = "no_valid_partition"


@dataclass(frozen=True)
class Candidate:
    """A queued participant eligible for matchmaking."""

    candidate_id: int
    role: Role
    rating: int
    join_time_ms: int
    class_id: int = 0
    dps_kind: DpsKind | None = None

    @property
    def is_healer(self) -> bool:
        return self.role == Role.HEALER


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of candidate selection for one match."""

    selected: tuple[Candidate, ...] = ()
    used_fallback: bool = False
    reason: NoMatchReason | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def no_match(cls, reason: NoMatchReason) -> SelectionResult:
        return cls(selected=(), used_fallback=False, reason=reason)


@dataclass(frozen=True)
class TeamSplitResult:
    """Best partition of the selected candidates, as indices into that list."""

    valid: bool = False
    team1_indices: tuple[int, ...] = ()
    team2_indices: tuple[int, ...] = ()
    mmr_diff: int = 0
    conflict_pairs: int = 0


__all__ = [
    "Candidate",
    "DpsKind",
    "NoMatchReason",
    "Role",
    "SelectionResult",
    "TeamSplitResult",
]
