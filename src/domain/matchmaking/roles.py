"""Role classification from talent investment."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from domain.matchmaking.common import Candidate, DpsKind, Role

FORBIDDEN_TALENT_POINT_THRESHOLD = 36


class TalentCategory(str, Enum):
    """Talent tree family a participant has invested in."""

    MELEE = "melee"
    RANGED = "ranged"
    HEALER = "healer"


_CATEGORY_ORDER = (TalentCategory.MELEE, TalentCategory.RANGED, TalentCategory.HEALER)


@runtime_checkable
class RoleClassifier(Protocol):
    """Host capability that inspects live participant state."""

    def classify(self, participant: Any) -> TalentCategory: ...


def classify_talent_points(points: Mapping[TalentCategory, int]) -> TalentCategory:
    """Pick the category with the most points; MELEE when nothing is invested.

    Ties keep the earlier category in MELEE, RANGED, HEALER order.
    """
    category = TalentCategory.MELEE
    best_points = 0
    for candidate_category in _CATEGORY_ORDER:
        category_points = int(points.get(candidate_category, 0))
        if category_points > best_points:
            category = candidate_category
            best_points = category_points
    return category


def role_for_category(category: TalentCategory) -> tuple[Role, DpsKind | None]:
    if category == TalentCategory.HEALER:
        return Role.HEALER, None
    if category == TalentCategory.RANGED:
        return Role.DPS, DpsKind.RANGED
    return Role.DPS, DpsKind.MELEE


def has_forbidden_talents(
    forbidden_tree_points: int,
    threshold: int = FORBIDDEN_TALENT_POINT_THRESHOLD,
) -> bool:
    """True when too many points sit in trees blocked from the queue."""
    return forbidden_tree_points >= threshold


def build_candidate(
    participant: Any,
    *,
    candidate_id: int,
    rating: int,
    join_time_ms: int,
    class_id: int = 0,
    classifier: RoleClassifier | None = None,
) -> Candidate:
    """Classify a participant once and wrap it as a ``Candidate``.

    Without a classifier (role filtering disabled) every participant is
    treated as melee DPS.
    """
    category = classifier.classify(participant) if classifier is not None else TalentCategory.MELEE
    role, dps_kind = role_for_category(category)
    return Candidate(
        candidate_id=candidate_id,
        role=role,
        rating=rating,
        join_time_ms=join_time_ms,
        class_id=class_id,
        dps_kind=dps_kind,
    )


__all__ = [
    "FORBIDDEN_TALENT_POINT_THRESHOLD",
    "RoleClassifier",
    "TalentCategory",
    "build_candidate",
    "classify_talent_points",
    "has_forbidden_talents",
    "role_for_category",
]
