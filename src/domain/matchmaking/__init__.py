"""Solo-queue candidate selection and team balancing."""

from domain.matchmaking.class_mask import class_id_to_mask_bit, class_mask_from_ids
from domain.matchmaking.common import (
    Candidate,
    DpsKind,
    NoMatchReason,
    Role,
    SelectionResult,
    TeamSplitResult,
)
from domain.matchmaking.partitioner import ConflictChecker, IgnoreGraph, find_best_team_split
from domain.matchmaking.pipeline import (
    MatchmakingOutcome,
    QueueParameters,
    resolve_matchmaker_rating,
    run_matchmaking_tick,
)
from domain.matchmaking.roles import (
    RoleClassifier,
    TalentCategory,
    build_candidate,
    classify_talent_points,
    has_forbidden_talents,
    role_for_category,
)
from domain.matchmaking.selector import select_candidates

__all__ = [
    "Candidate",
    "ConflictChecker",
    "DpsKind",
    "IgnoreGraph",
    "MatchmakingOutcome",
    "NoMatchReason",
    "QueueParameters",
    "Role",
    "RoleClassifier",
    "SelectionResult",
    "TalentCategory",
    "TeamSplitResult",
    "build_candidate",
    "class_id_to_mask_bit",
    "class_mask_from_ids",
    "classify_talent_points",
    "find_best_team_split",
    "has_forbidden_talents",
    "resolve_matchmaker_rating",
    "role_for_category",
    "run_matchmaking_tick",
    "select_candidates",
]
