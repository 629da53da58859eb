"""Exhaustive rating-balanced split of selected candidates into two teams."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from itertools import combinations
from typing import Protocol, runtime_checkable

from domain.matchmaking.class_mask import class_in_mask
from domain.matchmaking.common import Candidate, DpsKind, TeamSplitResult

MAX_CLASS_STACK_LEVEL = 6


@runtime_checkable
class ConflictChecker(Protocol):
    """Social-conflict lookup used as the secondary split score."""

    def has_conflict(self, candidate_id: int, other_id: int) -> bool: ...


class IgnoreGraph:
    """In-memory ignore list; a pair conflicts when either side ignores the other."""

    def __init__(self, ignores: Iterable[tuple[int, int]] = ()) -> None:
        self._ignores: set[tuple[int, int]] = set()
        for participant_id, ignored_id in ignores:
            self.add(participant_id, ignored_id)

    def add(self, participant_id: int, ignored_id: int) -> None:
        self._ignores.add((participant_id, ignored_id))

    def __len__(self) -> int:
        return len(self._ignores)

    def has_conflict(self, candidate_id: int, other_id: int) -> bool:
        return (candidate_id, other_id) in self._ignores or (other_id, candidate_id) in self._ignores


def iter_team_combinations(n: int, team_size: int) -> Iterator[tuple[int, ...]]:
    """Yield team-1 index tuples in increasing lexicographic order."""
    return combinations(range(n), team_size)


def complement_indices(team: Sequence[int], n: int) -> tuple[int, ...]:
    members = set(team)
    return tuple(index for index in range(n) if index not in members)


def _healer_count(team: Sequence[int], pool: Sequence[Candidate]) -> int:
    return sum(1 for index in team if pool[index].is_healer)


def _both_dps_of_kind(a: Candidate, b: Candidate, kind: DpsKind) -> bool:
    if a.is_healer or b.is_healer:
        return False
    # Without sub-role data every DPS pair is in scope.
    if a.dps_kind is None or b.dps_kind is None:
        return True
    return a.dps_kind == kind and b.dps_kind == kind


def _pair_in_stacking_scope(a: Candidate, b: Candidate, level: int) -> bool:
    if level == 1:
        return True
    if level == 2:
        return _both_dps_of_kind(a, b, DpsKind.MELEE)
    if level == 3:
        return _both_dps_of_kind(a, b, DpsKind.RANGED)
    if level == 4:
        return not a.is_healer and not b.is_healer
    if level in (5, 6):
        return a.is_healer or b.is_healer
    return False


def has_class_stacking_conflict(
    team: Sequence[int],
    pool: Sequence[Candidate],
    class_stack_level: int,
    class_mask: int,
) -> bool:
    """Return True when two same-class teammates are blocked by the stacking rule."""
    for i, j in combinations(team, 2):
        a = pool[i]
        b = pool[j]
        if a.class_id == 0 or a.class_id != b.class_id:
            continue
        if not class_in_mask(a.class_id, class_mask):
            continue
        if _pair_in_stacking_scope(a, b, class_stack_level):
            return True
    return False


def count_conflict_pairs(
    team: Sequence[int],
    pool: Sequence[Candidate],
    conflict_checker: ConflictChecker | None,
) -> int:
    if conflict_checker is None:
        return 0
    return sum(
        1
        for i, j in combinations(team, 2)
        if conflict_checker.has_conflict(pool[i].candidate_id, pool[j].candidate_id)
    )


def _role_balance_ok(
    team1: Sequence[int],
    team2: Sequence[int],
    pool: Sequence[Candidate],
    all_dps_match: bool,
) -> bool:
    healers_per_team = 0 if all_dps_match else 1
    return (
        _healer_count(team1, pool) == healers_per_team
        and _healer_count(team2, pool) == healers_per_team
    )


def find_best_team_split(
    selected: Sequence[Candidate],
    team_size: int,
    *,
    enforce_roles: bool,
    all_dps_match: bool,
    class_stack_level: int = 0,
    class_mask: int = 0,
    conflict_checker: ConflictChecker | None = None,
) -> TeamSplitResult:
    """Search every ``C(n, team_size)`` split for the smallest rating gap.

    Partitions failing the role-balance or class-stacking filters are
    skipped. Ties on the rating gap are broken by the number of same-team
    social-conflict pairs; the first partition reaching the best score in
    enumeration order is kept.
    """
    if team_size < 1:
        raise ValueError(f"team_size must be >= 1, got {team_size}")
    if class_stack_level < 0 or class_stack_level > MAX_CLASS_STACK_LEVEL:
        raise ValueError(
            f"class_stack_level must be between 0 and {MAX_CLASS_STACK_LEVEL}, got {class_stack_level}"
        )

    n = len(selected)
    if n < team_size * 2:
        return TeamSplitResult()

    best: TeamSplitResult | None = None
    for team1 in iter_team_combinations(n, team_size):
        team2 = complement_indices(team1, n)

        if enforce_roles and not _role_balance_ok(team1, team2, selected, all_dps_match):
            continue

        if class_stack_level > 0 and (
            has_class_stacking_conflict(team1, selected, class_stack_level, class_mask)
            or has_class_stacking_conflict(team2, selected, class_stack_level, class_mask)
        ):
            continue

        team1_sum = sum(selected[index].rating for index in team1)
        team2_sum = sum(selected[index].rating for index in team2)
        mmr_diff = abs(team1_sum - team2_sum)
        conflict_pairs = count_conflict_pairs(team1, selected, conflict_checker) + count_conflict_pairs(
            team2, selected, conflict_checker
        )

        if (
            best is None
            or mmr_diff < best.mmr_diff
            or (mmr_diff == best.mmr_diff and conflict_pairs < best.conflict_pairs)
        ):
            best = TeamSplitResult(
                valid=True,
                team1_indices=tuple(team1),
                team2_indices=team2,
                mmr_diff=mmr_diff,
                conflict_pairs=conflict_pairs,
            )

    return best if best is not None else TeamSplitResult()


__all__ = [
    "ConflictChecker",
    "IgnoreGraph",
    "MAX_CLASS_STACK_LEVEL",
    "complement_indices",
    "count_conflict_pairs",
    "find_best_team_split",
    "has_class_stacking_conflict",
    "iter_team_combinations",
]
