"""One matchmaking tick: selection followed by the balanced team split."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from domain.matchmaking.common import Candidate, NoMatchReason
from domain.matchmaking.partitioner import ConflictChecker, find_best_team_split
from domain.matchmaking.selector import required_healers, select_candidates


@dataclass(frozen=True)
class QueueParameters:
    team_size: int = 3
    arena_testing: bool = False
    filter_talents: bool = False
    block_forbidden_talents: bool = False
    all_dps_timer_ms: int = 60_000
    single_healer_dps_timer_ms: int = 120_000
    avoid_same_team_ignore: bool = True
    prevent_class_stacking: int = 0
    class_stack_mask: int = 0
    start_rating: int = 0

    @property
    def effective_team_size(self) -> int:
        """Testing mode runs 1v1 matches."""
        return 1 if self.arena_testing else self.team_size


@dataclass(frozen=True)
class MatchmakingOutcome:
    """Result of one tick; teams are empty when ``reason`` is set."""

    reason: NoMatchReason | None = None
    team1: tuple[Candidate, ...] = ()
    team2: tuple[Candidate, ...] = ()
    mmr_diff: int = 0
    used_fallback: bool = False

    @property
    def matched(self) -> bool:
        return self.reason is None

    @property
    def participant_ids(self) -> tuple[int, ...]:
        return tuple(candidate.candidate_id for candidate in self.team1 + self.team2)


def resolve_matchmaker_rating(
    *,
    queued_rating: int,
    member_rating: int | None,
    team_rating: int | None,
    default_rating: int,
) -> int:
    """Rating used for balancing, in lookup order.

    The rating stored with the queued entry wins when set, then the member's
    own matchmaker rating, then the team rating. Participants with no team
    get the configured start rating.
    """
    if queued_rating > 0:
        return queued_rating
    if team_rating is None:
        return default_rating
    if member_rating is not None and member_rating > 0:
        return member_rating
    return team_rating


def run_matchmaking_tick(
    candidates: Sequence[Candidate],
    parameters: QueueParameters,
    *,
    now_ms: int,
    conflict_checker: ConflictChecker | None = None,
    echo: Callable[[str], None] | None = None,
) -> MatchmakingOutcome:
    """Try to form one match from a FIFO snapshot of the waiting pool."""
    team_size = parameters.effective_team_size

    selection = select_candidates(
        candidates,
        team_size,
        enforce_roles=parameters.filter_talents,
        no_healer_timer_ms=parameters.all_dps_timer_ms,
        one_healer_timer_ms=parameters.single_healer_dps_timer_ms,
        now_ms=now_ms,
    )
    if not selection.ok:
        if echo is not None:
            echo(f"no_match reason={selection.reason.value} queued={len(candidates)} team_size={team_size}")
        return MatchmakingOutcome(reason=selection.reason)

    # Healer-free selections (fallback or 1v1 testing) must split with no healers per team.
    all_dps_match = selection.used_fallback or required_healers(team_size) == 0
    split = find_best_team_split(
        selection.selected,
        team_size,
        enforce_roles=parameters.filter_talents,
        all_dps_match=all_dps_match,
        class_stack_level=parameters.prevent_class_stacking,
        class_mask=parameters.class_stack_mask,
        conflict_checker=conflict_checker if parameters.avoid_same_team_ignore else None,
    )
    if not split.valid:
        if echo is not None:
            echo(
                f"no_match reason={NoMatchReason.NO_VALID_PARTITION.value} "
                f"selected={len(selection.selected)} "
                f"class_stacking={parameters.prevent_class_stacking}"
            )
        return MatchmakingOutcome(reason=NoMatchReason.NO_VALID_PARTITION)

    team1 = tuple(selection.selected[index] for index in split.team1_indices)
    team2 = tuple(selection.selected[index] for index in split.team2_indices)
    if echo is not None:
        echo(
            "matched "
            f"team1={[candidate.candidate_id for candidate in team1]} "
            f"team2={[candidate.candidate_id for candidate in team2]} "
            f"mmr_diff={split.mmr_diff} "
            f"conflict_pairs={split.conflict_pairs} "
            f"used_fallback={selection.used_fallback}"
        )
    return MatchmakingOutcome(
        reason=None,
        team1=team1,
        team2=team2,
        mmr_diff=split.mmr_diff,
        used_fallback=selection.used_fallback,
    )


__all__ = [
    "MatchmakingOutcome",
    "QueueParameters",
    "resolve_matchmaker_rating",
    "run_matchmaking_tick",
]
