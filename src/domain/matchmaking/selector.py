"""Pick the participants for one match from the FIFO waiting pool."""

from __future__ import annotations

from collections.abc import Sequence

from domain.matchmaking.common import Candidate, NoMatchReason, Role, SelectionResult


def required_healers(team_size: int) -> int:
    """One healer per team, except in single-player testing mode."""
    return 2 if team_size > 1 else 0


def _waited_at_least(candidates: Sequence[Candidate], timer_ms: int, now_ms: int) -> list[Candidate]:
    return [candidate for candidate in candidates if candidate.join_time_ms + timer_ms <= now_ms]


def select_candidates(
    candidates: Sequence[Candidate],
    team_size: int,
    *,
    enforce_roles: bool,
    no_healer_timer_ms: int,
    one_healer_timer_ms: int,
    now_ms: int,
) -> SelectionResult:
    """Select ``2 * team_size`` candidates for a single match.

    ``candidates`` must be in arrival order. Within each role bucket the
    oldest candidates are always taken first. When healers are scarce, an
    all-DPS match may be formed from DPS who have waited at least the
    matching fallback timer; the result is then flagged ``used_fallback``.
    """
    if team_size < 1:
        raise ValueError(f"team_size must be >= 1, got {team_size}")

    match_size = team_size * 2
    if len(candidates) < match_size:
        return SelectionResult.no_match(NoMatchReason.INSUFFICIENT_POOL)

    if not enforce_roles:
        return SelectionResult(selected=tuple(candidates[:match_size]), used_fallback=False)

    healers = [candidate for candidate in candidates if candidate.role == Role.HEALER]
    dps = [candidate for candidate in candidates if candidate.role != Role.HEALER]

    healers_needed = required_healers(team_size)
    dps_needed = match_size - healers_needed

    if len(healers) >= healers_needed and len(dps) >= dps_needed:
        return SelectionResult(
            selected=tuple(healers[:healers_needed] + dps[:dps_needed]),
            used_fallback=False,
        )

    if not healers:
        timed_dps = _waited_at_least(dps, no_healer_timer_ms, now_ms)
    elif len(healers) == 1:
        # The lone healer stays queued; 1 healer + 5 DPS is never formed.
        timed_dps = _waited_at_least(dps, one_healer_timer_ms, now_ms)
    else:
        timed_dps = []

    if len(timed_dps) >= match_size:
        return SelectionResult(selected=tuple(timed_dps[:match_size]), used_fallback=True)

    return SelectionResult.no_match(NoMatchReason.UNBALANCED_COMPOSITION)


__all__ = ["required_healers", "select_candidates"]
