"""Tests for talent-based role classification."""

from __future__ import annotations

from dataclasses import dataclass

from domain.matchmaking.common import DpsKind, Role
from domain.matchmaking.roles import (
    RoleClassifier,
    TalentCategory,
    build_candidate,
    classify_talent_points,
    has_forbidden_talents,
    role_for_category,
)


@dataclass(frozen=True)
class FakeParticipant:
    talent_points: dict[TalentCategory, int]


class TalentPointClassifier:
    def classify(self, participant: FakeParticipant) -> TalentCategory:
        return classify_talent_points(participant.talent_points)


def test_no_points_defaults_to_melee() -> None:
    assert classify_talent_points({}) == TalentCategory.MELEE


def test_most_points_wins() -> None:
    points = {TalentCategory.MELEE: 10, TalentCategory.RANGED: 5, TalentCategory.HEALER: 51}
    assert classify_talent_points(points) == TalentCategory.HEALER


def test_ties_keep_earlier_category() -> None:
    points = {TalentCategory.RANGED: 30, TalentCategory.HEALER: 30}
    assert classify_talent_points(points) == TalentCategory.RANGED


def test_categories_collapse_to_roles() -> None:
    assert role_for_category(TalentCategory.HEALER) == (Role.HEALER, None)
    assert role_for_category(TalentCategory.MELEE) == (Role.DPS, DpsKind.MELEE)
    assert role_for_category(TalentCategory.RANGED) == (Role.DPS, DpsKind.RANGED)


def test_forbidden_talent_threshold() -> None:
    assert not has_forbidden_talents(35)
    assert has_forbidden_talents(36)


def test_build_candidate_classifies_once() -> None:
    classifier = TalentPointClassifier()
    assert isinstance(classifier, RoleClassifier)

    candidate = build_candidate(
        FakeParticipant({TalentCategory.HEALER: 41}),
        candidate_id=7,
        rating=1720,
        join_time_ms=1_000,
        class_id=11,
        classifier=classifier,
    )

    assert candidate.role == Role.HEALER
    assert candidate.dps_kind is None
    assert candidate.rating == 1720
    assert candidate.class_id == 11


def test_build_candidate_without_classifier_is_melee_dps() -> None:
    candidate = build_candidate(
        FakeParticipant({TalentCategory.HEALER: 41}),
        candidate_id=1,
        rating=1500,
        join_time_ms=0,
    )

    assert candidate.role == Role.DPS
    assert candidate.dps_kind == DpsKind.MELEE


def test_role_helpers_are_exported_from_package() -> None:
    import domain.matchmaking as matchmaking

    assert matchmaking.classify_talent_points is classify_talent_points
    assert matchmaking.has_forbidden_talents is has_forbidden_talents
    assert matchmaking.role_for_category(TalentCategory.RANGED) == (Role.DPS, DpsKind.RANGED)
