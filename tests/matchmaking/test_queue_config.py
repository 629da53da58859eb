"""Tests for TOML-based queue config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.matchmaking.config import load_queue_system_configs


def test_load_queue_configs_from_directory(tmp_path: Path) -> None:
    config_path = tmp_path / "default.toml"
    config_path.write_text(
        """
[system]
name = "solo_a"
description = "A test queue"

[queue]
team_size = 3
filter_talents = true
all_dps_timer_seconds = 45
single_healer_dps_timer_seconds = 90
avoid_same_team_ignore = false
prevent_class_stacking = 4
class_stack_classes = [1, 11]
start_rating = 1500
""".strip()
    )

    configs = load_queue_system_configs(tmp_path)
    assert len(configs) == 1

    system = configs[0]
    assert system.name == "solo_a"
    assert system.description == "A test queue"
    assert system.parameters.team_size == 3
    assert system.parameters.arena_testing is False
    assert system.parameters.filter_talents is True
    assert system.parameters.all_dps_timer_ms == 45_000
    assert system.parameters.single_healer_dps_timer_ms == 90_000
    assert system.parameters.avoid_same_team_ignore is False
    assert system.parameters.prevent_class_stacking == 4
    assert system.parameters.class_stack_mask == (1 << 0) | (1 << 10)
    assert system.parameters.start_rating == 1500
    assert system.as_config_json()["class_stack_mask"] == 1025


def test_defaults_apply_when_queue_section_missing(tmp_path: Path) -> None:
    (tmp_path / "minimal.toml").write_text('[system]\nname = "minimal"\n')

    system = load_queue_system_configs(tmp_path)[0]

    assert system.description is None
    assert system.parameters.team_size == 3
    assert system.parameters.filter_talents is False
    assert system.parameters.all_dps_timer_ms == 60_000
    assert system.parameters.single_healer_dps_timer_ms == 120_000
    assert system.parameters.avoid_same_team_ignore is True
    assert system.parameters.prevent_class_stacking == 0
    assert system.parameters.class_stack_mask == 0


def test_duplicate_names_raise_error(tmp_path: Path) -> None:
    template = '[system]\nname = "dup"\n\n[queue]\nteam_size = 3\n'
    (tmp_path / "a.toml").write_text(template)
    (tmp_path / "b.toml").write_text(template)

    with pytest.raises(ValueError, match="Duplicate queue config names"):
        load_queue_system_configs(tmp_path)


def test_missing_name_raises_error(tmp_path: Path) -> None:
    (tmp_path / "bad.toml").write_text("[queue]\nteam_size = 3\n")

    with pytest.raises(ValueError, match=r"\[system\].name is required"):
        load_queue_system_configs(tmp_path)


@pytest.mark.parametrize(
    ("line", "message"),
    [
        ("team_size = 0", "team_size"),
        ("all_dps_timer_seconds = -1", "all_dps_timer_seconds"),
        ("single_healer_dps_timer_seconds = -5", "single_healer_dps_timer_seconds"),
        ("prevent_class_stacking = 7", "prevent_class_stacking"),
        ("start_rating = -1", "start_rating"),
        ("class_stack_classes = [10]", "class_stack_classes"),
        ("class_stack_classes = [1.5]", "class_stack_classes"),
        ("team_size = 2.5", "team_size must be an integer"),
        ("filter_talents = 1", "filter_talents must be true or false"),
        ('all_dps_timer_seconds = "60"', "all_dps_timer_seconds must be a number"),
        ("all_dps_timer_seconds = inf", "all_dps_timer_seconds"),
    ],
)
def test_invalid_values_raise_error(tmp_path: Path, line: str, message: str) -> None:
    (tmp_path / "bad.toml").write_text(f'[system]\nname = "bad"\n\n[queue]\n{line}\n')

    with pytest.raises(ValueError, match=message):
        load_queue_system_configs(tmp_path)


def test_mask_and_class_list_are_exclusive(tmp_path: Path) -> None:
    (tmp_path / "bad.toml").write_text(
        '[system]\nname = "bad"\n\n[queue]\nclass_stack_mask = 1\nclass_stack_classes = [1]\n'
    )

    with pytest.raises(ValueError, match="mutually exclusive"):
        load_queue_system_configs(tmp_path)


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_queue_system_configs(tmp_path / "nope")


def test_empty_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="No .toml config files"):
        load_queue_system_configs(tmp_path)


def test_shipped_default_config_loads() -> None:
    config_dir = Path(__file__).resolve().parents[2] / "configs" / "matchmaking"

    configs = load_queue_system_configs(config_dir)

    assert [config.name for config in configs] == ["solo_3v3_default"]
    assert configs[0].parameters.filter_talents is True


def test_fractional_timer_seconds_keep_milliseconds(tmp_path: Path) -> None:
    (tmp_path / "fractional.toml").write_text(
        '[system]\nname = "fractional"\n\n[queue]\n'
        "all_dps_timer_seconds = 1.5\nsingle_healer_dps_timer_seconds = 0.25\n"
    )

    parameters = load_queue_system_configs(tmp_path)[0].parameters

    assert parameters.all_dps_timer_ms == 1_500
    assert parameters.single_healer_dps_timer_ms == 250


def test_block_forbidden_talents_defaults_off(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('[system]\nname = "a"\n')
    (tmp_path / "b.toml").write_text('[system]\nname = "b"\n\n[queue]\nblock_forbidden_talents = true\n')

    configs = {config.name: config for config in load_queue_system_configs(tmp_path)}

    assert configs["a"].parameters.block_forbidden_talents is False
    assert configs["b"].parameters.block_forbidden_talents is True
    assert configs["b"].as_config_json()["block_forbidden_talents"] is True
