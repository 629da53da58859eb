"""Load solo-queue matchmaking configurations from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import (
    BaseSystemConfig,
    load_system_configs,
    parse_system_section,
    read_bool,
    read_int,
    read_seconds_as_ms,
)
from domain.matchmaking.class_mask import class_mask_from_ids
from domain.matchmaking.partitioner import MAX_CLASS_STACK_LEVEL
from domain.matchmaking.pipeline import QueueParameters

QUEUE_SECTION = "queue"


@dataclass(frozen=True)
class QueueSystemConfig(BaseSystemConfig):
    """Configuration for one solo-queue bracket."""

    parameters: QueueParameters

    def as_config_json(self) -> dict[str, Any]:
        return {
            "team_size": self.parameters.team_size,
            "arena_testing": self.parameters.arena_testing,
            "filter_talents": self.parameters.filter_talents,
            "block_forbidden_talents": self.parameters.block_forbidden_talents,
            "all_dps_timer_ms": self.parameters.all_dps_timer_ms,
            "single_healer_dps_timer_ms": self.parameters.single_healer_dps_timer_ms,
            "avoid_same_team_ignore": self.parameters.avoid_same_team_ignore,
            "prevent_class_stacking": self.parameters.prevent_class_stacking,
            "class_stack_mask": self.parameters.class_stack_mask,
            "start_rating": self.parameters.start_rating,
        }


def load_queue_system_configs(config_dir: Path) -> list[QueueSystemConfig]:
    """Load and validate all queue TOML config files in a directory."""
    return load_system_configs(config_dir, _parse_queue_system_config)


def _parse_queue_system_config(raw: dict[str, Any], file_path: Path) -> QueueSystemConfig:
    name, description = parse_system_section(raw, file_path)
    queue_raw = raw.get(QUEUE_SECTION, {})
    where = {"file_path": file_path, "section_name": QUEUE_SECTION}

    parameters = QueueParameters(
        team_size=read_int(queue_raw, "team_size", 3, minimum=1, **where),
        arena_testing=read_bool(queue_raw, "arena_testing", False, **where),
        filter_talents=read_bool(queue_raw, "filter_talents", False, **where),
        block_forbidden_talents=read_bool(queue_raw, "block_forbidden_talents", False, **where),
        all_dps_timer_ms=read_seconds_as_ms(queue_raw, "all_dps_timer_seconds", 60, **where),
        single_healer_dps_timer_ms=read_seconds_as_ms(
            queue_raw, "single_healer_dps_timer_seconds", 120, **where
        ),
        avoid_same_team_ignore=read_bool(queue_raw, "avoid_same_team_ignore", True, **where),
        prevent_class_stacking=read_int(
            queue_raw,
            "prevent_class_stacking",
            0,
            minimum=0,
            maximum=MAX_CLASS_STACK_LEVEL,
            **where,
        ),
        class_stack_mask=_parse_class_stack_mask(queue_raw, file_path),
        start_rating=read_int(queue_raw, "start_rating", 0, minimum=0, **where),
    )

    return QueueSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _parse_class_stack_mask(queue_raw: dict[str, Any], file_path: Path) -> int:
    """Raw bitmask, or the OR of the bits for a list of class ids."""
    if "class_stack_mask" in queue_raw and "class_stack_classes" in queue_raw:
        raise ValueError(
            f"{file_path}: [queue].class_stack_mask and [queue].class_stack_classes are mutually exclusive"
        )
    if "class_stack_classes" not in queue_raw:
        return read_int(
            queue_raw,
            "class_stack_mask",
            0,
            file_path=file_path,
            section_name=QUEUE_SECTION,
            minimum=0,
        )

    class_ids = queue_raw["class_stack_classes"]
    if not isinstance(class_ids, list) or any(
        isinstance(value, bool) or not isinstance(value, int) for value in class_ids
    ):
        raise ValueError(f"{file_path}: [queue].class_stack_classes must be a list of class ids")
    try:
        return class_mask_from_ids(class_ids)
    except ValueError as exc:
        raise ValueError(f"{file_path}: [queue].class_stack_classes {exc}") from exc


__all__ = ["QueueSystemConfig", "load_queue_system_configs"]
