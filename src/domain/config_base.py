"""TOML discovery, the ``[system]`` header and typed readers for queue configs."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar
import tomllib


@dataclass(frozen=True)
class BaseSystemConfig:
    """Name and origin of one config file."""

    name: str
    description: str | None
    file_path: Path

    def as_config_json(self) -> dict[str, Any]:
        raise NotImplementedError


T = TypeVar("T", bound=BaseSystemConfig)


def find_config_files(config_dir: Path) -> list[Path]:
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")
    return config_files


def load_system_configs(
    config_dir: Path,
    parser: Callable[[dict[str, Any], Path], T],
) -> list[T]:
    """Parse every ``*.toml`` file in ``config_dir``; names must be unique."""
    systems: list[T] = []
    for file_path in find_config_files(config_dir):
        with file_path.open("rb") as file:
            systems.append(parser(tomllib.load(file), file_path))

    counts = Counter(system.name for system in systems)
    duplicates = sorted(name for name, count in counts.items() if count > 1)
    if duplicates:
        files = [system.file_path.name for system in systems if system.name in duplicates]
        raise ValueError(f"Duplicate queue config names found in {config_dir}: {duplicates} ({files})")

    return systems


def parse_system_section(raw: dict[str, Any], file_path: Path) -> tuple[str, str | None]:
    """Read the required ``[system]`` name and optional description."""
    system_raw = raw.get("system", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)
    return name, description


def read_int(
    section: dict[str, Any],
    key: str,
    default: int,
    *,
    file_path: Path,
    section_name: str,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int:
    """Integer option with optional bounds; booleans and floats are rejected."""
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{file_path}: [{section_name}].{key} must be an integer")
    if minimum is not None and value < minimum:
        raise ValueError(f"{file_path}: [{section_name}].{key} must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise ValueError(f"{file_path}: [{section_name}].{key} must be <= {maximum}")
    return value


def read_bool(
    section: dict[str, Any],
    key: str,
    default: bool,
    *,
    file_path: Path,
    section_name: str,
) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{file_path}: [{section_name}].{key} must be true or false")
    return value


def read_seconds_as_ms(
    section: dict[str, Any],
    key: str,
    default_seconds: float,
    *,
    file_path: Path,
    section_name: str,
) -> int:
    """Non-negative duration given in seconds (fractions allowed), returned in ms."""
    value = section.get(key, default_seconds)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{file_path}: [{section_name}].{key} must be a number of seconds")
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{file_path}: [{section_name}].{key} must be >= 0")
    return int(round(value * 1000))


__all__ = [
    "BaseSystemConfig",
    "find_config_files",
    "load_system_configs",
    "parse_system_section",
    "read_bool",
    "read_int",
    "read_seconds_as_ms",
]
