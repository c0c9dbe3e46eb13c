"""YAML loader for schedule files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from stepaxis.config.schema import ScheduleConfig
from stepaxis.io.serialize import load_schedule, schedule_from_data
from stepaxis.utils.exceptions import ConfigError

YAML_SUFFIXES = (".yaml", ".yml")


def load_yaml(path: Path) -> Any:
    """Load and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file is not valid YAML.
    """
    with open(path) as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path} is not valid YAML: {exc}") from exc


def load_schedule_yaml(path: Path) -> ScheduleConfig:
    """Load a schedule from a YAML file."""
    return schedule_from_data(load_yaml(path))


def load_schedule_file(path: Path) -> ScheduleConfig:
    """Load a schedule from a YAML (``.yaml``/``.yml``) or JSON file."""
    if path.suffix.lower() in YAML_SUFFIXES:
        return load_schedule_yaml(path)
    return load_schedule(path.read_text())
