"""Serialization for schedules and time-axis export."""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from pydantic import ValidationError

from stepaxis.config.schema import ScheduleConfig
from stepaxis.core.time_axis import TimeAxis
from stepaxis.utils.exceptions import ConfigError

SECONDS_PER_DAY = 86_400


def schedule_from_data(data: Any) -> ScheduleConfig:
    """Validate already-decoded schedule data (e.g. from JSON or YAML).

    Raises:
        ConfigError: If the data does not describe a valid schedule.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Schedule must be a mapping, got {type(data).__name__}")
    try:
        return ScheduleConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid schedule: {exc}") from exc


def load_schedule(json_str: str) -> ScheduleConfig:
    """Deserialize a schedule from a JSON string."""
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Schedule is not valid JSON: {exc}") from exc
    return schedule_from_data(data)


def dump_schedule(schedule: ScheduleConfig) -> str:
    """Serialize a schedule to a JSON string."""
    return json.dumps(schedule.model_dump(), indent=2)


def dump_steps_csv(axis: TimeAxis) -> str:
    """Export the report steps as CSV.

    Columns: step, date (ISO 8601), elapsed_days, step_length_days (empty for
    the last step), first_of_month, first_of_year.
    """
    elapsed = axis.elapsed_array() / SECONDS_PER_DAY
    lengths = axis.step_lengths() / SECONDS_PER_DAY
    months = set(axis.first_step_of_month)
    years = set(axis.first_step_of_year)

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(
        ["step", "date", "elapsed_days", "step_length_days", "first_of_month", "first_of_year"]
    )
    for i, t in enumerate(axis):
        writer.writerow(
            [
                i,
                t.isoformat(),
                f"{elapsed[i]:.6f}",
                f"{lengths[i]:.6f}" if i < len(lengths) else "",
                int(i in months),
                int(i in years),
            ]
        )
    return output.getvalue()


def dump_axis_summary(axis: TimeAxis) -> str:
    """Serialize a time axis summary to JSON."""
    data = {
        "start": axis.start_of(0).isoformat(),
        "end": axis.end_of().isoformat(),
        "n_steps": axis.size(),
        "total_elapsed_seconds": axis.total_elapsed(),
        "timestamps": [t.isoformat() for t in axis],
        "first_step_of_month": list(axis.first_step_of_month),
        "first_step_of_year": list(axis.first_step_of_year),
    }
    return json.dumps(data, indent=2)
