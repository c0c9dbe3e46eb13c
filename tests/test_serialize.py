"""Tests for schedule models, loading and axis export."""

from __future__ import annotations

import csv
import io
import json
from datetime import datetime
from pathlib import Path

import pytest

from stepaxis.config.defaults import DEFAULT_START, default_schedule
from stepaxis.config.schema import DateRecord, DatesKeyword, ScheduleConfig, TstepKeyword
from stepaxis.core.time_axis import TimeAxis
from stepaxis.io.serialize import (
    dump_axis_summary,
    dump_schedule,
    dump_steps_csv,
    load_schedule,
)
from stepaxis.io.yaml_loader import load_schedule_file, load_schedule_yaml
from stepaxis.utils.exceptions import ConfigError

GOLDEN = Path(__file__).parent / "golden"

EXPECTED_STEPS = [
    datetime(2020, 1, 1),
    datetime(2020, 1, 15),
    datetime(2020, 2, 1),
    datetime(2020, 3, 1),
    datetime(2020, 3, 20),
    datetime(2021, 1, 1, 6),
]


class TestSchedule:
    def test_golden_json(self) -> None:
        schedule = load_schedule((GOLDEN / "basic_schedule.json").read_text())
        assert isinstance(schedule.keywords[0], DatesKeyword)
        assert isinstance(schedule.keywords[1], TstepKeyword)
        axis = TimeAxis.from_schedule(schedule)
        assert list(axis) == EXPECTED_STEPS
        assert axis.first_step_of_month == (0, 2, 3, 5)
        assert axis.first_step_of_year == (0, 5)

    def test_yaml_matches_json(self) -> None:
        from_json = load_schedule_file(GOLDEN / "basic_schedule.json")
        from_yaml = load_schedule_yaml(GOLDEN / "basic_schedule.yaml")
        assert from_yaml == from_json

    def test_round_trip(self) -> None:
        schedule = load_schedule((GOLDEN / "basic_schedule.json").read_text())
        assert load_schedule(dump_schedule(schedule)) == schedule

    def test_default_start(self) -> None:
        axis = TimeAxis.from_schedule(ScheduleConfig())
        assert axis.start_of(0) == datetime(1983, 1, 1)
        assert DEFAULT_START.to_instant() == datetime(1983, 1, 1)
        assert TimeAxis.from_schedule(default_schedule()).size() == 1

    def test_unknown_keyword(self) -> None:
        with pytest.raises(ConfigError):
            load_schedule(json.dumps({"keywords": [{"keyword": "WCONHIST", "records": []}]}))

    def test_extra_field_rejected(self) -> None:
        with pytest.raises(ConfigError):
            load_schedule(json.dumps({"start": {"day": 1, "month": "JAN", "year": 2020, "hour": 3}}))

    def test_not_json(self) -> None:
        with pytest.raises(ConfigError):
            load_schedule("{not json")

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "schedule.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_schedule_file(path)

    def test_record_is_frozen(self) -> None:
        record = DateRecord(day=1, month="JAN", year=2020)
        with pytest.raises(ValueError):
            record.day = 2  # type: ignore[misc]


class TestExport:
    def test_steps_csv(self) -> None:
        axis = TimeAxis.from_schedule(load_schedule_file(GOLDEN / "basic_schedule.json"))
        rows = list(csv.DictReader(io.StringIO(dump_steps_csv(axis))))
        assert len(rows) == axis.size()
        assert rows[2]["date"] == "2020-02-01T00:00:00"
        assert float(rows[2]["elapsed_days"]) == pytest.approx(31.0)
        assert float(rows[2]["step_length_days"]) == pytest.approx(29.0)
        assert rows[-1]["step_length_days"] == ""
        assert [r["first_of_month"] for r in rows] == ["1", "0", "1", "1", "0", "1"]
        assert [r["first_of_year"] for r in rows] == ["1", "0", "0", "0", "0", "1"]

    def test_axis_summary(self, monthly_axis: TimeAxis) -> None:
        data = json.loads(dump_axis_summary(monthly_axis))
        assert data["n_steps"] == 5
        assert data["start"] == "2020-01-01T00:00:00"
        assert data["total_elapsed_seconds"] == 79 * 86_400
        assert data["first_step_of_month"] == [0, 2, 3]
