"""Default configuration values for stepaxis."""

from __future__ import annotations

from stepaxis.config.schema import DateRecord, ScheduleConfig

# Start date assumed by decks without a START keyword.
DEFAULT_START = DateRecord(day=1, month="JAN", year=1983)


def default_schedule() -> ScheduleConfig:
    """A schedule with only the default start date and no report steps."""
    return ScheduleConfig(start=DEFAULT_START, keywords=[])
