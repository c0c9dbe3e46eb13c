"""Pydantic v2 models for tokenized schedule records."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from stepaxis.core.dates import parse_date_literal, parse_duration


class DateRecord(BaseModel):
    """One DATES record: ``day month year [time]``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    day: int = Field(description="Day of month")
    month: str = Field(description="Three-letter month abbreviation, e.g. JAN")
    year: int = Field(description="Four-digit year")
    time: str = Field(default="00:00:00.000", description="Time of day HH:MM:SS[.fff]")

    def to_instant(self) -> datetime:
        """Resolve the record to an absolute instant."""
        return parse_date_literal(self.day, self.month, self.year, self.time)


class TimeStepRecord(BaseModel):
    """One TSTEP entry: a step length and its unit."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    value: float = Field(allow_inf_nan=False, description="Step length in ``unit``")
    unit: str = Field(default="DAYS", description="DAYS, HOURS, MINUTES or SECONDS")

    def to_seconds(self) -> int:
        """Step length in whole seconds."""
        return parse_duration(self.value, self.unit)


class DatesKeyword(BaseModel):
    """A DATES keyword: each record appends one absolute report step."""

    model_config = ConfigDict(extra="forbid")

    keyword: Literal["DATES"] = "DATES"
    records: list[DateRecord] = Field(min_length=1)


class TstepKeyword(BaseModel):
    """A TSTEP keyword: each record appends one relative report step."""

    model_config = ConfigDict(extra="forbid")

    keyword: Literal["TSTEP"] = "TSTEP"
    records: list[TimeStepRecord] = Field(min_length=1)


ScheduleKeyword = Annotated[DatesKeyword | TstepKeyword, Field(discriminator="keyword")]


class ScheduleConfig(BaseModel):
    """Start date plus the ordered DATES/TSTEP keywords of a schedule section."""

    model_config = ConfigDict(extra="forbid")

    start: DateRecord | None = Field(
        default=None,
        description="START record; the default start date is used when omitted",
    )
    keywords: list[ScheduleKeyword] = Field(default_factory=list)
