"""Report-step time axis for a simulation schedule."""

from __future__ import annotations

import logging
import math
from bisect import bisect_right
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Any

import numpy as np
from numpy.typing import NDArray

from stepaxis.config.defaults import DEFAULT_START
from stepaxis.config.schema import (
    DateRecord,
    DatesKeyword,
    ScheduleConfig,
    TimeStepRecord,
    TstepKeyword,
)
from stepaxis.core.dates import (
    ONE_SECOND,
    as_instant,
    forward,
    from_epoch,
    mkdate,
    parse_date_literal,
    parse_duration,
)
from stepaxis.utils.exceptions import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidDurationError,
    OrderingError,
)

logger = logging.getLogger(__name__)


class TimeAxis:
    """Strictly increasing sequence of report-step instants.

    Index 0 is the simulation start. The axis only grows by appending, either
    an absolute instant (DATES) or a positive duration after the last step
    (TSTEP). Alongside the instants it keeps the indices of the first step of
    every calendar month and year, extended on each append.

    Not safe for concurrent appends. Once built, queries never mutate it and
    it can be shared between readers.
    """

    __slots__ = ("_timestamps", "_first_step_of_month", "_first_step_of_year")

    def __init__(self, start: datetime | int) -> None:
        self._timestamps: list[datetime] = [as_instant(start)]
        self._first_step_of_month: list[int] = [0]
        self._first_step_of_year: list[int] = [0]

    @classmethod
    def from_epoch(cls, seconds: int) -> TimeAxis:
        """Create an axis starting ``seconds`` after the POSIX epoch."""
        return cls(from_epoch(seconds))

    @classmethod
    def from_date(cls, year: int, month: int, day: int) -> TimeAxis:
        """Create an axis starting at midnight of a calendar date."""
        return cls(mkdate(year, month, day))

    @classmethod
    def from_date_literal(
        cls,
        day: int,
        month_name: str,
        year: int,
        time_of_day: str = "00:00:00.000",
    ) -> TimeAxis:
        """Create an axis from a START record, e.g. ``(1, "JAN", 2020)``."""
        return cls(parse_date_literal(day, month_name, year, time_of_day))

    @classmethod
    def from_schedule(cls, schedule: ScheduleConfig) -> TimeAxis:
        """Replay a schedule's START and DATES/TSTEP keywords in order."""
        start = schedule.start if schedule.start is not None else DEFAULT_START
        axis = cls(start.to_instant())
        for keyword in schedule.keywords:
            axis.add_keyword(keyword)
        logger.info(
            "Built time axis with %d report steps from %s to %s",
            axis.num_timesteps(),
            axis.start_of(0).isoformat(),
            axis.end_of().isoformat(),
        )
        return axis

    # ------------------------------------------------------------------
    # Appends

    def append_absolute(self, t: datetime | int) -> int:
        """Append a report step at instant ``t`` and return its index.

        Raises:
            OrderingError: If ``t`` is not strictly after the last step. The
                axis is left unchanged.
        """
        t = as_instant(t)
        last = self._timestamps[-1]
        if t <= last:
            logger.debug("Rejected report step %s (last is %s)", t.isoformat(), last.isoformat())
            raise OrderingError(
                f"Report step {t.isoformat()} is not after the last step {last.isoformat()}"
            )

        index = len(self._timestamps)
        self._timestamps.append(t)
        if (t.year, t.month) != (last.year, last.month):
            self._first_step_of_month.append(index)
        if t.year != last.year:
            self._first_step_of_year.append(index)
        logger.debug("Added report step %d at %s", index, t.isoformat())
        return index

    def append_relative(self, step: timedelta | int | float) -> int:
        """Append a report step ``step`` after the last one and return its index.

        ``step`` is a ``timedelta`` or a number of seconds, truncated to whole
        seconds.

        Raises:
            InvalidDurationError: If the truncated step is not positive, is not
                finite, or moves past the end of the calendar.
        """
        if isinstance(step, timedelta):
            seconds = step // ONE_SECOND
        elif math.isfinite(step):
            seconds = int(step)
        else:
            raise InvalidDurationError(f"Time step must be finite, got {step!r}")
        if seconds <= 0:
            raise InvalidDurationError(f"Time step must be at least one second, got {step!r}")
        return self.append_absolute(forward(self._timestamps[-1], seconds))

    def add_dates_keyword(self, records: Iterable[DateRecord | tuple[Any, ...]]) -> None:
        """Append one report step per DATES record.

        Records are :class:`DateRecord` models or ``(day, month, year[, time])``
        tuples. The keyword is applied as a whole: on error no step is kept.
        """
        with self._atomic():
            for record in records:
                if isinstance(record, DateRecord):
                    self.append_absolute(record.to_instant())
                else:
                    self.append_absolute(parse_date_literal(*record))

    def add_tstep_keyword(self, records: Iterable[TimeStepRecord | tuple[Any, ...]]) -> None:
        """Append one report step per TSTEP ``(value, unit)`` entry, all or nothing."""
        with self._atomic():
            for record in records:
                if isinstance(record, TimeStepRecord):
                    self.append_relative(record.to_seconds())
                else:
                    self.append_relative(parse_duration(*record))

    def add_keyword(self, keyword: DatesKeyword | TstepKeyword) -> None:
        """Apply a parsed DATES or TSTEP keyword."""
        if isinstance(keyword, DatesKeyword):
            self.add_dates_keyword(keyword.records)
        else:
            self.add_tstep_keyword(keyword.records)

    @contextmanager
    def _atomic(self) -> Iterator[None]:
        n_steps = len(self._timestamps)
        n_months = len(self._first_step_of_month)
        n_years = len(self._first_step_of_year)
        try:
            yield
        except BaseException:
            del self._timestamps[n_steps:]
            del self._first_step_of_month[n_months:]
            del self._first_step_of_year[n_years:]
            raise

    # ------------------------------------------------------------------
    # Queries

    def __len__(self) -> int:
        return len(self._timestamps)

    def __getitem__(self, index: int) -> datetime:
        return self._timestamps[index]

    def __iter__(self) -> Iterator[datetime]:
        return iter(self._timestamps)

    def __repr__(self) -> str:
        return (
            f"TimeAxis(start={self._timestamps[0].isoformat()}, "
            f"end={self._timestamps[-1].isoformat()}, size={len(self._timestamps)})"
        )

    @property
    def timestamps(self) -> tuple[datetime, ...]:
        return tuple(self._timestamps)

    @property
    def first_step_of_month(self) -> tuple[int, ...]:
        """Indices of the first step in each new calendar month, starting with 0."""
        return tuple(self._first_step_of_month)

    @property
    def first_step_of_year(self) -> tuple[int, ...]:
        """Indices of the first step in each new calendar year, starting with 0."""
        return tuple(self._first_step_of_year)

    def size(self) -> int:
        """Number of report steps, including the start."""
        return len(self._timestamps)

    def last_index(self) -> int:
        return len(self._timestamps) - 1

    def num_timesteps(self) -> int:
        """Number of intervals between report steps."""
        return len(self._timestamps) - 1

    def _check_index(self, index: int, limit: int, what: str) -> None:
        if not 0 <= index < limit:
            raise IndexOutOfRangeError(f"{what} index {index} out of range [0, {limit})")

    def start_of(self, index: int) -> datetime:
        """Instant at which report step ``index`` starts."""
        self._check_index(index, len(self._timestamps), "Report step")
        return self._timestamps[index]

    def end_of(self) -> datetime:
        """Instant of the last report step."""
        return self._timestamps[-1]

    def total_elapsed(self) -> int:
        """Seconds from the start to the last report step."""
        return (self._timestamps[-1] - self._timestamps[0]) // ONE_SECOND

    def elapsed_until(self, index: int) -> int:
        """Seconds from the start to report step ``index``."""
        self._check_index(index, len(self._timestamps), "Report step")
        return (self._timestamps[index] - self._timestamps[0]) // ONE_SECOND

    def step_length(self, index: int) -> int:
        """Length in seconds of the interval starting at report step ``index``."""
        self._check_index(index, len(self._timestamps) - 1, "Time step")
        return (self._timestamps[index + 1] - self._timestamps[index]) // ONE_SECOND

    def elapsed_array(self) -> NDArray[np.int64]:
        """Elapsed seconds of every report step, shape (size,)."""
        start = self._timestamps[0]
        return np.array([(t - start) // ONE_SECOND for t in self._timestamps], dtype=np.int64)

    def step_lengths(self) -> NDArray[np.int64]:
        """Length in seconds of every time step, shape (size - 1,)."""
        result: NDArray[np.int64] = np.diff(self.elapsed_array())
        return result

    # ------------------------------------------------------------------
    # Calendar boundaries

    def _boundaries(self, by_year: bool, start_offset: int, frequency: int) -> list[int]:
        if frequency < 1:
            raise InvalidArgumentError(f"frequency must be a positive count, got {frequency}")
        if start_offset < 0:
            raise InvalidArgumentError(f"start_offset must not be negative, got {start_offset}")
        return self._first_step_of_year if by_year else self._first_step_of_month

    def is_boundary_step(
        self,
        index: int,
        by_year: bool = False,
        start_offset: int = 1,
        frequency: int = 1,
    ) -> bool:
        """Check if a step is the first of a new month (year) in a reporting sequence.

        Boundaries are numbered by their position in the month (year) list,
        position 0 being the start step. A step matches when it is itself a
        boundary at position ``p`` with ``p >= start_offset`` and
        ``(p - start_offset) % frequency == 0``. With the default
        ``start_offset=1`` the start step never matches.

        Args:
            index: Report step index.
            by_year: Use year boundaries instead of month boundaries.
            start_offset: Position of the first boundary to report.
            frequency: Report every ``frequency``-th boundary from there.

        Raises:
            InvalidArgumentError: If ``frequency < 1`` or ``start_offset < 0``.
            IndexOutOfRangeError: If ``index`` is not a report step.
        """
        boundaries = self._boundaries(by_year, start_offset, frequency)
        self._check_index(index, len(self._timestamps), "Report step")
        # Index 0 is always a boundary, so position is never negative.
        position = bisect_right(boundaries, index) - 1
        if boundaries[position] != index or position < start_offset:
            return False
        return (position - start_offset) % frequency == 0

    def boundary_steps(
        self,
        by_year: bool = False,
        start_offset: int = 1,
        frequency: int = 1,
    ) -> list[int]:
        """All step indices for which :meth:`is_boundary_step` is true."""
        boundaries = self._boundaries(by_year, start_offset, frequency)
        return boundaries[start_offset::frequency]
