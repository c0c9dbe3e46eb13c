"""Custom exceptions for stepaxis."""

from __future__ import annotations


class StepAxisError(Exception):
    """Base exception for stepaxis."""


class ConfigError(StepAxisError):
    """Invalid schedule configuration."""


class OrderingError(StepAxisError, ValueError):
    """An appended instant is not strictly after the last report step."""


class InvalidDurationError(StepAxisError, ValueError):
    """A relative time step is not strictly positive."""


class IndexOutOfRangeError(StepAxisError, IndexError):
    """A report step index is outside the time axis."""


class InvalidArgumentError(StepAxisError, ValueError):
    """A query argument is outside its valid domain."""


class DeckValueError(StepAxisError, ValueError):
    """Malformed date or duration literal from an upstream schedule record."""


class UnknownMonthError(DeckValueError):
    """Month abbreviation not in the month-name table."""


class MalformedTimeError(DeckValueError):
    """Time-of-day literal is not ``HH:MM:SS[.fff]``."""


class InvalidUnitError(DeckValueError):
    """Unrecognized time unit on a duration literal."""


class InvalidDateError(DeckValueError):
    """Calendar date that does not exist (e.g. 30 February)."""
