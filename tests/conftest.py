"""Shared test fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime

import pytest
from numpy.random import PCG64DXSM, Generator

from stepaxis.core.time_axis import TimeAxis


@pytest.fixture
def rng() -> Generator:
    """Deterministic RNG for property tests."""
    return Generator(PCG64DXSM(42))


@pytest.fixture
def monthly_axis() -> TimeAxis:
    """Axis from 2020-01-01 with steps on 15 JAN, 1 FEB, 1 MAR, 20 MAR."""
    axis = TimeAxis(datetime(2020, 1, 1))
    for t in (
        datetime(2020, 1, 15),
        datetime(2020, 2, 1),
        datetime(2020, 3, 1),
        datetime(2020, 3, 20),
    ):
        axis.append_absolute(t)
    return axis


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """The ``stepaxis`` logger, restored to its prior level and handlers afterwards."""
    logger = logging.getLogger("stepaxis")
    level = logger.level
    handlers = list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    for handler in handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.setLevel(level)
