"""stepaxis — report-step time axis for reservoir-simulation schedules."""

__version__ = "0.1.0"

from stepaxis.config.defaults import DEFAULT_START as DEFAULT_START
from stepaxis.config.defaults import default_schedule as default_schedule
from stepaxis.config.schema import DateRecord as DateRecord
from stepaxis.config.schema import DatesKeyword as DatesKeyword
from stepaxis.config.schema import ScheduleConfig as ScheduleConfig
from stepaxis.config.schema import TimeStepRecord as TimeStepRecord
from stepaxis.config.schema import TstepKeyword as TstepKeyword
from stepaxis.core.dates import forward as forward
from stepaxis.core.dates import mkdate as mkdate
from stepaxis.core.dates import parse_date_literal as parse_date_literal
from stepaxis.core.dates import parse_duration as parse_duration
from stepaxis.core.time_axis import TimeAxis as TimeAxis
