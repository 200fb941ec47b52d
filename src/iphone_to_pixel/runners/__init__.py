"""
Runners layer - Execution engines for conversion and date repair.

Runners execute plans one file at a time, calling the processors and
accumulating a RunSummary.
"""

from .base import RunSummary
from .fix_dates import DateFixRunner, collect_fix_targets, run_fix_dates
from .sequential import SequentialRunner, run_conversion

__all__ = [
    "RunSummary",
    "SequentialRunner",
    "run_conversion",
    "DateFixRunner",
    "collect_fix_targets",
    "run_fix_dates",
]
