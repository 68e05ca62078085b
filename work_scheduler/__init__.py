"""
Work-session scheduler.

Places one-hour work sessions for upcoming assignments around a student's
fixed commitments, inside their daily work window.
"""

from .engine import allocate
from .errors import MissingWorkHoursError, NoCandidateDaysError, SchedulerError
from .models import (
    Assignment,
    FixedTask,
    OnDate,
    TimeRange,
    Unscheduled,
    Weekly,
    WorkHours,
    WorkSession,
)

__all__ = [
    "allocate",
    "Assignment",
    "FixedTask",
    "MissingWorkHoursError",
    "NoCandidateDaysError",
    "OnDate",
    "SchedulerError",
    "TimeRange",
    "Unscheduled",
    "Weekly",
    "WorkHours",
    "WorkSession",
]
