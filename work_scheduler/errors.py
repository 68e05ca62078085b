"""Exceptions raised by the work-session scheduler."""


class SchedulerError(Exception):
    """Base class for scheduler errors."""


class MissingWorkHoursError(SchedulerError):
    """Raised when a scheduling run is requested without a work-hours preference."""

    def __init__(self, message: str = "Work hours not set") -> None:
        super().__init__(message)


class NoCandidateDaysError(SchedulerError, ValueError):
    """Raised when the day-load tracker is asked to choose among zero days."""

    def __init__(self, message: str = "No candidate days to choose from") -> None:
        super().__init__(message)
