"""
Shared Pydantic models for REST API serialization.

These are the wire-level records exchanged with the task screens, the
assignment feed and the stored master schedule. They keep the shapes those
collaborators use (12-hour clock strings with AM/PM flags, ISO strings for
dates); conversion to the scheduler's dataclasses happens through the
``to_domain`` helpers below.
"""
from __future__ import annotations

import typing as t
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from work_scheduler.clock import parse_clock, parse_timestamp
from work_scheduler.models import Assignment, FixedTask, WorkHours, WorkSession


class FixedTaskRecord(BaseModel):
    """
    A user-entered task as stored by the task screens, e.g.:
    - "CS 101 lecture", 9:30 AM - 10:50 AM, days ["M", "W"]
    - "Dentist", 2:00 PM - 3:00 PM, start_date "2025-04-14"
    """
    id: t.Union[int, str]
    title: str = ""
    start_time: t.Optional[str] = None   # "H:MM", 12-hour when am_start is set
    end_time: t.Optional[str] = None
    am_start: t.Optional[bool] = None
    am_end: t.Optional[bool] = None
    start_date: t.Optional[str] = None   # "YYYY-MM-DD" or ISO datetime
    days_of_week: t.Optional[list[str]] = None  # ["M", "W", "TH"]

    def to_domain(self) -> FixedTask:
        return FixedTask.from_clock_fields(**self.model_dump())


class AssignmentRecord(BaseModel):
    """An assignment as delivered by the course feed."""
    id: t.Union[int, str]
    title: str = ""
    due_date: str  # ISO datetime

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v: str) -> str:
        try:
            parse_timestamp(v)
        except ValueError:
            raise ValueError("due_date must be an ISO 8601 datetime")
        return v

    def to_domain(self) -> Assignment:
        return Assignment.from_iso(self.id, self.title, self.due_date)


class WorkHoursRecord(BaseModel):
    """Daily work window preference in 24-hour "HH:MM"."""
    start: str = "08:00"
    end: str = "20:00"

    @field_validator("start", "end")
    @classmethod
    def validate_clock(cls, v: str) -> str:
        parse_clock(v)
        return v

    def to_domain(self) -> WorkHours:
        return WorkHours.from_clock(self.start, self.end)


class WorkSessionRecord(BaseModel):
    """A generated work session, in the same shape as a task record."""
    id: str
    title: str
    start_time: str
    end_time: str
    start_date: t.Optional[str] = None
    days_of_week: t.Optional[list[str]] = None
    user_defined: bool = False
    assignment_id: str = ""

    @classmethod
    def from_domain(cls, session: WorkSession) -> WorkSessionRecord:
        return cls(**session.to_record())


class MasterScheduleRecord(BaseModel):
    """Stored snapshot of everything shown on the calendar."""
    solid_tasks: list[FixedTaskRecord] = Field(default_factory=list)
    assignments: list[AssignmentRecord] = Field(default_factory=list)
    work_sessions: list[WorkSessionRecord] = Field(default_factory=list)
    generated_at: t.Optional[datetime] = None


# Request/Response Models for API endpoints
class ScheduleRequest(BaseModel):
    """Request model for a one-off scheduling run."""
    fixed_tasks: list[FixedTaskRecord] = Field(default_factory=list)
    assignments: list[AssignmentRecord] = Field(default_factory=list)
    work_hours: t.Optional[WorkHoursRecord] = None
    now: t.Optional[datetime] = None


class GenerateMasterScheduleRequest(BaseModel):
    """Request model for regenerating the stored master schedule."""
    fixed_tasks: list[FixedTaskRecord] = Field(default_factory=list)
    assignments: list[AssignmentRecord] = Field(default_factory=list)
    now: t.Optional[datetime] = None


class ShowWorkSessionsResponse(BaseModel):
    """Response model for formatted work sessions display."""
    formatted_sessions: str
