"""
Data models for the stored master schedule.

The master schedule is what the calendar screens display: the user's fixed
tasks, the imported assignments and the work sessions generated from them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import typing as t

from work_scheduler.clock import parse_timestamp
from work_scheduler.models import Assignment, FixedTask, WorkSession


@dataclass
class MasterSchedule:
    """Snapshot of one scheduling run together with the inputs it was built from."""
    fixed_tasks: list[FixedTask] = field(default_factory=list)
    assignments: list[Assignment] = field(default_factory=list)
    work_sessions: list[WorkSession] = field(default_factory=list)
    generated_at: t.Optional[datetime] = None

    def to_record(self) -> dict[str, t.Any]:
        return {
            "solid_tasks": [task.to_record() for task in self.fixed_tasks],
            "assignments": [assignment.to_record() for assignment in self.assignments],
            "work_sessions": [session.to_record() for session in self.work_sessions],
            "generated_at": self.generated_at.isoformat() if self.generated_at else None,
        }

    @classmethod
    def from_record(cls, data: t.Mapping[str, t.Any]) -> MasterSchedule:
        generated_at = data.get("generated_at")
        return cls(
            fixed_tasks=[FixedTask.from_clock_fields(**task) for task in data.get("solid_tasks", [])],
            assignments=[
                Assignment.from_iso(a["id"], a.get("title", ""), a["due_date"])
                for a in data.get("assignments", [])
            ],
            work_sessions=[WorkSession.from_record(s) for s in data.get("work_sessions", [])],
            generated_at=parse_timestamp(generated_at) if generated_at else None,
        )
