"""
Conflict checks for candidate work-session slots.

Everything is compared as minute-of-day intervals on a single calendar day.
Intervals are half-open, so a slot that ends exactly when a class starts is
still free.
"""
from __future__ import annotations

import typing as t
from datetime import date

from work_scheduler.models import FixedTask, TimeRange, WorkSession


def tasks_on_day(fixed_tasks: t.Iterable[FixedTask], day: date) -> list[FixedTask]:
    """Return the time-bound fixed tasks whose occurrence falls on ``day``."""
    return [
        task for task in fixed_tasks
        if task.is_time_bound and task.occurrence.occurs_on(day)
    ]


def sessions_on_day(sessions: t.Iterable[WorkSession], day: date) -> list[WorkSession]:
    """Return the already committed sessions that sit on ``day``."""
    return [session for session in sessions if session.date == day]


def is_slot_free(
        slot_start_minute: int,
        slot_minutes: int,
        day_tasks: t.Iterable[FixedTask],
        day_sessions: t.Iterable[WorkSession],
) -> bool:
    """Check whether ``[slot_start, slot_start + slot_minutes)`` collides with nothing.

    :param slot_start_minute: Slot start in minutes since midnight.
    :param slot_minutes: Slot length in minutes.
    :param day_tasks: Fixed tasks already resolved to the slot's day.
    :param day_sessions: Work sessions already committed on the slot's day.
    :return: True if the slot is free.
    """
    slot = TimeRange(slot_start_minute, slot_start_minute + slot_minutes)

    for task in day_tasks:
        # Not time-bound means it cannot block anything.
        if task.time_range is not None and slot.overlaps(task.time_range):
            return False

    return not any(slot.overlaps(session.time_range) for session in day_sessions)
