"""
Work-session allocator.

Takes the user's fixed commitments, the upcoming assignments and the daily
work window, and lays out one-hour work sessions for each assignment:

1. Assignments already past due are skipped; the rest are handled earliest
   deadline first (stable on ties).
2. Each assignment gets up to ``SESSIONS_PER_ASSIGNMENT`` attempts. An attempt
   picks the least-loaded day between today and the due date, then walks that
   day hour by hour, starting ``load`` hours into the work window, until it
   finds a slot that collides with no fixed task and no session placed
   earlier in the run.
3. An attempt that finds no free slot before the end of the window is
   dropped. Running out of room is an expected outcome, not an error.

Each call is independent: it builds its own day-load tracker and keeps no
state afterwards, so concurrent calls with separate inputs are safe.
"""
from __future__ import annotations

import logging
import typing as t
import uuid
from datetime import date, datetime, time, timedelta

from work_scheduler.day_load import DayLoadTracker
from work_scheduler.errors import MissingWorkHoursError
from work_scheduler.models import Assignment, FixedTask, WorkHours, WorkSession
from work_scheduler.slots import is_slot_free, sessions_on_day, tasks_on_day

logger = logging.getLogger(__name__)

SESSIONS_PER_ASSIGNMENT = 3
SESSION_MINUTES = 60
# Sessions never run past 8 PM, whatever the work window says.
SCAN_CEILING_MINUTES = 20 * 60

IdFactory = t.Callable[[], str]


def allocate(
        fixed_tasks: t.Sequence[FixedTask],
        assignments: t.Sequence[Assignment],
        work_hours: t.Optional[WorkHours],
        now: datetime,
        id_factory: t.Optional[IdFactory] = None,
) -> list[WorkSession]:
    """Schedule work sessions for the given assignments.

    :param fixed_tasks: The user's fixed commitments; never modified.
    :param assignments: Upcoming assignments; never modified.
    :param work_hours: Daily window sessions must fit in.
    :param now: Current time. Assignments due before it are ignored and the
        first candidate day is ``now``'s date.
    :param id_factory: Produces session IDs. Defaults to random UUIDs.
    :return: New work sessions in the order they were committed.
    :raises MissingWorkHoursError: If ``work_hours`` is None.
    """
    if work_hours is None:
        raise MissingWorkHoursError()

    next_id = id_factory or _uuid_id
    tracker = DayLoadTracker()
    sessions: list[WorkSession] = []
    window_end = min(work_hours.end_minute, SCAN_CEILING_MINUTES)

    upcoming = [
        (assignment, align_timestamp(assignment.due_at, now))
        for assignment in assignments
    ]
    upcoming = [(assignment, due_at) for assignment, due_at in upcoming if due_at >= now]
    # sorted() is stable, so equal deadlines keep their input order.
    upcoming.sort(key=lambda pair: pair[1])

    skipped = len(assignments) - len(upcoming)
    if skipped:
        logger.debug("Skipping %d assignment(s) already past due", skipped)

    for assignment, due_at in upcoming:
        candidate_days = _days_between(now.date(), due_at.date())
        placed = 0

        for attempt in range(SESSIONS_PER_ASSIGNMENT):
            day = tracker.least_loaded_day(candidate_days)
            slot_start = _find_free_slot(
                day=day,
                first_start=work_hours.start_minute + tracker.load(day) * SESSION_MINUTES,
                window_end=window_end,
                fixed_tasks=fixed_tasks,
                sessions=sessions,
            )
            if slot_start is None:
                logger.debug(
                    "No free slot on %s for %r (attempt %d), dropping it",
                    day.isoformat(), assignment.title, attempt + 1,
                )
                continue

            start = datetime.combine(day, time(), tzinfo=now.tzinfo) + timedelta(minutes=slot_start)
            sessions.append(
                WorkSession(
                    id=next_id(),
                    title=f"Work on {assignment.title}",
                    start=start,
                    end=start + timedelta(minutes=SESSION_MINUTES),
                    assignment_id=assignment.id,
                )
            )
            tracker.increment(day)
            placed += 1

        logger.debug(
            "Placed %d/%d session(s) for %r", placed, SESSIONS_PER_ASSIGNMENT, assignment.title
        )

    logger.info(
        "Scheduled %d work session(s) for %d upcoming assignment(s)", len(sessions), len(upcoming)
    )
    return sessions


def align_timestamp(moment: datetime, reference: datetime) -> datetime:
    """Express ``moment`` in the same frame as ``reference``.

    Aware timestamps are converted into the reference's zone (or into local
    time when the reference is naive); naive timestamps are assumed to
    already be in the reference's frame.
    """
    if reference.tzinfo is None:
        if moment.tzinfo is None:
            return moment
        return moment.astimezone().replace(tzinfo=None)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=reference.tzinfo)
    return moment.astimezone(reference.tzinfo)


def _find_free_slot(
        day: date,
        first_start: int,
        window_end: int,
        fixed_tasks: t.Sequence[FixedTask],
        sessions: t.Sequence[WorkSession],
) -> t.Optional[int]:
    """Return the first free hourly slot start on ``day``, or None."""
    day_tasks = tasks_on_day(fixed_tasks, day)
    day_sessions = sessions_on_day(sessions, day)

    slot_start = first_start
    while slot_start + SESSION_MINUTES <= window_end:
        if is_slot_free(slot_start, SESSION_MINUTES, day_tasks, day_sessions):
            return slot_start
        slot_start += SESSION_MINUTES
    return None


def _days_between(first: date, last: date) -> list[date]:
    return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]


def _uuid_id() -> str:
    return str(uuid.uuid4())
