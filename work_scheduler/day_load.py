"""Per-run bookkeeping of how many sessions each calendar day already holds."""
from __future__ import annotations

import typing as t
from collections import Counter
from datetime import date

from work_scheduler.errors import NoCandidateDaysError


class DayLoadTracker:
    """Counts sessions placed per day during a single scheduling run.

    A tracker belongs to exactly one run; the allocator creates a fresh one
    every time and drops it once the run's sessions are returned.
    """

    def __init__(self) -> None:
        self._load: Counter[date] = Counter()

    def load(self, day: date) -> int:
        return self._load[day]

    def least_loaded_day(self, candidate_days: t.Iterable[date]) -> date:
        """Pick the candidate day with the fewest sessions, earliest first on ties.

        :param candidate_days: Days the session may go on.
        :return: The least-loaded day.
        :raises NoCandidateDaysError: If ``candidate_days`` is empty.
        """
        days = list(candidate_days)
        if not days:
            raise NoCandidateDaysError()
        return min(days, key=lambda day: (self._load[day], day))

    def increment(self, day: date) -> None:
        """Record one more committed session on ``day``."""
        self._load[day] += 1
