# liftboard/services/stats.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Iterable

from liftboard.services.calendar import calendar_date
from liftboard.services.one_rep_max import round_half_up


@dataclass(slots=True)
class TrainingSummary:
    workouts_completed: int = 0
    total_sets: int = 0
    total_volume: int = 0
    current_streak: int = 0
    completed_dates: list[date] = field(default_factory=list)


def _completed_sets(log: Any) -> list[Any]:
    return [s for e in log.exercises for s in e.sets if s.is_completed]


def summarize_logs(logs: Iterable[Any], today: Any) -> TrainingSummary:
    """
    Totals across an athlete's workout logs. A log counts as a completed workout
    when it is flagged complete or has at least one completed set; the streak is
    the run of consecutive completed days ending today or yesterday.
    """
    summary = TrainingSummary()
    volume = 0.0
    days: set[date] = set()
    for log in logs:
        done = _completed_sets(log)
        summary.total_sets += len(done)
        volume += sum((s.completed_weight or 0) * (s.completed_reps or 0) for s in done)
        if log.is_completed or done:
            summary.workouts_completed += 1
            days.add(calendar_date(log.date))
    summary.total_volume = round_half_up(volume)
    summary.completed_dates = sorted(days, reverse=True)

    anchor = calendar_date(today)
    # logs dated after today do not extend the streak
    past = [d for d in summary.completed_dates if d <= anchor]
    if past and (anchor - past[0]).days <= 1:
        expected = past[0]
        for day in past:
            if day != expected:
                break
            summary.current_streak += 1
            expected = day - timedelta(days=1)
    return summary
