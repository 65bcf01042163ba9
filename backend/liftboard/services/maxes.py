# liftboard/services/maxes.py
"""
Rules for when an athlete's stored one-rep max changes.

* A logged lift (stat entry or completed set) only ever raises a max.
* A manual entry always replaces it, even when lower.
* Lifts above ``MAX_ESTIMATE_REPS`` reps are recorded but never estimated.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from liftboard.services.matching import ExerciseKey, find_match
from liftboard.services.one_rep_max import Number, estimate_one_rep_max

# Brzycki is only reliable for low-rep sets
MAX_ESTIMATE_REPS = 10


@dataclass(frozen=True, slots=True)
class MaxCandidate:
    exercise_id: Optional[int]
    exercise_name: str
    one_rep_max: float


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    rank: int
    athlete_id: int
    athlete_name: str
    exercise_name: str
    one_rep_max: float
    last_updated: Optional[datetime]


def estimate_for_max(weight: Optional[Number], reps: Optional[Number]) -> Number:
    """Brzycki estimate, or 0 when the lift is outside the range it can be trusted in."""
    if not weight or not reps or reps > MAX_ESTIMATE_REPS:
        return 0
    return estimate_one_rep_max(weight, reps)


def should_raise(existing: Optional[Any], estimate: float) -> bool:
    if estimate <= 0:
        return False
    return existing is None or estimate > existing.one_rep_max


def candidates_from_exercises(exercises: Iterable[Any]) -> list[MaxCandidate]:
    """
    Best estimated max per logged exercise, from sets with both a weight and a
    rep count.
    """
    best: dict[str, MaxCandidate] = {}
    for exercise in exercises:
        for s in exercise.sets:
            estimate = estimate_for_max(s.completed_weight, s.completed_reps)
            if estimate <= 0:
                continue
            key = exercise.exercise_name.strip().casefold()
            current = best.get(key)
            if current is None or estimate > current.one_rep_max:
                best[key] = MaxCandidate(exercise.exercise_id, exercise.exercise_name, estimate)
    return list(best.values())


def rank_athletes(
    key: ExerciseKey,
    athletes: Iterable[Any],
    maxes_by_athlete: Mapping[int, list[Any]],
) -> list[LeaderboardEntry]:
    """
    Team leaderboard for one exercise: each athlete's matching max, strongest
    first, ranked from 1. Athletes with no matching max are left out; ties keep
    the athletes' input order.
    """
    rows = []
    for athlete in athletes:
        found = find_match(key, maxes_by_athlete.get(athlete.id, []))
        if found is not None:
            rows.append((athlete, found))
    rows.sort(key=lambda pair: pair[1].one_rep_max, reverse=True)
    return [
        LeaderboardEntry(
            rank=i,
            athlete_id=athlete.id,
            athlete_name=athlete.name,
            exercise_name=found.exercise_name,
            one_rep_max=found.one_rep_max,
            last_updated=found.last_updated,
        )
        for i, (athlete, found) in enumerate(rows, start=1)
    ]
