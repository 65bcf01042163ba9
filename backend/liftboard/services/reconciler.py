# liftboard/services/reconciler.py
"""
Merge a day's prescription with what the athlete has already logged.

Prescribed values are always re-stamped from the current prescription, completed
values are always carried over, and rows are never dropped: if the coach adds
sets, fresh empty rows are appended; if the coach removes sets or exercises, the
logged rows stay.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from liftboard.schemas.program import ExercisePrescription
from liftboard.schemas.workout_log import (
    ExerciseHistory,
    ExerciseLog,
    SetLog,
    WorkoutLogHistory,
    WorkoutLogRead,
)
from liftboard.services.matching import ExerciseKey
from liftboard.services.one_rep_max import estimate_one_rep_max_display
from liftboard.services.resolver import find_athlete_max, target_weight


def build_log_entry(prescription: ExercisePrescription, one_rep_max: Optional[float] = None) -> ExerciseLog:
    """Expand every set config into one loggable row per set."""
    rows: list[SetLog] = []
    for config in prescription.set_configs:
        weight = target_weight(config, one_rep_max)
        for _ in range(config.sets):
            rows.append(SetLog(
                set_number=len(rows) + 1,
                prescribed_reps=config.reps,
                prescribed_weight=weight,
                prescribed_percentage=config.percentage,
            ))
    return ExerciseLog(
        exercise_id=prescription.exercise_id,
        exercise_name=prescription.exercise_name,
        sets=rows,
    )


def _merge_sets(fresh: Sequence[SetLog], logged: Sequence[SetLog]) -> list[SetLog]:
    merged: list[SetLog] = []
    for index, row in enumerate(fresh):
        if index < len(logged):
            old = logged[index]
            row = row.model_copy(update={
                "completed_reps": old.completed_reps,
                "completed_weight": old.completed_weight,
                "notes": old.notes,
            })
        merged.append(row)
    for old in logged[len(fresh):]:
        merged.append(old.model_copy(update={"set_number": len(merged) + 1}))
    return merged


def merge_with_existing_log(
    prescriptions: Iterable[ExercisePrescription],
    existing: Optional[Iterable[ExerciseLog]] = None,
    maxes: Iterable[Any] = (),
) -> list[ExerciseLog]:
    maxes = list(maxes)
    unmatched = list(existing or [])
    merged: list[ExerciseLog] = []

    for prescription in prescriptions:
        athlete_max = find_athlete_max(prescription, maxes)
        fresh = build_log_entry(prescription, athlete_max.one_rep_max if athlete_max is not None else None)

        key = ExerciseKey.of(prescription)
        logged = next((e for e in unmatched if key.same_id(ExerciseKey.of(e))), None)
        if logged is None:
            logged = next((e for e in unmatched if key.same_name(ExerciseKey.of(e))), None)
        if logged is None:
            merged.append(tally(fresh))
            continue

        unmatched.remove(logged)
        merged.append(tally(fresh.model_copy(update={
            "sets": _merge_sets(fresh.sets, logged.sets),
            "notes": logged.notes,
        })))

    # exercises the athlete logged that are no longer prescribed
    merged.extend(tally(e) for e in unmatched)
    return merged


def tally(exercise: ExerciseLog) -> ExerciseLog:
    completed = sum(1 for s in exercise.sets if s.is_completed)
    return exercise.model_copy(update={"total_sets_completed": completed})


def finalize_exercises(exercises: Iterable[ExerciseLog]) -> tuple[list[ExerciseLog], bool]:
    """
    Recount completed sets and decide whether the whole day is complete: every
    exercise has at least one set and all of its sets carry a completed value.
    """
    tallied = [tally(e) for e in exercises]
    is_completed = bool(tallied) and all(
        e.sets and e.total_sets_completed == len(e.sets) for e in tallied
    )
    return tallied, is_completed


def best_estimated_one_rep_max(exercise: ExerciseLog) -> Optional[int]:
    estimates = [
        estimate_one_rep_max_display(s.completed_weight, s.completed_reps)
        for s in exercise.sets
    ]
    estimates = [e for e in estimates if e is not None]
    return max(estimates) if estimates else None


def history_view(log: Any) -> WorkoutLogHistory:
    """A saved log with each exercise's best display-formula estimate attached."""
    saved = WorkoutLogRead.model_validate(log)
    exercises = [
        ExerciseHistory(**e.model_dump(), estimated_one_rep_max=best_estimated_one_rep_max(e))
        for e in saved.exercises
    ]
    return WorkoutLogHistory(**saved.model_dump(exclude={"exercises"}), exercises=exercises)
