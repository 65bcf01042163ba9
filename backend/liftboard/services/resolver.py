# liftboard/services/resolver.py
"""
Per-athlete weight resolution.

A workout day is shared by every athlete on a team; the concrete target weights
depend on each athlete's maxes, so resolution runs per request and is never
stored.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional

from liftboard.schemas.program import (
    ExercisePrescription,
    ResolvedExercise,
    ResolvedSetConfig,
    ResolvedWorkoutDay,
    SetConfig,
    WorkoutDay,
)
from liftboard.services.matching import ExerciseKey, find_match
from liftboard.services.one_rep_max import format_number, resolve_display_weight, weight_from_percentage
from liftboard.settings import get_settings


def find_athlete_max(prescription: Any, maxes: Iterable[Any]) -> Optional[Any]:
    """The max row for a prescription's exercise: by id first, then by name."""
    return find_match(ExerciseKey.of(prescription), maxes)


def target_weight(config: SetConfig, one_rep_max: Optional[float]) -> Optional[float]:
    """Fixed weight wins; otherwise percentage of the max; otherwise nothing."""
    if config.fixed_weight is not None:
        return config.fixed_weight
    return weight_from_percentage(one_rep_max, config.percentage)


def _config_display(config: SetConfig, one_rep_max: Optional[float], unit: str) -> str:
    if config.fixed_weight is not None:
        return f"{format_number(config.fixed_weight)} {unit}"
    return resolve_display_weight(one_rep_max, config.percentage).display_text


def resolve_exercise_for_athlete(prescription: ExercisePrescription, maxes: Iterable[Any]) -> ResolvedExercise:
    unit = get_settings().WEIGHT_UNIT
    athlete_max = find_athlete_max(prescription, maxes)
    one_rep_max = athlete_max.one_rep_max if athlete_max is not None else None

    configs = [
        ResolvedSetConfig(
            **config.model_dump(),
            target_weight=target_weight(config, one_rep_max),
            display_text=_config_display(config, one_rep_max, unit),
        )
        for config in prescription.set_configs
    ]
    first = configs[0] if configs else None
    return ResolvedExercise(
        exercise_id=prescription.exercise_id,
        exercise_name=prescription.exercise_name,
        notes=prescription.notes,
        demo_url=prescription.demo_url,
        order=prescription.order,
        set_configs=configs,
        total_sets=prescription.sets,
        summary=prescription.summary(unit),
        calculated_weight=first.target_weight if first else None,
        display_text=first.display_text if first else "",
        one_rep_max=one_rep_max,
        has_one_rep_max=athlete_max is not None,
    )


def resolve_workout_day(
    workout: WorkoutDay,
    maxes: Iterable[Any],
    *,
    program_id: Optional[int] = None,
    program_name: Optional[str] = None,
) -> ResolvedWorkoutDay:
    maxes = list(maxes)
    return ResolvedWorkoutDay(
        program_id=program_id,
        program_name=program_name,
        date=workout.date,
        day_of_week=workout.day_of_week,
        title=workout.title,
        exercises=[resolve_exercise_for_athlete(p, maxes) for p in workout.exercises],
    )
