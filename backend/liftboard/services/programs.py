# liftboard/services/programs.py
"""
Mutations on a ``ProgramDocument``.

All date lookups compare ``calendar_date`` values so a program never holds two
workout days for the same calendar date.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional

from liftboard.errors import ValidationError
from liftboard.schemas.program import ProgramDocument, WorkoutDay, WorkoutDayWrite
from liftboard.services.calendar import calendar_date, day_of_week_label, shift


def find_workout_day(program: ProgramDocument, day: Any) -> Optional[WorkoutDay]:
    target = calendar_date(day)
    for workout in program.workouts:
        if calendar_date(workout.date) == target:
            return workout
    return None


def add_or_replace_workout_day(
    program: ProgramDocument,
    day: Any,
    payload: WorkoutDayWrite | WorkoutDay | dict,
) -> WorkoutDay:
    """
    Put a workout day on ``day``: replace the existing one in place (keeping its
    position) or append a new one.
    """
    target = calendar_date(day)
    if isinstance(payload, dict):
        payload = WorkoutDayWrite.model_validate(payload)
    new_day = WorkoutDay(date=target, title=payload.title, exercises=list(payload.exercises))

    for index, workout in enumerate(program.workouts):
        if calendar_date(workout.date) == target:
            program.workouts[index] = new_day
            return new_day
    program.workouts.append(new_day)
    return new_day


def remove_workout_day(program: ProgramDocument, day: Any) -> bool:
    target = calendar_date(day)
    kept = [w for w in program.workouts if calendar_date(w.date) != target]
    removed = len(kept) != len(program.workouts)
    program.workouts = kept
    return removed


def collapse_workout_days(days: Iterable[WorkoutDay]) -> list[WorkoutDay]:
    """Fold a submitted list of days so each calendar date appears once (last one wins)."""
    holder = ProgramDocument(program_name="-", start_date=date.min, end_date=date.min)
    for workout in days:
        add_or_replace_workout_day(holder, workout.date, workout)
    return holder.workouts


def move_program(program: ProgramDocument, new_start_date: Any) -> int:
    """
    Shift every workout day so the earliest one lands on ``new_start_date``.

    Returns the shift in days. ``start_date`` is moved to the new start;
    ``end_date`` is left as it was.
    """
    if not program.workouts:
        raise ValidationError("Program has no workout days to move")
    new_start = calendar_date(new_start_date)
    earliest = min(calendar_date(w.date) for w in program.workouts)
    diff_days = (new_start - earliest).days

    for workout in program.workouts:
        workout.date = shift(workout.date, diff_days)
        workout.day_of_week = day_of_week_label(workout.date)
    program.start_date = new_start
    return diff_days


def publish(program: ProgramDocument) -> ProgramDocument:
    if not program.assigned_teams:
        raise ValidationError("You must assign a team before publishing")
    program.is_published = True
    program.is_draft = False
    return program


def unpublish(program: ProgramDocument) -> ProgramDocument:
    program.is_published = False
    program.is_draft = True
    return program


def assign_to_team(program: ProgramDocument, team_id: int) -> bool:
    if team_id in program.assigned_teams:
        return False
    program.assigned_teams.append(team_id)
    return True


def unassign_team(program: ProgramDocument, team_id: int) -> bool:
    if team_id not in program.assigned_teams:
        return False
    program.assigned_teams = [t for t in program.assigned_teams if t != team_id]
    return True


def covers(program: ProgramDocument, day: Any) -> bool:
    target = calendar_date(day)
    return calendar_date(program.start_date) <= target <= calendar_date(program.end_date)


def is_visible_to_team(program: ProgramDocument, team_id: Optional[int], day: Any) -> bool:
    return (
        team_id is not None
        and program.is_published
        and team_id in program.assigned_teams
        and covers(program, day)
    )


def locate_workout_day(
    programs: Iterable[ProgramDocument],
    team_id: Optional[int],
    day: Any,
) -> tuple[Optional[ProgramDocument], Optional[WorkoutDay]]:
    """First published program for the team covering ``day`` that has a workout on it."""
    for program in programs:
        if not is_visible_to_team(program, team_id, day):
            continue
        workout = find_workout_day(program, day)
        if workout is not None:
            return program, workout
    return None, None


def workout_days_in_range(
    programs: Iterable[ProgramDocument],
    team_id: Optional[int],
    start: Any,
    end: Any,
) -> list[tuple[ProgramDocument, WorkoutDay]]:
    """
    Every visible workout between ``start`` and ``end``. Applies the same
    visibility rule as ``locate_workout_day``, so a day shifted past its
    program's end date is hidden from both.
    """
    lo, hi = calendar_date(start), calendar_date(end)
    found = []
    for program in programs:
        for workout in program.workouts:
            day = calendar_date(workout.date)
            if lo <= day <= hi and is_visible_to_team(program, team_id, day):
                found.append((program, workout))
    found.sort(key=lambda pair: calendar_date(pair[1].date))
    return found
