# liftboard/services/catalog.py
"""
Exercise catalog: the built-in exercise list, merging with custom exercises,
demo-URL validation and edit/delete permission rules.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, Optional, Sequence, TypeVar

from liftboard.errors import AuthorizationError, ValidationError
from liftboard.models.exercise import ExerciseCategory
from liftboard.schemas.exercise import ExerciseRead
from liftboard.services.matching import normalize_name

T = TypeVar("T")

DEMO_URL_PATTERN = re.compile(r"^https?://(www\.)?(youtube\.com/watch\?v=|youtu\.be/)[a-zA-Z0-9_-]+$")
MAX_SEARCH_LENGTH = 100

_BUILTIN_NAMES: dict[ExerciseCategory, tuple[str, ...]] = {
    ExerciseCategory.upper_body: (
        "Bench Press", "Incline Bench Press", "Dumbbell Press", "Overhead Press", "Push Press",
        "Barbell Row", "Pull-ups", "Lat Pulldown", "Dumbbell Curl", "Tricep Pushdown", "Dips",
        "Face Pulls",
    ),
    ExerciseCategory.lower_body: (
        "Back Squat", "Front Squat", "Deadlift", "Romanian Deadlift", "Sumo Deadlift", "Leg Press",
        "Walking Lunges", "Bulgarian Split Squat", "Hip Thrust", "Leg Curl", "Leg Extension",
        "Calf Raises",
    ),
    ExerciseCategory.olympic: (
        "Power Clean", "Hang Clean", "Clean and Jerk", "Snatch", "Power Snatch", "Hang Snatch",
    ),
    ExerciseCategory.core: (
        "Plank", "Russian Twist", "Hanging Leg Raise", "Ab Wheel Rollout", "Cable Woodchop", "Dead Bug",
    ),
    ExerciseCategory.cardio: (
        "Box Jumps", "Burpees", "Battle Ropes", "Sled Push", "Farmer Carry", "Rowing Machine",
    ),
    ExerciseCategory.accessory: (
        "Lateral Raise", "Rear Delt Fly", "Shrugs", "Good Mornings", "Glute Ham Raise", "Reverse Hyper",
    ),
}

BUILTIN_EXERCISES: list[ExerciseRead] = [
    ExerciseRead(name=name, category=category, is_global=True)
    for category, names in _BUILTIN_NAMES.items()
    for name in names
]


def merge_exercises(custom: Iterable[T], builtins: Sequence[Any] = BUILTIN_EXERCISES) -> list:
    """
    Custom exercises first, then built-ins. A custom exercise whose name collides
    (case-insensitively) with a built-in is dropped, so built-ins always win.
    """
    builtin_names = {normalize_name(b.name) for b in builtins}
    unique_custom = [e for e in custom if normalize_name(e.name) not in builtin_names]
    return [*unique_custom, *builtins]


def filter_exercises(
    exercises: Iterable[T],
    *,
    category: Optional[str] = None,
    search: Optional[str] = None,
    sport: Optional[str] = None,
) -> list[T]:
    if search and len(search) > MAX_SEARCH_LENGTH:
        raise ValidationError(f"Search term too long (max {MAX_SEARCH_LENGTH} characters)")
    needle = normalize_name(search)
    result = []
    for exercise in exercises:
        if category and exercise.category != category:
            continue
        if needle and needle not in normalize_name(exercise.name):
            continue
        if sport:
            sports = exercise.applicable_sports or ["all"]
            if sport not in sports and "all" not in sports:
                continue
        result.append(exercise)
    return result


def validate_demo_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    if not DEMO_URL_PATTERN.fullmatch(url):
        raise ValidationError("Invalid YouTube URL format")
    return url


def check_can_modify(exercise: Any, requester_id: int, action: str = "edit") -> None:
    if exercise.is_global:
        raise AuthorizationError(f"Cannot {action} global exercises")
    if exercise.owner_id is None or exercise.owner_id != requester_id:
        raise AuthorizationError(f"Not authorized to {action} this exercise")
