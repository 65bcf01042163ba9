# liftboard/services/matching.py
"""
Id-or-name exercise identity.

Prescriptions, maxes and log entries all carry a denormalized exercise name next to
an optional exercise id. Ids can be missing (free-typed exercises) or stale (the
exercise was deleted after being prescribed), so the name is the fallback key.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, TypeVar

T = TypeVar("T")


def normalize_name(name: str | None) -> str:
    return (name or "").strip().casefold()


@dataclass(frozen=True, slots=True)
class ExerciseKey:
    exercise_id: Optional[int]
    name: str

    @classmethod
    def of(cls, obj: Any) -> "ExerciseKey":
        """Build a key from anything exposing ``exercise_id`` and ``exercise_name``."""
        return cls(getattr(obj, "exercise_id", None), getattr(obj, "exercise_name", "") or "")

    def same_id(self, other: "ExerciseKey") -> bool:
        return self.exercise_id is not None and self.exercise_id == other.exercise_id

    def same_name(self, other: "ExerciseKey") -> bool:
        return bool(self.name) and normalize_name(self.name) == normalize_name(other.name)

    def matches(self, other: "ExerciseKey") -> bool:
        return self.same_id(other) or self.same_name(other)


def find_match(
    key: ExerciseKey,
    candidates: Iterable[T],
    key_of: Callable[[T], ExerciseKey] = ExerciseKey.of,
) -> Optional[T]:
    """Return the first candidate sharing ``key``'s id, else the first sharing its name."""
    pool = list(candidates)
    for item in pool:
        if key.same_id(key_of(item)):
            return item
    for item in pool:
        if key.same_name(key_of(item)):
            return item
    return None
