from types import SimpleNamespace
import pytest

from liftboard.errors import AuthorizationError, ValidationError
from liftboard.services.catalog import (
    BUILTIN_EXERCISES,
    check_can_modify,
    filter_exercises,
    merge_exercises,
    validate_demo_url,
)

def ex(name, category="upper_body", sports=None, **kw):
    return SimpleNamespace(name=name, category=category, applicable_sports=sports or ["all"], **kw)

def test_builtin_catalog_shape():
    names = [e.name for e in BUILTIN_EXERCISES]
    assert len(names) == 48
    assert len(set(n.lower() for n in names)) == 48
    assert all(e.is_global for e in BUILTIN_EXERCISES)
    assert "Back Squat" in names and "Bench Press" in names

def test_custom_colliding_with_builtin_is_dropped():
    custom = [ex("bench press"), ex("Zercher Squat", "lower_body")]
    merged = merge_exercises(custom)
    assert merged[0].name == "Zercher Squat"
    bench = [e for e in merged if e.name.lower() == "bench press"]
    assert len(bench) == 1
    assert bench[0].is_global
    assert len(merged) == len(BUILTIN_EXERCISES) + 1

def test_filter_by_category_search_and_sport():
    items = [
        ex("Sled Drag", "cardio", ["football"]),
        ex("Med Ball Slam", "core", ["all"]),
        ex("Serve Drill", "cardio", ["tennis"]),
    ]
    assert [e.name for e in filter_exercises(items, category="cardio")] == ["Sled Drag", "Serve Drill"]
    assert [e.name for e in filter_exercises(items, search="  BALL")] == ["Med Ball Slam"]
    assert [e.name for e in filter_exercises(items, sport="football")] == ["Sled Drag", "Med Ball Slam"]
    assert filter_exercises(items) == items

def test_search_too_long():
    with pytest.raises(ValidationError):
        filter_exercises([], search="x" * 101)

@pytest.mark.parametrize("url", [
    "https://www.youtube.com/watch?v=abc_DEF-123",
    "http://youtu.be/abc123",
])
def test_valid_demo_urls(url):
    assert validate_demo_url(url) == url

@pytest.mark.parametrize("url", [
    "https://vimeo.com/12345",
    "https://www.youtube.com/channel/xyz",
    "youtube.com/watch?v=abc",
    "https://youtu.be/abc\n",
])
def test_invalid_demo_urls(url):
    with pytest.raises(ValidationError) as err:
        validate_demo_url(url)
    assert err.value.message == "Invalid YouTube URL format"

def test_blank_demo_url_is_none():
    assert validate_demo_url("") is None
    assert validate_demo_url(None) is None

def test_global_exercises_are_read_only_for_everyone():
    glob = SimpleNamespace(is_global=True, owner_id=7)
    with pytest.raises(AuthorizationError) as err:
        check_can_modify(glob, 7, "delete")
    assert err.value.message == "Cannot delete global exercises"

def test_only_the_creator_may_modify():
    mine = SimpleNamespace(is_global=False, owner_id=7)
    check_can_modify(mine, 7)
    with pytest.raises(AuthorizationError) as err:
        check_can_modify(mine, 8)
    assert err.value.message == "Not authorized to edit this exercise"
