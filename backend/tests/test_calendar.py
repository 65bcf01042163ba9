from datetime import date, datetime, timezone
import pytest

from liftboard.errors import ValidationError
from liftboard.services.calendar import calendar_date, day_of_week_label, month_bounds, parse_day, shift

def test_calendar_date_strips_time_of_day():
    assert calendar_date(datetime(2024, 6, 10, 17, 45)) == date(2024, 6, 10)
    assert calendar_date(datetime(2024, 6, 10, 23, 59, tzinfo=timezone.utc)) == date(2024, 6, 10)
    assert calendar_date(date(2024, 6, 10)) == date(2024, 6, 10)

def test_calendar_date_from_strings():
    assert calendar_date("2024-06-10") == date(2024, 6, 10)
    assert calendar_date("2024-06-10T05:30:00") == date(2024, 6, 10)
    assert calendar_date("2024-06-10T05:30:00Z") == date(2024, 6, 10)

def test_calendar_date_rejects_other_types():
    with pytest.raises(ValueError):
        calendar_date(20240610)

def test_parse_day_wraps_bad_input():
    assert parse_day("2024-02-29") == date(2024, 2, 29)
    with pytest.raises(ValidationError):
        parse_day("not-a-date")

def test_day_labels_and_shift():
    assert day_of_week_label("2024-06-10") == "monday"
    assert day_of_week_label(date(2024, 6, 16)) == "sunday"
    assert shift("2024-01-31", 1) == date(2024, 2, 1)

def test_month_bounds():
    assert month_bounds(date(2024, 2, 14)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(date(2023, 12, 31)) == (date(2023, 12, 1), date(2023, 12, 31))
