from datetime import date, datetime

import pytest

from inkstudio.shared.errors import ValidationError
from inkstudio.shared.validators import (
    add_months,
    diff_in_days,
    each_day,
    parse_datetime,
    parse_range_end,
    require_date_range,
    sunday_based_weekday,
    time_to_minutes,
    validate_choice,
    validate_time_string,
)


def test_parse_datetime_accepts_dates_and_datetimes():
    assert parse_datetime("2024-03-04") == datetime(2024, 3, 4)
    assert parse_datetime("2024-03-04T10:30:00") == datetime(2024, 3, 4, 10, 30)
    assert parse_datetime(date(2024, 3, 4)) == datetime(2024, 3, 4)


def test_parse_datetime_converts_aware_values_to_naive_local_time():
    parsed = parse_datetime("2024-03-04T10:30:00Z")
    assert parsed is not None
    assert parsed.tzinfo is None


@pytest.mark.parametrize("value", [None, "", "not a date", "2024-13-45"])
def test_parse_datetime_returns_none_for_unusable_input(value):
    assert parse_datetime(value) is None


def test_parse_range_end_moves_to_end_of_day():
    assert parse_range_end("2024-03-04") == datetime(2024, 3, 4, 23, 59, 59, 999000)
    assert parse_range_end("garbage") is None


def test_require_date_range_needs_both_bounds():
    start, end = require_date_range("2024-03-01", "2024-03-31")
    assert start == datetime(2024, 3, 1)
    assert end.date() == date(2024, 3, 31)

    with pytest.raises(ValidationError) as exc:
        require_date_range(None, "2024-03-31")
    assert exc.value.code == "VALIDATION_ERROR"

    with pytest.raises(ValidationError):
        require_date_range("2024-03-01", "yesterday")


def test_time_to_minutes():
    assert time_to_minutes("09:30") == 570
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("bad") == 0
    assert time_to_minutes("") == 0
    assert time_to_minutes(None) == 0


def test_validate_time_string():
    assert validate_time_string("17:45") == "17:45"
    assert validate_time_string(None) is None
    with pytest.raises(ValueError):
        validate_time_string("24:00")
    with pytest.raises(ValueError):
        validate_time_string("9am")


def test_diff_in_days_floors_partial_days():
    assert diff_in_days(datetime(2024, 2, 1), datetime(2024, 1, 1)) == 31
    assert diff_in_days(datetime(2024, 1, 2, 5), datetime(2024, 1, 1, 6)) == 0


def test_add_months_rolls_past_month_end():
    assert add_months(datetime(2024, 1, 31), 1) == datetime(2024, 3, 2)
    assert add_months(datetime(2023, 1, 31), 1) == datetime(2023, 3, 3)
    assert add_months(datetime(2023, 8, 31, 18, 30), 6) == datetime(2024, 3, 2, 18, 30)
    assert add_months(datetime(2024, 11, 15, 10), 2) == datetime(2025, 1, 15, 10)
    assert add_months(datetime(2023, 1, 10), 12) == datetime(2024, 1, 10)


def test_sunday_based_weekday():
    assert sunday_based_weekday(date(2024, 3, 3)) == 0  # Sunday
    assert sunday_based_weekday(date(2024, 3, 4)) == 1  # Monday
    assert sunday_based_weekday(datetime(2024, 3, 9, 18)) == 6  # Saturday


def test_each_day_is_inclusive():
    days = each_day(datetime(2024, 2, 28), datetime(2024, 3, 1, 23, 59))
    assert days == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]


def test_validate_choice():
    assert validate_choice("VIP", ("REGULAR", "VIP"), "status") == "VIP"
    assert validate_choice(None, ("REGULAR",), "status") is None
    with pytest.raises(ValidationError) as exc:
        validate_choice("GOLD", ("REGULAR", "VIP"), "status", "INVALID_STATUS")
    assert exc.value.code == "INVALID_STATUS"
