from workout_engine.core.time_utils import (
    format_duration,
    format_number,
    format_pace,
    parse_count,
    parse_duration,
    parse_number,
    parse_pace,
)


def test_parse_duration_hours_and_minutes():
    assert parse_duration("1:05:30") == 3930
    assert parse_duration("45:00") == 2700
    assert parse_duration(" 0:45:00 ") == 2700


def test_parse_duration_two_parts_allows_long_minutes():
    # two components are plain minutes, so more than 59 is fine
    assert parse_duration("75:00") == 4500


def test_parse_duration_rejects_bad_values():
    assert parse_duration("1:60:00") is None
    assert parse_duration("5:60") is None
    assert parse_duration("abc") is None
    assert parse_duration("1:2:3:4") is None
    assert parse_duration("-1:00") is None
    assert parse_duration("") is None
    assert parse_duration(None) is None


def test_format_duration():
    assert format_duration(3930) == "1:05:30"
    assert format_duration(3600) == "1:00:00"
    assert format_duration(2700) == "45:00"
    assert format_duration(59) == "0:59"
    assert format_duration(None) == ""


def test_parse_pace():
    assert parse_pace("4:30") == 4.5
    assert parse_pace("5") == 5.0
    assert parse_pace("4:60") is None
    assert parse_pace("x:10") is None
    assert parse_pace(None) is None


def test_format_pace_rounds_and_carries():
    assert format_pace(4.5) == "4:30"
    assert format_pace(4.999) == "5:00"
    assert format_pace(0) == ""
    assert format_pace(None) == ""


def test_numbers():
    assert parse_number("10,5") == 10.5
    assert parse_number("abc") is None
    assert parse_count("12") == 12
    assert parse_count("1.5") is None
    assert format_number(10.0) == "10"
    assert format_number(1.5) == "1.5"
    assert format_number(2) == "2"
