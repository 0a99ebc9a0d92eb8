import pytest

from BackEnd.core.durations import (
	Duration, DurationUnit, parse_duration, format_elapsed, format_clock, format_hours
)


@pytest.mark.parametrize("label,minutes", [
	("25m", 25),
	("1h", 60),
	("90s", 1.5),
	("", 0),
	("abc", 0),
	("45", 45),
	("2H", 120),
	("25 min", 25),
])
def test_parse_duration(label, minutes):
	assert parse_duration(label) == minutes


def test_parse_duration_never_raises_on_odd_input():
	assert parse_duration(None) == 0
	assert parse_duration(42) == 0
	assert parse_duration("-5m") == 0
	assert parse_duration("m25") == 0


def test_any_whole_minute_label_parses_back():
	for n in (0, 1, 7, 59, 60, 600, 1440):
		assert parse_duration(f"{n}m") == n


def test_compound_label_keeps_first_unit_only():
	assert parse_duration("1h30m") == 60
	assert Duration.parse("1h30m") == Duration(1, DurationUnit.HOURS)


def test_seconds_are_not_rounded():
	assert parse_duration("40s") == pytest.approx(40 / 60)


def test_format_elapsed():
	assert format_elapsed(300) == "5m"
	assert format_elapsed(30) == "30s"
	assert format_elapsed(59) == "59s"
	assert format_elapsed(60) == "1m"
	assert format_elapsed(1500) == "25m"
	assert format_elapsed(0) == "0s"


def test_format_clock_and_hours():
	assert format_clock(1500) == "25:00"
	assert format_clock(255) == "04:15"
	assert format_clock(3600) == "60:00"
	assert format_hours(90) == "1.5"
	assert format_hours(0) == "0.0"
