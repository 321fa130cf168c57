import pytest

from shared.time_utils import (
    combinations,
    format_duration,
    format_duration_min_sec,
    format_time,
    is_valid_time_format,
    parse_time,
)


@pytest.mark.parametrize("value", ["09:00", "9:05", "23:59", "00:00"])
def test_valid_time_formats(value):
    assert is_valid_time_format(value)


@pytest.mark.parametrize("value", ["24:00", "9:60", "0900", "nine", ""])
def test_invalid_time_formats(value):
    assert not is_valid_time_format(value)


def test_parse_time_counts_seconds_since_midnight():
    assert parse_time("09:30") == 34200
    assert parse_time("9:05") == 32700


def test_parse_time_rejects_garbage():
    with pytest.raises(ValueError, match="Invalid time format"):
        parse_time("25:00")


def test_format_time_zero_pads_and_truncates_seconds():
    assert format_time(32700) == "09:05"
    assert format_time(32759) == "09:05"


def test_format_duration():
    assert format_duration(3665) == "1h 1min 5s"
    assert format_duration(125) == "2min 5s"
    assert format_duration(3600) == "1h"
    assert format_duration(0) == "0s"


def test_format_duration_min_sec():
    assert format_duration_min_sec(125) == "2:05"


def test_combinations():
    assert combinations(0) == 0
    assert combinations(1) == 0
    assert combinations(4) == 6
    assert combinations(7) == 21
