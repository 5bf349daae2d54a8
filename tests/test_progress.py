"""Tests for year progress calculation."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from yearprogress.wallpaper.progress import (
    day_of_year,
    is_leap_year,
    parse_simulate,
    resolve_progress,
    round_half_up,
    total_days,
)


@pytest.mark.parametrize(
    "year,leap",
    [(2000, True), (1900, False), (2024, True), (2023, False), (2100, False), (2400, True)],
)
def test_leap_years(year, leap):
    assert is_leap_year(year) is leap
    assert total_days(year) == (366 if leap else 365)


def test_day_of_year_counts_jan_first_as_one():
    assert day_of_year(datetime(2025, 1, 1, 0, 0)) == 1
    assert day_of_year(datetime(2025, 1, 1, 23, 59)) == 1
    assert day_of_year(datetime(2025, 2, 1, 12, 0)) == 32


def test_day_of_year_last_day():
    assert day_of_year(datetime(2023, 12, 31, 12)) == 365
    assert day_of_year(datetime(2024, 12, 31, 12)) == 366


@pytest.mark.parametrize(
    "value,expected",
    [
        ("-5", 0.0),
        ("5", 1.0),
        ("abc", 0.0),
        ("", 0.0),
        ("0.25", 0.25),
        ("0.5abc", 0.5),
        (".75", 0.75),
        ("Infinity", 1.0),
        ("-Infinity", 0.0),
        ("nan", 0.0),
        (0.3, 0.3),
    ],
)
def test_parse_simulate_clamps(value, expected):
    assert parse_simulate(value) == pytest.approx(expected)


def test_round_half_up():
    assert round_half_up(182.5) == 183
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4999) == 2


def test_simulated_half_year():
    state = resolve_progress("0.5", now=datetime(2025, 3, 1))
    assert state.total_days == 365
    assert state.day_of_year == 183
    assert state.days_left == 182
    assert state.percentage == 50


def test_simulated_half_leap_year():
    state = resolve_progress("0.5", now=datetime(2024, 3, 1))
    assert state.total_days == 366
    assert state.day_of_year == 183
    assert state.days_left == 183


@pytest.mark.parametrize("simulate", ["-5", "5", "abc", "0", "1", "0.999"])
def test_simulated_progress_stays_in_range(simulate):
    state = resolve_progress(simulate, now=datetime(2025, 6, 1))
    assert 0.0 <= state.progress <= 1.0
    assert 0 <= state.day_of_year <= state.total_days
    assert 0 <= state.percentage <= 100
    assert state.days_left == state.total_days - state.day_of_year


def test_natural_progress_from_now():
    state = resolve_progress(now=datetime(2025, 2, 1, 9, 30))
    assert state.day_of_year == 32
    assert state.days_left == 333
    assert state.progress == pytest.approx(32 / 365)
    assert state.percentage == 9


def test_day_of_year_slips_after_spring_forward():
    new_york = ZoneInfo("America/New_York")
    assert day_of_year(datetime(2024, 3, 10, 12, 0, tzinfo=new_york)) == 70
    # Half past midnight on March 11th is only 70 days and 23.5 hours
    # after local midnight of Jan 0, since the clocks lost an hour
    assert day_of_year(datetime(2024, 3, 11, 0, 30, tzinfo=new_york)) == 70
    assert day_of_year(datetime(2024, 3, 11, 1, 30, tzinfo=new_york)) == 71
