from datetime import date, datetime

from symera.engine.days import DayKey, as_day, expand_range


def test_day_key_ignores_time_of_day():
    morning = datetime(2025, 6, 15, 0, 5)
    night = datetime(2025, 6, 15, 23, 55)
    assert DayKey.of(morning) == DayKey.of(night) == DayKey(2025, 6, 15)
    assert DayKey.of(date(2025, 6, 15)) == DayKey(2025, 6, 15)


def test_day_key_round_trips_to_date():
    assert DayKey(2024, 2, 29).to_date() == date(2024, 2, 29)
    assert str(DayKey(2025, 1, 5)) == "2025-01-05"


def test_expand_single_day():
    assert expand_range(date(2025, 6, 15), date(2025, 6, 15)) == [DayKey(2025, 6, 15)]


def test_expand_is_inclusive_across_month_end():
    keys = expand_range(date(2025, 1, 30), date(2025, 2, 2))
    assert keys == [
        DayKey(2025, 1, 30),
        DayKey(2025, 1, 31),
        DayKey(2025, 2, 1),
        DayKey(2025, 2, 2),
    ]


def test_expand_normalizes_mid_day_bounds():
    keys = expand_range(datetime(2025, 6, 15, 18, 0), datetime(2025, 6, 17, 9, 0))
    assert keys == [DayKey(2025, 6, 15), DayKey(2025, 6, 16), DayKey(2025, 6, 17)]


def test_expand_inverted_range_yields_start_only():
    assert expand_range(date(2025, 6, 20), date(2025, 6, 15)) == [DayKey(2025, 6, 20)]


def test_as_day():
    assert as_day(datetime(2025, 6, 15, 10, 30)) == date(2025, 6, 15)
    assert as_day(date(2025, 6, 15)) == date(2025, 6, 15)
