from datetime import date, datetime, timezone, tzinfo

from dateutil import tz

from symera.engine.clock import FixedClock, SystemClock, resolve_timezone


def test_fixed_clock():
    assert FixedClock(date(2025, 6, 15)).today() == date(2025, 6, 15)


def test_system_clock_uses_configured_zone():
    today = SystemClock("UTC").today()
    assert isinstance(today, date)
    assert abs((today - datetime.now(timezone.utc).date()).days) <= 1


def test_system_clock_defaults_to_local_zone():
    assert isinstance(SystemClock().today(), date)


def test_system_clock_accepts_tzinfo():
    assert abs((SystemClock(tz.UTC).today() - datetime.now(tz.UTC).date()).days) <= 1


def test_resolve_timezone_known_zone(caplog):
    zone = resolve_timezone("UTC")
    assert datetime(2025, 6, 15, 12, 0, tzinfo=zone).utcoffset().total_seconds() == 0
    assert "Unknown timezone" not in caplog.text


def test_resolve_timezone_unknown_zone_warns(caplog):
    zone = resolve_timezone("Not/AZone")
    assert isinstance(zone, tzinfo)
    assert "Unknown timezone 'Not/AZone', using local time" in caplog.text


def test_resolve_timezone_empty_is_local(caplog):
    assert isinstance(resolve_timezone(""), tzinfo)
    assert "Unknown timezone" not in caplog.text
