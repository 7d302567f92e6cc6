from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from rasp_watch.services.date_service import (
    Semester,
    format_day_label,
    is_current_semester,
    is_same_local_day,
    parse_schedule_date,
    semester_of,
)

MSK = ZoneInfo("Europe/Moscow")


def test_parse_schedule_date_numeric_offset():
    parsed = parse_schedule_date("2024-09-02T00:00:00.000+03:00")
    assert parsed is not None
    assert parsed.utcoffset() == timedelta(hours=3)
    assert parsed == datetime(2024, 9, 1, 21, 0, tzinfo=timezone.utc)


def test_parse_schedule_date_compact_offset():
    parsed = parse_schedule_date("2024-09-02T08:30:00.000+0300")
    assert parsed == datetime(2024, 9, 2, 5, 30, tzinfo=timezone.utc)


def test_parse_schedule_date_zulu_suffix():
    parsed = parse_schedule_date("2024-09-01T21:00:00.000Z")
    assert parsed == datetime(2024, 9, 1, 21, 0, tzinfo=timezone.utc)
    assert parsed.utcoffset() == timedelta(0)


def test_parse_schedule_date_rejects_other_layouts():
    assert parse_schedule_date("2024-09-02") is None
    assert parse_schedule_date("02.09.2024") is None
    assert parse_schedule_date("2024-09-02T00:00:00+03:00") is None  # no milliseconds
    assert parse_schedule_date("") is None
    assert parse_schedule_date("garbage") is None
    assert parse_schedule_date(None) is None


def test_semester_buckets():
    assert [semester_of(m) for m in (9, 10, 11, 12)] == [Semester.AUTUMN] * 4
    assert [semester_of(m) for m in range(1, 9)] == [Semester.SPRING] * 8


def test_is_current_semester_month_three():
    march = datetime(2024, 3, 4, tzinfo=MSK)
    assert not is_current_semester(march, datetime(2024, 10, 1, tzinfo=MSK))
    assert is_current_semester(march, datetime(2024, 2, 1, tzinfo=MSK))


def test_is_current_semester_ignores_year():
    assert is_current_semester(datetime(2019, 3, 4, tzinfo=MSK), datetime(2024, 5, 1, tzinfo=MSK))


def test_is_current_semester_unparsed_is_excluded():
    assert not is_current_semester(None, datetime(2024, 5, 1, tzinfo=MSK))


def test_is_same_local_day_uses_now_timezone():
    # 21:00 UTC on Sep 1 is already Sep 2 in Moscow
    instant = parse_schedule_date("2024-09-01T21:00:00.000Z")
    assert is_same_local_day(instant, datetime(2024, 9, 2, 10, 0, tzinfo=MSK))
    assert not is_same_local_day(instant, datetime(2024, 9, 1, 10, 0, tzinfo=MSK))
    assert not is_same_local_day(None, datetime(2024, 9, 2, tzinfo=MSK))


def test_format_day_label():
    instant = parse_schedule_date("2024-09-02T00:00:00.000+03:00")
    assert format_day_label(instant, MSK) == "02.09.2024 Понедельник"


def test_is_current_semester_uses_local_month_at_boundary():
    # 21:00 UTC on Aug 31 is Sep 1 00:00 in Moscow: autumn
    first_of_september = parse_schedule_date("2025-08-31T21:00:00.000Z")
    assert is_current_semester(first_of_september, datetime(2025, 9, 1, 10, 0, tzinfo=MSK))
    assert not is_current_semester(first_of_september, datetime(2025, 8, 20, 10, 0, tzinfo=MSK))

    # 21:00 UTC on Dec 31 is Jan 1 in Moscow: spring
    new_year = parse_schedule_date("2025-12-31T21:00:00.000Z")
    assert is_current_semester(new_year, datetime(2026, 1, 10, tzinfo=MSK))
    assert not is_current_semester(new_year, datetime(2025, 12, 20, tzinfo=MSK))
