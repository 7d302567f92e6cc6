from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from rasp_watch.schedule.models import Day, DayInfo, Lesson, Schedule, ScheduleItem

MSK = ZoneInfo("Europe/Moscow")


def _date_text(value: date, zone: str = "+03:00") -> str:
    if zone == "Z":
        return f"{value.isoformat()}T00:00:00.000Z"
    return f"{value.isoformat()}T00:00:00.000{zone}"


@pytest.fixture
def msk_now():
    def _now(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
        return datetime(year, month, day, hour, minute, tzinfo=MSK)

    return _now


@pytest.fixture
def make_day():
    def _make(value, lessons: int = 1, zone: str = "+03:00", week_number=None) -> Day:
        raw = value if isinstance(value, str) else _date_text(value, zone)
        return Day(
            info=DayInfo(date=raw, type=0, week_number=week_number),
            lessons=tuple(Lesson(name=f"Lesson {i + 1}", number=i + 1) for i in range(lessons)),
        )

    return _make


@pytest.fixture
def make_schedule():
    def _make(*groups, is_cache: bool = False) -> Schedule:
        return Schedule(
            is_cache=is_cache,
            items=tuple(ScheduleItem(number=n + 1, days=tuple(days)) for n, days in enumerate(groups)),
        )

    return _make
