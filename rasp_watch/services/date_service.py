from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Optional
import zoneinfo

# Upstream dates carry milliseconds and either a numeric offset or a literal "Z".
DATE_FORMAT_OFFSET = "%Y-%m-%dT%H:%M:%S.%f%z"
DATE_FORMAT_UTC = "%Y-%m-%dT%H:%M:%S.%fZ"

WEEKDAYS = {
    0: "Понедельник",
    1: "Вторник",
    2: "Среда",
    3: "Четверг",
    4: "Пятница",
    5: "Суббота",
    6: "Воскресенье",
}


class Semester(str, Enum):
    AUTUMN = "autumn"
    SPRING = "spring"


def get_local_now(tz: str) -> datetime:
    return datetime.now(zoneinfo.ZoneInfo(tz))


def ensure_aware(value: datetime) -> datetime:
    """Naive datetimes are taken as wall-clock time in the system local zone."""
    if value.tzinfo is None:
        return value.astimezone()
    return value


def parse_schedule_date(text: str) -> Optional[datetime]:
    """
    Parses an upstream day date into an aware datetime.

    Tries the numeric-offset layout first, then the "Z" layout.
    Returns None when neither matches.
    """
    if not isinstance(text, str):
        return None
    raw = text.strip()
    try:
        return datetime.strptime(raw, DATE_FORMAT_OFFSET)
    except ValueError:
        pass
    try:
        return datetime.strptime(raw, DATE_FORMAT_UTC).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def semester_of(month: int) -> Semester:
    # Sep..Dec is the autumn half-year, Jan..Aug the spring one.
    if 9 <= month <= 12:
        return Semester.AUTUMN
    return Semester.SPRING


def is_current_semester(instant: Optional[datetime], now: datetime) -> bool:
    """
    Month-bucket check only: the year is not compared, so a March date
    from any year counts as "current" whenever `now` is in Jan..Aug.

    The month of `instant` is taken in the local calendar of `now`.
    """
    if instant is None:
        return False
    now = ensure_aware(now)
    local_month = to_local(instant, now.tzinfo).month
    return semester_of(local_month) == semester_of(now.month)


def to_local(instant: datetime, tz: Optional[tzinfo] = None) -> datetime:
    if tz is None:
        return instant.astimezone()
    return instant.astimezone(tz)


def is_same_local_day(instant: Optional[datetime], now: datetime) -> bool:
    if instant is None:
        return False
    now = ensure_aware(now)
    return to_local(instant, now.tzinfo).date() == now.date()


def format_day_label(instant: datetime, tz: Optional[tzinfo] = None) -> str:
    local = to_local(instant, tz)
    weekday_name = WEEKDAYS.get(local.weekday(), local.strftime("%A"))
    return f"{local.strftime('%d.%m.%Y')} {weekday_name}"
