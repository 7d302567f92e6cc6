from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Dict, Iterator, List, Optional, Tuple

from rasp_watch.services.date_service import format_day_label, parse_schedule_date

UNTITLED_LESSON = "Предмет без названия"
NO_TEACHER_TEXT = "Препод не указан"
NO_AUDITORY_TEXT = "Аудитории нет"
DISTANT_TEXT = "Дистант"
NO_TIME_TEXT = "-"


@dataclass(frozen=True)
class Lesson:
    name: str = UNTITLED_LESSON
    number: Optional[int] = None
    start_at: Optional[str] = None  # HH:MM
    end_at: Optional[str] = None    # HH:MM
    time_range: Optional[str] = None
    teacher_id: Optional[int] = None
    teacher_name: Optional[str] = None
    auditory_name: Optional[str] = None
    is_distant: Optional[bool] = None
    is_lecture: Optional[bool] = None

    @property
    def time_text(self) -> str:
        if self.time_range:
            return self.time_range
        start = self.start_at or ""
        end = self.end_at or ""
        return f"{start}-{end}".strip("-")

    @property
    def display_time(self) -> str:
        return self.time_text or NO_TIME_TEXT

    @property
    def display_teacher(self) -> str:
        teacher = (self.teacher_name or "").strip()
        return teacher or NO_TEACHER_TEXT

    @property
    def display_auditory(self) -> str:
        room = (self.auditory_name or "").strip()
        if room:
            return room
        return DISTANT_TEXT if self.is_distant else NO_AUDITORY_TEXT


@dataclass(frozen=True)
class DayInfo:
    date: str  # raw upstream date, also the day key
    type: Optional[int] = None
    week_number: Optional[int] = None

    @property
    def parsed(self) -> Optional[datetime]:
        return parse_schedule_date(self.date)

    def display_label(self, tz: Optional[tzinfo] = None) -> str:
        """
        "dd.mm.yyyy Weekday" in `tz` (system local zone when omitted).
        Falls back to the raw date text when it cannot be parsed.
        """
        instant = self.parsed
        if instant is None:
            return self.date
        return format_day_label(instant, tz)


@dataclass(frozen=True)
class Day:
    info: DayInfo
    lessons: Tuple[Lesson, ...] = ()

    @property
    def key(self) -> str:
        return self.info.date

    @property
    def has_lessons(self) -> bool:
        return len(self.lessons) > 0


@dataclass(frozen=True)
class ScheduleItem:
    days: Tuple[Day, ...] = ()
    number: Optional[int] = None


@dataclass(frozen=True)
class Schedule:
    items: Tuple[ScheduleItem, ...] = ()
    is_cache: bool = False

    def iter_days(self) -> Iterator[Tuple[ScheduleItem, Day]]:
        for item in self.items:
            for day in item.days:
                yield item, day


@dataclass(frozen=True)
class Faculty:
    name: str
    groups: Tuple[str, ...] = ()


@dataclass(frozen=True)
class GroupCatalog:
    faculties: Tuple[Faculty, ...] = ()
    name: Optional[str] = None
    is_cache: bool = False

    def find_faculty(self, group: str) -> Optional[Faculty]:
        for faculty in self.faculties:
            if group in faculty.groups:
                return faculty
        return None


@dataclass
class FlattenedSchedule:
    days: List[Day]
    labels: Dict[str, str]
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Anchor:
    key: str
    is_today: bool


@dataclass(frozen=True)
class Window:
    start: int = 0
    end: int = 0  # exclusive

    @property
    def size(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    def slice(self, seq: List[Day]) -> List[Day]:
        return seq[self.start:self.end]
