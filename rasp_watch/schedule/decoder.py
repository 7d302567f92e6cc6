"""
Decoding of the upstream schedule API payloads into plain schedule models.

Upstream JSON is tolerant: almost every field may be missing or null and
`lessonName` comes either as a string or as a list of strings. The pydantic
models below mirror that shape; `to_model()` normalizes it so the rest of the
package never sees the variants.
"""
import logging
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rasp_watch.schedule.models import (
    UNTITLED_LESSON,
    Day,
    DayInfo,
    Faculty,
    GroupCatalog,
    Lesson,
    Schedule,
    ScheduleItem,
)

logger = logging.getLogger(__name__)


class ScheduleDecodeError(ValueError):
    pass


def normalize_lesson_name(value: Union[str, List[Optional[str]], None]) -> str:
    if isinstance(value, list):
        parts = [str(part).strip() for part in value if part is not None and str(part).strip()]
        value = ", ".join(parts)
    name = (value or "").strip()
    return name or UNTITLED_LESSON


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _none_on_mismatch(value, handler, info):
    # A mistyped optional field is dropped, not the whole payload.
    try:
        return handler(value)
    except ValidationError:
        logger.debug("Dropping invalid %s value %r", info.field_name, value)
        return None


class LessonPayload(_Payload):
    number: Optional[int] = None
    start_at: Optional[str] = Field(default=None, alias="startAt")
    end_at: Optional[str] = Field(default=None, alias="endAt")
    time_range: Optional[str] = Field(default=None, alias="timeRange")
    lesson_name: Union[str, List[Optional[str]], None] = Field(default=None, alias="lessonName")
    teacher_id: Optional[int] = Field(default=None, alias="teacherId")
    teacher_name: Optional[str] = Field(default=None, alias="teacherName")
    auditory_name: Optional[str] = Field(default=None, alias="auditoryName")
    is_distant: Optional[bool] = Field(default=None, alias="isDistant")
    is_lecture: Optional[bool] = Field(default=None, alias="isLecture")

    @field_validator(
        "number",
        "start_at",
        "end_at",
        "time_range",
        "lesson_name",
        "teacher_id",
        "teacher_name",
        "auditory_name",
        "is_distant",
        "is_lecture",
        mode="wrap",
    )
    @classmethod
    def drop_invalid_optional(cls, value, handler, info):
        return _none_on_mismatch(value, handler, info)

    def to_model(self) -> Lesson:
        return Lesson(
            name=normalize_lesson_name(self.lesson_name),
            number=self.number,
            start_at=self.start_at,
            end_at=self.end_at,
            time_range=self.time_range,
            teacher_id=self.teacher_id,
            teacher_name=self.teacher_name,
            auditory_name=self.auditory_name,
            is_distant=self.is_distant,
            is_lecture=self.is_lecture,
        )


class DayInfoPayload(_Payload):
    type: Optional[int] = None
    week_number: Optional[int] = Field(default=None, alias="weekNumber")
    date: str

    @field_validator("type", "week_number", mode="wrap")
    @classmethod
    def drop_invalid_optional(cls, value, handler, info):
        return _none_on_mismatch(value, handler, info)


class DayPayload(_Payload):
    info: DayInfoPayload
    lessons: Optional[List[LessonPayload]] = None

    def to_model(self) -> Day:
        return Day(
            info=DayInfo(
                date=self.info.date,
                type=self.info.type,
                week_number=self.info.week_number,
            ),
            lessons=tuple(lesson.to_model() for lesson in self.lessons or []),
        )


class ScheduleItemPayload(_Payload):
    number: Optional[int] = None
    days: Optional[List[DayPayload]] = None

    def to_model(self) -> ScheduleItem:
        return ScheduleItem(
            number=self.number,
            days=tuple(day.to_model() for day in self.days or []),
        )


class SchedulePayload(_Payload):
    is_cache: Optional[bool] = Field(default=None, alias="isCache")
    items: Optional[List[ScheduleItemPayload]] = None

    def to_model(self) -> Schedule:
        return Schedule(
            is_cache=bool(self.is_cache),
            items=tuple(item.to_model() for item in self.items or []),
        )


class FacultyPayload(_Payload):
    name: str
    groups: Optional[List[str]] = None


class GroupsPayload(_Payload):
    is_cache: Optional[bool] = Field(default=None, alias="isCache")
    name: Optional[str] = None
    items: Optional[List[FacultyPayload]] = None

    def to_model(self) -> GroupCatalog:
        return GroupCatalog(
            is_cache=bool(self.is_cache),
            name=self.name,
            faculties=tuple(
                Faculty(name=item.name, groups=tuple(item.groups or []))
                for item in self.items or []
            ),
        )


def _validate(model: type[_Payload], payload):
    try:
        if isinstance(payload, (str, bytes, bytearray)):
            return model.model_validate_json(payload)
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.error("Failed to decode %s: %d error(s)", model.__name__, exc.error_count())
        raise ScheduleDecodeError(f"Invalid {model.__name__}: {exc}") from exc


def decode_schedule(payload) -> Schedule:
    """Accepts a decoded JSON object or the raw JSON text/bytes."""
    return _validate(SchedulePayload, payload).to_model()


def decode_groups(payload) -> GroupCatalog:
    return _validate(GroupsPayload, payload).to_model()
