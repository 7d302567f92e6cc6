from rasp_watch.schedule.models import Lesson
from rasp_watch.services.schedule_session import DayRow, ScheduleSession

NO_LESSONS_TEXT = "Занятий нет 🎉"
NO_DAYS_TEXT = "Расписание пусто"
BANNER_TEXT = "🟩 Сегодня занятий нет, ближайшие занятия:"
HIGHLIGHT_MARK = "📍"
CACHE_NOTE = "⚠️ Показана сохранённая копия расписания"
EARLIER_HINT = "⬆ Показать раньше"
LATER_HINT = "⬇ Показать позже"


def _lesson_kind(lesson: Lesson) -> str:
    tags: list[str] = []
    if lesson.is_lecture:
        tags.append("лекция")
    if lesson.is_distant:
        tags.append("дистант")
    return ", ".join(tags)


def build_lesson_block(lesson: Lesson) -> str:
    """
    Format example:
    🕘 1. 08:30-10:00
    Математический анализ (лекция)
    Преподаватель: Иванов И.И.
    🏛 Г-512
    """
    number = f"{lesson.number}. " if lesson.number is not None else ""
    block_lines: list[str] = [f"🕘 {number}{lesson.display_time}"]

    kind = _lesson_kind(lesson)
    block_lines.append(f"{lesson.name} ({kind})" if kind else lesson.name)
    block_lines.append(f"Преподаватель: {lesson.display_teacher}")
    block_lines.append(f"🏛 {lesson.display_auditory}")

    return "\n".join(block_lines)


def build_day_block(row: DayRow) -> str:
    header = f"📅 {row.label}"
    if row.highlighted:
        header = f"{HIGHLIGHT_MARK} {header}"
    if row.day.info.week_number is not None:
        header = f"{header} ({row.day.info.week_number} нед.)"

    if row.day.lessons:
        body = "\n\n".join(build_lesson_block(lesson) for lesson in row.day.lessons)
    else:
        body = NO_LESSONS_TEXT

    block = header + "\n\n" + body
    if row.banner_before:
        block = BANNER_TEXT + "\n\n" + block
    return block.strip()


def build_window_message(session: ScheduleSession) -> str:
    """
    Renders the visible window of a loaded session, day by day.
    Expand hints are shown only at edges that can still grow.
    """
    rows = session.rows()
    if not rows:
        return NO_DAYS_TEXT

    blocks: list[str] = []
    if session.is_cache:
        blocks.append(CACHE_NOTE)
    if session.can_expand_earlier:
        blocks.append(EARLIER_HINT)
    blocks.extend(build_day_block(row) for row in rows)
    if session.can_expand_later:
        blocks.append(LATER_HINT)

    # Two blank lines between day blocks for readability.
    return "\n\n\n".join(blocks).strip()
