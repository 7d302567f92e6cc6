import logging
from datetime import datetime
from functools import cmp_to_key
from typing import Dict, List, Optional, Sequence

from rasp_watch.schedule.models import Anchor, Day, FlattenedSchedule, Schedule
from rasp_watch.services.date_service import (
    ensure_aware,
    format_day_label,
    is_current_semester,
    is_same_local_day,
    parse_schedule_date,
)

logger = logging.getLogger(__name__)


def _compare_days(left: Day, right: Day) -> int:
    left_dt = parse_schedule_date(left.key)
    right_dt = parse_schedule_date(right.key)
    if left_dt is None or right_dt is None:
        # Lexical order of the raw text keeps the sort deterministic.
        return (left.key > right.key) - (left.key < right.key)
    return (left_dt > right_dt) - (left_dt < right_dt)


def sort_days(days: Sequence[Day]) -> List[Day]:
    return sorted(days, key=cmp_to_key(_compare_days))


def flatten_schedule(schedule: Schedule, now: datetime) -> FlattenedSchedule:
    """
    Merges every (item, day) pair into one sequence for the current semester.

    - days with an unparsable date are skipped with a warning
    - days outside the semester bucket of `now` are dropped
    - a repeated date keeps its first occurrence
    - result is sorted ascending by parsed instant
    """
    now = ensure_aware(now)
    warnings: List[str] = []
    kept: List[Day] = []
    seen: set[str] = set()

    for item, day in schedule.iter_days():
        instant = parse_schedule_date(day.key)
        if instant is None:
            warnings.append(f"Item {item.number}: unparsable date '{day.key}', skipping")
            continue
        if not is_current_semester(instant, now):
            continue
        if day.key in seen:
            warnings.append(f"Item {item.number}: duplicate date '{day.key}', keeping first")
            continue
        seen.add(day.key)
        kept.append(day)

    for warning in warnings:
        logger.warning(warning)

    days = sort_days(kept)
    labels: Dict[str, str] = {}
    for day in days:
        instant = parse_schedule_date(day.key)
        labels[day.key] = format_day_label(instant, now.tzinfo) if instant else day.key

    logger.debug("Flattened %d of %d days", len(days), sum(1 for _ in schedule.iter_days()))
    return FlattenedSchedule(days=days, labels=labels, warnings=warnings)


def resolve_anchor(days: Sequence[Day], now: datetime) -> Optional[Anchor]:
    """
    Picks the day the view should open on.

    Today's entry wins regardless of lessons. Otherwise the earliest day at or
    after `now` that has lessons; on equal instants the first one seen is kept.
    Returns None when neither exists.

    Only `days` are searched, normally the flattened current-semester
    sequence, so a future day outside the semester bucket is never picked.
    """
    now = ensure_aware(now)
    for day in days:
        if is_same_local_day(parse_schedule_date(day.key), now):
            return Anchor(key=day.key, is_today=True)

    best: Optional[Day] = None
    best_instant: Optional[datetime] = None
    for day in days:
        if not day.has_lessons:
            continue
        instant = parse_schedule_date(day.key)
        if instant is None or instant < now:
            continue
        if best_instant is None or instant < best_instant:
            best, best_instant = day, instant

    if best is None:
        return None
    return Anchor(key=best.key, is_today=False)
