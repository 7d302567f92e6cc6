import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from rasp_watch.config import settings as env_settings
from rasp_watch.schedule.models import Anchor, Day, Schedule, Window
from rasp_watch.services.date_service import get_local_now
from rasp_watch.services.highlight_service import should_highlight, should_insert_banner
from rasp_watch.services.timeline_service import flatten_schedule, resolve_anchor
from rasp_watch.services.window_service import expand_earlier, expand_later, initial_window

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    EMPTY = "empty"
    LOADED = "loaded"


@dataclass(frozen=True)
class DayRow:
    day: Day
    label: str
    highlighted: bool
    banner_before: bool


class ScheduleSession:
    """
    Derived view state for one loaded schedule payload.

    Every `load` rebuilds the day sequence, anchor and window from scratch;
    only the expand commands touch the window afterwards. Callers are expected
    to dispatch events from a single thread.
    """

    def __init__(
        self,
        tz: Optional[str] = None,
        before: Optional[int] = None,
        after: Optional[int] = None,
        step: Optional[int] = None,
    ):
        self.tz = tz or env_settings.TIMEZONE
        self.before = env_settings.WINDOW_BEFORE if before is None else before
        self.after = env_settings.WINDOW_AFTER if after is None else after
        self.step = env_settings.EXPAND_STEP if step is None else step
        self.reset()

    def reset(self) -> None:
        self.state = SessionState.EMPTY
        self.is_cache = False
        self.loaded_at: Optional[datetime] = None
        self.days: List[Day] = []
        self.labels: Dict[str, str] = {}
        self.warnings: List[str] = []
        self.anchor: Optional[Anchor] = None
        self.window = Window(0, 0)

    def load(self, schedule: Schedule, now: Optional[datetime] = None) -> None:
        now = now or get_local_now(self.tz)
        flattened = flatten_schedule(schedule, now)
        anchor = resolve_anchor(flattened.days, now)

        self.reset()
        self.state = SessionState.LOADED
        self.is_cache = schedule.is_cache
        self.loaded_at = now
        self.days = flattened.days
        self.labels = flattened.labels
        self.warnings = flattened.warnings
        self.anchor = anchor
        self.window = initial_window(self.days, self.anchor_key, self.before, self.after)
        logger.info(
            "Schedule loaded: days=%d anchor=%s today=%s window=%d..%d cache=%s",
            len(self.days),
            self.anchor_key,
            self.has_today,
            self.window.start,
            self.window.end,
            self.is_cache,
        )

    @property
    def anchor_key(self) -> Optional[str]:
        return self.anchor.key if self.anchor else None

    @property
    def has_today(self) -> bool:
        return self.anchor is not None and self.anchor.is_today

    @property
    def can_expand_earlier(self) -> bool:
        return self.window.start > 0

    @property
    def can_expand_later(self) -> bool:
        return self.window.end < len(self.days)

    def expand_earlier(self) -> Window:
        if self.state is SessionState.LOADED:
            self.window = expand_earlier(self.window, len(self.days), self.step)
        return self.window

    def expand_later(self) -> Window:
        if self.state is SessionState.LOADED:
            self.window = expand_later(self.window, len(self.days), self.step)
        return self.window

    def visible_days(self) -> List[Day]:
        return self.window.slice(self.days)

    def rows(self) -> List[DayRow]:
        anchor_key = self.anchor_key
        return [
            DayRow(
                day=day,
                label=self.labels.get(day.key, day.key),
                highlighted=should_highlight(day.key, anchor_key),
                banner_before=should_insert_banner(day.key, anchor_key, self.has_today),
            )
            for day in self.visible_days()
        ]
