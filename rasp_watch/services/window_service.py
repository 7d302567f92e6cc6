from typing import Optional, Sequence

from rasp_watch.schedule.models import Day, Window

DEFAULT_BEFORE = 3
DEFAULT_AFTER = 7
DEFAULT_STEP = 10


def clamp(window: Window, length: int) -> Window:
    if length <= 0:
        return Window(0, 0)
    start = min(max(0, window.start), length - 1)
    end = min(max(window.end, start + 1), length)
    return Window(start, end)


def anchor_index(days: Sequence[Day], anchor_key: Optional[str]) -> int:
    if anchor_key is None:
        return 0
    for index, day in enumerate(days):
        if day.key == anchor_key:
            return index
    return 0


def initial_window(
    days: Sequence[Day],
    anchor_key: Optional[str],
    before: int = DEFAULT_BEFORE,
    after: int = DEFAULT_AFTER,
) -> Window:
    """
    Window around the anchor: `before` days ahead of it, the anchor itself
    and up to `after - 1` days following it.
    """
    length = len(days)
    if length == 0:
        return Window(0, 0)
    index = anchor_index(days, anchor_key)
    return clamp(Window(max(0, index - before), min(length, index + after)), length)


def expand_earlier(window: Window, length: int, step: int = DEFAULT_STEP) -> Window:
    window = clamp(window, length)
    if length == 0:
        return window
    return Window(max(0, window.start - step), window.end)


def expand_later(window: Window, length: int, step: int = DEFAULT_STEP) -> Window:
    window = clamp(window, length)
    if length == 0:
        return window
    return Window(window.start, min(length, window.end + step))
