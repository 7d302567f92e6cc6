from typing import Optional


def should_highlight(day_key: str, anchor_key: Optional[str]) -> bool:
    return anchor_key is not None and day_key == anchor_key


def should_insert_banner(day_key: str, anchor_key: Optional[str], has_today: bool) -> bool:
    """
    "No classes today" marker goes right before the next day with classes,
    and only when the data has no entry for today.
    """
    return not has_today and should_highlight(day_key, anchor_key)
