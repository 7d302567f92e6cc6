import logging
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_TZ = "Europe/Moscow"


class Settings(BaseSettings):
    TIMEZONE: str = DEFAULT_TZ
    # Initial window: days shown before the anchor and the exclusive bound after it.
    WINDOW_BEFORE: int = 3
    WINDOW_AFTER: int = 7
    # Days added per "show earlier" / "show later" action.
    EXPAND_STEP: int = 10
    LOG_DIR: str = "data"
    LOG_LEVEL: str = "INFO"

    @field_validator("TIMEZONE")
    @classmethod
    def validate_timezone(cls, value: str):
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"TIMEZONE must be a valid IANA timezone, got '{value}'") from exc
        return value

    @field_validator("WINDOW_BEFORE", "WINDOW_AFTER", "EXPAND_STEP")
    @classmethod
    def validate_positive(cls, value: int, info):
        if value < 1:
            raise ValueError(f"{info.field_name} must be >= 1")
        return value

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, value):
        level = str(value or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got '{value}'")
        return level

    class Config:
        env_file = BASE_DIR / ".env"
        env_file_encoding = "utf-8"

settings = Settings()
