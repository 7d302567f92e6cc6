import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO

from rasp_watch.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "rasp_watch.log"


def setup_logging(
    log_dir: Optional[str] = None,
    level: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configures logging for the application.
    output: `stream` (stdout by default) + file (<LOG_DIR>/rasp_watch.log)
    level: LOG_LEVEL from settings (INFO by default)
    """
    directory = Path(log_dir or settings.LOG_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [
        logging.StreamHandler(stream or sys.stdout),
        RotatingFileHandler(
            directory / LOG_FILE_NAME, maxBytes=5 * 1024 * 1024, backupCount=2, encoding="utf-8"
        ),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level or settings.LOG_LEVEL)
    for handler in handlers:
        root_logger.addHandler(handler)

    # Validation chatter is only interesting when debugging payloads
    logging.getLogger("pydantic").setLevel(logging.WARNING)
