import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

from rasp_watch.config import settings as env_settings
from rasp_watch.logging_setup import setup_logging
from rasp_watch.schedule.decoder import ScheduleDecodeError, decode_schedule
from rasp_watch.services.message_builder import build_window_message
from rasp_watch.services.schedule_session import ScheduleSession


def _read_payload(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _parse_now(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"--now must be ISO 8601, got '{value}'") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rasp_watch",
        description="Render the visible window of a saved group schedule payload.",
    )
    parser.add_argument("payload", help="path to a schedule JSON payload, or - for stdin")
    parser.add_argument("--now", type=_parse_now, default=None, help="override current time (ISO 8601)")
    parser.add_argument("--earlier", type=int, default=0, help="number of 'show earlier' actions")
    parser.add_argument("--later", type=int, default=0, help="number of 'show later' actions")
    parser.add_argument("--tz", default=env_settings.TIMEZONE, help="IANA timezone for 'today'")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # stdout carries the rendered schedule
    setup_logging(stream=sys.stderr)

    try:
        schedule = decode_schedule(_read_payload(args.payload))
    except OSError as exc:
        logging.error("Failed to read payload %s: %s", args.payload, exc)
        return 1
    except ScheduleDecodeError:
        logging.error("Payload %s is not a valid schedule", args.payload)
        return 1

    now = args.now
    if now is not None and now.tzinfo is None:
        now = now.replace(tzinfo=ZoneInfo(args.tz))

    session = ScheduleSession(tz=args.tz)
    session.load(schedule, now=now)
    for _ in range(max(0, args.earlier)):
        session.expand_earlier()
    for _ in range(max(0, args.later)):
        session.expand_later()

    print(build_window_message(session))
    return 0


if __name__ == "__main__":
    sys.exit(main())
