from datetime import date, timedelta

from rasp_watch.schedule.models import Schedule, Window
from rasp_watch.services.schedule_session import ScheduleSession, SessionState


def _session() -> ScheduleSession:
    return ScheduleSession(tz="Europe/Moscow", before=3, after=7, step=10)


def test_session_starts_empty():
    session = _session()
    assert session.state is SessionState.EMPTY
    assert session.rows() == []
    assert session.expand_earlier() == Window(0, 0)
    assert session.expand_later() == Window(0, 0)


def test_load_empty_schedule(msk_now):
    session = _session()
    session.load(Schedule(), now=msk_now(2024, 10, 1))
    assert session.state is SessionState.LOADED
    assert session.days == []
    assert session.anchor is None
    assert session.window == Window(0, 0)
    assert not session.can_expand_earlier
    assert not session.can_expand_later


def test_load_places_window_and_expands(make_day, make_schedule, msk_now):
    base = date(2024, 9, 2)
    days = [make_day(base + timedelta(days=i)) for i in range(30)]
    session = _session()
    session.load(make_schedule(days[15:], days[:15]), now=msk_now(2024, 9, 22))

    assert session.anchor_key == days[20].key
    assert session.has_today
    assert session.window == Window(17, 27)
    assert [day.key for day in session.visible_days()] == [day.key for day in days[17:27]]

    assert session.expand_earlier() == Window(7, 27)
    assert session.expand_earlier() == Window(0, 27)
    assert not session.can_expand_earlier
    assert session.expand_later() == Window(0, 30)
    assert session.expand_later() == Window(0, 30)


def test_reload_replaces_window(make_day, make_schedule, msk_now):
    base = date(2024, 9, 2)
    days = [make_day(base + timedelta(days=i)) for i in range(30)]
    session = _session()
    session.load(make_schedule(days), now=msk_now(2024, 9, 22))
    session.expand_earlier()
    session.expand_later()

    fresh = days[:5]
    session.load(make_schedule(fresh), now=msk_now(2024, 9, 3))
    assert len(session.days) == 5
    assert session.anchor_key == fresh[1].key
    assert session.window == Window(0, 5)


def test_rows_mark_banner_before_next_day(make_day, make_schedule, msk_now):
    d1 = make_day(date(2024, 5, 1), lessons=0)
    d2 = make_day(date(2024, 5, 3), lessons=2)
    session = _session()
    session.load(make_schedule([d2, d1]), now=msk_now(2024, 5, 2))

    assert not session.has_today
    rows = session.rows()
    assert [row.day.key for row in rows] == [d1.key, d2.key]
    assert [row.banner_before for row in rows] == [False, True]
    assert [row.highlighted for row in rows] == [False, True]
    assert rows[1].label == "03.05.2024 Пятница"


def test_rows_for_today_have_no_banner(make_day, make_schedule, msk_now):
    today = make_day(date(2024, 5, 2), lessons=0)
    session = _session()
    session.load(make_schedule([today]), now=msk_now(2024, 5, 2))

    rows = session.rows()
    assert rows[0].highlighted
    assert not rows[0].banner_before


def test_reset_returns_to_empty(make_day, make_schedule, msk_now):
    session = _session()
    session.load(make_schedule([make_day(date(2024, 5, 2))]), now=msk_now(2024, 5, 2))
    session.reset()
    assert session.state is SessionState.EMPTY
    assert session.anchor is None
    assert session.window == Window(0, 0)


def test_explicit_zero_window_sizes_are_kept(make_day, make_schedule, msk_now):
    base = date(2024, 9, 2)
    days = [make_day(base + timedelta(days=i)) for i in range(10)]
    session = ScheduleSession(tz="Europe/Moscow", before=0, after=1, step=0)
    assert (session.before, session.after, session.step) == (0, 1, 0)

    session.load(make_schedule(days), now=msk_now(2024, 9, 6))
    assert session.window == Window(4, 5)
    assert session.expand_earlier() == Window(4, 5)
    assert session.expand_later() == Window(4, 5)
