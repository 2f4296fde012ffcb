# tests/test_pomodoro.py
from datetime import timedelta

from zenith_tracker.models import PomodoroLog, Subject
from zenith_tracker.pomodoro import (
    Countdown, elapsed_minutes, time_left, total_focus_minutes, weekly_analytics,
)


def make_log(id, subject_id, duration, when):
    return PomodoroLog(id=id, subject_id=subject_id, duration=duration, timestamp=when.isoformat())


def test_weekly_analytics(now):
    subjects = [Subject(id="s1", name="Physics", color="#ef4444"), Subject(id="s2", name="Maths")]
    logs = [
        make_log("1", "s1", 25, now - timedelta(days=1)),
        make_log("2", "s2", 52, now - timedelta(days=2)),
        make_log("3", "s1", 40, now - timedelta(days=3)),
        make_log("4", "s2", 90, now - timedelta(days=8)),
        make_log("5", "gone", 10, now - timedelta(hours=1)),
    ]
    result = weekly_analytics(logs, subjects, now)
    assert [(r["name"], r["minutes"]) for r in result] == [
        ("Physics", 65), ("Maths", 52), ("Quick Session", 10),
    ]
    assert result[2]["color"] == "#cbd5e1"


def test_total_focus_minutes(now):
    logs = [make_log("1", "s1", 25, now), make_log("2", "s1", 17, now)]
    assert total_focus_minutes(logs) == 42
    assert total_focus_minutes([]) == 0


def test_elapsed_minutes_credits_at_least_one():
    assert elapsed_minutes(52, 52 * 60 - 30) == 1
    assert elapsed_minutes(25, 10 * 60) == 15


def test_time_left(now):
    deadline = now + timedelta(days=40, hours=5)
    assert time_left(deadline, now) == {"mo": 1, "d": 10, "h": 5}
    assert time_left(now - timedelta(days=1), now) == {"mo": 0, "d": 0, "h": 0}


def test_countdown(now):
    timer = Countdown(now, 25)
    assert timer.remaining_seconds(now) == 25 * 60
    assert timer.display(now + timedelta(minutes=10, seconds=30)) == "14:30"
    assert not timer.is_finished(now + timedelta(minutes=24))
    assert timer.is_finished(now + timedelta(minutes=26))
    assert timer.remaining_seconds(now + timedelta(minutes=26)) == 0
