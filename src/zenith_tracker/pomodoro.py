"""Pomodoro log aggregates and countdown arithmetic."""
import math
from datetime import timedelta

from zenith_tracker.dates import parse_timestamp
from zenith_tracker.models import PomodoroLog, Subject

DEFAULT_FOCUS_MINUTES = 52
DEFAULT_BREAK_MINUTES = 17
UNKNOWN_SUBJECT_NAME = "Quick Session"
UNKNOWN_SUBJECT_COLOR = "#cbd5e1"


def total_focus_minutes(logs: list[PomodoroLog]) -> int:
    return sum(log.duration for log in logs)


def weekly_analytics(logs: list[PomodoroLog], subjects: list[Subject], now) -> list[dict]:
    """Minutes per subject over the last seven days, most studied first."""
    week_ago = parse_timestamp(now) - timedelta(days=7)
    minutes = {}
    for log in logs:
        if parse_timestamp(log.timestamp) >= week_ago:
            minutes[log.subject_id] = minutes.get(log.subject_id, 0) + log.duration
    by_id = {s.id: s for s in subjects}
    results = []
    for subject_id, total in minutes.items():
        subject = by_id.get(subject_id)
        results.append({
            "id": subject_id,
            "name": subject.name if subject else UNKNOWN_SUBJECT_NAME,
            "color": subject.color if subject else UNKNOWN_SUBJECT_COLOR,
            "minutes": total,
        })
    return sorted(results, key=lambda r: r["minutes"], reverse=True)


def elapsed_minutes(focus_minutes: int, remaining_seconds: int) -> int:
    """Minutes to credit when a focus block is finished early (at least one)."""
    elapsed = focus_minutes * 60 - remaining_seconds
    return max(1, math.floor(elapsed / 60))


def time_left(deadline, now) -> dict:
    """Split the time until ``deadline`` into 30-day months, days and hours."""
    difference = (parse_timestamp(deadline) - parse_timestamp(now)).total_seconds()
    if difference <= 0:
        return {"mo": 0, "d": 0, "h": 0}
    total_hours = math.floor(difference / 3600)
    total_days = total_hours // 24
    return {"mo": total_days // 30, "d": total_days % 30, "h": total_hours % 24}


class Countdown:
    """A timer that recomputes what is left from a fixed deadline on every tick."""

    def __init__(self, started_at, minutes: int):
        self.minutes = minutes
        self.deadline = parse_timestamp(started_at) + timedelta(minutes=minutes)

    def remaining_seconds(self, now) -> int:
        left = (self.deadline - parse_timestamp(now)).total_seconds()
        return max(0, math.ceil(left))

    def is_finished(self, now) -> bool:
        return self.remaining_seconds(now) == 0

    def display(self, now) -> str:
        minutes, seconds = divmod(self.remaining_seconds(now), 60)
        return f"{minutes:02d}:{seconds:02d}"
