"""Spaced-repetition revision scheduling on a fixed interval ladder."""
import math
from dataclasses import replace

from zenith_tracker.dates import days_between, now_utc, parse_timestamp
from zenith_tracker.models import Chapter, DueChapter, Subject

# Days to wait before the next review, indexed by the chapter's revision count
INTERVALS = (1, 3, 7, 14, 30)

DASHBOARD_QUEUE_SIZE = 5


def required_interval(revisions: int) -> int:
    """Return the interval in days for a chapter with ``revisions`` completed reviews."""
    revisions = max(0, revisions or 0)
    if revisions >= len(INTERVALS):
        return INTERVALS[-1]
    return INTERVALS[revisions]


def tier_label(revisions: int) -> str:
    if revisions <= 0:
        return "Initial Review"
    elif revisions == 1:
        return "Retention Sync"
    elif revisions == 2:
        return "Long-Term Lock"
    return "Mastery Review"


def last_event(chapter: Chapter):
    """The most recent review, falling back to completion. None if neither is set."""
    return chapter.last_revised_at or chapter.completed_at


def is_eligible(chapter: Chapter) -> bool:
    return chapter.is_completed and last_event(chapter) is not None


def days_since_last_event(chapter: Chapter, now) -> float | None:
    if not is_eligible(chapter):
        return None
    return days_between(last_event(chapter), now)


def is_due(chapter: Chapter, now) -> bool:
    elapsed = days_since_last_event(chapter, now)
    if elapsed is None:
        return False
    return elapsed >= required_interval(chapter.revisions)


def due_chapters(subjects: list[Subject], now, limit: int | None = None) -> list[DueChapter]:
    """Collect chapters whose revision interval has elapsed.

    With ``limit=None`` every due chapter is returned in subject/chapter order.
    With a limit, the most overdue chapters come first and the list is
    truncated to ``limit`` entries.
    """
    due = []
    for subject in subjects:
        for chapter in subject.chapters:
            elapsed = days_since_last_event(chapter, now)
            if elapsed is None:
                continue
            interval = required_interval(chapter.revisions)
            if elapsed < interval:
                continue
            due.append(DueChapter(
                chapter=chapter,
                subject_id=subject.id,
                subject_name=subject.name,
                color=subject.color,
                due_in_days=math.floor(elapsed),
                tier_label=tier_label(chapter.revisions),
                next_interval=interval,
            ))
    if limit is None:
        return due
    due.sort(key=lambda d: d.due_in_days, reverse=True)
    return due[:limit]


def revision_queue(subjects: list[Subject], now) -> list[DueChapter]:
    """Dashboard view: the five most overdue chapters."""
    return due_chapters(subjects, now, limit=DASHBOARD_QUEUE_SIZE)


def apply_reinforcement(chapter: Chapter, delta: int, now=None) -> Chapter:
    """Return a copy of ``chapter`` with its revision count moved by ``delta``.

    The count never drops below zero. Only a positive delta stamps
    ``last_revised_at``; undoing a review leaves the previous stamp alone.
    """
    revisions = max(0, (chapter.revisions or 0) + delta)
    last_revised_at = chapter.last_revised_at
    if delta > 0:
        stamp = now if now is not None else now_utc()
        last_revised_at = parse_timestamp(stamp).isoformat()
    return replace(chapter, revisions=revisions, last_revised_at=last_revised_at)


def reinforce(subjects: list[Subject], subject_id: str, chapter_id: str, delta: int, now=None) -> list[Subject]:
    """Apply a reinforcement inside a subjects snapshot, returning a new list."""
    updated = []
    for subject in subjects:
        if subject.id != subject_id:
            updated.append(subject)
            continue
        chapters = [
            apply_reinforcement(c, delta, now) if c.id == chapter_id else c
            for c in subject.chapters
        ]
        updated.append(replace(subject, chapters=chapters))
    return updated
