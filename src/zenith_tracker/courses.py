"""Saved lecture links: search, subject filter and YouTube id extraction."""
import re

from zenith_tracker.models import Course

YOUTUBE_ID = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")


def youtube_embed_id(url: str) -> str | None:
    """Return the 11-character video id for a YouTube link, else None."""
    match = YOUTUBE_ID.match(url or "")
    if match and len(match.group(2)) == 11:
        return match.group(2)
    return None


def thumbnail_url(url: str) -> str | None:
    video_id = youtube_embed_id(url)
    if video_id is None:
        return None
    return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"


def filter_courses(courses: list[Course], query: str = "", subject_id: str | None = None) -> list[Course]:
    """Courses whose title or topic contains ``query`` (case-insensitive), optionally for one subject."""
    needle = query.lower()
    results = []
    for c in courses:
        matches_search = needle in c.title.lower() or needle in (c.topic or "").lower()
        if matches_search and (subject_id is None or c.subject_id == subject_id):
            results.append(c)
    return results
