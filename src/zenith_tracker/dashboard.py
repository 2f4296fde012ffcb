"""Dashboard progress scoring and statistics."""
from zenith_tracker.exams import average_performance
from zenith_tracker.models import AppState
from zenith_tracker.pomodoro import total_focus_minutes
from zenith_tracker.revision import due_chapters


def get_progress_color(score: float) -> str:
    if score >= 80:
        return "green"
    elif score >= 65:
        return "yellow"
    elif score >= 50:
        return "dark_orange"
    return "red"


def get_revision_status(due_count: int) -> str:
    if due_count > 0:
        return f"{due_count} Due for Sync"
    return "Optimal Retention"


def _chapter_counts(state: AppState) -> tuple[int, int]:
    total = sum(len(s.chapters) for s in state.subjects)
    completed = sum(1 for s in state.subjects for c in s.chapters if c.is_completed)
    return total, completed


def calc_progress_percent(state: AppState) -> int:
    total, completed = _chapter_counts(state)
    if total == 0:
        return 0
    return round((completed / total) * 100)


def get_subject_progress(state: AppState) -> list[dict]:
    results = []
    for s in state.subjects:
        done = sum(1 for c in s.chapters if c.is_completed)
        results.append({
            "subject_id": s.id,
            "name": s.name,
            "color": s.color,
            "completed": done,
            "total": len(s.chapters),
            "progress": done / (len(s.chapters) or 1),
        })
    return results


def get_study_stats(state: AppState, now) -> dict:
    total, completed = _chapter_counts(state)
    return {
        "total_chapters": total,
        "completed_chapters": completed,
        "progress_percent": calc_progress_percent(state),
        "total_focus_minutes": total_focus_minutes(state.pomodoro_logs),
        "average_result": average_performance(state.exams),
        "revisions_due": len(due_chapters(state.subjects, now)),
    }
