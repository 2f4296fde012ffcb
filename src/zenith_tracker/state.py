"""Snapshot updates. Each function takes an AppState and returns a new one."""
from dataclasses import replace

from zenith_tracker import exams, goals, revision
from zenith_tracker.dates import now_utc, parse_timestamp
from zenith_tracker.models import AppState, Chapter, Course, Exam, GardenState, Goal, PomodoroLog, Subject


def add_subject(state: AppState, subject: Subject) -> AppState:
    return replace(state, subjects=[*state.subjects, subject])


def delete_subject(state: AppState, subject_id: str) -> AppState:
    """Remove a subject together with its chapters."""
    return replace(state, subjects=[s for s in state.subjects if s.id != subject_id])


def add_chapter(state: AppState, subject_id: str, chapter: Chapter) -> AppState:
    subjects = [
        replace(s, chapters=[*s.chapters, chapter]) if s.id == subject_id else s
        for s in state.subjects
    ]
    return replace(state, subjects=subjects)


def toggle_chapter(state: AppState, subject_id: str, chapter_id: str, now=None) -> AppState:
    """Flip a chapter's completion. Completing stamps ``completed_at``; reopening clears it."""
    stamp = parse_timestamp(now if now is not None else now_utc()).isoformat()

    def flip(c: Chapter) -> Chapter:
        if c.is_completed:
            return replace(c, is_completed=False, completed_at=None)
        return replace(c, is_completed=True, completed_at=stamp)

    subjects = [
        replace(s, chapters=[flip(c) if c.id == chapter_id else c for c in s.chapters])
        if s.id == subject_id else s
        for s in state.subjects
    ]
    return replace(state, subjects=subjects)


def reinforce_chapter(state: AppState, subject_id: str, chapter_id: str, delta: int, now=None) -> AppState:
    return replace(state, subjects=revision.reinforce(state.subjects, subject_id, chapter_id, delta, now))


def add_goal(state: AppState, goal: Goal) -> AppState:
    return replace(state, goals=[*state.goals, goal])


def delete_goal(state: AppState, goal_id: str) -> AppState:
    return replace(state, goals=[g for g in state.goals if g.id != goal_id])


def toggle_goal_by_id(state: AppState, goal_id: str, day=None) -> AppState:
    return replace(
        state,
        goals=[goals.toggle_goal(g, day) if g.id == goal_id else g for g in state.goals],
    )


def log_pomodoro(state: AppState, log: PomodoroLog) -> AppState:
    return replace(state, pomodoro_logs=[*state.pomodoro_logs, log])


def add_exam(state: AppState, exam: Exam) -> AppState:
    return replace(state, exams=[*state.exams, exam])


def delete_exam(state: AppState, exam_id: str) -> AppState:
    return replace(state, exams=[e for e in state.exams if e.id != exam_id])


def grade_exam_by_id(state: AppState, exam_id: str, total_marks: float, obtained_marks: float) -> AppState:
    return replace(
        state,
        exams=[
            exams.grade_exam(e, total_marks, obtained_marks) if e.id == exam_id else e
            for e in state.exams
        ],
    )


def set_syllabus_deadline(state: AppState, deadline: str | None) -> AppState:
    return replace(state, syllabus_deadline=deadline)


def update_garden(state: AppState, garden: GardenState) -> AppState:
    return replace(state, garden=garden)


def update_subject_color(state: AppState, subject_id: str, color: str) -> AppState:
    return replace(
        state,
        subjects=[replace(s, color=color) if s.id == subject_id else s for s in state.subjects],
    )


def reorder_chapter(state: AppState, subject_id: str, from_idx: int, to_idx: int) -> AppState:
    """Move one chapter within its subject. Out-of-range indexes leave the state unchanged."""
    subjects = []
    for s in state.subjects:
        count = len(s.chapters)
        if s.id != subject_id or not (0 <= from_idx < count and 0 <= to_idx < count):
            subjects.append(s)
            continue
        chapters = list(s.chapters)
        moved = chapters.pop(from_idx)
        chapters.insert(to_idx, moved)
        subjects.append(replace(s, chapters=chapters))
    return replace(state, subjects=subjects)


def add_course(state: AppState, course: Course) -> AppState:
    return replace(state, courses=[*state.courses, course])


def delete_course(state: AppState, course_id: str) -> AppState:
    return replace(state, courses=[c for c in state.courses if c.id != course_id])


def add_exam_type(state: AppState, exam_type: str) -> AppState:
    """Remember a custom exam type. Blank or already known types are ignored."""
    exam_type = exam_type.strip()
    if not exam_type or exam_type in state.custom_exam_types:
        return state
    return replace(state, custom_exam_types=[*state.custom_exam_types, exam_type])
