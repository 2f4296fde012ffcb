"""Exam scheduling and grading aggregates."""
import math
from dataclasses import replace

from zenith_tracker.dates import days_between, parse_timestamp
from zenith_tracker.models import Exam, Subject


def grade_exam(exam: Exam, total_marks: float, obtained_marks: float) -> Exam:
    """Record marks for an exam. Grading also marks it as taken."""
    if total_marks <= 0:
        raise ValueError(f"total_marks must be positive, got {total_marks}")
    if not 0 <= obtained_marks <= total_marks:
        raise ValueError(f"obtained_marks must be between 0 and {total_marks}, got {obtained_marks}")
    return replace(
        exam,
        total_marks=total_marks,
        obtained_marks=obtained_marks,
        is_completed=True,
        is_graded=True,
    )


def percentage(exam: Exam) -> int:
    return round(((exam.obtained_marks or 0) / (exam.total_marks or 1)) * 100)


def upcoming_exams(exams: list[Exam]) -> list[Exam]:
    return sorted(
        (e for e in exams if not e.is_graded),
        key=lambda e: parse_timestamp(e.date),
    )


def graded_exams(exams: list[Exam]) -> list[Exam]:
    return sorted(
        (e for e in exams if e.is_graded),
        key=lambda e: parse_timestamp(e.date),
        reverse=True,
    )


def average_performance(exams: list[Exam]) -> int:
    graded = [e for e in exams if e.is_graded]
    if not graded:
        return 0
    ratio = sum((e.obtained_marks or 0) / (e.total_marks or 1) for e in graded) / len(graded)
    return round(ratio * 100)


def subject_averages(exams: list[Exam], subjects: list[Subject]) -> list[dict]:
    """Average graded percentage per subject; subjects without grades are omitted."""
    results = []
    for subject in subjects:
        graded = [e for e in exams if e.is_graded and e.subject_id == subject.id]
        if not graded:
            continue
        results.append({
            "subject_id": subject.id,
            "name": subject.name,
            "color": subject.color,
            "count": len(graded),
            "average": average_performance(graded),
        })
    return results


def days_left(exam: Exam, now) -> int:
    return math.ceil(days_between(now, exam.date))
