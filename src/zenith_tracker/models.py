"""Data classes for the study-tracker domain model.

Persisted snapshots use the camelCase keys the web client wrote, so every
record carries a ``from_dict``/``to_dict`` pair mapping between the two.
Optional fields that are ``None`` are left out of the JSON entirely.
"""
from dataclasses import dataclass, field
from typing import Optional

RECURRENCE_TYPES = ("none", "daily", "weekly", "monthly")
GOAL_CATEGORIES = ("Study", "Personal", "Project", "Health")
EXAM_PRIORITIES = ("High", "Medium", "Low")
EXAM_TYPES = ("Mock", "Quiz", "Midterm", "Final", "Assignment")


def _compact(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None}


@dataclass
class Chapter:
    id: str
    name: str
    is_completed: bool = False
    completed_at: Optional[str] = None
    last_revised_at: Optional[str] = None
    revisions: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Chapter":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            is_completed=bool(data.get("isCompleted", False)),
            completed_at=data.get("completedAt"),
            last_revised_at=data.get("lastRevisedAt"),
            revisions=int(data.get("revisions") or 0),
        )

    def to_dict(self) -> dict:
        return _compact({
            "id": self.id,
            "name": self.name,
            "isCompleted": self.is_completed,
            "completedAt": self.completed_at,
            "lastRevisedAt": self.last_revised_at,
            "revisions": self.revisions,
        })


@dataclass
class Subject:
    id: str
    name: str
    color: str = "#6366f1"
    chapters: list[Chapter] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Subject":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            color=data.get("color", "#6366f1"),
            chapters=[Chapter.from_dict(c) for c in data.get("chapters", [])],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "chapters": [c.to_dict() for c in self.chapters],
        }


@dataclass
class Goal:
    id: str
    text: str
    date: str
    is_done: bool = False
    category: str = "Study"
    recurrence: str = "none"
    completed_dates: Optional[list[str]] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        completed = data.get("completedDates")
        return cls(
            id=data["id"],
            text=data.get("text", ""),
            date=data["date"],
            is_done=bool(data.get("isDone", False)),
            category=data.get("category", "Study"),
            recurrence=data.get("recurrence", "none"),
            completed_dates=list(completed) if completed is not None else None,
        )

    def to_dict(self) -> dict:
        return _compact({
            "id": self.id,
            "text": self.text,
            "date": self.date,
            "isDone": self.is_done,
            "category": self.category,
            "recurrence": self.recurrence,
            "completedDates": self.completed_dates,
        })


@dataclass
class PomodoroLog:
    id: str
    subject_id: str
    duration: int
    timestamp: str

    @classmethod
    def from_dict(cls, data: dict) -> "PomodoroLog":
        return cls(
            id=data["id"],
            subject_id=data.get("subjectId", ""),
            duration=int(data.get("duration", 0)),
            timestamp=data["timestamp"],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "subjectId": self.subject_id,
            "duration": self.duration,
            "timestamp": self.timestamp,
        }


@dataclass
class Exam:
    id: str
    subject_id: str
    title: str
    date: str
    priority: str = "Medium"
    type: str = "Exam"
    is_completed: bool = False
    is_graded: bool = False
    total_marks: Optional[float] = None
    obtained_marks: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Exam":
        return cls(
            id=data["id"],
            subject_id=data.get("subjectId", ""),
            title=data.get("title", ""),
            date=data["date"],
            priority=data.get("priority", "Medium"),
            type=data.get("type", "Exam"),
            is_completed=bool(data.get("isCompleted", False)),
            is_graded=bool(data.get("isGraded", False)),
            total_marks=data.get("totalMarks"),
            obtained_marks=data.get("obtainedMarks"),
        )

    def to_dict(self) -> dict:
        return _compact({
            "id": self.id,
            "subjectId": self.subject_id,
            "title": self.title,
            "date": self.date,
            "priority": self.priority,
            "type": self.type,
            "isCompleted": self.is_completed,
            "isGraded": self.is_graded,
            "totalMarks": self.total_marks,
            "obtainedMarks": self.obtained_marks,
        })


@dataclass
class Course:
    id: str
    title: str
    url: str
    subject_id: str
    added_at: str
    topic: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Course":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            url=data.get("url", ""),
            subject_id=data.get("subjectId", ""),
            added_at=data.get("addedAt", ""),
            topic=data.get("topic"),
        )

    def to_dict(self) -> dict:
        return _compact({
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "subjectId": self.subject_id,
            "topic": self.topic,
            "addedAt": self.added_at,
        })


@dataclass
class GardenState:
    daily_focus_goal: Optional[str] = None
    goal_last_updated: Optional[str] = None  # YYYY-MM-DD
    has_achieved_goal_today: bool = False
    garden_streak: int = 0


@dataclass
class DueChapter:
    """A chapter that has reached its revision interval, with its subject context."""
    chapter: Chapter
    subject_id: str
    subject_name: str
    color: str
    due_in_days: int
    tier_label: str
    next_interval: int


@dataclass
class PendingGoal:
    goal: Goal
    is_overdue: bool = False


# Top-level snapshot keys this model understands; anything else is kept in AppState.extra
_STATE_KEYS = {
    "subjects", "goals", "exams", "pomodoroLogs", "courses", "syllabusDeadline",
    "customExamTypes", "dailyFocusGoal", "goalLastUpdated",
    "hasAchievedGoalToday", "gardenStreak",
}


@dataclass
class AppState:
    subjects: list[Subject] = field(default_factory=list)
    goals: list[Goal] = field(default_factory=list)
    exams: list[Exam] = field(default_factory=list)
    pomodoro_logs: list[PomodoroLog] = field(default_factory=list)
    courses: list[Course] = field(default_factory=list)
    syllabus_deadline: Optional[str] = None
    custom_exam_types: list[str] = field(default_factory=list)
    garden: GardenState = field(default_factory=GardenState)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "AppState":
        return cls(
            subjects=[Subject.from_dict(s) for s in data.get("subjects", [])],
            goals=[Goal.from_dict(g) for g in data.get("goals", [])],
            exams=[Exam.from_dict(e) for e in data.get("exams", [])],
            pomodoro_logs=[PomodoroLog.from_dict(p) for p in data.get("pomodoroLogs", [])],
            courses=[Course.from_dict(c) for c in data.get("courses", [])],
            syllabus_deadline=data.get("syllabusDeadline"),
            custom_exam_types=list(data.get("customExamTypes", [])),
            garden=GardenState(
                daily_focus_goal=data.get("dailyFocusGoal"),
                goal_last_updated=data.get("goalLastUpdated"),
                has_achieved_goal_today=bool(data.get("hasAchievedGoalToday", False)),
                garden_streak=int(data.get("gardenStreak") or 0),
            ),
            extra={k: v for k, v in data.items() if k not in _STATE_KEYS},
        )

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update(_compact({
            "subjects": [s.to_dict() for s in self.subjects],
            "goals": [g.to_dict() for g in self.goals],
            "exams": [e.to_dict() for e in self.exams],
            "pomodoroLogs": [p.to_dict() for p in self.pomodoro_logs],
            "courses": [c.to_dict() for c in self.courses],
            "syllabusDeadline": self.syllabus_deadline,
            "customExamTypes": list(self.custom_exam_types),
            "dailyFocusGoal": self.garden.daily_focus_goal,
            "goalLastUpdated": self.garden.goal_last_updated,
            "hasAchievedGoalToday": self.garden.has_achieved_goal_today,
            "gardenStreak": self.garden.garden_streak,
        }))
        return data
