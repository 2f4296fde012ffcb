from datetime import timedelta
from unittest.mock import patch

import pytest

from zenith_tracker.app import (
    cmd_courses, cmd_dashboard, cmd_deadline, cmd_exams, cmd_garden, cmd_goals, cmd_insights,
    cmd_revision, cmd_subjects, main,
)
from zenith_tracker.db import StateStore, get_saved_at
from zenith_tracker.dates import now_local
from zenith_tracker.models import AppState, Chapter, Course, GardenState, Goal, Subject


@pytest.fixture
def store(tmp_db):
    return StateStore(tmp_db)


@pytest.fixture
def due_state():
    overdue = (now_local() - timedelta(days=10)).isoformat()
    chapter = Chapter(id="c1", name="Optics", is_completed=True, completed_at=overdue)
    return AppState(subjects=[Subject(id="s1", name="Physics", chapters=[chapter])])


def test_dashboard_renders_without_data(store):
    state = AppState()
    assert cmd_dashboard(store, state) is state


def test_dashboard_renders_with_data(store, due_state):
    due_state.goals.append(Goal(id="g1", text="Read", date=now_local().date().isoformat()))
    due_state.syllabus_deadline = (now_local() + timedelta(days=45)).isoformat()
    assert cmd_dashboard(store, due_state) is due_state


def test_revision_reinforces_and_saves(store, due_state):
    with patch("zenith_tracker.app.Prompt.ask", side_effect=["1", "+"]):
        state = cmd_revision(store, due_state)
    assert state.subjects[0].chapters[0].revisions == 1
    assert state.subjects[0].chapters[0].last_revised_at is not None
    assert store.load() == state


def test_revision_back_leaves_state(store, due_state):
    with patch("zenith_tracker.app.Prompt.ask", return_value=""):
        assert cmd_revision(store, due_state) is due_state


def test_revision_rejects_bad_choice(store, due_state):
    with patch("zenith_tracker.app.Prompt.ask", return_value="7"):
        assert cmd_revision(store, due_state) is due_state


def test_goals_add(store):
    answers = ["2024-01-01", "add", "Gym", "Health", "weekly"]
    with patch("zenith_tracker.app.Prompt.ask", side_effect=answers):
        state = cmd_goals(store, AppState())
    goal = state.goals[0]
    assert (goal.text, goal.date, goal.category, goal.recurrence) == ("Gym", "2024-01-01", "Health", "weekly")
    assert store.load().goals == [goal]


def test_goals_toggle_recurring_for_chosen_date(store):
    state = AppState(goals=[Goal(id="g1", text="Gym", date="2024-01-01", recurrence="weekly")])
    with patch("zenith_tracker.app.Prompt.ask", side_effect=["2024-01-08", "toggle"]), \
            patch("zenith_tracker.app.IntPrompt.ask", return_value=1):
        state = cmd_goals(store, state)
    assert state.goals[0].completed_dates == ["2024-01-08"]


def test_subjects_add(store):
    with patch("zenith_tracker.app.Prompt.ask", side_effect=["add", "Chemistry", "n"]):
        state = cmd_subjects(store, AppState())
    assert [s.name for s in state.subjects] == ["Chemistry"]
    assert state.subjects[0].chapters == []


def test_subjects_add_with_suggested_chapters(store, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    with patch("zenith_tracker.app.Prompt.ask", side_effect=["add", "Chemistry", "y"]):
        state = cmd_subjects(store, AppState())
    assert [c.name for c in state.subjects[0].chapters][0] == "Introduction"


def test_garden_achieve(store):
    state = AppState(garden=GardenState(daily_focus_goal="Deep work", goal_last_updated=now_local().date().isoformat()))
    with patch("zenith_tracker.app.Prompt.ask", return_value="achieve"):
        state = cmd_garden(store, state)
    assert state.garden.garden_streak == 1
    assert state.garden.has_achieved_goal_today


def test_garden_achieve_needs_focus_goal(store):
    state = AppState()
    with patch("zenith_tracker.app.Prompt.ask", return_value="achieve"):
        assert cmd_garden(store, state) is state


def test_insights_uses_fallback(store, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    state = AppState()
    assert cmd_insights(store, state) is state


def test_main_loop_quits(tmp_db, monkeypatch):
    monkeypatch.setenv("ZENITH_DB", tmp_db)
    with patch("zenith_tracker.app.Prompt.ask", side_effect=["bogus", "dashboard", "quit"]):
        main()


@pytest.fixture
def physics():
    return AppState(subjects=[Subject(id="s1", name="Physics")])


def test_exams_rejects_unparseable_date(store, tmp_db, physics):
    with patch("zenith_tracker.app.Prompt.ask", side_effect=["add", "Mock", "next friday", "Medium"]), \
            patch("zenith_tracker.app.IntPrompt.ask", return_value=1):
        state = cmd_exams(store, physics)
    assert state is physics
    assert get_saved_at(tmp_db) is None

    with patch("zenith_tracker.app.Prompt.ask", side_effect=["add", "Mock", "2024-07-01", "High"]), \
            patch("zenith_tracker.app.IntPrompt.ask", return_value=1):
        state = cmd_exams(store, state)
    exam = state.exams[0]
    assert (exam.title, exam.date, exam.priority) == ("Physics Mock", "2024-07-01", "High")
    assert store.load().exams == [exam]


def test_exams_remembers_custom_type(store, physics):
    with patch("zenith_tracker.app.Prompt.ask", side_effect=["add", "Weekly Assessment", "2024-07-01", "Low"]), \
            patch("zenith_tracker.app.IntPrompt.ask", return_value=1):
        state = cmd_exams(store, physics)
    assert state.custom_exam_types == ["Weekly Assessment"]
    assert store.load().custom_exam_types == ["Weekly Assessment"]


def test_exams_builtin_type_is_not_recorded(store, physics):
    with patch("zenith_tracker.app.Prompt.ask", side_effect=["add", "Quiz", "2024-07-01", "Low"]), \
            patch("zenith_tracker.app.IntPrompt.ask", return_value=1):
        state = cmd_exams(store, physics)
    assert state.custom_exam_types == []


def test_subjects_move_chapter(store):
    chapters = [Chapter(id=c, name=c.upper()) for c in ("a", "b", "c")]
    state = AppState(subjects=[Subject(id="s1", name="Physics", chapters=chapters)])
    with patch("zenith_tracker.app.Prompt.ask", return_value="move"), \
            patch("zenith_tracker.app.IntPrompt.ask", side_effect=[1, 1, 3]):
        state = cmd_subjects(store, state)
    assert [c.id for c in state.subjects[0].chapters] == ["b", "c", "a"]
    assert store.load() == state


def test_subjects_change_color(store, physics):
    with patch("zenith_tracker.app.Prompt.ask", return_value="color"), \
            patch("zenith_tracker.app.IntPrompt.ask", side_effect=[1, 4]):
        state = cmd_subjects(store, physics)
    assert state.subjects[0].color == "#10b981"


def test_courses_add_and_delete(store, physics):
    answers = ["", "add", "Optics", "https://youtu.be/dQw4w9WgXcQ", "Lenses"]
    with patch("zenith_tracker.app.Prompt.ask", side_effect=answers), \
            patch("zenith_tracker.app.IntPrompt.ask", return_value=1):
        state = cmd_courses(store, physics)
    course = state.courses[0]
    assert (course.title, course.subject_id, course.topic) == ("Optics", "s1", "Lenses")
    assert store.load().courses == [course]

    with patch("zenith_tracker.app.Prompt.ask", side_effect=["opt", "delete"]), \
            patch("zenith_tracker.app.IntPrompt.ask", return_value=1):
        state = cmd_courses(store, state)
    assert state.courses == []


def test_courses_search_with_no_match_cannot_delete(store):
    course = Course(id="k1", title="Optics", url="https://example.com", subject_id="s1", added_at="2024-06-01")
    state = AppState(courses=[course])
    with patch("zenith_tracker.app.Prompt.ask", side_effect=["chemistry", "delete"]):
        assert cmd_courses(store, state) is state


def test_deadline_set_and_clear(store):
    with patch("zenith_tracker.app.Prompt.ask", return_value="2024-12-31"):
        state = cmd_deadline(store, AppState())
    assert state.syllabus_deadline == "2024-12-31"
    assert store.load().syllabus_deadline == "2024-12-31"

    with patch("zenith_tracker.app.Prompt.ask", return_value="clear"):
        state = cmd_deadline(store, state)
    assert state.syllabus_deadline is None


def test_deadline_rejects_bad_date(store, tmp_db):
    state = AppState()
    with patch("zenith_tracker.app.Prompt.ask", return_value="someday"):
        assert cmd_deadline(store, state) is state
    assert get_saved_at(tmp_db) is None
