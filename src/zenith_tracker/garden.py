"""Daily focus goal and the garden streak."""
from dataclasses import replace
from typing import Callable, Optional

from zenith_tracker.dates import date_str
from zenith_tracker.models import GardenState

FOCUS_GOALS = [
    {"id": "focus_4h", "label": "Achieve 4 Hours of Deep Work"},
    {"id": "rev_sync", "label": "Complete All Pending Revision Syncs"},
    {"id": "exam_prep", "label": "Master 3 Chapters for Upcoming Exam"},
    {"id": "course_mastery", "label": "Finish 2 Course Lectures"},
    {"id": "habit_streak", "label": "Hit All Today's Routine Goals"},
]

WiltHook = Callable[[GardenState], GardenState]


def roll_over(garden: GardenState, today, on_wilt: Optional[WiltHook] = None) -> GardenState:
    """Start a new day: clear the achievement flag if it belongs to an earlier day.

    There is no built-in rule for wilting the streak when a day is missed.
    Callers that want one pass ``on_wilt``; it receives the state for a day
    that ended with a focus goal set but not achieved.
    """
    key = date_str(today)
    if garden.goal_last_updated == key:
        return garden
    missed = (
        garden.goal_last_updated is not None
        and garden.daily_focus_goal is not None
        and not garden.has_achieved_goal_today
    )
    if missed and on_wilt is not None:
        garden = on_wilt(garden)
    return replace(garden, has_achieved_goal_today=False, goal_last_updated=key)


def select_focus_goal(garden: GardenState, goal: str, today) -> GardenState:
    return replace(
        garden,
        daily_focus_goal=goal,
        has_achieved_goal_today=False,
        goal_last_updated=date_str(today),
    )


def achieve_goal(garden: GardenState, today) -> GardenState:
    """Mark today's focus goal achieved. The streak grows at most once per day."""
    garden = roll_over(garden, today)
    if garden.has_achieved_goal_today:
        return garden
    return replace(
        garden,
        has_achieved_goal_today=True,
        garden_streak=garden.garden_streak + 1,
        goal_last_updated=date_str(today),
    )


def is_wilted(garden: GardenState) -> bool:
    return garden.garden_streak == 0 and bool(garden.daily_focus_goal)
