"""Goal recurrence: which goals apply on a date, and whether they are done."""
from dataclasses import replace

from zenith_tracker.dates import date_str, same_day_of_month, same_weekday, to_day
from zenith_tracker.models import Goal, PendingGoal

PENDING_LIMIT = 8


def _matches_pattern(goal: Goal, anchor, target) -> bool:
    if goal.recurrence == "none":
        return target == anchor
    elif goal.recurrence == "daily":
        return True
    elif goal.recurrence == "weekly":
        return same_weekday(target, anchor)
    elif goal.recurrence == "monthly":
        # An anchor on the 31st has no occurrence in shorter months
        return same_day_of_month(target, anchor)
    return False


def is_active_on_date(goal: Goal, day) -> bool:
    """True when the goal's recurrence pattern lands on ``day``.

    Recurrence never applies before the anchor date.
    """
    anchor = to_day(goal.date)
    target = to_day(day)
    if target < anchor:
        return False
    return _matches_pattern(goal, anchor, target)


def is_completed_on_date(goal: Goal, day) -> bool:
    if goal.recurrence == "none":
        return goal.is_done
    return date_str(day) in (goal.completed_dates or [])


def toggle_goal(goal: Goal, day=None) -> Goal:
    """Flip the completion state of a goal.

    One-shot goals flip ``is_done``. Recurring goals add or remove ``day``
    from ``completed_dates``; without a day they are returned unchanged.
    """
    if goal.recurrence == "none":
        return replace(goal, is_done=not goal.is_done)
    if day is None:
        return goal
    key = date_str(day)
    completed = list(goal.completed_dates or [])
    if key in completed:
        completed = [d for d in completed if d != key]
    else:
        completed.append(key)
    return replace(goal, completed_dates=completed)


def goals_for_date(goals: list[Goal], day) -> list[Goal]:
    return [g for g in goals if is_active_on_date(g, day)]


def all_done_on_date(goals: list[Goal], day) -> bool:
    active = goals_for_date(goals, day)
    return bool(active) and all(is_completed_on_date(g, day) for g in active)


def pending_today(goals: list[Goal], today, limit: int = PENDING_LIMIT) -> list[PendingGoal]:
    """Goals still open for ``today``, in input order, capped at ``limit``.

    Unfinished one-shot goals surface on every day after their anchor and are
    flagged overdue. Recurring goals only surface on days their pattern hits
    and are never overdue.
    """
    today = to_day(today)
    pending = []
    for goal in goals:
        anchor = to_day(goal.date)
        if anchor > today:
            continue
        if goal.recurrence == "none":
            if goal.is_done:
                continue
            pending.append(PendingGoal(goal=goal, is_overdue=anchor < today))
        else:
            if is_completed_on_date(goal, today):
                continue
            if _matches_pattern(goal, anchor, today):
                pending.append(PendingGoal(goal=goal, is_overdue=False))
    return pending[:limit]
