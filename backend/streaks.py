"""
Habit streak calculation.

A habit is credited at most once per calendar day. Completing on the day
right after the previous completion extends the streak; any other day
(first completion, a gap, or a last completion dated after today) restarts
it at 1. Days are never un-recorded.
"""
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

import config
from models import Habit


def check_timezone() -> None:
    """Fail at startup, not on the first habit request, when HABIT_TIMEZONE is unknown."""
    if config.HABIT_TIMEZONE:
        ZoneInfo(config.HABIT_TIMEZONE)


def local_today(timezone: Optional[str] = None) -> date:
    """
    Today's calendar date in the configured zone.
    Falls back to HABIT_TIMEZONE, then to the server's local zone.
    """
    zone_name = timezone if timezone is not None else config.HABIT_TIMEZONE
    if zone_name:
        return datetime.now(ZoneInfo(zone_name)).date()
    return datetime.now().astimezone().date()


def complete_habit(habit: Habit, today: date) -> Habit:
    if today in habit.completed_dates:
        return habit

    if habit.last_completed == today - timedelta(days=1):
        streak = habit.streak + 1
    else:
        streak = 1

    return habit.model_copy(update={
        "streak": streak,
        "last_completed": today,
        "completed_dates": habit.completed_dates + (today,),
    })


def completed_today(habit: Habit, today: date) -> bool:
    return today in habit.completed_dates
