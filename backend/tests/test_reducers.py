"""
Tests for reducers.py - add/toggle/delete/complete on each collection.
"""
import pytest
import sys
import os
from datetime import date, datetime, timezone

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models import GeneratedText, Habit, Message, Task
from reducers import (
    Add,
    Complete,
    Delete,
    ToggleComplete,
    ToggleFavorite,
    UnsupportedIntent,
    reduce_generated_texts,
    reduce_habits,
    reduce_messages,
    reduce_tasks,
)

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def message(id, role="user", content="hi"):
    return Message(id=id, role=role, content=content, timestamp=NOW)


def text(id, prompt="X"):
    return GeneratedText(id=id, prompt=prompt, result="result", timestamp=NOW)


def task(id, title="Pay rent"):
    return Task(id=id, title=title, date=date(2024, 3, 1), priority="high")


def habit(id, name="Read"):
    return Habit(id=id, name=name, goal="20 pages")


class TestMessages:
    """Tests for reduce_messages."""

    def test_add_appends(self):
        messages = (message("m-1"),)
        result = reduce_messages(messages, Add(record=message("m-2", role="assistant")))

        assert [m.id for m in result] == ["m-1", "m-2"]
        assert len(messages) == 1

    def test_toggle_favorite(self):
        messages = (message("m-1"), message("m-2"))
        result = reduce_messages(messages, ToggleFavorite(id="m-2"))

        assert result[0].favorite is False
        assert result[1].favorite is True

        result = reduce_messages(result, ToggleFavorite(id="m-2"))
        assert result[1].favorite is False

    def test_toggle_favorite_missing_id_is_noop(self):
        messages = (message("m-1"),)
        assert reduce_messages(messages, ToggleFavorite(id="nope")) == messages

    def test_delete_not_supported(self):
        """Messages are never deleted."""
        with pytest.raises(UnsupportedIntent):
            reduce_messages((message("m-1"),), Delete(id="m-1"))

    def test_add_wrong_record_type(self):
        with pytest.raises(UnsupportedIntent):
            reduce_messages((), Add(record=task("t-1")))


class TestGeneratedTexts:
    """Tests for reduce_generated_texts."""

    def test_add_prepends(self):
        """Newest generated text is shown first; earlier ones shift down."""
        texts = (text("g-1", prompt="first"), text("g-2", prompt="second"))
        result = reduce_generated_texts(texts, Add(record=text("g-3", prompt="X")))

        assert result[0].prompt == "X"
        assert [t.id for t in result] == ["g-3", "g-1", "g-2"]

    def test_toggle_favorite(self):
        result = reduce_generated_texts((text("g-1"),), ToggleFavorite(id="g-1"))
        assert result[0].favorite is True

    def test_delete(self):
        texts = (text("g-1"), text("g-2"))
        result = reduce_generated_texts(texts, Delete(id="g-1"))

        assert [t.id for t in result] == ["g-2"]

    def test_delete_missing_id_is_noop(self):
        texts = (text("g-1"), text("g-2"))
        assert reduce_generated_texts(texts, Delete(id="nope")) == texts


class TestTasks:
    """Tests for reduce_tasks."""

    def test_add_appends(self):
        result = reduce_tasks((task("t-1"),), Add(record=task("t-2", title="Dentist")))
        assert [t.title for t in result] == ["Pay rent", "Dentist"]

    def test_toggle_complete(self):
        tasks = (task("t-1"), task("t-2"))
        result = reduce_tasks(tasks, ToggleComplete(id="t-1"))

        assert result[0].completed is True
        assert result[1].completed is False
        assert reduce_tasks(result, ToggleComplete(id="t-1"))[0].completed is False

    def test_toggle_complete_missing_id_is_noop(self):
        tasks = (task("t-1"),)
        assert reduce_tasks(tasks, ToggleComplete(id="nope")) == tasks

    def test_delete(self):
        result = reduce_tasks((task("t-1"), task("t-2")), Delete(id="t-2"))
        assert [t.id for t in result] == ["t-1"]

    def test_delete_missing_id_is_noop(self):
        tasks = (task("t-1"),)
        assert reduce_tasks(tasks, Delete(id="nope")) == tasks

    def test_toggle_favorite_not_supported(self):
        with pytest.raises(UnsupportedIntent):
            reduce_tasks((task("t-1"),), ToggleFavorite(id="t-1"))


class TestHabits:
    """Tests for reduce_habits."""

    def test_add_appends_fresh_habit(self):
        result = reduce_habits((), Add(record=habit("h-1")))

        assert result[0].streak == 0
        assert result[0].last_completed is None
        assert result[0].completed_dates == ()

    def test_complete_only_touches_target(self):
        habits = (habit("h-1"), habit("h-2", name="Run"))
        result = reduce_habits(habits, Complete(id="h-2", today=date(2024, 1, 1)))

        assert result[0] == habits[0]
        assert result[1].streak == 1
        assert result[1].last_completed == date(2024, 1, 1)

    def test_complete_missing_id_is_noop(self):
        habits = (habit("h-1"),)
        assert reduce_habits(habits, Complete(id="nope", today=date(2024, 1, 1))) == habits

    def test_complete_consecutive_days(self):
        habits = (habit("h-1"),)
        for day in (1, 2, 3):
            habits = reduce_habits(habits, Complete(id="h-1", today=date(2024, 1, day)))

        assert habits[0].streak == 3

    def test_delete(self):
        result = reduce_habits((habit("h-1"), habit("h-2")), Delete(id="h-1"))
        assert [h.id for h in result] == ["h-2"]

    def test_delete_missing_id_is_noop(self):
        habits = (habit("h-1"),)
        assert reduce_habits(habits, Delete(id="nope")) == habits
