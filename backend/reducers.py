"""
Pure reducers for the four collections.

Each reducer takes the current collection (a tuple of frozen records) and an
intent, and returns the next collection. Inputs are never mutated; an intent
that targets an unknown id returns an equal collection.
"""
from datetime import date
from typing import Union

from pydantic import BaseModel, ConfigDict

from models import GeneratedText, Habit, Message, Record, Task
from streaks import complete_habit


class Intent(BaseModel):
    model_config = ConfigDict(frozen=True)


class Add(Intent):
    record: Union[Message, GeneratedText, Task, Habit]


class ToggleFavorite(Intent):
    id: str


class ToggleComplete(Intent):
    id: str


class Delete(Intent):
    id: str


class Complete(Intent):
    id: str
    today: date


class UnsupportedIntent(ValueError):
    """Raised when an intent is dispatched to a collection that does not handle it."""


def _flip(collection: tuple, record_id: str, field: str) -> tuple:
    return tuple(
        item.model_copy(update={field: not getattr(item, field)}) if item.id == record_id else item
        for item in collection
    )


def _delete(collection: tuple, record_id: str) -> tuple:
    return tuple(item for item in collection if item.id != record_id)


def _check_record(intent: Add, record_type: type[Record]) -> Record:
    if not isinstance(intent.record, record_type):
        raise UnsupportedIntent(
            f"Cannot add {type(intent.record).__name__} to a {record_type.__name__} collection"
        )
    return intent.record


def _unsupported(collection_name: str, intent: Intent):
    return UnsupportedIntent(f"{type(intent).__name__} is not supported for {collection_name}")


def reduce_messages(messages: tuple[Message, ...], intent: Intent) -> tuple[Message, ...]:
    if isinstance(intent, Add):
        return messages + (_check_record(intent, Message),)
    if isinstance(intent, ToggleFavorite):
        return _flip(messages, intent.id, "favorite")
    raise _unsupported("messages", intent)


def reduce_generated_texts(texts: tuple[GeneratedText, ...], intent: Intent) -> tuple[GeneratedText, ...]:
    # Most recent first
    if isinstance(intent, Add):
        return (_check_record(intent, GeneratedText),) + texts
    if isinstance(intent, ToggleFavorite):
        return _flip(texts, intent.id, "favorite")
    if isinstance(intent, Delete):
        return _delete(texts, intent.id)
    raise _unsupported("generated texts", intent)


def reduce_tasks(tasks: tuple[Task, ...], intent: Intent) -> tuple[Task, ...]:
    if isinstance(intent, Add):
        return tasks + (_check_record(intent, Task),)
    if isinstance(intent, ToggleComplete):
        return _flip(tasks, intent.id, "completed")
    if isinstance(intent, Delete):
        return _delete(tasks, intent.id)
    raise _unsupported("tasks", intent)


def reduce_habits(habits: tuple[Habit, ...], intent: Intent) -> tuple[Habit, ...]:
    if isinstance(intent, Add):
        return habits + (_check_record(intent, Habit),)
    if isinstance(intent, Complete):
        return tuple(
            complete_habit(habit, intent.today) if habit.id == intent.id else habit
            for habit in habits
        )
    if isinstance(intent, Delete):
        return _delete(habits, intent.id)
    raise _unsupported("habits", intent)
