"""
Application state and intent dispatch.

The Session owns the current AppState. Every dispatch reduces one collection
and immediately saves that whole collection, under a lock so no other
dispatch interleaves. The in-memory state stays authoritative when a save
fails.

Add intents are built here from request input. Input missing a required
field builds nothing and is dropped without dispatching.
"""
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, NamedTuple, Optional

import database
from models import AppState, GeneratedText, Habit, HabitCreate, Message, TaskCreate, Task
from reducers import (
    Intent,
    reduce_generated_texts,
    reduce_habits,
    reduce_messages,
    reduce_tasks,
)


class Collection(NamedTuple):
    field: str
    storage_key: str
    record_type: type
    reducer: Callable


MESSAGES = Collection("messages", database.MESSAGES_KEY, Message, reduce_messages)
GENERATED_TEXTS = Collection("generated_texts", database.TEXTS_KEY, GeneratedText, reduce_generated_texts)
TASKS = Collection("tasks", database.TASKS_KEY, Task, reduce_tasks)
HABITS = Collection("habits", database.HABITS_KEY, Habit, reduce_habits)

COLLECTIONS = (MESSAGES, GENERATED_TEXTS, TASKS, HABITS)


class Commit(NamedTuple):
    collection: tuple
    saved: bool


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def new_message(role: str, content: str) -> Optional[Message]:
    # Content is kept as typed; only blank input is refused
    if not content.strip():
        return None
    return Message(id=_new_id(), role=role, content=content, timestamp=_now())


def new_generated_text(prompt: str, result: str) -> Optional[GeneratedText]:
    if not prompt.strip():
        return None
    return GeneratedText(id=_new_id(), prompt=prompt, result=result, timestamp=_now())


def new_task(task_data: TaskCreate) -> Optional[Task]:
    if not task_data.title.strip() or task_data.date is None:
        return None
    return Task(
        id=_new_id(),
        title=task_data.title,
        date=task_data.date,
        time=task_data.time or "00:00",
        priority=task_data.priority,
    )


def new_habit(habit_data: HabitCreate) -> Optional[Habit]:
    if not habit_data.name.strip() or not habit_data.goal.strip():
        return None
    return Habit(id=_new_id(), name=habit_data.name, goal=habit_data.goal)


class Session:
    """The single local writer of the four collections."""

    def __init__(self, state: Optional[AppState] = None):
        self._state = state or AppState()
        self._lock = threading.Lock()

    @classmethod
    def load(cls) -> "Session":
        """Build a session from whatever the store holds."""
        return cls(AppState(**{
            c.field: database.load(c.storage_key, c.record_type) for c in COLLECTIONS
        }))

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, collection: Collection, intent: Intent) -> Commit:
        """Reduce one intent and commit the resulting collection."""
        with self._lock:
            current = getattr(self._state, collection.field)
            updated = collection.reducer(current, intent)
            self._state = self._state.model_copy(update={collection.field: updated})
            saved = database.save(collection.storage_key, updated)
            return Commit(updated, saved)
