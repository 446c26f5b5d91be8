import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Record(BaseModel):
    """Base for stored records. Records are immutable; updates go through model_copy."""
    model_config = ConfigDict(frozen=True)

    id: str


class Message(Record):
    role: Literal["user", "assistant"]
    content: str
    timestamp: dt.datetime
    favorite: bool = False


class GeneratedText(Record):
    prompt: str
    result: str  # Failure text is stored here too
    timestamp: dt.datetime
    favorite: bool = False


class Task(Record):
    title: str
    date: dt.date
    time: str = "00:00"  # HH:MM
    completed: bool = False
    priority: Literal["low", "medium", "high"] = "medium"


class Habit(Record):
    name: str
    goal: str
    streak: int = Field(default=0, ge=0)
    last_completed: Optional[dt.date] = None
    completed_dates: tuple[dt.date, ...] = ()


class HabitView(Habit):
    completed_today: bool = False


class AppState(BaseModel):
    """Everything the presentation layer renders, one field per collection."""
    model_config = ConfigDict(frozen=True)

    messages: tuple[Message, ...] = ()
    generated_texts: tuple[GeneratedText, ...] = ()
    tasks: tuple[Task, ...] = ()
    habits: tuple[Habit, ...] = ()


# Request bodies. Required fields default to empty so that blank or missing
# input reaches the silent-reject check instead of failing request validation.

class ChatRequest(BaseModel):
    message: str = ""


class GenerateRequest(BaseModel):
    prompt: str = ""


class TaskCreate(BaseModel):
    title: str = ""
    date: Optional[dt.date] = None
    time: str = Field(default="", pattern=r"^(([01]\d|2[0-3]):[0-5]\d)?$")
    priority: Literal["low", "medium", "high"] = "medium"

    @field_validator("date", mode="before")
    @classmethod
    def blank_date_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("time", mode="before")
    @classmethod
    def none_time_is_blank(cls, value):
        return "" if value is None else value


class HabitCreate(BaseModel):
    name: str = ""
    goal: str = ""
