from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
import logging

import config
import database
import gateway
from models import (
    AppState,
    ChatRequest,
    GenerateRequest,
    GeneratedText,
    Habit,
    HabitCreate,
    HabitView,
    Message,
    Task,
    TaskCreate,
)
from reducers import Add, Complete, Delete, ToggleComplete, ToggleFavorite
from state import (
    COLLECTIONS,
    GENERATED_TEXTS,
    HABITS,
    MESSAGES,
    TASKS,
    Session,
    new_generated_text,
    new_habit,
    new_message,
    new_task,
)
from streaks import check_timezone, completed_today, local_today

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
)
logger = logging.getLogger(__name__)

session = Session()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Startup
    global session
    check_timezone()
    database.init_db()
    session = Session.load()
    logger.info(
        "Loaded %d messages, %d generated texts, %d tasks, %d habits",
        *(len(getattr(session.state, c.field)) for c in COLLECTIONS)
    )
    yield
    # Shutdown (nothing to do)

app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _habit_views(habits: tuple[Habit, ...]) -> list[HabitView]:
    today = local_today()
    return [
        HabitView(**habit.model_dump(), completed_today=completed_today(habit, today))
        for habit in habits
    ]


@app.get("/state")
def get_state() -> AppState:
    return session.state


# Chat

@app.get("/messages")
def get_messages() -> list[Message]:
    return list(session.state.messages)


@app.post("/chat")
async def chat(chat_request: ChatRequest) -> list[Message]:
    """Store the user's message, ask the model, store its answer."""
    user_message = new_message("user", chat_request.message)
    if user_message is None:
        return list(session.state.messages)
    await run_in_threadpool(session.dispatch, MESSAGES, Add(record=user_message))

    # Other requests are served while this one waits on the model
    answer = await gateway.chat(chat_request.message)

    assistant_message = new_message("assistant", answer)
    commit = await run_in_threadpool(session.dispatch, MESSAGES, Add(record=assistant_message))
    return list(commit.collection)


@app.post("/messages/{message_id}/favorite")
def toggle_favorite_message(message_id: str) -> list[Message]:
    return list(session.dispatch(MESSAGES, ToggleFavorite(id=message_id)).collection)


# Text generator

@app.get("/generated")
def get_generated_texts() -> list[GeneratedText]:
    return list(session.state.generated_texts)


@app.post("/generate")
async def generate(generate_request: GenerateRequest) -> list[GeneratedText]:
    if not generate_request.prompt.strip():
        return list(session.state.generated_texts)

    result = await gateway.generate(generate_request.prompt)

    text = new_generated_text(generate_request.prompt, result)
    commit = await run_in_threadpool(session.dispatch, GENERATED_TEXTS, Add(record=text))
    return list(commit.collection)


@app.post("/generated/{text_id}/favorite")
def toggle_favorite_text(text_id: str) -> list[GeneratedText]:
    return list(session.dispatch(GENERATED_TEXTS, ToggleFavorite(id=text_id)).collection)


@app.delete("/generated/{text_id}")
def delete_generated_text(text_id: str) -> list[GeneratedText]:
    return list(session.dispatch(GENERATED_TEXTS, Delete(id=text_id)).collection)


# Agenda

@app.get("/tasks")
def get_tasks() -> list[Task]:
    return list(session.state.tasks)


@app.post("/tasks")
def create_task(task_data: TaskCreate) -> list[Task]:
    task = new_task(task_data)
    if task is None:
        return list(session.state.tasks)
    return list(session.dispatch(TASKS, Add(record=task)).collection)


@app.post("/tasks/{task_id}/toggle")
def toggle_task(task_id: str) -> list[Task]:
    return list(session.dispatch(TASKS, ToggleComplete(id=task_id)).collection)


@app.delete("/tasks/{task_id}")
def delete_task(task_id: str) -> list[Task]:
    return list(session.dispatch(TASKS, Delete(id=task_id)).collection)


# Habits

@app.get("/habits")
def get_habits() -> list[HabitView]:
    return _habit_views(session.state.habits)


@app.post("/habits")
def create_habit(habit_data: HabitCreate) -> list[HabitView]:
    habit = new_habit(habit_data)
    if habit is None:
        return _habit_views(session.state.habits)
    return _habit_views(session.dispatch(HABITS, Add(record=habit)).collection)


@app.post("/habits/{habit_id}/complete")
def complete_habit(habit_id: str) -> list[HabitView]:
    intent = Complete(id=habit_id, today=local_today())
    return _habit_views(session.dispatch(HABITS, intent).collection)


@app.delete("/habits/{habit_id}")
def delete_habit(habit_id: str) -> list[HabitView]:
    return _habit_views(session.dispatch(HABITS, Delete(id=habit_id)).collection)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
