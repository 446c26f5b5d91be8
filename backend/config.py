import os

from dotenv import load_dotenv

load_dotenv()

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
ASSISTANT_MODEL = os.getenv("ASSISTANT_MODEL", "claude-sonnet-4-5")

# SQLite file holding the four collections (also read by alembic/env.py)
DATABASE_PATH = os.getenv("DATABASE_PATH", "assistant.db")

# IANA zone used to decide which calendar day a habit completion belongs to.
# Empty means the server's local zone.
HABIT_TIMEZONE = os.getenv("HABIT_TIMEZONE", "")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
