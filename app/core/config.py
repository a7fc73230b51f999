"""
Description:
Application configuration loaded from environment variables.

All tunables for the mock interview service live here so the rest of the code
never reads os.environ directly. Values are read once at import time after
loading a local .env file.

Dependencies:
- dotenv: For environment variable loading.
- os: For environment variable access.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from e


# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./interview_coach.db")

# Upstream model
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL")
CONVERSATION_MODEL = os.getenv("CONVERSATION_MODEL", "gpt-4o")
REPORT_MODEL = os.getenv("REPORT_MODEL", "gpt-4o-mini")
QUESTION_MODEL = os.getenv("QUESTION_MODEL", CONVERSATION_MODEL)
TURN_MAX_TOKENS = _int_env("TURN_MAX_TOKENS", 1024)
REPORT_MAX_TOKENS = _int_env("REPORT_MAX_TOKENS", 4000)
QUESTION_MAX_TOKENS = _int_env("QUESTION_MAX_TOKENS", 512)

# Interview flow
MAX_INTERVIEW_QUESTIONS = _int_env("MAX_INTERVIEW_QUESTIONS", 5)
MIN_ANSWER_LENGTH = _int_env("MIN_ANSWER_LENGTH", 5)
REPORT_QUESTION_LIMIT = _int_env("REPORT_QUESTION_LIMIT", 5)

# HTTP surface
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
DEFAULT_RATE_LIMIT = os.getenv("DEFAULT_RATE_LIMIT", "60/minute")
RESPOND_RATE_LIMIT = os.getenv("RESPOND_RATE_LIMIT", "20/minute")

# Auth
FIREBASE_CREDENTIALS_PATH = os.getenv("FIREBASE_CREDENTIALS_PATH")
