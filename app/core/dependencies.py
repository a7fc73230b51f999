"""
Description:
FastAPI dependency providers for the mock interview routes.

Each provider is a separate function so tests can swap the caller identity,
the AI clients or the database through ``app.dependency_overrides``.

Dependencies:
- fastapi: For dependency injection.
- openai: For the AsyncOpenAI client type.
- app.core.ai_client_manager: For the shared AI clients.
- app.services.auth.firebase_auth: For resolving the caller.
"""
from fastapi import Request
from openai import AsyncOpenAI

from app.core.ai_client_manager import get_conversation_client, get_question_client, get_report_client
from app.services.auth.firebase_auth import get_current_user_uid


def get_current_user_id(request: Request) -> str:
    return get_current_user_uid(request)


def get_conversation_ai() -> AsyncOpenAI:
    return get_conversation_client()


def get_report_ai() -> AsyncOpenAI:
    return get_report_client()


def get_question_ai() -> AsyncOpenAI:
    return get_question_client()
