"""
Shared fixtures for the mock interview tests.

The database is an in-memory SQLite shared through a StaticPool so every
session opened by the code under test sees the same data.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("OPENAI_API_KEY", "test-key")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.models.interview_models import Base
from app.schemas.mock_interview import InterviewerMessage
from app.services.mock_interview.interview_repository import InterviewRepository
from app.services.mock_interview.session_locks import SessionLockRegistry
from app.test.fakes import OPENING_QUESTION, FakeAsyncOpenAI


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def fake_ai():
    return FakeAsyncOpenAI()


@pytest.fixture
def locks():
    return SessionLockRegistry()


@pytest.fixture
def seed_interview(session_factory):
    """Create an in-progress interview holding only the opening question."""
    def _seed(user_id="user-1", company="Google", role_level="vp", question=OPENING_QUESTION):
        with session_factory() as db:
            return InterviewRepository(db).create(
                user_id, company, role_level, [InterviewerMessage(content=question, questionIndex=1)]
            )
    return _seed


@pytest.fixture
def load_interview(session_factory):
    def _load(session_id):
        with session_factory() as db:
            return InterviewRepository(db).load(session_id)
    return _load
