"""Interview Models Module

This module defines the SQLAlchemy model for mock interview sessions. The
transcript is stored as a JSON column on the session row so a turn, which
touches the transcript, the counters and the status together, is persisted by
a single UPDATE of that row.

Dependencies:
- sqlalchemy: For ORM functionality and database modeling.
- uuid: For primary key generation.
- datetime: For timestamp handling.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import String, Text, DateTime, Integer, JSON, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class MockInterview(Base):
    """One mock interview owned by a single user.

    Attributes:
        id (str): Primary key, UUID string
        user_id (str): Firebase UID of the owner
        company (str): Target company, fixed at creation
        role_level (str): Target role level, fixed at creation
        status (str): in_progress, completed or abandoned
        messages (list): Ordered transcript as JSON
        total_turns (int): Number of committed answer/feedback round trips
        overall_score (int, optional): 0-100 score reported on completion
        final_summary (str, optional): Closing assessment reported on completion
        started_at (datetime): When the interview was opened
        completed_at (datetime, optional): When the interview reached a terminal status
        version (int): Incremented on every write, checked on update
    """
    __tablename__ = "mock_interviews"
    __table_args__ = (
        Index("ix_mock_interviews_user_started", "user_id", "started_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(128), index=True)
    company: Mapped[str] = mapped_column(String(100))
    role_level: Mapped[str] = mapped_column(String(50))
    status: Mapped[str] = mapped_column(String(20), default="in_progress")
    messages: Mapped[list] = mapped_column(JSON, default=list)
    total_turns: Mapped[int] = mapped_column(Integer, default=0)
    overall_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    final_summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utc_now)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    version: Mapped[int] = mapped_column(Integer, default=1)

    def __repr__(self):
        return f"MockInterview(id={self.id}, company={self.company}, status={self.status})"
