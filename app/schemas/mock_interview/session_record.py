"""
Description:
Domain schema for one mock interview session and its lifecycle status.

Dependencies:
- pydantic: For data validation and settings management.
- app.schemas.mock_interview.conversation_state: For the transcript.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.mock_interview.conversation_state import ConversationState


class InterviewStatus(str, Enum):
    """Lifecycle status of a mock interview."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"

    @property
    def is_terminal(self) -> bool:
        return self is not InterviewStatus.IN_PROGRESS


class InterviewSessionRecord(BaseModel):
    """Full state of a session as loaded from and saved to the store."""
    id: str
    userId: str
    company: str
    roleLevel: str
    status: InterviewStatus = InterviewStatus.IN_PROGRESS
    conversation: ConversationState = Field(default_factory=ConversationState)
    totalTurns: int = Field(default=0, ge=0)
    overallScore: Optional[int] = Field(default=None, ge=0, le=100)
    finalSummary: Optional[str] = None
    startedAt: datetime
    completedAt: Optional[datetime] = None
    version: int = Field(default=1, ge=1, description="Bumped on every save, used for compare-and-swap")
