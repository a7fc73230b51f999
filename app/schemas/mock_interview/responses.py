"""
Description:
Response bodies returned by the mock interview routes.

Dependencies:
- pydantic: For data validation and serialization.
- app.schemas.mock_interview: For session and message types.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from app.schemas.mock_interview.messages import Message
from app.schemas.mock_interview.session_record import InterviewSessionRecord, InterviewStatus


class InterviewSummaryResponse(BaseModel):
    id: str
    company: str
    roleLevel: str
    status: InterviewStatus
    totalTurns: int
    overallScore: Optional[int] = None
    startedAt: datetime
    completedAt: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: InterviewSessionRecord) -> "InterviewSummaryResponse":
        return cls(
            id=record.id,
            company=record.company,
            roleLevel=record.roleLevel,
            status=record.status,
            totalTurns=record.totalTurns,
            overallScore=record.overallScore,
            startedAt=record.startedAt,
            completedAt=record.completedAt,
        )


class InterviewDetailResponse(InterviewSummaryResponse):
    messages: List[Message]
    finalSummary: Optional[str] = None

    @classmethod
    def from_record(cls, record: InterviewSessionRecord) -> "InterviewDetailResponse":
        summary = InterviewSummaryResponse.from_record(record)
        return cls(
            **summary.model_dump(),
            messages=record.conversation.messages,
            finalSummary=record.finalSummary,
        )


class InterviewCountsResponse(BaseModel):
    total: int
    completed: int
