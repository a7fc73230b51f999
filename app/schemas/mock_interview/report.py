"""
Description:
Schemas for the post-interview performance report.

ReportModelOutput is the JSON document the report model must return; it is
validated strictly. InterviewReportData is what the route returns, combining
that document with fields read from the session.

Dependencies:
- pydantic: For data validation and settings management.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class QuestionBreakdown(BaseModel):
    questionIndex: int
    questionText: str
    userAnswer: str
    feedbackText: str
    score: Optional[int] = Field(default=None, description="Score out of 10")
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    idealAnswerOpening: str = ""


class ReportModelOutput(BaseModel):
    executiveSummary: str
    keyThemes: List[str]
    topRecommendations: List[str]
    questionBreakdown: List[QuestionBreakdown]


class InterviewReportData(BaseModel):
    interviewId: str
    company: str
    roleLevel: str
    overallScore: int = Field(..., description="Score out of 100")
    completedAt: datetime
    finalSummary: str
    executiveSummary: str
    keyThemes: List[str]
    topRecommendations: List[str]
    questionBreakdown: List[QuestionBreakdown]


class InterviewReportResponse(BaseModel):
    reportData: InterviewReportData
