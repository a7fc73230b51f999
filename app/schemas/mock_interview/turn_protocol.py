"""
Description:
Typed result of parsing one model reply written in the turn protocol.

The ``next`` field is discriminated on ``kind``: a turn either carries the
next question or closes the interview.

Dependencies:
- pydantic: For data validation and discriminated unions.
"""
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class ParsedFeedback(BaseModel):
    text: str = ""
    score: int = Field(default=5, ge=1, le=10)
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)


class NextQuestion(BaseModel):
    kind: Literal["question"] = "question"
    text: str = ""
    index: Optional[int] = None


class InterviewComplete(BaseModel):
    kind: Literal["complete"] = "complete"
    summary: str = ""
    overallScore: Optional[int] = Field(default=None, ge=0, le=100)


class ParsedTurn(BaseModel):
    feedback: ParsedFeedback = Field(default_factory=ParsedFeedback)
    next: Annotated[Union[NextQuestion, InterviewComplete], Field(discriminator="kind")]
