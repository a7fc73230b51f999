"""
Conversation Message Schemas

This module defines the three kinds of entries that make up a mock interview
transcript. Each kind is its own model tagged by ``role`` and the union is
discriminated on that tag, so a user message can never carry feedback data
and a feedback message can never omit it.

Dependencies:
- pydantic: For data validation and discriminated unions.
- typing: For type annotations.
- datetime: For message timestamps.
"""

from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FeedbackData(BaseModel):
    """Structured coaching payload attached to a feedback message."""
    model_config = ConfigDict(extra="forbid")

    score: int = Field(..., ge=1, le=10, description="Answer score between 1 and 10")
    strengths: List[str] = Field(default_factory=list, description="What the answer did well")
    improvements: List[str] = Field(default_factory=list, description="What the answer should change")


class InterviewerMessage(BaseModel):
    """A question or closing statement from the interviewer."""
    model_config = ConfigDict(extra="forbid")

    role: Literal["interviewer"] = "interviewer"
    content: str
    timestamp: datetime = Field(default_factory=utc_now)
    questionIndex: Optional[int] = Field(default=None, ge=1, description="Ordinal of the question, absent on closing messages")


class UserMessage(BaseModel):
    """An answer given by the candidate."""
    model_config = ConfigDict(extra="forbid")

    role: Literal["user"] = "user"
    content: str
    timestamp: datetime = Field(default_factory=utc_now)


class FeedbackMessage(BaseModel):
    """Coaching feedback on the user message right before it."""
    model_config = ConfigDict(extra="forbid")

    role: Literal["feedback"] = "feedback"
    content: str
    timestamp: datetime = Field(default_factory=utc_now)
    feedbackData: FeedbackData


Message = Annotated[
    Union[InterviewerMessage, UserMessage, FeedbackMessage],
    Field(discriminator="role"),
]

message_list_adapter = TypeAdapter(List[Message])


def load_messages(raw: Optional[list]) -> List[Message]:
    """Validate a JSON-decoded message list into typed messages."""
    return message_list_adapter.validate_python(raw or [])


def dump_messages(messages: List[Message]) -> list:
    """Serialize typed messages into JSON-compatible dicts, omitting unset optionals."""
    return [message.model_dump(mode="json", exclude_none=True) for message in messages]
