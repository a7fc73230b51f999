"""
Description:
Request bodies accepted by the mock interview routes.

Dependencies:
- pydantic: For data validation and settings management.
"""
from pydantic import BaseModel, Field


class CreateInterviewRequest(BaseModel):
    company: str = Field(..., min_length=1, max_length=100)
    roleLevel: str = Field(..., min_length=1, max_length=50)


class UpdateStatusRequest(BaseModel):
    status: str = Field(..., description="One of in_progress, completed, abandoned")


class RespondRequest(BaseModel):
    userAnswer: str = Field("", max_length=10000)
