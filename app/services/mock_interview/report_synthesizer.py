"""
Report Synthesizer Service

This service turns a completed mock interview into a structured performance
report. It sends the paired questions, answers and existing feedback to the
model in one non-streaming call and expects a JSON document back.

Unlike the turn protocol, the report reply is not parsed leniently: anything
that is not the expected JSON shape fails the request with the raw text
attached, and the session is left untouched so the call can be retried.

Dependencies:
- openai: For the chat completion.
- pydantic: For validating the model's JSON.
- loguru: For logging operations.
- app.core.secure_prompt_manager: For the report prompt.
"""

import json
import math
from typing import Optional

from loguru import logger
from openai import AsyncOpenAI
from pydantic import ValidationError as PydanticValidationError

from app.core.config import REPORT_MAX_TOKENS, REPORT_MODEL, REPORT_QUESTION_LIMIT
from app.core.secure_prompt_manager import REPORT_SYSTEM_INSTRUCTION, secure_prompt_manager
from app.errors.exceptions import InvalidStateError, ReportParseError, UpstreamFailureError
from app.schemas.mock_interview import (
    InterviewReportData,
    InterviewSessionRecord,
    InterviewStatus,
    ReportModelOutput,
)

DEFAULT_OVERALL_SCORE = 50


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ReportSynthesizer:
    """Builds the post-interview report for a completed session."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = REPORT_MODEL,
        max_tokens: int = REPORT_MAX_TOKENS,
        question_limit: int = REPORT_QUESTION_LIMIT,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.question_limit = question_limit

    @staticmethod
    def average_score(record: InterviewSessionRecord) -> int:
        """
        Overall score out of 100.

        The mean per-answer score (out of 10), rounded, times ten. Without any
        feedback the stored overall score is used, or 50 if there is none.
        """
        feedback = record.conversation.feedback_messages
        if not feedback:
            return record.overallScore if record.overallScore is not None else DEFAULT_OVERALL_SCORE
        mean = sum(message.feedbackData.score for message in feedback) / len(feedback)
        return _round_half_up(mean) * 10

    @staticmethod
    def parse_report(raw: str) -> ReportModelOutput:
        """
        Raises:
            ReportParseError: If ``raw`` is not JSON or not the expected shape.
        """
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ReportParseError(raw, reason=str(e)) from e
        try:
            return ReportModelOutput.model_validate(data)
        except PydanticValidationError as e:
            raise ReportParseError(raw, reason=str(e)) from e

    async def _complete(self, prompt: str) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[
                    {"role": "system", "content": REPORT_SYSTEM_INSTRUCTION},
                    {"role": "user", "content": prompt},
                ],
            )
        except Exception as e:
            logger.error(f"Report generation call failed: {e}")
            raise UpstreamFailureError("Failed to generate interview report.") from e
        content: Optional[str] = response.choices[0].message.content if response.choices else None
        return (content or "").strip()

    async def generate(self, record: InterviewSessionRecord) -> InterviewReportData:
        """
        Generate the report for ``record``.

        Raises:
            InvalidStateError: If the session is not completed.
            UpstreamFailureError: If the model call fails.
            ReportParseError: If the reply is not the expected JSON.
        """
        if record.status is not InterviewStatus.COMPLETED:
            raise InvalidStateError(
                record.status.value,
                detail=f"Interview must be completed before a report can be generated (status: {record.status.value}).",
            )

        pairs = record.conversation.question_answer_pairs(self.question_limit)
        overall_score = self.average_score(record)
        prompt = secure_prompt_manager.get_report_prompt(
            company=record.company,
            role_level=record.roleLevel,
            pairs=pairs,
            overall_score=overall_score,
            final_summary=record.finalSummary,
        )

        raw = await self._complete(prompt)
        try:
            report = self.parse_report(raw)
        except ReportParseError as e:
            logger.error(f"[Session {record.id}] Could not parse report reply: {e.reason}")
            raise

        logger.info(f"[Session {record.id}] Generated report covering {len(report.questionBreakdown)} questions")
        return InterviewReportData(
            interviewId=record.id,
            company=record.company,
            roleLevel=record.roleLevel,
            overallScore=overall_score,
            completedAt=record.completedAt or record.startedAt,
            finalSummary=record.finalSummary or "",
            executiveSummary=report.executiveSummary,
            keyThemes=report.keyThemes,
            topRecommendations=report.topRecommendations,
            questionBreakdown=report.questionBreakdown,
        )
