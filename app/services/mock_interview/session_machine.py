"""
Interview Session Machine Module

This module governs the lifecycle of a mock interview:

    in_progress --submit_turn--> in_progress
    in_progress --submit_turn (final question answered)--> completed
    in_progress --force_close(completed | abandoned)--> completed | abandoned

``completed`` and ``abandoned`` are terminal. Every transition returns a new
InterviewSessionRecord built entirely in memory; the caller persists it with a
single repository write.

Dependencies:
- loguru: For logging transitions.
- app.schemas.mock_interview: For records, messages and parsed turns.
- app.errors.exceptions: For invalid-state errors.
- app.core.config: For the question cap.
"""

from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from app.core.config import MAX_INTERVIEW_QUESTIONS
from app.errors.exceptions import InvalidStateError, ValidationError
from app.schemas.mock_interview import (
    FeedbackData,
    FeedbackMessage,
    InterviewerMessage,
    InterviewSessionRecord,
    InterviewStatus,
    ParsedTurn,
    UserMessage,
)

CLOSING_FALLBACK = "Interview complete."
NEXT_QUESTION_FALLBACK = (
    "Let's keep going. Tell me about another time you had to lead your organization "
    "through a difficult decision. What did you do and what was the outcome?"
)

CLOSE_REASONS = (InterviewStatus.COMPLETED, InterviewStatus.ABANDONED)


class InterviewSessionMachine:
    """State transitions for a single mock interview."""

    def __init__(self, max_questions: int = MAX_INTERVIEW_QUESTIONS):
        if max_questions < 1:
            raise ValueError("max_questions must be at least 1")
        self.max_questions = max_questions

    def ensure_accepts_turn(self, record: InterviewSessionRecord) -> None:
        """
        Raises:
            InvalidStateError: If the session is not in progress.
        """
        if record.status.is_terminal:
            logger.warning(f"[Session {record.id}] Turn rejected in status {record.status.value}")
            raise InvalidStateError(record.status.value)

    def is_final_turn(self, record: InterviewSessionRecord) -> bool:
        """True once the last allowed question has been asked and is awaiting its answer."""
        return record.conversation.question_count >= self.max_questions

    def next_question_index(self, record: InterviewSessionRecord) -> int:
        return record.conversation.question_count + 1

    def apply_turn(
        self,
        record: InterviewSessionRecord,
        answer: str,
        parsed: ParsedTurn,
        is_final_turn: bool,
        now: Optional[datetime] = None,
    ) -> InterviewSessionRecord:
        """
        Build the record that results from committing one turn.

        Appends the user answer, the feedback and either the next question or
        the closing statement, increments ``totalTurns`` and, on the final
        turn, moves to ``completed`` with the overall score and summary.
        """
        self.ensure_accepts_turn(record)
        now = now or datetime.now(timezone.utc)

        user_message = UserMessage(content=answer, timestamp=now)
        feedback_message = FeedbackMessage(
            content=parsed.feedback.text,
            timestamp=now,
            feedbackData=FeedbackData(
                score=parsed.feedback.score,
                strengths=parsed.feedback.strengths,
                improvements=parsed.feedback.improvements,
            ),
        )

        update = {"totalTurns": record.totalTurns + 1}

        if is_final_turn:
            summary = parsed.next.summary if parsed.next.kind == "complete" else ""
            overall = parsed.next.overallScore if parsed.next.kind == "complete" else None
            closing_message = InterviewerMessage(content=summary or CLOSING_FALLBACK, timestamp=now)
            update.update(
                status=InterviewStatus.COMPLETED,
                overallScore=overall,
                finalSummary=summary,
                completedAt=now,
            )
        else:
            index = self.next_question_index(record)
            question = parsed.next.text if parsed.next.kind == "question" else ""
            if not question:
                logger.warning(f"[Session {record.id}] Reply had no next question, using fallback")
                question = NEXT_QUESTION_FALLBACK
            elif parsed.next.index is not None and parsed.next.index != index:
                logger.warning(
                    f"[Session {record.id}] Model reported question index {parsed.next.index}, expected {index}"
                )
            closing_message = InterviewerMessage(content=question, timestamp=now, questionIndex=index)

        update["conversation"] = record.conversation.append_turn(user_message, feedback_message, closing_message)
        next_record = record.model_copy(update=update)

        if is_final_turn:
            logger.info(f"[Session {record.id}] Interview completed after {next_record.totalTurns} turns")
        return next_record

    def force_close(
        self,
        record: InterviewSessionRecord,
        reason: InterviewStatus,
        now: Optional[datetime] = None,
    ) -> InterviewSessionRecord:
        """
        Close an in-progress session without a model call.

        Raises:
            ValidationError: If ``reason`` is not completed or abandoned.
            InvalidStateError: If the session is already closed.
        """
        try:
            reason = InterviewStatus(reason)
        except ValueError:
            raise ValidationError("Invalid status")
        if reason not in CLOSE_REASONS:
            raise ValidationError("Invalid status")
        if record.status.is_terminal:
            logger.warning(f"[Session {record.id}] Close to {reason.value} rejected in status {record.status.value}")
            raise InvalidStateError(record.status.value)

        logger.info(f"[Session {record.id}] Closed as {reason.value}")
        return record.model_copy(update={
            "status": reason,
            "completedAt": now or datetime.now(timezone.utc),
        })
