"""
Streaming Turn Controller Module

This module drives one conversational turn of a mock interview:

1. Reject the turn before any model call if the session is closed or the
   answer is too short.
2. Ask the model for feedback plus the next question (or the closing block on
   the final turn) and forward each text fragment to the caller as it arrives.
3. When the stream ends, parse the full reply once and commit the user answer,
   the feedback and the next interviewer message in a single write.

If the model call fails, the stream breaks, the caller disconnects, or another
writer commits first, nothing is saved and the session stays exactly as it
was. Turns on the same session are serialized by a per-session lock held from
the reload until the commit.

Dependencies:
- openai: For the streaming chat completion.
- loguru: For logging operations.
- fastapi: For HTTPException, the base of the precondition errors.
- app.helper.extract_turn_protocol: For parsing the reply.
- app.services.mock_interview: For the repository, state machine and locks.
"""

from contextlib import aclosing
from typing import AsyncIterator, Callable, Dict, List

from fastapi import HTTPException
from loguru import logger
from openai import AsyncOpenAI
from sqlalchemy.orm import Session

from app.core.config import CONVERSATION_MODEL, MIN_ANSWER_LENGTH, TURN_MAX_TOKENS
from app.core.secure_prompt_manager import secure_prompt_manager
from app.errors.exceptions import InvalidInputError, SessionConflictError, UpstreamFailureError
from app.helper.extract_turn_protocol import extract_turn_protocol
from app.schemas.mock_interview import (
    InterviewSessionRecord,
    TurnDoneEvent,
    TurnErrorEvent,
    TurnEvent,
    TurnTextEvent,
)
from app.services.mock_interview.interview_repository import InterviewRepository
from app.services.mock_interview.session_locks import SessionLockRegistry, session_locks
from app.services.mock_interview.session_machine import InterviewSessionMachine


class StreamingTurnController:
    """
    Runs one streamed interview turn and commits it atomically.

    Attributes:
        client (AsyncOpenAI): Client used for the streaming completion.
        session_factory: Callable returning a new SQLAlchemy session.
        machine (InterviewSessionMachine): Lifecycle rules and question cap.
        locks (SessionLockRegistry): Per-session serialization.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        session_factory: Callable[[], Session],
        machine: InterviewSessionMachine = None,
        locks: SessionLockRegistry = None,
        model: str = CONVERSATION_MODEL,
        max_tokens: int = TURN_MAX_TOKENS,
        min_answer_length: int = MIN_ANSWER_LENGTH,
    ):
        self.client = client
        self.session_factory = session_factory
        self.machine = machine or InterviewSessionMachine()
        self.locks = locks or session_locks
        self.model = model
        self.max_tokens = max_tokens
        self.min_answer_length = min_answer_length

    def validate_answer(self, answer: str) -> str:
        """
        Returns:
            str: The answer with surrounding whitespace removed.

        Raises:
            InvalidInputError: If the answer is empty or shorter than the minimum.
        """
        if not isinstance(answer, str) or len(answer.strip()) < self.min_answer_length:
            raise InvalidInputError(
                f"userAnswer is required and must be at least {self.min_answer_length} characters"
            )
        return answer.strip()

    def _load(self, session_id: str, user_id: str) -> InterviewSessionRecord:
        with self.session_factory() as db:
            return InterviewRepository(db).load_owned(session_id, user_id)

    def _save(self, record: InterviewSessionRecord) -> InterviewSessionRecord:
        with self.session_factory() as db:
            return InterviewRepository(db).save(record)

    def precheck(self, session_id: str, user_id: str, answer: str) -> InterviewSessionRecord:
        """
        Validate a turn request without touching the model.

        Used by the route so that a closed session or a short answer is a
        plain 4xx response rather than an error inside an open stream.

        Raises:
            InterviewNotFound, InvalidStateError, InvalidInputError
        """
        record = self._load(session_id, user_id)
        self.machine.ensure_accepts_turn(record)
        self.validate_answer(answer)
        return record

    def build_messages(self, record: InterviewSessionRecord, answer: str, is_final_turn: bool) -> List[Dict[str, str]]:
        system_prompt = secure_prompt_manager.get_turn_system_prompt(
            company=record.company,
            role_level=record.roleLevel,
            is_final_turn=is_final_turn,
            question_index=None if is_final_turn else self.machine.next_question_index(record),
        )
        return [{"role": "system", "content": system_prompt}, *record.conversation.prompt_history(answer)]

    async def stream_completion(self, messages: List[Dict[str, str]]) -> AsyncIterator[str]:
        """Yield non-empty text deltas from one streaming chat completion."""
        stream = await self.client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=messages,
            stream=True,
        )
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                text = chunk.choices[0].delta.content
                if text:
                    yield text
        finally:
            await stream.close()

    async def submit_turn(self, session_id: str, user_id: str, answer: str) -> AsyncIterator[TurnEvent]:
        """
        Run one turn and yield events for the caller.

        Yields zero or more TurnTextEvent, then exactly one TurnDoneEvent or
        TurnErrorEvent. Closing the iterator early cancels the turn without
        saving anything.
        """
        async with self.locks.hold(session_id):
            # State may have moved while this turn waited for the lock
            try:
                record = self._load(session_id, user_id)
                self.machine.ensure_accepts_turn(record)
                answer = self.validate_answer(answer)
            except HTTPException as e:
                yield TurnErrorEvent(error=str(e.detail))
                return

            is_final_turn = self.machine.is_final_turn(record)
            messages = self.build_messages(record, answer, is_final_turn)
            logger.debug(
                f"[Session {session_id}] Streaming turn {record.totalTurns + 1} "
                f"({'closing' if is_final_turn else 'next question'}) with {len(messages)} messages"
            )

            fragments: List[str] = []
            try:
                async with aclosing(self.stream_completion(messages)) as stream:
                    async for text in stream:
                        fragments.append(text)
                        yield TurnTextEvent(text=text)
            except Exception as e:
                logger.error(f"[Session {session_id}] Streaming error, turn discarded: {e}")
                yield TurnErrorEvent(error=UpstreamFailureError().detail)
                return

            full_text = "".join(fragments)
            logger.debug(f"[Session {session_id}] Stream finished with {len(full_text)} chars")

            parsed = extract_turn_protocol(
                full_text,
                expect_complete=is_final_turn,
                expected_index=None if is_final_turn else self.machine.next_question_index(record),
            )
            next_record = self.machine.apply_turn(record, answer, parsed, is_final_turn)

            try:
                self._save(next_record)
            except SessionConflictError as e:
                yield TurnErrorEvent(error=str(e.detail))
                return
            except Exception as e:
                logger.error(f"[Session {session_id}] Failed to save turn: {e}")
                yield TurnErrorEvent(error="Failed to save interview turn.")
                return

            logger.info(
                f"[Session {session_id}] Committed turn {next_record.totalTurns} "
                f"(score {parsed.feedback.score}, status {next_record.status.value})"
            )
            yield TurnDoneEvent(isComplete=is_final_turn)
