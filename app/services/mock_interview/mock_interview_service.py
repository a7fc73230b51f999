"""
Mock Interview Service Module

This module implements the non-streaming operations on mock interviews:
opening a session, listing and reading sessions, closing a session early and
generating the post-interview report. Streaming turns live in
StreamingTurnController.

Example Usage:
    service = MockInterviewService(InterviewRepository(db), question_generator, report_synthesizer)
    record = await service.create_interview("uid-1", CreateInterviewRequest(company="Google", roleLevel="vp"))
    record = service.update_status(record.id, "uid-1", "abandoned")

Dependencies:
- loguru: For logging operations.
- app.services.mock_interview: For the repository, state machine, question generator and report synthesizer.
- app.errors.exceptions: For validation and state errors.
"""

from typing import List, Tuple

from loguru import logger

from app.constants.interview_options import VALID_COMPANIES, VALID_ROLE_LEVELS
from app.errors.exceptions import ValidationError
from app.schemas.mock_interview import (
    CreateInterviewRequest,
    InterviewerMessage,
    InterviewReportData,
    InterviewSessionRecord,
    InterviewStatus,
)
from app.services.mock_interview.interview_repository import InterviewRepository
from app.services.mock_interview.opening_question import OpeningQuestionGenerator
from app.services.mock_interview.report_synthesizer import ReportSynthesizer
from app.services.mock_interview.session_machine import InterviewSessionMachine


class MockInterviewService:
    """Session lifecycle operations that do not stream."""

    def __init__(
        self,
        repository: InterviewRepository,
        question_generator: OpeningQuestionGenerator = None,
        report_synthesizer: ReportSynthesizer = None,
        machine: InterviewSessionMachine = None,
    ):
        self.repository = repository
        self.question_generator = question_generator
        self.report_synthesizer = report_synthesizer
        self.machine = machine or InterviewSessionMachine()

    async def create_interview(self, user_id: str, request: CreateInterviewRequest) -> InterviewSessionRecord:
        """
        Open a new interview seeded with the model's first question.

        Raises:
            ValidationError: If the company or role level is not offered.
            UpstreamFailureError: If the first question cannot be generated.
        """
        if request.company not in VALID_COMPANIES:
            raise ValidationError("Invalid company")
        if request.roleLevel not in VALID_ROLE_LEVELS:
            raise ValidationError("Invalid roleLevel (must be director or vp)")

        question = await self.question_generator.generate(request.company, request.roleLevel)
        seed = InterviewerMessage(content=question, questionIndex=1)
        return self.repository.create(user_id, request.company, request.roleLevel, [seed])

    def list_interviews(self, user_id: str) -> List[InterviewSessionRecord]:
        return self.repository.list_for_user(user_id)

    def count_interviews(self, user_id: str) -> Tuple[int, int]:
        return self.repository.count_for_user(user_id)

    def get_interview(self, session_id: str, user_id: str) -> InterviewSessionRecord:
        return self.repository.load_owned(session_id, user_id)

    def update_status(self, session_id: str, user_id: str, status: str) -> InterviewSessionRecord:
        """
        Apply a client-requested status change.

        ``completed`` and ``abandoned`` close an in-progress session.
        ``in_progress`` is accepted only when the session already is in
        progress, and then changes nothing.

        Raises:
            ValidationError: If ``status`` is not a known status.
            InvalidStateError: If the session is already closed.
        """
        try:
            target = InterviewStatus(status)
        except ValueError:
            raise ValidationError("Invalid status")

        record = self.repository.load_owned(session_id, user_id)
        if target is InterviewStatus.IN_PROGRESS:
            self.machine.ensure_accepts_turn(record)
            return record

        closed = self.machine.force_close(record, target)
        return self.repository.save(closed)

    def complete_interview(self, session_id: str, user_id: str) -> InterviewSessionRecord:
        return self.update_status(session_id, user_id, InterviewStatus.COMPLETED.value)

    async def generate_report(self, session_id: str, user_id: str) -> InterviewReportData:
        record = self.repository.load_owned(session_id, user_id)
        logger.info(f"[Session {session_id}] Generating interview report")
        return await self.report_synthesizer.generate(record)
