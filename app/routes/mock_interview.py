"""
Mock Interview API Routes

Description:
This module defines the FastAPI routes for text-based mock interviews:
opening a session, reading and listing sessions, closing a session early,
streaming a conversational turn over Server-Sent Events and generating the
post-interview report.

Every route is scoped to the authenticated caller. Sessions owned by someone
else are reported as not found.

Arguments:
- request: An instance of Request, required for rate limiting.
- session_id: The mock interview id taken from the path.

Returns:
- JSON session views, counts and reports, or a text/event-stream of turn events.

Dependencies:
- fastapi: For creating routes and streaming responses.
- sqlalchemy: For the request-scoped database session.
- app.core.dependencies: For the caller identity and AI clients.
- app.core.route_limiters: For rate limiting functionality.
- app.services.mock_interview: For the interview operations.
- loguru: For logging information about requests.
"""
from typing import List, Union

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from loguru import logger
from openai import AsyncOpenAI
from sqlalchemy.orm import Session

from app.core.config import RESPOND_RATE_LIMIT
from app.core.dependencies import get_conversation_ai, get_current_user_id, get_question_ai, get_report_ai
from app.core.route_limiters import limiter
from app.database import get_db_session, get_session_factory
from app.schemas.mock_interview import (
    CreateInterviewRequest,
    InterviewCountsResponse,
    InterviewDetailResponse,
    InterviewReportResponse,
    InterviewSummaryResponse,
    RespondRequest,
    UpdateStatusRequest,
    to_sse_frame,
)
from app.services.mock_interview.interview_repository import InterviewRepository
from app.services.mock_interview.mock_interview_service import MockInterviewService
from app.services.mock_interview.opening_question import OpeningQuestionGenerator
from app.services.mock_interview.report_synthesizer import ReportSynthesizer
from app.services.mock_interview.turn_controller import StreamingTurnController

router = APIRouter(
    prefix="/api",
    tags=["mock-interview"],
    responses={404: {"description": "Not found"}}
)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def get_mock_interview_service(db: Session = Depends(get_db_session)) -> MockInterviewService:
    return MockInterviewService(InterviewRepository(db))


@router.get("/mock-interview", response_model=Union[InterviewCountsResponse, List[InterviewSummaryResponse]])
@limiter.limit("60/minute")
async def list_mock_interviews(
    request: Request,
    summary: bool = False,
    user_id: str = Depends(get_current_user_id),
    service: MockInterviewService = Depends(get_mock_interview_service),
):
    """
    List the caller's interviews, newest first.

    With ``?summary=true`` only the total and completed counts are returned.
    """
    if summary:
        total, completed = service.count_interviews(user_id)
        return InterviewCountsResponse(total=total, completed=completed)
    return [InterviewSummaryResponse.from_record(record) for record in service.list_interviews(user_id)]


@router.post("/mock-interview", response_model=InterviewDetailResponse, status_code=201)
@limiter.limit("10/minute")
async def create_mock_interview(
    request: Request,
    body: CreateInterviewRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db_session),
    client: AsyncOpenAI = Depends(get_question_ai),
):
    """
    Open a new interview seeded with its first question.
    """
    service = MockInterviewService(InterviewRepository(db), question_generator=OpeningQuestionGenerator(client))
    record = await service.create_interview(user_id, body)
    return InterviewDetailResponse.from_record(record)


@router.get("/mock-interview/{session_id}", response_model=InterviewDetailResponse)
@limiter.limit("60/minute")
async def get_mock_interview(
    request: Request,
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    service: MockInterviewService = Depends(get_mock_interview_service),
):
    return InterviewDetailResponse.from_record(service.get_interview(session_id, user_id))


@router.patch("/mock-interview/{session_id}", response_model=InterviewDetailResponse)
@limiter.limit("30/minute")
async def update_mock_interview_status(
    request: Request,
    session_id: str,
    body: UpdateStatusRequest,
    user_id: str = Depends(get_current_user_id),
    service: MockInterviewService = Depends(get_mock_interview_service),
):
    """
    Close an in-progress interview as completed or abandoned.
    """
    logger.info(f"[Session {session_id}] Status change to '{body.status}' requested")
    record = service.update_status(session_id, user_id, body.status)
    return InterviewDetailResponse.from_record(record)


@router.post("/mock-interview/{session_id}/complete", response_model=InterviewDetailResponse)
@limiter.limit("30/minute")
async def complete_mock_interview(
    request: Request,
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    service: MockInterviewService = Depends(get_mock_interview_service),
):
    record = service.complete_interview(session_id, user_id)
    return InterviewDetailResponse.from_record(record)


@router.post("/mock-interview/{session_id}/respond")
@limiter.limit(RESPOND_RATE_LIMIT)
async def respond_to_mock_interview(
    request: Request,
    session_id: str,
    body: RespondRequest,
    user_id: str = Depends(get_current_user_id),
    client: AsyncOpenAI = Depends(get_conversation_ai),
    session_factory=Depends(get_session_factory),
):
    """
    Submit an answer and stream the interviewer's reply as Server-Sent Events.

    Each frame is ``data: <json>\\n\\n`` carrying ``{"text": ...}`` fragments,
    then exactly one ``{"done": true, "isComplete": ...}`` or
    ``{"error": ...}``. A closed session, a too-short answer or an unknown
    session is rejected with a plain 4xx before the stream opens.
    """
    controller = StreamingTurnController(client, session_factory)
    controller.precheck(session_id, user_id, body.userAnswer)

    async def event_stream():
        async for event in controller.submit_turn(session_id, user_id, body.userAnswer):
            yield to_sse_frame(event)

    return StreamingResponse(event_stream(), media_type="text/event-stream", headers=SSE_HEADERS)


@router.post("/mock-interview/{session_id}/report", response_model=InterviewReportResponse)
@limiter.limit("10/minute")
async def generate_mock_interview_report(
    request: Request,
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db_session),
    client: AsyncOpenAI = Depends(get_report_ai),
):
    """
    Generate the structured performance report for a completed interview.
    """
    service = MockInterviewService(InterviewRepository(db), report_synthesizer=ReportSynthesizer(client))
    report = await service.generate_report(session_id, user_id)
    return InterviewReportResponse(reportData=report)
