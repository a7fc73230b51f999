from .messages import (
    FeedbackData,
    FeedbackMessage,
    InterviewerMessage,
    Message,
    UserMessage,
    dump_messages,
    load_messages,
)
from .conversation_state import ConversationState, QuestionAnswerPair
from .session_record import InterviewSessionRecord, InterviewStatus
from .turn_protocol import InterviewComplete, NextQuestion, ParsedFeedback, ParsedTurn
from .turn_events import TurnDoneEvent, TurnErrorEvent, TurnEvent, TurnTextEvent, to_sse_frame
from .requests import CreateInterviewRequest, RespondRequest, UpdateStatusRequest
from .responses import InterviewCountsResponse, InterviewDetailResponse, InterviewSummaryResponse
from .report import InterviewReportData, InterviewReportResponse, QuestionBreakdown, ReportModelOutput

__all__ = [
    "FeedbackData",
    "FeedbackMessage",
    "InterviewerMessage",
    "Message",
    "UserMessage",
    "dump_messages",
    "load_messages",
    "ConversationState",
    "QuestionAnswerPair",
    "InterviewSessionRecord",
    "InterviewStatus",
    "InterviewComplete",
    "NextQuestion",
    "ParsedFeedback",
    "ParsedTurn",
    "TurnDoneEvent",
    "TurnErrorEvent",
    "TurnEvent",
    "TurnTextEvent",
    "to_sse_frame",
    "CreateInterviewRequest",
    "RespondRequest",
    "UpdateStatusRequest",
    "InterviewCountsResponse",
    "InterviewDetailResponse",
    "InterviewSummaryResponse",
    "InterviewReportData",
    "InterviewReportResponse",
    "QuestionBreakdown",
    "ReportModelOutput",
]
