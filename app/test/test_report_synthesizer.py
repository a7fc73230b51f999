"""
Test Report Synthesizer

Checks score averaging, the prompt sent for a completed interview, strict
parsing of the report JSON and the error raised for anything else.
"""

import json
from datetime import datetime, timezone

import pytest

from app.errors.exceptions import InvalidStateError, ReportParseError, UpstreamFailureError
from app.schemas.mock_interview import (
    ConversationState,
    FeedbackData,
    FeedbackMessage,
    InterviewerMessage,
    InterviewSessionRecord,
    InterviewStatus,
    UserMessage,
)
from app.services.mock_interview.report_synthesizer import ReportSynthesizer
from app.test.fakes import FakeAsyncOpenAI

STARTED = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
COMPLETED = datetime(2024, 3, 1, 9, 40, tzinfo=timezone.utc)

REPORT_JSON = {
    "executiveSummary": "A composed candidate with strong stories.",
    "keyThemes": ["ownership", "clarity"],
    "topRecommendations": ["Quantify impact"],
    "questionBreakdown": [
        {
            "questionIndex": 1,
            "questionText": "Q1",
            "userAnswer": "A1",
            "feedbackText": "Good",
            "score": 7,
            "strengths": ["clear"],
            "improvements": ["numbers"],
            "idealAnswerOpening": "When I joined, the org was split in three.",
        }
    ],
}


def completed_record(scores=(7, 8), **overrides):
    messages = []
    for i, score in enumerate(scores, start=1):
        messages += [
            InterviewerMessage(content=f"Q{i}", questionIndex=i),
            UserMessage(content=f"A{i}"),
            FeedbackMessage(content=f"F{i}", feedbackData=FeedbackData(score=score, strengths=["s"], improvements=["i"])),
        ]
    messages.append(InterviewerMessage(content="Thanks, that concludes the interview."))
    data = dict(
        id="session-1",
        userId="user-1",
        company="Amazon",
        roleLevel="director",
        status=InterviewStatus.COMPLETED,
        conversation=ConversationState(messages=messages),
        totalTurns=len(scores),
        overallScore=80,
        finalSummary="Consistent and clear.",
        startedAt=STARTED,
        completedAt=COMPLETED,
    )
    data.update(overrides)
    return InterviewSessionRecord(**data)


class TestAverageScore:
    @pytest.mark.parametrize("scores, expected", [
        ((7, 8), 80),
        ((7, 7, 8), 70),
        ((10,), 100),
        ((1, 2), 20),
    ])
    def test_mean_rounded_times_ten(self, scores, expected):
        assert ReportSynthesizer.average_score(completed_record(scores)) == expected

    def test_no_feedback_uses_stored_score(self):
        record = completed_record(scores=(), overallScore=64)
        assert ReportSynthesizer.average_score(record) == 64

    def test_no_feedback_and_no_score_defaults(self):
        record = completed_record(scores=(), overallScore=None)
        assert ReportSynthesizer.average_score(record) == 50


class TestGenerate:
    async def test_builds_report_from_model_json(self):
        client = FakeAsyncOpenAI(json.dumps(REPORT_JSON))
        report = await ReportSynthesizer(client).generate(completed_record())

        assert report.interviewId == "session-1"
        assert report.company == "Amazon"
        assert report.roleLevel == "director"
        assert report.overallScore == 80
        assert report.completedAt == COMPLETED
        assert report.finalSummary == "Consistent and clear."
        assert report.keyThemes == ["ownership", "clarity"]
        assert report.questionBreakdown[0].idealAnswerOpening.startswith("When I joined")

    async def test_prompt_contains_transcript_and_score(self):
        client = FakeAsyncOpenAI(json.dumps(REPORT_JSON))
        await ReportSynthesizer(client).generate(completed_record(scores=(6, 9)))

        call = client.calls[0]
        assert "stream" not in call
        prompt = call["messages"][1]["content"]
        assert "Amazon" in prompt
        assert "Director of Engineering" in prompt
        assert "Q1: Q1" in prompt and "Answer: A2" in prompt
        assert "Overall score: 80/100" in prompt
        assert "Consistent and clear." in prompt

    async def test_question_limit_caps_breakdown_input(self):
        client = FakeAsyncOpenAI(json.dumps(REPORT_JSON))
        await ReportSynthesizer(client, question_limit=2).generate(completed_record(scores=(5, 6, 7)))

        prompt = client.calls[0]["messages"][1]["content"]
        assert "Q2: Q2" in prompt
        assert "Q3: Q3" not in prompt

    async def test_missing_completed_at_falls_back_to_started_at(self):
        client = FakeAsyncOpenAI(json.dumps(REPORT_JSON))
        report = await ReportSynthesizer(client).generate(completed_record(completedAt=None, finalSummary=None))
        assert report.completedAt == STARTED
        assert report.finalSummary == ""

    @pytest.mark.parametrize("status", [InterviewStatus.IN_PROGRESS, InterviewStatus.ABANDONED])
    async def test_requires_completed_session(self, status):
        client = FakeAsyncOpenAI()
        with pytest.raises(InvalidStateError):
            await ReportSynthesizer(client).generate(completed_record(status=status))
        assert client.calls == []

    @pytest.mark.parametrize("raw", [
        "Here is your report!",
        "```json\n{}\n```",
        json.dumps({"executiveSummary": "only this"}),
    ])
    async def test_unparseable_reply_carries_raw_text(self, raw):
        client = FakeAsyncOpenAI(raw)
        with pytest.raises(ReportParseError) as exc_info:
            await ReportSynthesizer(client).generate(completed_record())

        assert exc_info.value.status_code == 422
        assert exc_info.value.detail == {"error": "Could not parse AI response", "raw": raw}

    async def test_call_failure_is_upstream_failure(self):
        client = FakeAsyncOpenAI(TimeoutError("timed out"))
        with pytest.raises(UpstreamFailureError):
            await ReportSynthesizer(client).generate(completed_record())
