"""
Description:
Extract structured feedback and the next step from one interviewer reply.

The interviewer model is asked to answer in a fixed line protocol (see
app.core.secure_prompt_manager). Models drift from instructions, so every
field here degrades to a default instead of raising: a reply with no usable
structure still yields score 5, empty lists and empty text.

Arguments:
- content: The complete reply text.
- expect_complete: True for the closing turn, False for a regular turn, None to
  decide from the headers present in the text.
- expected_index: Question index to report when the reply omits QUESTION_INDEX.

Returns:
- A ParsedTurn with the feedback and either a NextQuestion or an InterviewComplete.

Dependencies:
- app.constants.regex_patterns: For the precompiled protocol patterns.
- app.schemas.mock_interview.turn_protocol: For the result types.
- loguru: For logging defaulted fields.
"""
from typing import List, Optional

from loguru import logger

from app.constants.regex_patterns import REGEX_PATTERNS
from app.schemas.mock_interview.turn_protocol import (
    InterviewComplete,
    NextQuestion,
    ParsedFeedback,
    ParsedTurn,
)

DEFAULT_FEEDBACK_SCORE = 5


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def extract_int(pattern: str, text: str) -> Optional[int]:
    match = REGEX_PATTERNS[pattern].search(text)
    if match:
        try:
            return int(match.group(1))
        except ValueError:
            return None
    return None


def extract_list(pattern: str, text: str) -> List[str]:
    match = REGEX_PATTERNS[pattern].search(text)
    if match:
        return [item.strip() for item in match.group(1).split(',') if item.strip()]
    return []


def extract_section(pattern: str, text: str) -> str:
    match = REGEX_PATTERNS[pattern].search(text)
    if match:
        return match.group(1).strip()
    return ""


def extract_feedback(content: str) -> ParsedFeedback:
    """Read the FEEDBACK section: score, strengths, improvements and the remaining prose."""
    section = extract_section('feedback_section', content)

    score = extract_int('feedback_score', section)
    if score is None:
        logger.warning("FEEDBACK_SCORE missing from interviewer reply, defaulting to 5")
        score = DEFAULT_FEEDBACK_SCORE
    score = _clamp(score, 1, 10)

    stripped = REGEX_PATTERNS['labeled_lines'].sub("", section)
    text = "\n".join(line.rstrip() for line in stripped.splitlines() if line.strip()).strip()

    return ParsedFeedback(
        text=text,
        score=score,
        strengths=extract_list('strengths', section),
        improvements=extract_list('improvements', section),
    )


def extract_next_question(content: str, expected_index: Optional[int] = None) -> NextQuestion:
    index = extract_int('question_index', content)
    return NextQuestion(
        text=extract_section('next_question', content),
        index=index if index is not None else expected_index,
    )


def extract_interview_complete(content: str) -> InterviewComplete:
    overall = extract_int('overall_score', content)
    return InterviewComplete(
        summary=extract_section('interview_complete', content),
        overallScore=_clamp(overall, 0, 100) if overall is not None else None,
    )


def _is_closing_reply(content: str) -> bool:
    has_complete = REGEX_PATTERNS['interview_complete_header'].search(content) is not None
    has_next = REGEX_PATTERNS['next_question_header'].search(content) is not None
    return has_complete and not has_next


def extract_turn_protocol(
    content: str,
    expect_complete: Optional[bool] = None,
    expected_index: Optional[int] = None,
) -> ParsedTurn:
    """Parse one interviewer reply. Never raises."""
    if not isinstance(content, str):
        content = "" if content is None else str(content)

    closing = _is_closing_reply(content) if expect_complete is None else expect_complete

    try:
        feedback = extract_feedback(content)
        if closing:
            return ParsedTurn(feedback=feedback, next=extract_interview_complete(content))
        return ParsedTurn(feedback=feedback, next=extract_next_question(content, expected_index))
    except Exception as e:
        # Pydantic rejecting an out-of-range value is the only realistic path here.
        logger.error(f"An unexpected error occurred while parsing interviewer reply: {e}")
        next_step = InterviewComplete() if closing else NextQuestion(index=expected_index)
        return ParsedTurn(feedback=ParsedFeedback(), next=next_step)
