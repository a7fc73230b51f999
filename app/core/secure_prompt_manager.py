"""
Secure Prompt Manager Module

This module keeps the interviewer and report prompts apart from user data.
Prompts are templates with explicit placeholders, and every value is sanitized
before it is injected.

The module contains:
- PromptTemplate: A dataclass for prompt templates with placeholders
- SecurePromptManager: Builds the prompts used by the mock interview services
- sanitize_text: Utility function for text sanitization

Dependencies:
- dataclasses: For template data structures
- re: For regex-based sanitization
- html: For HTML entity encoding
- loguru: For logging truncation and unknown keys
"""

from typing import Dict, List, Optional
from dataclasses import dataclass, field
import re
import html
from loguru import logger
from app.constants.interview_options import role_title
from app.schemas.mock_interview import QuestionAnswerPair

def sanitize_text(text: str, max_length: int = 1000, escape_html: bool = True) -> str:
    """
    Sanitize text before it is placed in a prompt.

    Steps: optional HTML escaping, whitespace trim, control character removal,
    length limiting and UTF-8 normalization.

    Args:
        text (str): The text to sanitize
        max_length (int): Maximum allowed length (default: 1000)
        escape_html (bool): Whether to HTML escape the text (default: True)

    Returns:
        str: The sanitized text

    Raises:
        ValueError: If text is None or empty after sanitization
    """
    if text is None:
        raise ValueError("Text cannot be None")

    text = str(text)

    if escape_html:
        text = html.escape(text)

    text = text.strip()

    # Remove null bytes and other control characters (except newlines and tabs)
    text = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', text)

    if len(text) > max_length:
        text = text[:max_length]
        logger.warning(f"Text truncated to {max_length} characters for security")

    text = text.encode('utf-8', errors='ignore').decode('utf-8')

    if not text:
        raise ValueError("Text cannot be empty after sanitization")

    return text

@dataclass
class PromptTemplate:
    """Prompt template with placeholders for safe data injection."""
    template: str
    placeholders: Dict[str, str]
    sanitization_config: Dict[str, Dict] = field(default_factory=dict)

    def render(self, **kwargs) -> str:
        """
        Render the template with sanitized values.

        Raises:
            ValueError: If required placeholders are missing or data is invalid
        """
        missing_placeholders = set(self.placeholders.keys()) - set(kwargs.keys())
        if missing_placeholders:
            raise ValueError(f"Missing required placeholders: {missing_placeholders}")

        sanitized_data = {}
        for key, value in kwargs.items():
            if key not in self.placeholders:
                logger.warning(f"Unknown placeholder key: {key}")
                continue
            config = self.sanitization_config.get(key, {})
            sanitized_data[key] = sanitize_text(
                str(value),
                max_length=config.get('max_length', 1000),
                escape_html=config.get('escape_html', True),
            )

        try:
            return self.template.format(**sanitized_data)
        except KeyError as e:
            raise ValueError(f"Template rendering error: {e}") from e


INTERVIEWER_PERSONA = (
    "You are a {company} senior engineering leader conducting a behavioral interview "
    "for a {role_title} of Engineering candidate."
)

FEEDBACK_FORMAT = """---FEEDBACK---
[2-3 sentences of specific coaching feedback on structure, specificity, and executive presence]
FEEDBACK_SCORE: [score 1-10]
STRENGTHS: [comma-separated list of 1-3 strengths]
IMPROVEMENTS: [comma-separated list of 1-3 specific improvements]"""

OPENING_QUESTION_REQUEST = "Please ask your first interview question."

REPORT_SYSTEM_INSTRUCTION = "You are an executive communication expert. Return only valid JSON, no other text."


class SecurePromptManager:
    """Builds every prompt the mock interview services send to the model."""

    def __init__(self):
        self._templates = self._initialize_templates()

    def _initialize_templates(self) -> Dict[str, PromptTemplate]:
        persona_placeholders = {
            "company": "Target company",
            "role_title": "Role title, VP or Director",
        }
        return {
            "opening_question": PromptTemplate(
                template=INTERVIEWER_PERSONA + """
Ask one focused behavioral interview question. Return only the question text, nothing else.
Focus on leadership, influence, strategic thinking, and cross-functional impact.""",
                placeholders=persona_placeholders,
            ),
            "turn_next_question": PromptTemplate(
                template=INTERVIEWER_PERSONA + """

After each answer, provide coaching feedback AND your next question.

Format your response EXACTLY as follows with no deviations:
""" + FEEDBACK_FORMAT + """
---NEXT_QUESTION---
[Your next behavioral interview question]
QUESTION_INDEX: {question_index}""",
                placeholders={**persona_placeholders, "question_index": "Index of the question being asked"},
            ),
            "turn_interview_complete": PromptTemplate(
                template=INTERVIEWER_PERSONA + """

This was the final question. Provide coaching feedback on the answer AND close the interview.

Format your response EXACTLY as follows with no deviations:
""" + FEEDBACK_FORMAT + """
---INTERVIEW_COMPLETE---
[1-2 sentence overall assessment paragraph]
OVERALL_SCORE: [score 0-100]""",
                placeholders=persona_placeholders,
            ),
            "report": PromptTemplate(
                template="""You are an executive communication coach writing a formal interview performance report.

Here is a completed {company} mock interview for a {role_title} of Engineering candidate.

Questions and Answers:
{question_answers}

Overall score: {overall_score}/100
Final summary from interviewer: {final_summary}

Return ONLY valid JSON with this exact shape (no markdown, no code blocks):
{{
  "executiveSummary": "A 2-3 sentence professional summary of the candidate's performance",
  "keyThemes": ["theme1", "theme2", "theme3"],
  "topRecommendations": ["rec1", "rec2", "rec3"],
  "questionBreakdown": [
    {{
      "questionIndex": 1,
      "questionText": "...",
      "userAnswer": "...",
      "feedbackText": "...",
      "score": 7,
      "strengths": ["...", "..."],
      "improvements": ["...", "..."],
      "idealAnswerOpening": "A strong opening line that would anchor a better answer"
    }}
  ]
}}

For questionBreakdown, include all {question_count} questions. Use the existing scores and feedback but enhance the feedbackText and add idealAnswerOpening for each.""",
                placeholders={
                    **persona_placeholders,
                    "question_answers": "Formatted question, answer and feedback blocks",
                    "overall_score": "Average score out of 100",
                    "final_summary": "Closing summary from the interviewer",
                    "question_count": "Number of questions in the breakdown",
                },
                sanitization_config={
                    # Transcript text is prompt data, not markup
                    "question_answers": {"max_length": 30000, "escape_html": False},
                    "final_summary": {"max_length": 4000, "escape_html": False},
                },
            ),
        }

    def get_opening_question_prompt(self, company: str, role_level: str) -> str:
        return self._templates["opening_question"].render(
            company=company,
            role_title=role_title(role_level),
        )

    def get_turn_system_prompt(
        self,
        company: str,
        role_level: str,
        is_final_turn: bool,
        question_index: Optional[int] = None,
    ) -> str:
        """
        Get the interviewer instructions for one turn.

        The final turn asks for the INTERVIEW_COMPLETE block; every other turn
        asks for NEXT_QUESTION with ``question_index``.
        """
        if is_final_turn:
            return self._templates["turn_interview_complete"].render(
                company=company,
                role_title=role_title(role_level),
            )
        if question_index is None:
            raise ValueError("question_index is required for a regular turn")
        return self._templates["turn_next_question"].render(
            company=company,
            role_title=role_title(role_level),
            question_index=question_index,
        )

    @staticmethod
    def format_question_answers(pairs: List[QuestionAnswerPair]) -> str:
        blocks = []
        for pair in pairs:
            data = pair.feedback.feedbackData if pair.feedback else None
            blocks.append(
                f"\nQ{pair.questionIndex}: {pair.question}\n"
                f"Answer: {pair.answer}\n"
                f"Existing score: {data.score if data else None}/10\n"
                f"Existing strengths: {', '.join(data.strengths) if data else ''}\n"
                f"Existing improvements: {', '.join(data.improvements) if data else ''}\n"
            )
        return "\n---\n".join(blocks) or "No questions were answered."

    def get_report_prompt(
        self,
        company: str,
        role_level: str,
        pairs: List[QuestionAnswerPair],
        overall_score: int,
        final_summary: Optional[str],
    ) -> str:
        return self._templates["report"].render(
            company=company,
            role_title=role_title(role_level),
            question_answers=self.format_question_answers(pairs),
            overall_score=overall_score,
            final_summary=final_summary or "None provided",
            question_count=len(pairs),
        )


# Global instance for reuse across the application
secure_prompt_manager = SecurePromptManager()
