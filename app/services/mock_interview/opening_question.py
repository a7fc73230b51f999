"""
Opening Question Service

Asks the model for the first behavioral question of a new mock interview.
"""

from openai import AsyncOpenAI
from loguru import logger

from app.core.config import QUESTION_MAX_TOKENS, QUESTION_MODEL
from app.core.secure_prompt_manager import OPENING_QUESTION_REQUEST, secure_prompt_manager
from app.errors.exceptions import UpstreamFailureError


class OpeningQuestionGenerator:
    def __init__(self, client: AsyncOpenAI, model: str = QUESTION_MODEL, max_tokens: int = QUESTION_MAX_TOKENS):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    async def generate(self, company: str, role_level: str) -> str:
        """
        Returns:
            str: The question text, trimmed.

        Raises:
            UpstreamFailureError: If the call fails or returns no text.
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[
                    {"role": "system", "content": secure_prompt_manager.get_opening_question_prompt(company, role_level)},
                    {"role": "user", "content": OPENING_QUESTION_REQUEST},
                ],
            )
        except Exception as e:
            logger.error(f"Opening question call failed for {company} ({role_level}): {e}")
            raise UpstreamFailureError("Failed to generate the first interview question.") from e

        question = (response.choices[0].message.content or "").strip() if response.choices else ""
        if not question:
            logger.error(f"Empty opening question received for {company} ({role_level})")
            raise UpstreamFailureError("The AI service returned an empty interview question.")
        return question
