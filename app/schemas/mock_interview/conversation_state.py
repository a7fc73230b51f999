"""
Conversation State Schema

This module defines the ordered, append-only message log of a mock interview
together with the counters derived from it. Appending never mutates an
existing state; it returns a new one, so a turn can be built fully in memory
and discarded if the upstream call fails.

Dependencies:
- pydantic: For data validation.
- app.schemas.mock_interview.messages: For the message union.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.schemas.mock_interview.messages import (
    FeedbackMessage,
    InterviewerMessage,
    Message,
    UserMessage,
)

NO_ANSWER_PLACEHOLDER = "(no answer provided)"


class QuestionAnswerPair(BaseModel):
    """One question with the answer and feedback given for it, matched by position."""
    questionIndex: int
    question: str
    answer: str
    feedback: Optional[FeedbackMessage] = None


class ConversationState(BaseModel):
    """Append-only transcript of a session."""
    messages: List[Message] = Field(default_factory=list)

    @property
    def interviewer_messages(self) -> List[InterviewerMessage]:
        return [m for m in self.messages if m.role == "interviewer"]

    @property
    def user_messages(self) -> List[UserMessage]:
        return [m for m in self.messages if m.role == "user"]

    @property
    def feedback_messages(self) -> List[FeedbackMessage]:
        return [m for m in self.messages if m.role == "feedback"]

    @property
    def question_count(self) -> int:
        """Number of interviewer messages asked so far."""
        return len(self.interviewer_messages)

    @property
    def turn_count(self) -> int:
        """Number of answered questions."""
        return len(self.user_messages)

    @property
    def awaiting_answer(self) -> bool:
        return bool(self.messages) and self.messages[-1].role == "interviewer"

    def append(self, *messages: Message) -> "ConversationState":
        """Return a new state with ``messages`` added at the end."""
        return ConversationState(messages=[*self.messages, *messages])

    def append_turn(
        self,
        answer: UserMessage,
        feedback: FeedbackMessage,
        closing: InterviewerMessage,
    ) -> "ConversationState":
        """
        Return a new state extended by one answer/feedback/interviewer triple.

        Raises:
            ValueError: If the log is not waiting for an answer, which would
                put the feedback out of order.
        """
        if not self.awaiting_answer:
            raise ValueError("Conversation is not waiting for an answer")
        return self.append(answer, feedback, closing)

    def prompt_history(self, new_answer: str) -> List[Dict[str, str]]:
        """
        Replay the transcript as chat turns for the model.

        Interviewer messages become assistant turns and user messages become
        user turns. Feedback messages are not replayed. The new answer is the
        final user turn.
        """
        history: List[Dict[str, str]] = []
        for message in self.messages:
            if message.role == "interviewer":
                history.append({"role": "assistant", "content": message.content})
            elif message.role == "user":
                history.append({"role": "user", "content": message.content})
        history.append({"role": "user", "content": new_answer})
        return history

    def question_answer_pairs(self, limit: int) -> List[QuestionAnswerPair]:
        """Pair the first ``limit`` questions with answers and feedback by position."""
        answers = self.user_messages
        feedback = self.feedback_messages
        pairs = []
        for i, question in enumerate(self.interviewer_messages[:limit]):
            pairs.append(QuestionAnswerPair(
                questionIndex=i + 1,
                question=question.content,
                answer=answers[i].content if i < len(answers) else NO_ANSWER_PLACEHOLDER,
                feedback=feedback[i] if i < len(feedback) else None,
            ))
        return pairs
