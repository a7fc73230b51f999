"""
Description:
Events sent to the client while a turn streams.

A turn produces zero or more TurnTextEvent followed by exactly one terminal
TurnDoneEvent or TurnErrorEvent. Each event is written as one Server-Sent
Events ``data:`` frame.

Dependencies:
- pydantic: For data validation and serialization.
"""
from typing import Literal, Union

from pydantic import BaseModel


class TurnTextEvent(BaseModel):
    text: str


class TurnDoneEvent(BaseModel):
    done: Literal[True] = True
    isComplete: bool


class TurnErrorEvent(BaseModel):
    error: str


TurnEvent = Union[TurnTextEvent, TurnDoneEvent, TurnErrorEvent]


def to_sse_frame(event: TurnEvent) -> str:
    """Encode an event as a Server-Sent Events data frame."""
    return f"data: {event.model_dump_json()}\n\n"
