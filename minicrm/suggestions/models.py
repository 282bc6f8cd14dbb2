"""Message suggestion models."""

from enum import Enum

from pydantic import BaseModel, Field


class MessageTone(str, Enum):
    """Tone of a suggested campaign message."""

    FRIENDLY = "friendly"
    URGENT = "urgent"
    PROFESSIONAL = "professional"
    PROMOTIONAL = "promotional"


class MessageSuggestion(BaseModel):
    """One candidate campaign message."""

    id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    tone: MessageTone
    reasoning: str = ""
