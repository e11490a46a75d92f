"""
Canonical request models for the chat relay.
"""

from typing import Optional, List, Dict, Any, Literal
from pydantic import BaseModel, Field


class Message(BaseModel):
    """
    Provider-agnostic chat message.

    Conversation order is significant; adapters translate
    the role into the vendor's own vocabulary.
    """
    role: Literal["system", "user", "assistant"]
    content: str


class ChatOptions(BaseModel):
    """
    Per-call overrides.

    Every field is optional. Absent fields are filled in by the
    adapter from its own defaults, never by the gateway.
    """
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = Field(default=None, alias="maxTokens", ge=1)

    class Config:
        populate_by_name = True


class ChatRequest(BaseModel):
    """
    Inbound chat request as accepted by the gateway.
    """
    messages: List[Message] = Field(..., min_length=1)
    provider: str = "openai"
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = Field(default=None, alias="maxTokens", ge=1)

    class Config:
        populate_by_name = True
        extra = "ignore"

    def to_options(self) -> ChatOptions:
        """Copy only the option fields the caller actually set."""
        present: Dict[str, Any] = {}
        if self.model:
            present["model"] = self.model
        if self.temperature is not None:
            present["temperature"] = self.temperature
        if self.max_tokens is not None:
            present["max_tokens"] = self.max_tokens
        return ChatOptions(**present)
