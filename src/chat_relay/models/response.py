"""
Canonical response models and the envelopes returned to callers.
"""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field


class Usage(BaseModel):
    """Token usage information."""
    prompt_tokens: int = Field(default=0, alias="promptTokens")
    completion_tokens: int = Field(default=0, alias="completionTokens")
    total_tokens: int = Field(default=0, alias="totalTokens")

    class Config:
        populate_by_name = True

    @classmethod
    def from_counts(
        cls,
        prompt_tokens: Optional[int],
        completion_tokens: Optional[int],
        total_tokens: Optional[int] = None,
    ) -> "Usage":
        """
        Build usage from vendor counters.

        Missing counters become 0. When the vendor does not report a
        total, it is the sum of the two components.
        """
        prompt = prompt_tokens or 0
        completion = completion_tokens or 0
        total = total_tokens if total_tokens is not None else prompt + completion
        return cls(
            prompt_tokens=prompt,
            completion_tokens=completion,
            total_tokens=total,
        )


class ChatResult(BaseModel):
    """Normalized result of a single adapter chat call."""
    content: str
    model: str
    usage: Usage = Field(default_factory=Usage)


class ChatEnvelope(BaseModel):
    """Success body of ``POST /chat``."""
    provider: str
    model: str
    message: str
    usage: Usage

    @classmethod
    def from_result(cls, provider: str, result: ChatResult) -> "ChatEnvelope":
        return cls(
            provider=provider,
            model=result.model,
            message=result.content,
            usage=result.usage,
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ErrorEnvelope(BaseModel):
    """Error body shared by every failure path."""
    error: str
    message: Optional[str] = None
    available_providers: Optional[List[str]] = Field(
        default=None, alias="availableProviders"
    )

    class Config:
        populate_by_name = True

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
