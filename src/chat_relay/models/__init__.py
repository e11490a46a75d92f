"""
Chat relay data models.
"""

from .request import ChatRequest, ChatOptions, Message
from .response import ChatResult, ChatEnvelope, ErrorEnvelope, Usage

__all__ = [
    "ChatRequest",
    "ChatOptions",
    "Message",
    "ChatResult",
    "ChatEnvelope",
    "ErrorEnvelope",
    "Usage",
]
