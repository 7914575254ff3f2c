"""
Canonical response models for the chat gateway.
"""

from typing import Optional, List
from pydantic import BaseModel

from .request import ToolCall


class Usage(BaseModel):
    """Token usage information."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatResponse(BaseModel):
    """
    Canonical chat completion response.

    ``text`` is always a string; a provider that returned no text yields "".
    """
    id: Optional[str] = None
    model: Optional[str] = None
    text: str = ""
    finish_reason: Optional[str] = None
    usage: Optional[Usage] = None
    tool_calls: Optional[List[ToolCall]] = None

    # Provider that produced this response
    provider: Optional[str] = None

    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)
