"""
Canonical chat gateway data models.
"""

from .request import ChatMessage, ChatRequest, FunctionCall, FunctionDefinition, Tool, ToolCall
from .response import ChatResponse, Usage

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "FunctionCall",
    "FunctionDefinition",
    "Tool",
    "ToolCall",
    "ChatResponse",
    "Usage",
]
