"""
Wire protocol implementations, one per wire format.
"""

from typing import Dict

from ..core.interface import WireProtocol
from ..core.registry import WireFormat
from .openai_adapter import OpenAICompatibleProtocol
from .anthropic_adapter import AnthropicMessagesProtocol
from .gemini_adapter import GeminiGenerateProtocol


def default_protocols() -> Dict[WireFormat, WireProtocol]:
    """Protocol table covering every built-in wire format."""
    protocols = [
        OpenAICompatibleProtocol(),
        AnthropicMessagesProtocol(),
        GeminiGenerateProtocol(),
    ]
    return {p.wire_format: p for p in protocols}


__all__ = [
    "OpenAICompatibleProtocol",
    "AnthropicMessagesProtocol",
    "GeminiGenerateProtocol",
    "default_protocols",
]
