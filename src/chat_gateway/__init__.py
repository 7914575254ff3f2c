"""
Chat Gateway

One canonical chat interface over several LLM wire formats:
- OpenAI-compatible chat completions (OpenRouter, OpenAI, Groq, custom)
- Anthropic Messages
- Google Gemini generateContent

Every call returns Success(ChatResponse) or Failure(GatewayError).
"""

from .gateway import ChatGateway
from .core.interface import GatewayCapability, WireProtocol, WireRequest
from .core.registry import ProviderDescriptor, ProviderRegistry, WireFormat
from .core.config import GatewayConfig, load_config
from .core.result import Failure, Result, Success
from .core.errors import GatewayError
from .models.request import ChatMessage, ChatRequest, FunctionCall, FunctionDefinition, Tool, ToolCall
from .models.response import ChatResponse, Usage

__all__ = [
    "ChatGateway",
    "GatewayCapability",
    "WireProtocol",
    "WireRequest",
    "ProviderDescriptor",
    "ProviderRegistry",
    "WireFormat",
    "GatewayConfig",
    "load_config",
    "Failure",
    "Result",
    "Success",
    "GatewayError",
    "ChatMessage",
    "ChatRequest",
    "FunctionCall",
    "FunctionDefinition",
    "Tool",
    "ToolCall",
    "ChatResponse",
    "Usage",
]
