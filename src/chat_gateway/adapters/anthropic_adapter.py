"""
Anthropic Messages protocol.

The system prompt travels in a dedicated field and authentication uses the
x-api-key header rather than the Bearer scheme.
"""

import logging
from typing import Optional, Set, List, Dict, Any

from pydantic import BaseModel

from ..core.interface import GatewayCapability, WireProtocol, WireRequest
from ..core.registry import ProviderDescriptor, WireFormat
from ..models.request import ChatRequest
from ..models.response import ChatResponse, Usage

logger = logging.getLogger(__name__)


class _ContentBlock(BaseModel):
    type: str
    text: Optional[str] = None


class _Usage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0


class _Message(BaseModel):
    id: Optional[str] = None
    model: Optional[str] = None
    content: List[_ContentBlock] = []
    stop_reason: Optional[str] = None
    usage: Optional[_Usage] = None


class AnthropicMessagesProtocol(WireProtocol):
    """Messages API wire format."""

    MESSAGES_PATH = "/messages"
    ANTHROPIC_VERSION = "2023-06-01"
    # max_tokens is mandatory on this wire format
    DEFAULT_MAX_TOKENS = 2048

    @property
    def wire_format(self) -> WireFormat:
        return WireFormat.ANTHROPIC_MESSAGES

    @property
    def capabilities(self) -> Set[GatewayCapability]:
        return {GatewayCapability.CHAT_COMPLETION}

    def build_request(
        self,
        request: ChatRequest,
        provider: ProviderDescriptor,
        api_key: str,
    ) -> WireRequest:
        # Only the first system message is kept; later ones are dropped.
        system = request.system_prompt()
        dropped = sum(1 for m in request.messages if m.role == "system") - 1
        if dropped > 0:
            logger.debug(f"[{provider.id}] Dropping {dropped} non-leading system message(s)")
        messages = [
            {
                "role": "assistant" if m.role == "assistant" else "user",
                "content": m.content,
            }
            for m in request.conversation()
        ]

        body: Dict[str, Any] = {
            "model": request.model,
            "messages": messages,
            "max_tokens": request.max_tokens or self.DEFAULT_MAX_TOKENS,
            "temperature": request.temperature,
        }

        if system is not None:
            body["system"] = system

        self.merge_hints(body, request, provider)

        return WireRequest(
            path=self.MESSAGES_PATH,
            body=body,
            headers={
                "Content-Type": "application/json",
                "x-api-key": api_key,
                "anthropic-version": self.ANTHROPIC_VERSION,
            },
            unsupported=self.unsupported_features(request),
        )

    def parse_response(self, data: Any, provider: ProviderDescriptor) -> ChatResponse:
        message = _Message.model_validate(data)

        text = next(
            (block.text or "" for block in message.content if block.type == "text"),
            "",
        )

        usage = None
        if message.usage is not None:
            usage = Usage(
                prompt_tokens=message.usage.input_tokens,
                completion_tokens=message.usage.output_tokens,
                total_tokens=message.usage.input_tokens + message.usage.output_tokens,
            )

        return ChatResponse(
            id=message.id,
            model=message.model,
            text=text,
            finish_reason=message.stop_reason,
            usage=usage,
            provider=provider.id,
        )
