"""
OpenAI-compatible chat completions protocol.

Shared by OpenRouter, OpenAI, Groq and any custom endpoint that speaks
the /chat/completions schema.
"""

from typing import Optional, Set, List, Dict, Any

from pydantic import BaseModel

from ..core.interface import GatewayCapability, WireProtocol, WireRequest
from ..core.registry import ProviderDescriptor, WireFormat
from ..models.request import ChatRequest, ToolCall
from ..models.response import ChatResponse, Usage


class _Message(BaseModel):
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None


class _Choice(BaseModel):
    message: _Message = _Message()
    finish_reason: Optional[str] = None


class _Completion(BaseModel):
    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[_Choice] = []
    usage: Optional[Usage] = None


class OpenAICompatibleProtocol(WireProtocol):
    """Chat completions wire format with Bearer authentication."""

    CHAT_PATH = "/chat/completions"

    @property
    def wire_format(self) -> WireFormat:
        return WireFormat.OPENAI_COMPATIBLE

    @property
    def capabilities(self) -> Set[GatewayCapability]:
        return {
            GatewayCapability.CHAT_COMPLETION,
            GatewayCapability.TOOL_USE,
        }

    def build_request(
        self,
        request: ChatRequest,
        provider: ProviderDescriptor,
        api_key: str,
    ) -> WireRequest:
        body: Dict[str, Any] = {
            "model": request.model,
            "messages": [m.model_dump(exclude_none=True) for m in request.messages],
            "temperature": request.temperature,
            "stream": False,
        }

        if request.max_tokens is not None:
            body["max_tokens"] = request.max_tokens

        if request.tools:
            body["tools"] = [t.model_dump() for t in request.tools]
        if request.tool_choice is not None:
            body["tool_choice"] = request.tool_choice

        if provider.allow_fallbacks:
            body["provider"] = {"allow_fallbacks": True}

        self.merge_hints(body, request, provider)

        return WireRequest(
            path=self.CHAT_PATH,
            body=body,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            unsupported=self.unsupported_features(request),
        )

    def parse_response(self, data: Any, provider: ProviderDescriptor) -> ChatResponse:
        completion = _Completion.model_validate(data)

        if not completion.choices:
            return ChatResponse(
                id=completion.id,
                model=completion.model,
                usage=completion.usage,
                provider=provider.id,
            )

        choice = completion.choices[0]
        return ChatResponse(
            id=completion.id,
            model=completion.model,
            text=choice.message.content or "",
            finish_reason=choice.finish_reason,
            usage=completion.usage,
            tool_calls=choice.message.tool_calls or None,
            provider=provider.id,
        )
