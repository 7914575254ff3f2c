"""
Google Gemini generateContent protocol.

Assistant turns use the "model" role, generation parameters live in a
nested generationConfig object, and the API key is a URL query parameter.
httpx logs every request URL at INFO, so a filter on the "httpx" logger
masks the key before any handler sees it.
"""

import logging
import re
from typing import Optional, Set, List, Dict, Any

from pydantic import BaseModel

from ..core.interface import GatewayCapability, WireProtocol, WireRequest
from ..core.registry import ProviderDescriptor, WireFormat
from ..models.request import ChatRequest
from ..models.response import ChatResponse, Usage

logger = logging.getLogger(__name__)

_KEY_PARAM = re.compile(r"([?&]key=)[^&\s\"]+")

ROLE_MAP = {
    "user": "user",
    "assistant": "model",
}


class _QueryKeyFilter(logging.Filter):
    """Mask the key query parameter in log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if "key=" in message:
            record.msg = _KEY_PARAM.sub(r"\1***", message)
            record.args = ()
        return True


logging.getLogger("httpx").addFilter(_QueryKeyFilter())


class _Part(BaseModel):
    text: Optional[str] = None


class _Content(BaseModel):
    parts: List[_Part] = []


class _Candidate(BaseModel):
    content: Optional[_Content] = None
    finishReason: Optional[str] = None


class _UsageMetadata(BaseModel):
    promptTokenCount: int = 0
    candidatesTokenCount: int = 0
    totalTokenCount: int = 0


class _GenerateContentResponse(BaseModel):
    candidates: List[_Candidate] = []
    usageMetadata: Optional[_UsageMetadata] = None
    responseId: Optional[str] = None
    modelVersion: Optional[str] = None


class GeminiGenerateProtocol(WireProtocol):
    """generateContent wire format."""

    @property
    def wire_format(self) -> WireFormat:
        return WireFormat.GEMINI_GENERATE

    @property
    def capabilities(self) -> Set[GatewayCapability]:
        return {GatewayCapability.CHAT_COMPLETION}

    def build_request(
        self,
        request: ChatRequest,
        provider: ProviderDescriptor,
        api_key: str,
    ) -> WireRequest:
        system = request.system_prompt()
        dropped = sum(1 for m in request.messages if m.role == "system") - 1
        if dropped > 0:
            logger.debug(f"[{provider.id}] Dropping {dropped} non-leading system message(s)")
        contents = [
            {
                "role": ROLE_MAP.get(m.role, "user"),
                "parts": [{"text": m.content}],
            }
            for m in request.conversation()
        ]

        generation_config: Dict[str, Any] = {"temperature": request.temperature}
        if request.max_tokens is not None:
            generation_config["maxOutputTokens"] = request.max_tokens

        body: Dict[str, Any] = {
            "contents": contents,
            "generationConfig": generation_config,
        }

        if system is not None:
            body["systemInstruction"] = {"parts": [{"text": system}]}

        self.merge_hints(body, request, provider)

        return WireRequest(
            path=f"/models/{request.model}:generateContent",
            body=body,
            headers={"Content-Type": "application/json"},
            params={"key": api_key},
            unsupported=self.unsupported_features(request),
        )

    def parse_response(self, data: Any, provider: ProviderDescriptor) -> ChatResponse:
        generated = _GenerateContentResponse.model_validate(data)

        text = ""
        finish_reason = None
        if generated.candidates:
            candidate = generated.candidates[0]
            finish_reason = candidate.finishReason
            if candidate.content and candidate.content.parts:
                text = candidate.content.parts[0].text or ""

        usage = None
        if generated.usageMetadata is not None:
            usage = Usage(
                prompt_tokens=generated.usageMetadata.promptTokenCount,
                completion_tokens=generated.usageMetadata.candidatesTokenCount,
                total_tokens=generated.usageMetadata.totalTokenCount,
            )

        return ChatResponse(
            id=generated.responseId,
            model=generated.modelVersion,
            text=text,
            finish_reason=finish_reason,
            usage=usage,
            provider=provider.id,
        )
