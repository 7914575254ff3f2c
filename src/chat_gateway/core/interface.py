"""
Wire protocol interface definition.

Defines the contract each wire format implements: translating a canonical
request into the provider's native HTTP request, and normalizing the
provider's success body back into a canonical response.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Set, Tuple

from pydantic import ValidationError

from .errors import ProtocolError
from .registry import ProviderDescriptor, WireFormat
from .result import Failure, Result, Success
from ..models.request import ChatRequest
from ..models.response import ChatResponse

logger = logging.getLogger(__name__)


class GatewayCapability(str, Enum):
    """Capabilities that a wire protocol may support."""
    CHAT_COMPLETION = "chat_completion"
    STREAMING = "streaming"
    TOOL_USE = "tool_use"


@dataclass
class WireRequest:
    """A translated, ready-to-send provider request."""
    path: str
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)
    # Requested capabilities the wire format could not express
    unsupported: Tuple[GatewayCapability, ...] = ()


class WireProtocol(ABC):
    """
    Abstract base class for wire format implementations.

    One instance serves every provider that shares the wire format, so
    implementations hold no per-call state.
    """

    @property
    @abstractmethod
    def wire_format(self) -> WireFormat:
        """Wire format this protocol speaks."""
        pass

    @property
    @abstractmethod
    def capabilities(self) -> Set[GatewayCapability]:
        """Capabilities this wire format can express."""
        pass

    @abstractmethod
    def build_request(
        self,
        request: ChatRequest,
        provider: ProviderDescriptor,
        api_key: str,
    ) -> WireRequest:
        """
        Translate a canonical request into the provider's native request.

        Args:
            request: Canonical chat request
            provider: Descriptor of the target provider
            api_key: Credential for the provider

        Returns:
            Wire request; ``unsupported`` lists requested capabilities that
            were not translated
        """
        pass

    @abstractmethod
    def parse_response(self, data: Any, provider: ProviderDescriptor) -> ChatResponse:
        """
        Normalize a provider success body into a canonical response.

        Raises:
            pydantic.ValidationError: If the body does not match the wire schema
        """
        pass

    def normalize(self, data: Any, provider: ProviderDescriptor) -> Result[ChatResponse]:
        """Normalize a success body, reporting schema mismatches as ProtocolError."""
        try:
            response = self.parse_response(data, provider)
        except ValidationError as e:
            logger.warning(f"[{provider.id}] Response did not match {self.wire_format.value} schema: {e}")
            return Failure(ProtocolError(
                f"Unexpected {self.wire_format.value} response: {e.error_count()} validation error(s)",
                provider=provider.id,
            ))
        return Success(response)

    def supports(self, capability: GatewayCapability) -> bool:
        return capability in self.capabilities

    def unsupported_features(self, request: ChatRequest) -> Tuple[GatewayCapability, ...]:
        """Capabilities the request asks for that this wire format lacks."""
        wanted = []
        if request.tools:
            wanted.append(GatewayCapability.TOOL_USE)
        if request.stream:
            wanted.append(GatewayCapability.STREAMING)
        return tuple(c for c in wanted if not self.supports(c))

    def merge_hints(self, body: Dict[str, Any], request: ChatRequest, provider: ProviderDescriptor) -> None:
        """Merge provider hints into a wire body without replacing translated fields."""
        for key, value in (request.provider_hints or {}).items():
            if key in body:
                logger.warning(f"[{provider.id}] Ignoring provider hint {key!r}: field already set")
                continue
            body[key] = value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(wire_format={self.wire_format.value!r})"
