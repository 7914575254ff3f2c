"""
Chat gateway facade.

Single entry point that resolves a provider, translates the canonical
request through the provider's wire protocol, performs the HTTP exchange
and returns a uniform ``Result``.
"""

import dataclasses
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

import httpx
from pydantic import ValidationError

from .adapters import default_protocols
from .core.classifier import body_excerpt, classify_status, classify_transport
from .core.config import GatewayConfig
from .core.errors import (
    AuthError,
    InvalidRequestError,
    ProtocolError,
    UnsupportedFeatureError,
)
from .core.interface import GatewayCapability, WireProtocol
from .core.registry import ProviderDescriptor, ProviderRegistry, WireFormat
from .core.result import Failure, Result, Success
from .models.request import ChatMessage, ChatRequest, Tool
from .models.response import ChatResponse

logger = logging.getLogger(__name__)

MessageLike = Union[ChatMessage, Dict[str, Any]]
ToolLike = Union[Tool, Dict[str, Any]]


@dataclass(frozen=True)
class _Route:
    """A provider resolved for one call."""
    provider: ProviderDescriptor
    protocol: WireProtocol
    api_key: str
    model: str


class ChatGateway:
    """
    Multi-provider chat completion gateway.

    Holds only immutable configuration and a shared httpx connection pool,
    so one instance can serve concurrent callers. Every public call returns
    ``Success(ChatResponse)`` or ``Failure(GatewayError)``; nothing is
    raised except task cancellation, which aborts the in-flight request.
    """

    def __init__(
        self,
        config: GatewayConfig,
        registry: Optional[ProviderRegistry] = None,
        protocols: Optional[Mapping[WireFormat, WireProtocol]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the gateway.

        Args:
            config: Provider selection, credentials and timeouts
            registry: Provider table (defaults to the built-in providers)
            protocols: Wire protocol per wire format (defaults to all built-ins)
            client: Pre-built HTTP client; the gateway does not close it
        """
        registry = registry or ProviderRegistry.default()
        if config.providers:
            registry = registry.with_overrides(config.providers)

        self._config = config
        self._registry = registry
        self._protocols: Dict[WireFormat, WireProtocol] = dict(protocols or default_protocols())
        self._client = client
        self._owns_client = client is None

    @property
    def provider_id(self) -> str:
        return self._config.provider

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Create the shared HTTP client."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._config.timeout))
        self._owns_client = True
        logger.info(f"Chat gateway ready (provider={self._config.provider}, timeout={self._config.timeout}s)")

    async def disconnect(self) -> None:
        """Close the shared HTTP client if the gateway created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
            logger.info("Chat gateway closed")

    async def __aenter__(self) -> "ChatGateway":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.disconnect()

    # ------------------------------------------------------------------ #
    #  Public API
    # ------------------------------------------------------------------ #

    async def chat(
        self,
        messages: Sequence[MessageLike],
        temperature: float = 0.7,
        max_tokens: Optional[int] = 2048,
        provider: Optional[str] = None,
    ) -> Result[ChatResponse]:
        """
        Send a plain chat completion.

        Args:
            messages: Full conversation history
            temperature: Sampling temperature
            max_tokens: Completion token limit
            provider: Provider id for this call (defaults to the configured one)

        Returns:
            Success with the normalized response, or a classified Failure
        """
        resolved = self._resolve(provider)
        if isinstance(resolved, Failure):
            return resolved
        route = resolved.value

        built = self._build_request(
            route,
            model=route.model,
            messages=list(messages),
            temperature=temperature,
            max_tokens=max_tokens,
        )
        if isinstance(built, Failure):
            return built

        return await self._dispatch(route, built.value)

    async def chat_with_tools(
        self,
        messages: Sequence[MessageLike],
        tools: Iterable[ToolLike],
        temperature: float = 0.3,
        provider: Optional[str] = None,
    ) -> Result[ChatResponse]:
        """
        Send a chat completion that lets the model call tools.

        Fails with UnsupportedFeatureError, without any network call, when
        the provider's wire format cannot carry tool definitions.
        """
        resolved = self._resolve(provider)
        if isinstance(resolved, Failure):
            return resolved
        route = resolved.value

        if not route.protocol.supports(GatewayCapability.TOOL_USE):
            logger.warning(f"[{route.provider.id}] Tool calling is not supported by {route.provider.wire_format.value}")
            return Failure(UnsupportedFeatureError(
                f"{route.provider.display_name} does not support tool calling",
                provider=route.provider.id,
                feature=GatewayCapability.TOOL_USE.value,
            ))

        built = self._build_request(
            route,
            model=route.model,
            messages=list(messages),
            temperature=temperature,
            tools=list(tools),
            tool_choice="auto",
        )
        if isinstance(built, Failure):
            return built

        return await self._dispatch(route, built.value)

    async def complete(
        self,
        request: ChatRequest,
        provider: Optional[str] = None,
    ) -> Result[ChatResponse]:
        """
        Send a caller-built request.

        An empty ``request.model`` is replaced by the resolved provider's model.
        """
        resolved = self._resolve(provider)
        if isinstance(resolved, Failure):
            return resolved
        route = resolved.value

        if not request.model:
            request = request.model_copy(update={"model": route.model})

        return await self._dispatch(route, request)

    # ------------------------------------------------------------------ #
    #  Internals
    # ------------------------------------------------------------------ #

    def _resolve(self, provider_id: Optional[str]) -> Result[_Route]:
        """Look up provider, protocol, credential and model for one call."""
        provider_id = provider_id or self._config.provider
        is_configured = provider_id == self._config.provider

        found = self._registry.lookup(provider_id)
        if isinstance(found, Failure):
            logger.warning(f"Unknown provider requested: {provider_id}")
            return found
        descriptor = found.value

        if is_configured and self._config.base_url:
            descriptor = dataclasses.replace(descriptor, base_url=self._config.base_url)

        if not descriptor.base_url:
            return Failure(InvalidRequestError(
                f"No base URL configured for {descriptor.display_name}",
                provider=provider_id,
            ))

        protocol = self._protocols.get(descriptor.wire_format)
        if protocol is None:
            return Failure(UnsupportedFeatureError(
                f"No protocol registered for wire format {descriptor.wire_format.value}",
                provider=provider_id,
                feature=descriptor.wire_format.value,
            ))

        api_key = self._config.api_key_for(provider_id)
        if not api_key:
            return Failure(AuthError(
                f"No API key configured for {descriptor.display_name}",
                provider=provider_id,
            ))

        model = (self._config.model if is_configured else None) or descriptor.default_model
        return Success(_Route(provider=descriptor, protocol=protocol, api_key=api_key, model=model))

    def _build_request(self, route: _Route, **fields: Any) -> Result[ChatRequest]:
        try:
            return Success(ChatRequest(**fields))
        except ValidationError as e:
            logger.warning(f"[{route.provider.id}] Invalid chat request: {e}")
            return Failure(InvalidRequestError(
                f"Invalid chat request: {e.error_count()} validation error(s)",
                provider=route.provider.id,
            ))

    async def _dispatch(self, route: _Route, request: ChatRequest) -> Result[ChatResponse]:
        """Translate, send and normalize one request."""
        provider = route.provider
        wire = route.protocol.build_request(request, provider, route.api_key)

        if wire.unsupported:
            features = ", ".join(c.value for c in wire.unsupported)
            logger.warning(f"[{provider.id}] Request uses unsupported feature(s): {features}")
            return Failure(UnsupportedFeatureError(
                f"{provider.display_name} cannot express: {features}",
                provider=provider.id,
                feature=wire.unsupported[0].value,
            ))

        try:
            content = json.dumps(wire.body)
        except (TypeError, ValueError) as e:
            logger.warning(f"[{provider.id}] Request body is not JSON-encodable: {e}")
            return Failure(InvalidRequestError(
                f"Request body is not JSON-encodable: {e}",
                provider=provider.id,
            ))

        if self._client is None:
            await self.connect()

        url = provider.base_url.rstrip("/") + wire.path
        try:
            response = await self._client.post(
                url,
                content=content,
                headers=wire.headers,
                params=wire.params,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error = classify_transport(provider.id, e)
            logger.warning(f"[{provider.display_name}] {error.message}")
            return Failure(error)

        if not response.is_success:
            error = classify_status(
                provider.id,
                response.status_code,
                body=response.text,
                headers=response.headers,
            )
            logger.warning(f"[{provider.display_name}] Error {response.status_code}: {body_excerpt(response.text)}")
            return Failure(error)

        try:
            data = response.json()
        except ValueError:
            logger.warning(f"[{provider.display_name}] Response body is not JSON")
            return Failure(ProtocolError(
                "Response body is not valid JSON",
                provider=provider.id,
                status_code=response.status_code,
                body=body_excerpt(response.text),
            ))

        result = route.protocol.normalize(data, provider)
        if isinstance(result, Success):
            logger.debug(f"[{provider.display_name}] Response: {result.value.text[:100]}...")
        else:
            result.error.status_code = response.status_code
            result.error.body = body_excerpt(response.text)
        return result
