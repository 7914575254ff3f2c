"""
Shared fixtures: gateways wired to an in-process httpx.MockTransport.
"""
from typing import Callable, List, Optional

import httpx
import pytest

from chat_gateway import ChatGateway, ChatMessage, GatewayConfig
from chat_gateway.core.registry import ProviderRegistry


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def messages():
    return [
        ChatMessage.system("You are helpful"),
        ChatMessage.user("Hello"),
    ]


@pytest.fixture
def make_gateway():
    """Factory returning (gateway, transport) for a provider and handler."""
    def factory(provider: str, handler, registry: Optional[ProviderRegistry] = None, **config_kwargs):
        transport = RecordingTransport(handler)
        client = httpx.AsyncClient(transport=transport)
        config_kwargs.setdefault("api_key", "test-key")
        config = GatewayConfig(provider=provider, **config_kwargs)
        return ChatGateway(config, registry=registry, client=client), transport
    return factory
