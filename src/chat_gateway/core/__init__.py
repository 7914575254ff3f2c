"""
Core gateway components.
"""

from .interface import GatewayCapability, WireProtocol, WireRequest
from .registry import DEFAULT_PROVIDERS, ProviderDescriptor, ProviderRegistry, WireFormat
from .config import GatewayConfig, config_from_env, load_config
from .result import Failure, Result, Success
from .classifier import classify_status, classify_transport
from .errors import (
    GatewayError,
    UnknownProviderError,
    TransportError,
    AuthError,
    RateLimitedError,
    ServerError,
    ProtocolError,
    UnsupportedFeatureError,
    InvalidRequestError,
)

__all__ = [
    "GatewayCapability",
    "WireProtocol",
    "WireRequest",
    "DEFAULT_PROVIDERS",
    "ProviderDescriptor",
    "ProviderRegistry",
    "WireFormat",
    "GatewayConfig",
    "config_from_env",
    "load_config",
    "Failure",
    "Result",
    "Success",
    "classify_status",
    "classify_transport",
    "GatewayError",
    "UnknownProviderError",
    "TransportError",
    "AuthError",
    "RateLimitedError",
    "ServerError",
    "ProtocolError",
    "UnsupportedFeatureError",
    "InvalidRequestError",
]
