"""
Gateway error taxonomy.

Errors are returned inside ``Failure`` results rather than raised to
callers, but they remain ``Exception`` subclasses so a caller may re-raise
one when that suits its control flow.
"""

from typing import Optional


class GatewayError(Exception):
    """Base class for every classified gateway failure."""

    kind = "gateway_error"

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.message = message
        self.provider = provider
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(provider={self.provider!r}, "
            f"status_code={self.status_code!r}, message={self.message!r})"
        )


class UnknownProviderError(GatewayError):
    """Provider id is not in the registry."""

    kind = "unknown_provider"


class TransportError(GatewayError):
    """Connection or timeout failure before any response arrived."""

    kind = "transport_error"


class AuthError(GatewayError):
    """Provider rejected the credentials (401/403), or none were configured."""

    kind = "auth_error"


class RateLimitedError(GatewayError):
    """Provider returned 429."""

    kind = "rate_limited"

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        retry_after: Optional[float] = None,
    ):
        super().__init__(message, provider, status_code, body)
        self.retry_after = retry_after


class ServerError(GatewayError):
    """Provider returned a 5xx status."""

    kind = "server_error"


class ProtocolError(GatewayError):
    """A 2xx response did not match the wire format's schema."""

    kind = "protocol_error"


class UnsupportedFeatureError(GatewayError):
    """The request needs a capability the wire format cannot express."""

    kind = "unsupported_feature"

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        feature: Optional[str] = None,
    ):
        super().__init__(message, provider)
        self.feature = feature


class InvalidRequestError(GatewayError):
    """Request was rejected: canonical validation failed or a non-auth 4xx."""

    kind = "invalid_request"
