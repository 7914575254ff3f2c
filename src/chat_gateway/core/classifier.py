"""
Error classification for provider responses and transport failures.
"""

from typing import Mapping, Optional

import httpx

from .errors import (
    AuthError,
    GatewayError,
    InvalidRequestError,
    RateLimitedError,
    ServerError,
    TransportError,
)

MAX_BODY_EXCERPT = 2000


def body_excerpt(text: Optional[str]) -> Optional[str]:
    """Truncate a raw response body for diagnostics."""
    if text is None:
        return None
    if len(text) <= MAX_BODY_EXCERPT:
        return text
    return text[:MAX_BODY_EXCERPT] + "..."


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    # Only the delta-seconds form is honoured; HTTP-date values are dropped.
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def classify_status(
    provider: str,
    status_code: int,
    body: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> GatewayError:
    """
    Map a non-2xx HTTP status to a gateway error.

    Args:
        provider: Provider id the response came from
        status_code: HTTP status code
        body: Raw response body, if any
        headers: Response headers (used for Retry-After)

    Returns:
        Classified error carrying the provider id, status and body excerpt
    """
    excerpt = body_excerpt(body)

    if status_code in (401, 403):
        return AuthError(
            f"Authentication failed ({status_code})",
            provider=provider,
            status_code=status_code,
            body=excerpt,
        )

    if status_code == 429:
        retry_after = _parse_retry_after((headers or {}).get("retry-after"))
        return RateLimitedError(
            "Rate limit exceeded",
            provider=provider,
            status_code=status_code,
            body=excerpt,
            retry_after=retry_after,
        )

    if 500 <= status_code < 600:
        return ServerError(
            f"Provider error {status_code}",
            provider=provider,
            status_code=status_code,
            body=excerpt,
        )

    return InvalidRequestError(
        f"Request failed: {status_code}",
        provider=provider,
        status_code=status_code,
        body=excerpt,
    )


def classify_transport(provider: str, exc: Exception) -> TransportError:
    """Map an httpx transport failure (no response received) to TransportError."""
    if isinstance(exc, httpx.TimeoutException):
        message = f"Request timed out: {exc.__class__.__name__}"
    else:
        message = f"Transport failure: {exc.__class__.__name__}: {exc}"
    return TransportError(message, provider=provider)
