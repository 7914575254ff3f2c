"""
Provider registry: the static table of provider descriptors.
"""

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping

from .errors import UnknownProviderError
from .result import Failure, Result, Success

logger = logging.getLogger(__name__)


class WireFormat(str, Enum):
    """Request/response schema family spoken by a provider."""
    OPENAI_COMPATIBLE = "openai_compatible"
    ANTHROPIC_MESSAGES = "anthropic_messages"
    GEMINI_GENERATE = "gemini_generate"


@dataclass(frozen=True)
class ProviderDescriptor:
    """Static description of one provider endpoint."""
    id: str
    display_name: str
    base_url: str
    default_model: str
    wire_format: WireFormat
    # OpenRouter-style provider routing preferences
    allow_fallbacks: bool = False


DEFAULT_PROVIDERS: List[ProviderDescriptor] = [
    ProviderDescriptor(
        id="openrouter",
        display_name="OpenRouter",
        base_url="https://openrouter.ai/api/v1",
        default_model="openai/gpt-4o",
        wire_format=WireFormat.OPENAI_COMPATIBLE,
        allow_fallbacks=True,
    ),
    ProviderDescriptor(
        id="openai",
        display_name="OpenAI",
        base_url="https://api.openai.com/v1",
        default_model="gpt-4o",
        wire_format=WireFormat.OPENAI_COMPATIBLE,
    ),
    ProviderDescriptor(
        id="groq",
        display_name="Groq",
        base_url="https://api.groq.com/openai/v1",
        default_model="llama-3.3-70b-versatile",
        wire_format=WireFormat.OPENAI_COMPATIBLE,
    ),
    ProviderDescriptor(
        id="letta",
        display_name="Letta.ai Agent",
        base_url="https://api.letta.ai/v1",
        default_model="letta-v2",
        wire_format=WireFormat.OPENAI_COMPATIBLE,
    ),
    ProviderDescriptor(
        id="opencode-zed",
        display_name="OpenCode (Zed)",
        base_url="https://api.opencode.ai/v1",
        default_model="zed-code-v3",
        wire_format=WireFormat.OPENAI_COMPATIBLE,
    ),
    ProviderDescriptor(
        id="freedomgpt",
        display_name="FreedomGPT",
        base_url="https://chat.freedomgpt.com/api/v1",
        default_model="liberty",
        wire_format=WireFormat.OPENAI_COMPATIBLE,
    ),
    ProviderDescriptor(
        id="custom",
        display_name="OpenAI Compatible (Custom)",
        base_url="",
        default_model="",
        wire_format=WireFormat.OPENAI_COMPATIBLE,
    ),
    ProviderDescriptor(
        id="anthropic",
        display_name="Anthropic Claude",
        base_url="https://api.anthropic.com/v1",
        default_model="claude-sonnet-4-20250514",
        wire_format=WireFormat.ANTHROPIC_MESSAGES,
    ),
    ProviderDescriptor(
        id="gemini",
        display_name="Google Gemini",
        base_url="https://generativelanguage.googleapis.com/v1beta",
        default_model="gemini-2.0-flash",
        wire_format=WireFormat.GEMINI_GENERATE,
    ),
]

_OVERRIDABLE_FIELDS = {"display_name", "base_url", "default_model", "allow_fallbacks"}


class ProviderRegistry:
    """
    Immutable lookup table of provider descriptors.

    Built once at configuration time and handed to the gateway; it is
    never mutated while calls are in flight.
    """

    def __init__(self, descriptors: Iterable[ProviderDescriptor]):
        """
        Initialize the registry.

        Args:
            descriptors: Provider descriptors; a later duplicate id replaces
                an earlier one.
        """
        table: Dict[str, ProviderDescriptor] = {}
        for descriptor in descriptors:
            table[descriptor.id] = descriptor
        self._providers: Mapping[str, ProviderDescriptor] = table

    @classmethod
    def default(cls) -> "ProviderRegistry":
        """Registry with the built-in provider table."""
        return cls(DEFAULT_PROVIDERS)

    def lookup(self, provider_id: str) -> Result[ProviderDescriptor]:
        """
        Find a provider descriptor by id.

        Args:
            provider_id: Provider identifier (e.g., "openrouter", "gemini")

        Returns:
            Success with the descriptor, or Failure(UnknownProviderError)
        """
        descriptor = self._providers.get(provider_id)
        if descriptor is None:
            return Failure(UnknownProviderError(
                f"Unknown provider: {provider_id}",
                provider=provider_id,
            ))
        return Success(descriptor)

    def with_overrides(self, overrides: Mapping[str, Mapping[str, Any]]) -> "ProviderRegistry":
        """
        Return a new registry with per-provider field overrides applied.

        Args:
            overrides: Mapping of provider id to fields to replace
                (base_url, default_model, display_name, allow_fallbacks)

        Raises:
            KeyError: If an override names a provider that is not registered
            ValueError: If an override names a field that cannot be replaced
        """
        table = dict(self._providers)
        for provider_id, fields in overrides.items():
            if provider_id not in table:
                raise KeyError(f"Cannot override unknown provider: {provider_id}")
            unknown = set(fields) - _OVERRIDABLE_FIELDS
            if unknown:
                raise ValueError(f"Cannot override fields {sorted(unknown)} of {provider_id}")
            table[provider_id] = dataclasses.replace(table[provider_id], **fields)
            logger.info(f"Overrode provider {provider_id}: {sorted(fields)}")
        return ProviderRegistry(table.values())

    def ids(self) -> List[str]:
        return list(self._providers)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._providers

    def __iter__(self) -> Iterator[ProviderDescriptor]:
        return iter(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(providers={self.ids()!r})"
