"""
Configuration loading for the chat gateway.
"""

import os
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


@dataclass
class GatewayConfig:
    """Gateway configuration: provider selection, credentials and overrides."""
    provider: str = "openrouter"
    api_key: Optional[str] = None
    model: Optional[str] = None
    base_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    # Credentials for providers selected per call
    api_keys: Dict[str, str] = field(default_factory=dict)
    # Registry overrides: provider id -> descriptor fields
    providers: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def __post_init__(self):
        if self.provider == "custom" and not self.base_url:
            raise ValueError("base_url is required for the custom OpenAI-compatible provider")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def api_key_for(self, provider_id: str) -> Optional[str]:
        """Credential for a provider: per-provider key first, then the main key for the configured provider."""
        if provider_id in self.api_keys:
            return self.api_keys[provider_id]
        if provider_id == self.provider:
            return self.api_key
        return None


def load_config(config_path: Optional[str] = None) -> GatewayConfig:
    """
    Load gateway configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Loaded configuration, or the environment configuration when no file
        is found or it cannot be parsed
    """
    if config_path is None:
        # Try common locations
        paths = [
            Path("config/chat-gateway.yaml"),
            Path("/etc/chat-gateway/config.yaml"),
            Path.home() / ".config/chat-gateway/config.yaml",
        ]
        for p in paths:
            if p.exists():
                config_path = str(p)
                break

    if config_path is None or not Path(config_path).exists():
        logger.warning("No gateway config file found, using environment")
        return config_from_env()

    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return _parse_config(data)

    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        logger.error(f"Failed to load config from {config_path}: {e}")
        return config_from_env()


def _expand_env(value: Any) -> Any:
    """Expand a "${ENV_VAR}" string to the variable's value."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1], "")
    return value


def _parse_config(data: Dict[str, Any]) -> GatewayConfig:
    """Parse configuration dictionary."""
    api_keys = {
        provider_id: _expand_env(key)
        for provider_id, key in (data.get("api_keys") or {}).items()
    }

    return GatewayConfig(
        provider=data.get("provider", "openrouter"),
        api_key=_expand_env(data.get("api_key")) or None,
        model=data.get("model") or None,
        base_url=data.get("base_url") or None,
        timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
        api_keys=api_keys,
        providers=data.get("providers") or {},
    )


def config_from_env() -> GatewayConfig:
    """Build configuration from CHAT_GATEWAY_* environment variables."""
    return GatewayConfig(
        provider=os.environ.get("CHAT_GATEWAY_PROVIDER", "openrouter"),
        api_key=os.environ.get("CHAT_GATEWAY_API_KEY") or None,
        model=os.environ.get("CHAT_GATEWAY_MODEL") or None,
        base_url=os.environ.get("CHAT_GATEWAY_BASE_URL") or None,
        timeout=float(os.environ.get("CHAT_GATEWAY_TIMEOUT", DEFAULT_TIMEOUT)),
    )
