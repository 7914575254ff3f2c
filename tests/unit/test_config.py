"""
Unit tests for gateway configuration loading.
"""
import pytest

from chat_gateway.core.config import GatewayConfig, config_from_env, load_config


class TestGatewayConfig:
    """Test GatewayConfig validation."""

    def test_defaults(self):
        """Test default provider and timeout."""
        config = GatewayConfig()
        assert config.provider == "openrouter"
        assert config.timeout == 5.0

    def test_custom_requires_base_url(self):
        """Test the custom provider needs a base URL."""
        with pytest.raises(ValueError):
            GatewayConfig(provider="custom", api_key="k")

    def test_custom_with_base_url(self):
        """Test the custom provider with a base URL."""
        config = GatewayConfig(provider="custom", api_key="k", base_url="http://localhost:8000/v1")
        assert config.base_url == "http://localhost:8000/v1"

    def test_non_positive_timeout(self):
        """Test timeouts must be positive."""
        with pytest.raises(ValueError):
            GatewayConfig(timeout=0)

    def test_api_key_for(self):
        """Test per-provider keys take precedence."""
        config = GatewayConfig(provider="openai", api_key="main", api_keys={"gemini": "g"})
        assert config.api_key_for("openai") == "main"
        assert config.api_key_for("gemini") == "g"
        assert config.api_key_for("anthropic") is None


class TestLoadConfig:
    """Test YAML and environment loading."""

    def test_load_yaml(self, tmp_path, monkeypatch):
        """Test loading a YAML file with env expansion."""
        monkeypatch.setenv("TEST_ANTHROPIC_KEY", "sk-ant-123")
        path = tmp_path / "gateway.yaml"
        path.write_text(
            "provider: anthropic\n"
            "api_key: ${TEST_ANTHROPIC_KEY}\n"
            "timeout: 10\n"
            "api_keys:\n"
            "  gemini: plain-key\n"
            "providers:\n"
            "  openai:\n"
            "    base_url: http://proxy/v1\n"
        )

        config = load_config(str(path))
        assert config.provider == "anthropic"
        assert config.api_key == "sk-ant-123"
        assert config.timeout == 10.0
        assert config.api_keys == {"gemini": "plain-key"}
        assert config.providers == {"openai": {"base_url": "http://proxy/v1"}}

    def test_missing_file_falls_back_to_env(self, tmp_path, monkeypatch):
        """Test a missing file yields the environment configuration."""
        monkeypatch.setenv("CHAT_GATEWAY_PROVIDER", "groq")
        monkeypatch.setenv("CHAT_GATEWAY_API_KEY", "gsk")
        config = load_config(str(tmp_path / "missing.yaml"))
        assert config.provider == "groq"
        assert config.api_key == "gsk"

    def test_invalid_yaml_falls_back_to_env(self, tmp_path, monkeypatch):
        """Test unparsable YAML yields the environment configuration."""
        monkeypatch.setenv("CHAT_GATEWAY_PROVIDER", "gemini")
        path = tmp_path / "broken.yaml"
        path.write_text("provider: [unclosed\n")
        assert load_config(str(path)).provider == "gemini"

    def test_config_from_env(self, monkeypatch):
        """Test every CHAT_GATEWAY_* variable is read."""
        monkeypatch.setenv("CHAT_GATEWAY_PROVIDER", "custom")
        monkeypatch.setenv("CHAT_GATEWAY_API_KEY", "k")
        monkeypatch.setenv("CHAT_GATEWAY_MODEL", "my-model")
        monkeypatch.setenv("CHAT_GATEWAY_BASE_URL", "http://localhost:1234/v1")
        monkeypatch.setenv("CHAT_GATEWAY_TIMEOUT", "2.5")

        config = config_from_env()
        assert config.provider == "custom"
        assert config.model == "my-model"
        assert config.base_url == "http://localhost:1234/v1"
        assert config.timeout == 2.5
