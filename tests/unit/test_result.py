"""
Unit tests for the Success/Failure result types.
"""
import pytest

from chat_gateway.core.errors import ServerError
from chat_gateway.core.result import Failure, Success


class TestSuccess:
    """Test the success branch."""

    def test_unwrap_returns_value(self):
        """Test unwrap hands back the carried value."""
        result = Success("hello")
        assert result.is_success is True
        assert result.unwrap() == "hello"

    def test_is_frozen(self):
        """Test results cannot be mutated after construction."""
        result = Success(1)
        with pytest.raises(AttributeError):
            result.value = 2


class TestFailure:
    """Test the failure branch."""

    def test_unwrap_raises_error(self):
        """Test unwrap raises the classified error."""
        error = ServerError("upstream down", provider="openai", status_code=503)
        result = Failure(error)

        assert result.is_success is False
        with pytest.raises(ServerError) as exc_info:
            result.unwrap()
        assert exc_info.value is error
