"""
Tagged success/failure result returned by every public gateway operation.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import GatewayError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying a value."""
    value: T

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """Failed outcome carrying a classified error."""
    error: GatewayError

    @property
    def is_success(self) -> bool:
        return False

    def unwrap(self):
        """Raise the carried error."""
        raise self.error


Result = Union[Success[T], Failure]
