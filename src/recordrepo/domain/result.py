"""
Result Monad for Store Operations
Represents success or failure without raising across the repository boundary
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """
    Represents a successful operation result.

    An empty collection or ``None`` inside a Success means "no data",
    never "the operation failed".

    Attributes:
        value: The successful result value
    """

    value: T

    def is_success(self) -> bool:
        """Always returns True for Success."""
        return True

    def is_failure(self) -> bool:
        """Always returns False for Success."""
        return False

    def map(self, func: Callable[[T], Any]) -> Success[Any]:
        """
        Transform the success value using the provided function.

        Exceptions raised by ``func`` propagate to the caller.

        Args:
            func: Function to transform the value

        Returns:
            New Success with transformed value
        """
        return Success(func(self.value))

    def flat_map(self, func: Callable[[T], Success[Any] | Failure[Any]]) -> Success[Any] | Failure[Any]:
        """
        Chain operations that return Results.

        Args:
            func: Function that returns a Result

        Returns:
            Result from applying func to the value
        """
        return func(self.value)

    def or_else(self, default: T) -> T:
        """Return the value (ignores default)."""
        return self.value

    def unwrap(self) -> T:
        """Return the value."""
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """
    Represents a failed operation result.

    Attributes:
        error: The error that caused the failure
    """

    error: E

    def is_success(self) -> bool:
        """Always returns False for Failure."""
        return False

    def is_failure(self) -> bool:
        """Always returns True for Failure."""
        return True

    def map(self, func: Callable[[Any], Any]) -> Failure[E]:
        """Does nothing for Failure (error propagates)."""
        return self

    def flat_map(self, func: Callable[[Any], Any]) -> Failure[E]:
        """Does nothing for Failure (error propagates)."""
        return self

    def or_else(self, default: Any) -> Any:
        """Return the default value instead of error."""
        return default

    def unwrap(self) -> Any:
        """
        Raise the carried error.

        Raises:
            The carried exception, or ValueError when the error is not an exception
        """
        if isinstance(self.error, BaseException):
            raise self.error
        raise ValueError(f"Attempted to unwrap a Failure: {self.error}")


# Type alias for Result
Result = Success[T] | Failure[E]
