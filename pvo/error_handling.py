"""
Error Handling Module for PVO

This module defines the error kinds raised while resolving, decoding and evaluating
connectives, and a Result type pattern used where pure functions report failure
without raising (configuration loading).
"""

from typing import Tuple, Any, TypeVar, Union

# Type variables for generic functions
T = TypeVar('T')
E = TypeVar('E')

# Result type for functions that might fail
Result = Union[Tuple[T, None], Tuple[None, E]]


class ConnectiveError(ValueError):
    """Base class for errors caused by user input; recoverable per request."""


class UnknownConnective(ConnectiveError):
    """Name is neither an alias, a truth-table code nor a literal truth vector."""

    def __init__(self, name: str):
        super().__init__(f"Unknown connective: {name!r}")
        self.name = name


class InvalidSymbol(ConnectiveError):
    """Text contains something outside the truth-symbol alphabet."""

    def __init__(self, text: str, reason: str = "invalid truth symbol"):
        super().__init__(f"{reason}: {text!r}")
        self.text = text


class ArityMismatch(ConnectiveError):
    """Assignment or operand arity does not fit the function."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected arity {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


def success(value: T) -> Result[T, Any]:
    """Create a success result."""
    return (value, None)

def error(err: E) -> Result[Any, E]:
    """Create an error result."""
    return (None, err)

def is_error(result: Result[T, E]) -> bool:
    """Check if a result is an error."""
    return result[1] is not None

def get_value(result: Result[T, E]) -> T:
    """
    Get the value from a successful result.

    Args:
        result: A Result tuple

    Returns:
        The success value

    Raises:
        ValueError: If the result is an error
    """
    if is_error(result):
        raise ValueError(f"Cannot get value from error result: {result[1]}")
    return result[0]

def get_error(result: Result[T, E]) -> E:
    """
    Get the error from an error result.

    Args:
        result: A Result tuple

    Returns:
        The error value

    Raises:
        ValueError: If the result is a success
    """
    if not is_error(result):
        raise ValueError("Cannot get error from success result")
    return result[1]
