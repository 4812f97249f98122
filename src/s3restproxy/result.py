"""
Result type for explicit error handling.

Every fallible step of the proxy (routing, store calls, health probes,
configuration loading) returns ``Success`` or ``Failure`` instead of raising,
so the HTTP layer can render each failure exhaustively.

Usage:
    >>> match await store.get("reports/today.csv"):
    ...     case Success(stored):
    ...         print(len(stored.body))
    ...     case Failure(error):
    ...         print(f"Error: {error}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar


T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Represents a successful result containing a value of type T."""

    value: T


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Represents a failed result containing an error of type E."""

    error: E


# Type alias for the union of Success and Failure
Result = Success[T] | Failure[E]
