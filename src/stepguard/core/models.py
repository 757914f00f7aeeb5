"""Domain models for stepguard.

All models are immutable value objects with no behaviour beyond data
access.  They carry zero I/O and must remain pure across the entire
lifecycle.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Step direction
# ---------------------------------------------------------------------------

class Direction(enum.Enum):
    """Which native operation a single accumulation step performs."""

    ADD = "add"
    SUBTRACT = "subtract"


# ---------------------------------------------------------------------------
# Checked result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CheckedResult(Generic[T]):
    """Outcome of a checked stepped accumulation.

    The result unpacks as the pair ``(value, ok)``::

        value, ok = checked_add(0, 25, 6, kind="int8")
    """

    value: T
    """Last value known to be safely computed.

    Equals the start value when the very first step was already unsafe.
    """

    ok: bool
    """``True`` iff every requested step completed inside the kind's range."""

    steps_taken: int = 0
    """Number of steps actually applied before stopping."""

    def __iter__(self) -> Iterator[Any]:
        yield self.value
        yield self.ok

    def __bool__(self) -> bool:
        return self.ok
