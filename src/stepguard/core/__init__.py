"""Core layer — pure checked-arithmetic logic.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli``.
* Crossing a numeric boundary is a result, never an exception.
"""

from stepguard.core.accumulator import accumulate, checked_add, checked_subtract
from stepguard.core.kinds import (
    FloatingKind,
    IntegralKind,
    infer_kind,
    register_kind,
    resolve_kind,
    supported_kinds,
)
from stepguard.core.models import CheckedResult, Direction
from stepguard.core.protocols import NumericKind

__all__: list[str] = [
    "CheckedResult",
    "Direction",
    "FloatingKind",
    "IntegralKind",
    "NumericKind",
    "accumulate",
    "checked_add",
    "checked_subtract",
    "infer_kind",
    "register_kind",
    "resolve_kind",
    "supported_kinds",
]
