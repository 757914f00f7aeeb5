"""stepguard — checked stepped accumulation over fixed-width numeric kinds.

Adds or subtracts a step repeatedly and stops, with a flag, right before
a step would overflow or underflow the kind's representable range.
"""

from stepguard.core import (
    CheckedResult,
    Direction,
    NumericKind,
    accumulate,
    checked_add,
    checked_subtract,
    resolve_kind,
    supported_kinds,
)
from stepguard.version import __version__

__all__: list[str] = [
    "CheckedResult",
    "Direction",
    "NumericKind",
    "__version__",
    "accumulate",
    "checked_add",
    "checked_subtract",
    "resolve_kind",
    "supported_kinds",
]
