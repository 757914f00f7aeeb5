"""Protocols (interfaces) consumed by the core layer.

The accumulator is written once against :class:`NumericKind`.  Concrete
kinds live in :mod:`stepguard.core.kinds`; any object implementing this
protocol structurally can be handed to the accumulator, so new
fixed-width integer or IEEE floating kinds plug in without touching the
accumulation logic.
"""

from __future__ import annotations

from typing import Any, Protocol

import numpy as np

from stepguard.core.models import Direction


class NumericKind(Protocol):
    """Contract for a fixed-range numeric kind.

    Bounds are exposed as numpy scalars of the kind itself.  For unsigned
    kinds :attr:`min` is zero; for floating kinds it is ``-max``.
    """

    name: str
    """Canonical name, e.g. ``"int8"`` or ``"float32"``."""

    dtype: np.dtype[Any]
    """The numpy dtype backing this kind."""

    @property
    def max(self) -> Any:
        """Largest finite representable value."""
        ...  # pragma: no cover

    @property
    def min(self) -> Any:
        """Smallest finite representable value."""
        ...  # pragma: no cover

    def is_finite(self, value: Any) -> bool:
        """Return whether *value* is finite (always true for integers)."""
        ...  # pragma: no cover

    def cast(self, value: Any) -> Any:
        """Convert *value* to a scalar of this kind without range checks."""
        ...  # pragma: no cover

    def contains(self, value: Any) -> bool:
        """Return whether *value* is representable in this kind."""
        ...  # pragma: no cover

    def step_is_unsafe(self, a: Any, b: Any, direction: Direction) -> bool:
        """Return whether ``a (+|-) b`` would leave the representable range.

        Implementations must evaluate the check in a domain where the
        check itself cannot overflow.
        """
        ...  # pragma: no cover

    def apply(self, a: Any, b: Any, direction: Direction) -> Any:
        """Perform the native step.

        Only called after :meth:`step_is_unsafe` returned ``False`` for
        the same operands.
        """
        ...  # pragma: no cover
