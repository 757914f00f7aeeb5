"""Pure boundary predicates.

Every function here answers one question: *would this single add or
subtract step leave the representable range?*  Nothing is mutated and
nothing is raised for an unsafe verdict — the caller decides what to do
with it.

Integral predicates work on Python ``int`` operands, so the classic
``a > max - b`` comparisons are evaluated exactly and can never overflow
themselves.  Floating predicates evaluate a trial result in a strictly
wider numpy floating type when one exists, and fall back to
``max - |b|`` style bound comparisons for the widest type.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from stepguard.core.models import Direction


# ---------------------------------------------------------------------------
# Integral kinds
# ---------------------------------------------------------------------------

def integral_add_unsafe(a: int, b: int, *, lo: int, hi: int, signed: bool) -> bool:
    """Return whether ``a + b`` falls outside ``[lo, hi]``.

    For unsigned kinds *b* is never negative, so only the upper bound
    can be crossed.
    """
    if signed:
        if b > 0 and a > hi - b:
            return True
        if b < 0 and a < lo - b:
            return True
        return False
    return a > hi - b


def integral_subtract_unsafe(
    a: int, b: int, *, lo: int, hi: int, signed: bool,
) -> bool:
    """Return whether ``a - b`` falls outside ``[lo, hi]``.

    Signed kinds reuse the addition check on ``-b``; Python integers
    make the negation exact even for ``b == lo``.  Unsigned kinds
    underflow exactly when ``b > a``.
    """
    if signed:
        return integral_add_unsafe(a, -b, lo=lo, hi=hi, signed=True)
    return b > a


def integral_step_unsafe(
    a: int,
    b: int,
    direction: Direction,
    *,
    lo: int,
    hi: int,
    signed: bool,
) -> bool:
    """Dispatch to the add or subtract predicate for *direction*."""
    if direction is Direction.ADD:
        return integral_add_unsafe(a, b, lo=lo, hi=hi, signed=signed)
    return integral_subtract_unsafe(a, b, lo=lo, hi=hi, signed=signed)


# ---------------------------------------------------------------------------
# Floating kinds
# ---------------------------------------------------------------------------

def native_floating_step(
    a: Any, b: Any, direction: Direction, dtype: np.dtype[Any],
) -> Any:
    """Perform the step in *dtype* itself with floating warnings silenced."""
    x = dtype.type(a)
    y = dtype.type(b)
    with np.errstate(over="ignore", invalid="ignore"):
        return x + y if direction is Direction.ADD else x - y


def _wide_trial_unsafe(
    a: Any,
    b: Any,
    direction: Direction,
    *,
    dtype: np.dtype[Any],
    wide: np.dtype[Any],
) -> bool:
    """Compute the step in *wide* and check that it rounds back finite."""
    x = wide.type(a)
    y = wide.type(b)
    with np.errstate(over="ignore", invalid="ignore"):
        trial = x + y if direction is Direction.ADD else x - y
        if not np.isfinite(trial):
            return True
        # A trial that rounds to max(T) is still representable.
        rounded = dtype.type(trial)
    return not np.isfinite(rounded)


def _bound_unsafe(
    a: Any,
    b: Any,
    direction: Direction,
    *,
    dtype: np.dtype[Any],
) -> bool:
    """Compare against ``max - step`` bounds without a wider type."""
    x = dtype.type(a)
    y = dtype.type(b) if direction is Direction.ADD else -dtype.type(b)
    hi = np.finfo(dtype).max
    with np.errstate(over="ignore", invalid="ignore"):
        if y > 0 and x > hi - y:
            return True
        if y < 0 and x < -hi - y:
            return True
    return False


def floating_step_unsafe(
    a: Any,
    b: Any,
    direction: Direction,
    *,
    dtype: np.dtype[Any],
    wide: np.dtype[Any] | None,
) -> bool:
    """Return whether ``a (+|-) b`` would leave the finite range of *dtype*.

    Infinities and NaNs are rejected; subnormal results are tolerated.
    *wide* is a floating dtype strictly wider than *dtype*, or ``None``
    when *dtype* is already the widest available type.
    """
    if wide is not None:
        if _wide_trial_unsafe(a, b, direction, dtype=dtype, wide=wide):
            return True
    elif _bound_unsafe(a, b, direction, dtype=dtype):
        return True
    return not np.isfinite(native_floating_step(a, b, direction, dtype))


def floating_add_unsafe(
    a: Any, b: Any, *, dtype: np.dtype[Any], wide: np.dtype[Any] | None,
) -> bool:
    """Return whether ``a + b`` would leave the finite range of *dtype*."""
    return floating_step_unsafe(a, b, Direction.ADD, dtype=dtype, wide=wide)


def floating_subtract_unsafe(
    a: Any, b: Any, *, dtype: np.dtype[Any], wide: np.dtype[Any] | None,
) -> bool:
    """Return whether ``a - b`` would leave the finite range of *dtype*."""
    return floating_step_unsafe(a, b, Direction.SUBTRACT, dtype=dtype, wide=wide)
