"""Checked stepped accumulation.

The accumulator applies a fixed step to a value ``count`` times and asks
the value's :class:`~stepguard.core.protocols.NumericKind` *before* each
step whether the step would leave the representable range.  On the first
unsafe verdict it stops and reports the last safe value with
``ok=False``.

Guarantees
----------
* Crossing a boundary never raises; it is reported through the result.
* No step beyond the first unsafe one is attempted.
* Only :class:`~stepguard.exceptions.StepGuardError` subclasses escape,
  and only for invalid arguments.
"""

from __future__ import annotations

import logging
import operator
from typing import Any

from stepguard.core.kinds import infer_kind, resolve_kind
from stepguard.core.models import CheckedResult, Direction
from stepguard.core.protocols import NumericKind
from stepguard.exceptions import InvalidStepCountError, ValueOutOfRangeError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument validation
# ---------------------------------------------------------------------------

def _validate_count(count: Any) -> int:
    """Return *count* as a non-negative ``int``."""
    if isinstance(count, bool):
        raise InvalidStepCountError(f"Step count must be an integer, got {count!r}.")
    try:
        steps = operator.index(count)
    except TypeError as exc:
        raise InvalidStepCountError(
            f"Step count must be an integer, got {count!r}.",
        ) from exc
    if steps < 0:
        raise InvalidStepCountError(
            f"Step count must not be negative, got {steps}.",
        )
    return steps


def _describe(value: Any) -> str:
    # repr() of a very large int can exceed the int-to-string digit limit.
    if isinstance(value, int) and value.bit_length() > 256:
        return f"<{value.bit_length()}-bit integer>"
    return repr(value)


def _coerce(kind: NumericKind, value: Any, role: str) -> Any:
    """Cast *value* to *kind*, rejecting anything the kind cannot hold."""
    if not kind.contains(value):
        raise ValueOutOfRangeError(
            f"{role} value {_describe(value)} is not representable as {kind.name}.",
            hint=f"{kind.name} holds finite values in [{kind.min}, {kind.max}].",
        )
    return kind.cast(value)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def accumulate(
    start: Any,
    step: Any,
    count: int,
    direction: Direction,
    kind: Any = None,
) -> CheckedResult[Any]:
    """Apply *step* to *start* up to *count* times in *direction*.

    Parameters
    ----------
    start:
        Initial value.
    step:
        Fixed magnitude added or subtracted on every iteration.
    count:
        Number of steps to attempt; must be a non-negative integer.
    direction:
        :attr:`Direction.ADD` or :attr:`Direction.SUBTRACT`.
    kind:
        Anything :func:`~stepguard.core.kinds.resolve_kind` accepts.
        When ``None`` the kind is inferred from *start*.

    Returns
    -------
    CheckedResult
        ``ok`` is ``True`` iff all *count* steps stayed in range;
        ``value`` is the last safely computed value, as a numpy scalar
        of the kind.

    Raises
    ------
    UnsupportedKindError
        If the kind is not supported.
    InvalidStepCountError
        If *count* is negative or not an integer.
    ValueOutOfRangeError
        If *start* or *step* is not representable in the kind.
    """
    numeric_kind = resolve_kind(kind) if kind is not None else infer_kind(start)
    steps = _validate_count(count)
    value = _coerce(numeric_kind, start, "start")
    delta = _coerce(numeric_kind, step, "step")

    # A zero step never moves the value, whatever the count.
    if delta == 0:
        return CheckedResult(value=value, ok=True, steps_taken=steps)

    for taken in range(steps):
        if numeric_kind.step_is_unsafe(value, delta, direction):
            logger.debug(
                "%s %s stopped at step %d of %d; last safe value %s",
                numeric_kind.name,
                direction.value,
                taken + 1,
                steps,
                value,
            )
            return CheckedResult(value=value, ok=False, steps_taken=taken)
        value = numeric_kind.apply(value, delta, direction)

    return CheckedResult(value=value, ok=True, steps_taken=steps)


def checked_add(
    start: Any,
    increment: Any,
    steps: int,
    kind: Any = None,
) -> CheckedResult[Any]:
    """Compute ``start + increment * steps`` one checked step at a time."""
    return accumulate(start, increment, steps, Direction.ADD, kind)


def checked_subtract(
    start: Any,
    decrement: Any,
    steps: int,
    kind: Any = None,
) -> CheckedResult[Any]:
    """Compute ``start - decrement * steps`` one checked step at a time."""
    return accumulate(start, decrement, steps, Direction.SUBTRACT, kind)
