"""Concrete numeric kinds and the kind registry.

One :class:`IntegralKind` or :class:`FloatingKind` instance exists per
supported numpy dtype.  Both satisfy
:class:`~stepguard.core.protocols.NumericKind`, which is all the
accumulator ever sees.

Kinds are looked up by dtype, so every spelling numpy understands
(``"int8"``, ``"i1"``, ``"byte"``, ``np.int8``, ``np.dtype("int8")``)
resolves to the same instance.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from stepguard.core.boundary import (
    floating_step_unsafe,
    integral_step_unsafe,
    native_floating_step,
)
from stepguard.core.models import Direction
from stepguard.core.protocols import NumericKind
from stepguard.exceptions import UnsupportedKindError, supported_kinds_hint


def _kind_name(dtype: np.dtype[Any]) -> str:
    # longdouble reports "float64" on some platforms and "float128" on others.
    if dtype.char == "g":
        return "longdouble"
    return dtype.name


def _is_bool(value: object) -> bool:
    return isinstance(value, (bool, np.bool_))


# ---------------------------------------------------------------------------
# Integral kinds
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class IntegralKind:
    """A fixed-width signed or unsigned integer kind backed by ``numpy.iinfo``.

    Bounds are kept as Python integers so every comparison made by the
    boundary predicates is exact.
    """

    dtype: np.dtype[Any]
    name: str = field(init=False)
    signed: bool = field(init=False)
    lo: int = field(init=False, repr=False)
    hi: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        info = np.iinfo(self.dtype)
        object.__setattr__(self, "name", _kind_name(self.dtype))
        object.__setattr__(self, "signed", self.dtype.kind == "i")
        object.__setattr__(self, "lo", int(info.min))
        object.__setattr__(self, "hi", int(info.max))

    @property
    def max(self) -> Any:
        return self.dtype.type(self.hi)

    @property
    def min(self) -> Any:
        return self.dtype.type(self.lo)

    def is_finite(self, value: Any) -> bool:
        return True

    def cast(self, value: Any) -> Any:
        return self.dtype.type(operator.index(value))

    def contains(self, value: Any) -> bool:
        if _is_bool(value):
            return False
        try:
            number = operator.index(value)
        except TypeError:
            return False
        return self.lo <= number <= self.hi

    def step_is_unsafe(self, a: Any, b: Any, direction: Direction) -> bool:
        return integral_step_unsafe(
            int(a),
            int(b),
            direction,
            lo=self.lo,
            hi=self.hi,
            signed=self.signed,
        )

    def apply(self, a: Any, b: Any, direction: Direction) -> Any:
        if direction is Direction.ADD:
            return self.dtype.type(int(a) + int(b))
        return self.dtype.type(int(a) - int(b))


# ---------------------------------------------------------------------------
# Floating kinds
# ---------------------------------------------------------------------------

_FLOAT_LADDER: tuple[type[np.floating[Any]], ...] = (
    np.float16,
    np.float32,
    np.float64,
    np.longdouble,
)


def _wider_float(dtype: np.dtype[Any]) -> np.dtype[Any] | None:
    """Return the narrowest floating dtype strictly wider than *dtype*.

    "Wider" means a larger exponent range and at least as many mantissa
    bits, so a trial result computed there neither overflows nor loses
    the precision needed to round back.
    """
    own = np.finfo(dtype)
    for candidate in _FLOAT_LADDER:
        other = np.finfo(candidate)
        if other.maxexp > own.maxexp and other.nmant >= own.nmant:
            return np.dtype(candidate)
    return None


@dataclass(frozen=True, slots=True)
class FloatingKind:
    """An IEEE floating kind backed by ``numpy.finfo``.

    ``min`` is ``-max``: the kind is symmetric around zero and subnormal
    magnitudes count as in range.
    """

    dtype: np.dtype[Any]
    name: str = field(init=False)
    wide: np.dtype[Any] | None = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _kind_name(self.dtype))
        object.__setattr__(self, "wide", _wider_float(self.dtype))

    @property
    def max(self) -> Any:
        return np.finfo(self.dtype).max

    @property
    def min(self) -> Any:
        return -np.finfo(self.dtype).max

    def is_finite(self, value: Any) -> bool:
        return bool(np.isfinite(value))

    def cast(self, value: Any) -> Any:
        return self.dtype.type(value)

    def contains(self, value: Any) -> bool:
        if _is_bool(value):
            return False
        if not isinstance(value, (int, float, np.integer, np.floating)):
            return False
        try:
            with np.errstate(over="ignore"):
                converted = self.dtype.type(value)
        except (OverflowError, ValueError):
            return False
        return self.is_finite(converted)

    def step_is_unsafe(self, a: Any, b: Any, direction: Direction) -> bool:
        return floating_step_unsafe(
            a, b, direction, dtype=self.dtype, wide=self.wide,
        )

    def apply(self, a: Any, b: Any, direction: Direction) -> Any:
        return native_floating_step(a, b, direction, self.dtype)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_DEFAULT_DTYPES: tuple[type[np.generic], ...] = (
    np.int8,
    np.int16,
    np.int32,
    np.int64,
    np.uint8,
    np.uint16,
    np.uint32,
    np.uint64,
    np.float16,
    np.float32,
    np.float64,
    np.longdouble,
)

_REGISTRY: dict[str, NumericKind] = {}
_BY_DTYPE: dict[np.dtype[Any], NumericKind] = {}


def make_kind(dtype_like: Any) -> NumericKind:
    """Build the concrete kind for a numpy integer or floating dtype."""
    dtype = np.dtype(dtype_like)
    if dtype.kind in ("i", "u"):
        return IntegralKind(dtype)
    if dtype.kind == "f":
        return FloatingKind(dtype)
    raise UnsupportedKindError(
        f"dtype {dtype.name!r} is neither a fixed-width integer nor a float.",
    )


def register_kind(kind: NumericKind) -> NumericKind:
    """Add *kind* to the registry under its name.

    A kind with the same name is replaced.  A dtype keeps resolving to
    the first kind registered for it, so a kind stored in an existing
    dtype (a 4-bit kind kept in ``int8``) is reachable by name only.
    """
    previous = _REGISTRY.get(kind.name)
    if previous is not None and _BY_DTYPE.get(previous.dtype) is previous:
        del _BY_DTYPE[previous.dtype]
    _REGISTRY[kind.name] = kind
    _BY_DTYPE.setdefault(kind.dtype, kind)
    return kind


def supported_kinds() -> tuple[NumericKind, ...]:
    """Return every registered kind: signed, unsigned, then floating."""
    return tuple(_REGISTRY.values())


def supported_kind_names() -> list[str]:
    return list(_REGISTRY)


def _lookup(dtype: np.dtype[Any]) -> NumericKind | None:
    kind = _BY_DTYPE.get(dtype)
    if kind is not None:
        return kind
    # Equivalent dtypes with distinct type codes (``long``/``longlong``)
    # compare equal but do not necessarily hash alike.
    for known, candidate in _BY_DTYPE.items():
        if known == dtype:
            return candidate
    return None


def _unsupported(kind_like: object) -> UnsupportedKindError:
    return UnsupportedKindError(
        f"Unsupported numeric kind: {kind_like!r}",
        hint=supported_kinds_hint(supported_kind_names()),
    )


def resolve_kind(kind_like: Any) -> NumericKind:
    """Map a kind description to a registered :class:`NumericKind`.

    Accepts a kind instance, a kind or dtype name, a numpy scalar type,
    a ``numpy.dtype`` or the Python types ``int`` and ``float``.

    Raises
    ------
    UnsupportedKindError
        If *kind_like* does not name a registered kind.
    """
    if isinstance(kind_like, (IntegralKind, FloatingKind)):
        return kind_like
    if hasattr(kind_like, "step_is_unsafe") and hasattr(kind_like, "apply"):
        return kind_like
    if kind_like is None or kind_like is bool or _is_bool(kind_like):
        raise _unsupported(kind_like)
    if isinstance(kind_like, str) and kind_like in _REGISTRY:
        return _REGISTRY[kind_like]
    try:
        dtype = np.dtype(kind_like)
    except TypeError as exc:
        raise _unsupported(kind_like) from exc
    kind = _lookup(dtype)
    if kind is None:
        raise _unsupported(kind_like)
    return kind


def infer_kind(value: Any) -> NumericKind:
    """Pick the kind for a start value when the caller did not name one.

    numpy scalars keep their own dtype; a Python ``int`` maps to
    ``int64`` and a Python ``float`` to ``float64``.
    """
    if _is_bool(value):
        raise _unsupported(type(value).__name__)
    if isinstance(value, np.generic):
        return resolve_kind(value.dtype)
    if isinstance(value, int):
        return resolve_kind(np.int64)
    if isinstance(value, float):
        return resolve_kind(np.float64)
    raise _unsupported(type(value).__name__)


for _dtype in _DEFAULT_DTYPES:
    # Where longdouble is plain float64 it is not a kind of its own.
    if _lookup(np.dtype(_dtype)) is None:
        register_kind(make_kind(_dtype))
