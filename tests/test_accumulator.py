"""Tests for the checked stepped accumulator (core/accumulator.py).

Every test is a pure function call.  Coverage:

* Concrete 8-bit, 64-bit and floating scenarios
* count == 0 and step == 0 identities
* Stop-at-boundary monotonicity
* Integral round trips
* Argument validation
"""

from __future__ import annotations

import logging

import numpy as np
import pytest

from stepguard.core.accumulator import accumulate, checked_add, checked_subtract
from stepguard.core.kinds import resolve_kind, supported_kinds
from stepguard.core.models import Direction
from stepguard.exceptions import (
    InvalidStepCountError,
    UnsupportedKindError,
    ValueOutOfRangeError,
)

INTEGRAL_KINDS = [kind for kind in supported_kinds() if kind.dtype.kind in "iu"]
ALL_KINDS = list(supported_kinds())


# ---------------------------------------------------------------------------
# Concrete scenarios
# ---------------------------------------------------------------------------

class TestEightBitScenarios:
    def test_int8_add_within_range(self) -> None:
        result = checked_add(0, 25, 5, kind="int8")
        assert result.value == 125
        assert result.ok is True
        assert result.steps_taken == 5
        assert isinstance(result.value, np.int8)

    def test_int8_add_stops_before_overflow(self) -> None:
        result = checked_add(0, 25, 6, kind="int8")
        assert result.value == 125
        assert result.ok is False
        assert result.steps_taken == 5

    def test_uint8_subtract_to_zero(self) -> None:
        value, ok = checked_subtract(255, 51, 5, kind="uint8")
        assert value == 0
        assert ok is True

    def test_uint8_subtract_stops_before_underflow(self) -> None:
        value, ok = checked_subtract(255, 51, 6, kind="uint8")
        assert value == 0
        assert ok is False

    def test_first_step_unsafe_keeps_start(self) -> None:
        result = checked_add(120, 10, 3, kind="int8")
        assert result.value == 120
        assert not result.ok
        assert result.steps_taken == 0

    def test_negative_step_on_signed_kind(self) -> None:
        result = checked_add(-100, -10, 5, kind="int8")
        assert result.value == -120
        assert not result.ok
        assert result.steps_taken == 2


class TestWideIntegerScenarios:
    def test_int64_demo(self) -> None:
        step = (2**63 - 1) // 5
        assert checked_add(0, step, 5, kind="int64").ok
        result = checked_add(0, step, 6, kind="int64")
        assert not result.ok
        assert int(result.value) == 5 * step

    def test_uint64_max_plus_one(self) -> None:
        result = checked_add(2**64 - 1, 1, 1, kind="uint64")
        assert not result.ok
        assert int(result.value) == 2**64 - 1

    def test_int64_subtract_min(self) -> None:
        result = checked_subtract(0, -(2**63), 1, kind="int64")
        assert not result.ok
        assert result.value == 0

    def test_int64_reaches_min_exactly(self) -> None:
        result = checked_add(0, -(2**63), 1, kind="int64")
        assert result.ok
        assert int(result.value) == -(2**63)


class TestFloatingScenarios:
    @pytest.mark.parametrize("name", ["float32", "float64", "longdouble"])
    def test_five_fifths_reach_max(self, name: str) -> None:
        kind = resolve_kind(name)
        step = kind.max / kind.cast(5)
        result = checked_add(kind.cast(0), step, 5, kind=kind)
        assert result.ok
        assert result.value == kind.max

    @pytest.mark.parametrize("name", ["float32", "float64", "longdouble"])
    def test_sixth_fifth_is_stopped(self, name: str) -> None:
        kind = resolve_kind(name)
        step = kind.max / kind.cast(5)
        five = checked_add(kind.cast(0), step, 5, kind=kind)
        six = checked_add(kind.cast(0), step, 6, kind=kind)
        assert not six.ok
        assert six.value == five.value
        assert six.steps_taken == 5

    def test_float32_negative_side(self) -> None:
        kind = resolve_kind("float32")
        result = checked_subtract(0.0, kind.max / 5, 6, kind="float32")
        assert not result.ok
        assert result.value == kind.min

    def test_float16_powers_of_two(self) -> None:
        assert tuple(checked_add(0, 8192, 7, kind="float16")) == (57344, True)
        result = checked_add(0, 8192, 8, kind="float16")
        assert result.value == 57344
        assert not result.ok

    def test_subnormal_result_is_ok(self) -> None:
        tiny = np.finfo(np.float32).tiny
        result = checked_subtract(tiny, tiny / 2, 1, kind="float32")
        assert result.ok
        assert 0 < result.value < tiny

    def test_python_float_defaults_to_float64(self) -> None:
        result = checked_add(0.5, 0.25, 2)
        assert result.value == 1.0
        assert isinstance(result.value, np.float64)


# ---------------------------------------------------------------------------
# Identities
# ---------------------------------------------------------------------------

class TestIdentities:
    @pytest.mark.parametrize("kind", ALL_KINDS, ids=lambda k: k.name)
    def test_zero_count_returns_start(self, kind: object) -> None:
        start = kind.max  # type: ignore[attr-defined]
        result = accumulate(start, start, 0, Direction.ADD, kind)
        assert result.value == start
        assert result.ok
        assert result.steps_taken == 0

    @pytest.mark.parametrize("kind", ALL_KINDS, ids=lambda k: k.name)
    @pytest.mark.parametrize("direction", [Direction.ADD, Direction.SUBTRACT])
    def test_zero_step_is_idempotent(self, kind: object, direction: Direction) -> None:
        start = kind.max  # type: ignore[attr-defined]
        result = accumulate(start, 0, 1000, direction, kind)
        assert result.value == start
        assert result.ok

    def test_zero_step_huge_count_returns_immediately(self) -> None:
        result = checked_add(7, 0, 10**18, kind="int8")
        assert result.ok
        assert result.steps_taken == 10**18


# ---------------------------------------------------------------------------
# Monotonicity and round trips
# ---------------------------------------------------------------------------

class TestMonotonicity:
    @pytest.mark.parametrize("kind", INTEGRAL_KINDS, ids=lambda k: k.name)
    def test_stopped_value_equals_last_safe_step(self, kind: object) -> None:
        step = int(kind.max) // 3  # type: ignore[attr-defined]
        stopped = checked_add(0, step, 10, kind=kind)
        assert not stopped.ok
        replay = checked_add(0, step, stopped.steps_taken, kind=kind)
        assert replay.ok
        assert replay.value == stopped.value

    @pytest.mark.parametrize("count", [4, 5, 50])
    def test_extra_steps_do_not_move_value(self, count: int) -> None:
        result = checked_add(0, 40, count, kind="int8")
        assert result.value == 120
        assert result.steps_taken == 3


class TestRoundTrip:
    @pytest.mark.parametrize("kind", INTEGRAL_KINDS, ids=lambda k: k.name)
    def test_subtract_undoes_add(self, kind: object) -> None:
        start = 3
        step = int(kind.max) // 7  # type: ignore[attr-defined]
        forward = checked_add(start, step, 6, kind=kind)
        assert forward.ok
        back = checked_subtract(forward.value, step, 6, kind=kind)
        assert back.ok
        assert back.value == start

    def test_float_round_trip_without_precision_loss(self) -> None:
        forward = checked_add(1.5, 0.25, 8, kind="float32")
        back = checked_subtract(forward.value, 0.25, 8, kind="float32")
        assert back.value == 1.5


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestValidation:
    @pytest.mark.parametrize("count", [-1, 2.5, "3", True, None])
    def test_bad_count(self, count: object) -> None:
        with pytest.raises(InvalidStepCountError):
            checked_add(0, 1, count, kind="int8")  # type: ignore[arg-type]

    def test_numpy_count_accepted(self) -> None:
        assert checked_add(0, 1, np.uint32(3), kind="int8").value == 3

    def test_negative_step_on_unsigned_kind(self) -> None:
        with pytest.raises(ValueOutOfRangeError) as exc_info:
            checked_add(0, -1, 1, kind="uint8")
        assert "uint8" in str(exc_info.value)
        assert exc_info.value.hint is not None

    def test_start_out_of_range(self) -> None:
        with pytest.raises(ValueOutOfRangeError):
            checked_add(300, 1, 1, kind="int8")

    def test_float_for_integral_kind(self) -> None:
        with pytest.raises(ValueOutOfRangeError):
            checked_add(0, 1.5, 1, kind="int8")

    def test_nan_start(self) -> None:
        with pytest.raises(ValueOutOfRangeError):
            checked_add(float("nan"), 1.0, 1, kind="float32")

    @pytest.mark.parametrize("name", ["int64", "float64", "longdouble"])
    def test_huge_int_start(self, name: str) -> None:
        with pytest.raises(ValueOutOfRangeError) as exc_info:
            checked_add(10**5000, 1, 1, kind=name)
        assert "16610-bit integer" in str(exc_info.value)

    def test_unsupported_kind(self) -> None:
        with pytest.raises(UnsupportedKindError):
            checked_add(0, 1, 1, kind="complex128")

    def test_kind_inferred_from_numpy_start(self) -> None:
        result = checked_add(np.int8(0), 25, 6)
        assert not result.ok
        assert isinstance(result.value, np.int8)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class TestLogging:
    def test_boundary_stop_is_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="stepguard.core.accumulator")
        checked_add(0, 25, 6, kind="int8")
        assert "int8 add stopped at step 6 of 6" in caplog.text

    def test_completed_run_is_silent(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="stepguard.core.accumulator")
        checked_add(0, 25, 5, kind="int8")
        assert caplog.text == ""
