"""``stepguard report`` and ``stepguard kinds`` — tabular CLI output.

For every kind the report runs four checked accumulations:

* **overflow**: add ``max / N`` to ``0`` for ``N`` steps (expected safe)
  and for ``N + 1`` steps (expected to stop at the boundary);
* **underflow**: subtract ``max / N`` from ``max`` for ``N`` and
  ``N + 1`` steps.

Integral kinds use integer division for ``max / N``.  Rows are rendered
as a Rich table, or as plain text when Rich is missing.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from stepguard.cli import exit_codes
from stepguard.cli.console import console
from stepguard.core.accumulator import accumulate
from stepguard.core.models import CheckedResult, Direction
from stepguard.core.protocols import NumericKind
from stepguard.exceptions import InvalidStepCountError


# ---------------------------------------------------------------------------
# Report rows
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ReportRow:
    """One checked accumulation shown in the report."""

    kind: str
    direction: Direction
    start: Any
    step: Any
    steps: int
    result: CheckedResult[Any]


def demo_step(kind: NumericKind, steps: int) -> Any:
    """Return ``max / steps`` in *kind* arithmetic."""
    if np.issubdtype(kind.dtype, np.integer):
        return kind.cast(int(kind.max) // steps)
    return kind.cast(kind.max / kind.cast(steps))


def build_report(kinds: Sequence[NumericKind], steps: int) -> list[ReportRow]:
    """Run the overflow and underflow demonstrations for every kind.

    Raises
    ------
    InvalidStepCountError
        If *steps* is smaller than one.
    """
    if steps < 1:
        raise InvalidStepCountError(
            f"Report step count must be at least 1, got {steps}.",
        )

    rows: list[ReportRow] = []
    for kind in kinds:
        step = demo_step(kind, steps)
        plan = (
            (Direction.ADD, kind.cast(0)),
            (Direction.SUBTRACT, kind.max),
        )
        for direction, start in plan:
            for count in (steps, steps + 1):
                result = accumulate(start, step, count, direction, kind)
                rows.append(
                    ReportRow(
                        kind=kind.name,
                        direction=direction,
                        start=start,
                        step=step,
                        steps=count,
                        result=result,
                    )
                )
    return rows


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _label(direction: Direction) -> str:
    return "overflow" if direction is Direction.ADD else "underflow"


def _print_plain_report(rows: list[ReportRow]) -> None:
    """Render report output without Rich."""
    print("\nstepguard report", file=sys.stderr)
    print("=" * 96, file=sys.stderr)
    print(
        f"{'Kind':<11} {'Test':<10} {'Start':<24} {'Step':<24} "
        f"{'N':>3} {'ok':<6} {'Result'}",
        file=sys.stderr,
    )
    print("-" * 96, file=sys.stderr)
    for row in rows:
        print(
            f"{row.kind:<11} {_label(row.direction):<10} {str(row.start):<24} "
            f"{str(row.step):<24} {row.steps:>3} {str(row.result.ok):<6} "
            f"{row.result.value}",
            file=sys.stderr,
        )
    print(file=sys.stderr)


def run_report(kinds: Sequence[NumericKind], steps: int) -> int:
    """Build and render the report.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS`; boundary stops are the expected
        content of the report, not failures.
    """
    rows = build_report(kinds, steps)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_report(rows)
        return exit_codes.SUCCESS

    table = Table(
        title="stepguard report",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Kind", style="bold", min_width=10)
    table.add_column("Test")
    table.add_column("Start", justify="right")
    table.add_column("Step", justify="right")
    table.add_column("N", justify="right")
    table.add_column("ok", justify="center")
    table.add_column("Result", justify="right")

    for row in rows:
        ok = "[green]true[/green]" if row.result.ok else "[red]false[/red]"
        table.add_row(
            row.kind,
            _label(row.direction),
            str(row.start),
            str(row.step),
            str(row.steps),
            ok,
            str(row.result.value),
        )

    console.print()
    console.print(table)
    console.print()
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Kind listing
# ---------------------------------------------------------------------------

def _check_method(kind: NumericKind) -> str:
    """Describe how the boundary predicate evaluates steps for *kind*."""
    if np.issubdtype(kind.dtype, np.integer):
        return "exact integer bounds"
    wide = getattr(kind, "wide", None)
    if wide is None:
        return "bound comparison"
    wide_dtype = np.dtype(wide)
    return "trial in " + ("longdouble" if wide_dtype.char == "g" else wide_dtype.name)


def run_kinds(kinds: Sequence[NumericKind]) -> int:
    """List *kinds* with their bounds and check method."""
    rows = [
        (kind.name, str(kind.min), str(kind.max), _check_method(kind))
        for kind in kinds
    ]

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        for name, lo, hi, method in rows:
            print(f"{name:<11} {lo:>28} {hi:>28}  {method}", file=sys.stderr)
        return exit_codes.SUCCESS

    table = Table(
        title="supported kinds",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Kind", style="bold")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Check")
    for row in rows:
        table.add_row(*row)

    console.print()
    console.print(table)
    console.print()
    return exit_codes.SUCCESS
