"""CLI application entry point and command routing for stepguard.

This module is the **sole error boundary** for the entire application.
It catches :class:`~stepguard.exceptions.StepGuardError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No arithmetic lives here — all work is delegated to the core layer.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

import numpy as np

from stepguard.cli import exit_codes
from stepguard.cli.console import configure_logging, console
from stepguard.exceptions import StepGuardError, ValueOutOfRangeError
from stepguard.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_accumulate_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("kind", help="Numeric kind, e.g. int8, uint16, float32.")
    parser.add_argument("start", help="Initial value.")
    parser.add_argument("step", help="Amount applied on every step.")
    parser.add_argument("count", type=int, help="Number of steps to attempt.")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands:
    * ``stepguard report``                          — overflow/underflow demo
    * ``stepguard add KIND START STEP COUNT``       — one checked addition run
    * ``stepguard subtract KIND START STEP COUNT``  — one checked subtraction run
    * ``stepguard kinds``                           — list supported kinds
    * ``stepguard doctor``                          — environment diagnostics
    """
    parser = argparse.ArgumentParser(
        prog="stepguard",
        description="Checked stepped accumulation over fixed-width numeric kinds.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log boundary stops and other diagnostics to stderr.",
    )
    commands = parser.add_subparsers(dest="command")

    report = commands.add_parser(
        "report", help="Run the overflow/underflow demonstration.",
    )
    report.add_argument(
        "--steps",
        type=int,
        default=5,
        help="Safe step count N; the report also runs N + 1 (default: 5).",
    )
    report.add_argument(
        "--kind",
        action="append",
        dest="kinds",
        metavar="KIND",
        help="Restrict the report to KIND (repeatable; default: all kinds).",
    )

    add = commands.add_parser("add", help="Add STEP to START, COUNT times.")
    _add_accumulate_arguments(add)
    subtract = commands.add_parser(
        "subtract", help="Subtract STEP from START, COUNT times.",
    )
    _add_accumulate_arguments(subtract)

    commands.add_parser("kinds", help="List supported numeric kinds.")
    commands.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------

def _parse_value(kind: Any, text: str, role: str) -> Any:
    """Parse *text* for *kind*.

    Floating kinds parse through the kind's own constructor so that
    ``longdouble`` keeps digits a Python ``float`` would drop.
    """
    try:
        if np.issubdtype(kind.dtype, np.integer):
            return int(text)
        with np.errstate(over="ignore"):
            return kind.dtype.type(text)
    except ValueError as exc:
        raise ValueOutOfRangeError(
            f"{role} value {text!r} is not a valid {kind.name} number.",
        ) from exc


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_accumulate(args: argparse.Namespace) -> int:
    """Run one checked accumulation and print ``ok=…, result=…``."""
    from stepguard.core.accumulator import accumulate
    from stepguard.core.kinds import resolve_kind
    from stepguard.core.models import Direction

    kind = resolve_kind(args.kind)
    direction = Direction(args.command)
    start = _parse_value(kind, args.start, "start")
    step = _parse_value(kind, args.step, "step")

    result = accumulate(start, step, args.count, direction, kind)

    status = "[green]true[/green]" if result.ok else "[red]false[/red]"
    console.print(
        f"{direction.value} {kind.name} ({start}, {step}, {args.count}) => "
        f"ok={status}, result={result.value}, steps={result.steps_taken}"
    )
    return exit_codes.SUCCESS if result.ok else exit_codes.BOUNDARY_STOP


def _handle_report(args: argparse.Namespace) -> int:
    """Dispatch the ``report`` demonstration."""
    from stepguard.cli.report import run_report
    from stepguard.core.kinds import resolve_kind, supported_kinds

    if args.kinds:
        kinds = [resolve_kind(name) for name in args.kinds]
    else:
        kinds = list(supported_kinds())
    return run_report(kinds, args.steps)


def _handle_kinds() -> int:
    """Dispatch the ``kinds`` listing."""
    from stepguard.cli.report import run_kinds
    from stepguard.core.kinds import supported_kinds

    return run_kinds(supported_kinds())


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from stepguard.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the stepguard CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        configure_logging()

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS
    if args.command in ("add", "subtract"):
        return _handle_accumulate(args)
    if args.command == "report":
        return _handle_report(args)
    if args.command == "kinds":
        return _handle_kinds()
    return _handle_doctor()


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except StepGuardError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
