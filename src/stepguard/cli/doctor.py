"""``stepguard doctor`` — environment diagnostics command.

Gathers platform information that affects checked arithmetic (numpy
version, the precision of ``longdouble``) and renders a Rich table,
falling back to plain text when Rich is missing.
"""

from __future__ import annotations

import platform
import sys

import numpy as np

from stepguard.cli import exit_codes
from stepguard.cli.console import console
from stepguard.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _stepguard_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the stepguard version row."""
    return "stepguard", __version__, "[green]OK[/green]"


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _numpy_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the numpy version row."""
    return "numpy", np.__version__, "[green]OK[/green]"


def _longdouble_check() -> tuple[str, str, str]:
    """Return (label, value, status) describing ``longdouble``.

    When ``longdouble`` is no wider than ``float64``, float64 steps are
    checked by bound comparison instead of a wider trial result.
    """
    info = np.finfo(np.longdouble)
    value = f"{info.bits} bits, {info.nmant} mantissa bits"
    wider = info.maxexp > np.finfo(np.float64).maxexp
    status = "[green]OK[/green]" if wider else "[yellow]WARN (same as float64)[/yellow]"
    return "longdouble", value, status


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nstepguard doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<36} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<36} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = [
        _stepguard_version_check(),
        _python_version_check(),
        _numpy_version_check(),
        _longdouble_check(),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="stepguard doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
