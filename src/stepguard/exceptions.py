"""Custom exception hierarchy for stepguard.

Crossing a numeric boundary is **not** an error — it is reported through
:attr:`~stepguard.core.models.CheckedResult.ok`.  The exceptions below
cover programmer errors only: asking for an unsupported kind, passing a
negative step count, or handing in values the kind cannot represent.

Hierarchy
---------
StepGuardError
├── UnsupportedKindError
├── InvalidStepCountError
├── ValueOutOfRangeError
└── EnvironmentError
"""

from __future__ import annotations


class StepGuardError(Exception):
    """Base exception for all stepguard errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Numeric kinds ---------------------------------------------------------

class UnsupportedKindError(StepGuardError):
    """Raised when a value or type does not map to a supported numeric kind."""


# --- Call arguments --------------------------------------------------------

class InvalidStepCountError(StepGuardError):
    """Raised when the step count is negative or not an integer."""


class ValueOutOfRangeError(StepGuardError):
    """Raised when a start or step value is not representable in the kind."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(StepGuardError):
    """Raised when an optional runtime dependency is not available."""


def supported_kinds_hint(names: list[str]) -> str:
    """Build the hint listing kind names accepted by :func:`resolve_kind`."""
    return "Supported kinds: " + ", ".join(names)
