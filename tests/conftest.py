"""Shared pytest fixtures and configuration for the stepguard test suite.

Guidelines
----------
* Core tests must be pure — no side effects, no global registry changes.
* Tests must not depend on the platform's ``longdouble`` width unless
  they say so.
* Rich is hidden through ``sys.modules`` when a plain-text path is
  under test.
"""

from __future__ import annotations

import sys

import pytest


@pytest.fixture
def hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make every ``rich`` import fail for the duration of a test."""
    for name in ("rich", "rich.console", "rich.table", "rich.logging"):
        monkeypatch.setitem(sys.modules, name, None)
