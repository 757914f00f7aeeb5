"""Allow ``python -m stepguard`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m stepguard`` behaves identically to the ``stepguard``
console script.
"""

from __future__ import annotations

from stepguard.cli.app import cli

if __name__ == "__main__":
    cli()
