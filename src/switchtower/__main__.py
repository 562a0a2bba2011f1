"""Allow ``python -m switchtower`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m switchtower`` behaves identically to the ``switchtower``
console script.
"""

from __future__ import annotations

from switchtower.cli.app import cli

if __name__ == "__main__":
    cli()
