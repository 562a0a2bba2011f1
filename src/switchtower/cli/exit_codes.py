"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
Error-kind codes follow ``sysexits.h``.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit: actions completed, or help/version was shown."""

GENERAL_ERROR: int = 1
"""A SwitchTowerError without a more specific code was caught."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

USAGE_ERROR: int = 64
"""Malformed or missing command-line input (EX_USAGE)."""

DISPATCH_ERROR: int = 70
"""An action was unknown or failed while running (EX_SOFTWARE)."""

LOAD_ERROR: int = 78
"""The standard recipe or a user recipe failed to load (EX_CONFIG)."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
