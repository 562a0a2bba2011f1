"""Custom exception hierarchy for SwitchTower.

Every failure that can reach the command line is a subclass of
:class:`SwitchTowerError`.  Exceptions raised by recipe code or action
handlers are caught at the loader / dispatcher boundary and re-raised as
one of the typed subclasses below, so the CLI error boundary can map
each kind to its own exit code.

Hierarchy
---------
SwitchTowerError
├── UsageError
├── LoadError
│   └── InstallationError
├── DispatchError
│   ├── UnknownActionError
│   └── ActionFailedError
├── CredentialError
├── TerminalError
└── EnvironmentError
"""

from __future__ import annotations


class SwitchTowerError(Exception):
    """Base exception for all SwitchTower errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command line ----------------------------------------------------------

class UsageError(SwitchTowerError):
    """Raised when command-line input is malformed or incomplete."""


# --- Recipes ---------------------------------------------------------------

class LoadError(SwitchTowerError):
    """Raised when a recipe cannot be found or fails while loading."""

    def __init__(self, message: str, *, recipe: str, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.recipe: str = recipe
        """Name or path of the recipe that failed."""


class InstallationError(LoadError):
    """Raised when a built-in recipe is missing or broken."""


# --- Dispatch --------------------------------------------------------------

class DispatchError(SwitchTowerError):
    """Raised when an action cannot be dispatched or fails while running."""

    def __init__(self, message: str, *, action: str, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.action: str = action
        """Name of the action that was being dispatched."""


class UnknownActionError(DispatchError):
    """Raised when no handler is registered under the requested name."""


class ActionFailedError(DispatchError):
    """Raised when an action handler raises an unexpected exception."""


# --- Credentials / terminal ------------------------------------------------

class CredentialError(SwitchTowerError):
    """Raised when a credential cannot be acquired (e.g. end of input)."""


class TerminalError(SwitchTowerError):
    """Terminal echo control is unavailable.

    Never propagated: the terminal controller logs it and degrades to a
    no-op.
    """


class EnvironmentError(SwitchTowerError):
    """Raised when a required runtime dependency is not available."""
