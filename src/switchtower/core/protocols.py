"""Protocols (interfaces) consumed by the core layer.

The loader and dispatcher only ever talk to these contracts.  The
concrete :class:`~switchtower.infra.configuration.Configuration` and
:class:`~switchtower.infra.actor.Actor` satisfy them structurally, and
tests substitute simple recording fakes.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CredentialSource(Protocol):
    """A deferred secret, produced on demand by :meth:`acquire`."""

    def acquire(self) -> str:
        """Return the secret.

        Every call may perform the acquisition again; callers that need
        a stable value memoize it themselves.

        Raises
        ------
        CredentialError
            When no secret could be obtained.
        """
        ...  # pragma: no cover


class Actor(Protocol):
    """Runtime agent that executes named actions."""

    def invoke(self, name: str) -> None:
        """Run the action registered under *name*.

        Raises
        ------
        UnknownActionError
            When nothing is registered under *name*.
        """
        ...  # pragma: no cover


class Configuration(Protocol):
    """Mutable run configuration populated by recipes and overrides."""

    log_level: int
    """Verbosity count: 0 warnings only, 1 info, 2 or more debug."""

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any earlier value."""
        ...  # pragma: no cover

    def load(self, name: str) -> None:
        """Load the recipe identified by *name*.

        Raises
        ------
        LoadError
            When the recipe is missing or fails while loading.
        """
        ...  # pragma: no cover

    @property
    def actor(self) -> Actor:
        """The actor bound to this configuration."""
        ...  # pragma: no cover
