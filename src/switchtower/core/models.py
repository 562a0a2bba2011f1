"""Domain models for SwitchTower.

All models are **frozen** dataclasses.  :class:`Options` is built once by
the argument parser and never mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from switchtower.core.protocols import CredentialSource


def _empty_variables() -> Mapping[str, str]:
    return MappingProxyType({})


# ---------------------------------------------------------------------------
# Parsed command line
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Options:
    """Validated command-line options for a single run."""

    recipes: tuple[str, ...]
    """Recipe paths, in the order they were given."""

    actions: tuple[str, ...]
    """Action names, in the order they must be dispatched."""

    password: CredentialSource
    """Literal password or an interactive prompt, acquired lazily."""

    verbosity: int = 0
    """Number of ``-v`` flags seen."""

    variables: Mapping[str, str] = field(default_factory=_empty_variables)
    """Read-only ``--set`` overrides; later duplicates already won."""

    pretend: bool = False
    """Ask actions to skip real side effects."""


@dataclass(frozen=True, slots=True)
class InfoRequest:
    """Informational output (help or version) requested instead of a run."""

    text: str


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ActionDefinition:
    """A named action handler registered by a recipe."""

    name: str
    handler: Callable[[Any], None]
    """Called with the actor as its only argument."""

    description: str = ""
