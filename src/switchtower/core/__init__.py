"""Core layer — options model and run orchestration.

Rules
-----
* No ``print()`` calls.
* No terminal, filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* Collaborators are reached only through :mod:`switchtower.core.protocols`.
"""

from switchtower.core.credentials import LiteralCredential
from switchtower.core.dispatcher import ActionDispatcher
from switchtower.core.loader import STANDARD_RECIPE, ConfigurationLoader
from switchtower.core.models import ActionDefinition, InfoRequest, Options
from switchtower.core.protocols import Actor, Configuration, CredentialSource

__all__: list[str] = [
    "STANDARD_RECIPE",
    "ActionDefinition",
    "ActionDispatcher",
    "Actor",
    "Configuration",
    "ConfigurationLoader",
    "CredentialSource",
    "InfoRequest",
    "LiteralCredential",
    "Options",
]
