"""Infrastructure layer — terminal, prompt, configuration and actor.

This layer touches the terminal, standard streams and the filesystem
(recipe files).  Failures from recipe code are caught here and re-raised
as :class:`~switchtower.exceptions.SwitchTowerError` subclasses.

Rules
-----
* No imports from ``cli``.
* No user-facing rendering; logging only.
"""

from switchtower.infra.actor import Actor
from switchtower.infra.configuration import Configuration, verbosity_to_level
from switchtower.infra.prompt import PROMPT, InteractivePromptCredential
from switchtower.infra.terminal import TerminalEchoController

__all__: list[str] = [
    "PROMPT",
    "Actor",
    "Configuration",
    "InteractivePromptCredential",
    "TerminalEchoController",
    "verbosity_to_level",
]
