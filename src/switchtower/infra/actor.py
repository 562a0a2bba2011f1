"""Infrastructure: the actor that runs registered actions by name.

Actions are looked up in the configuration's registry at call time, so
the actor always sees the final set left by the last recipe.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from switchtower.exceptions import UnknownActionError

if TYPE_CHECKING:
    from switchtower.infra.configuration import Configuration

logger = logging.getLogger(__name__)


class Actor:
    """Dispatch target bound to a single :class:`Configuration`.

    Handlers receive the actor itself and reach settings through
    :attr:`configuration`.
    """

    def __init__(self, configuration: Configuration) -> None:
        self._configuration = configuration

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def pretend(self) -> bool:
        """Whether actions should skip real side effects."""
        return bool(self._configuration.get("pretend", False))

    @property
    def action_names(self) -> tuple[str, ...]:
        return tuple(self._configuration.actions)

    def describe(self, name: str) -> str:
        """Return the description registered for *name*, or ``""``."""
        definition = self._configuration.actions.get(name)
        return definition.description if definition is not None else ""

    def invoke(self, name: str) -> None:
        """Run the handler registered as *name*.

        Raises
        ------
        UnknownActionError
            If no recipe registered *name*.
        """
        definition = self._configuration.actions.get(name)
        if definition is None:
            known = ", ".join(sorted(self._configuration.actions)) or "(none)"
            raise UnknownActionError(
                f"Unknown action {name!r}.",
                action=name,
                hint=f"Known actions: {known}",
            )
        logger.debug("Invoking %s", name)
        definition.handler(self)
