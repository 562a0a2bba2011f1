"""Core action dispatcher — runs the requested actions in order.

The first failure stops the run.  Nothing is retried and completed
actions are not rolled back.  Pretend mode is left to the actions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from switchtower.core.protocols import Actor
from switchtower.exceptions import ActionFailedError, SwitchTowerError

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """Invokes named actions against an :class:`Actor`."""

    def __init__(self, actor: Actor) -> None:
        self._actor: Actor = actor

    def dispatch(self, actions: Iterable[str]) -> None:
        """Invoke each action in *actions*, strictly in order.

        Raises
        ------
        UnknownActionError
            If an action name is not registered.
        ActionFailedError
            If an action raises anything that is not a
            :class:`~switchtower.exceptions.SwitchTowerError`.
        """
        for name in actions:
            logger.info("Executing action %s", name)
            try:
                self._actor.invoke(name)
            except SwitchTowerError:
                # Already typed; propagate unchanged.
                raise
            except Exception as exc:
                raise ActionFailedError(
                    f"Action {name!r} failed: {exc}",
                    action=name,
                ) from exc
