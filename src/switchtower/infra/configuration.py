"""Infrastructure: the mutable run configuration populated by recipes.

A recipe is a Python module that defines ``load(configuration)``.  Built-in
recipes live in :mod:`switchtower.recipes` and are addressed by bare name
(``"standard"``); anything else is treated as a filesystem path.

Variables set to a :class:`~switchtower.core.protocols.CredentialSource`
are acquired on first fetch and memoized, so a password prompt only
happens when an action actually asks for the value.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import runpy
from collections.abc import Callable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, TypeVar

from switchtower.core.models import ActionDefinition
from switchtower.core.protocols import CredentialSource
from switchtower.exceptions import LoadError, SwitchTowerError
from switchtower.infra.actor import Actor

logger = logging.getLogger(__name__)

BUILTIN_RECIPE_PACKAGE: str = "switchtower.recipes"
RECIPE_ENTRY_POINT: str = "load"

_Handler = TypeVar("_Handler", bound=Callable[..., Any])


def verbosity_to_level(verbosity: int) -> int:
    """Map a ``-v`` count onto a :mod:`logging` level.

    verbosity == 0 -> WARNING
    verbosity == 1 -> INFO
    verbosity >= 2 -> DEBUG
    """
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def _summary(handler: Callable[..., Any]) -> str:
    lines = (handler.__doc__ or "").strip().splitlines()
    return lines[0].strip() if lines else ""


class Configuration:
    """Variables, registered actions and recipe loading for one run."""

    def __init__(self) -> None:
        self._variables: dict[str, Any] = {}
        self._actions: dict[str, ActionDefinition] = {}
        self._loaded: list[str] = []
        self._actor: Actor | None = None
        self._log_level: int = 0

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    @property
    def log_level(self) -> int:
        return self._log_level

    @log_level.setter
    def log_level(self, verbosity: int) -> None:
        self._log_level = max(0, verbosity)
        logging.getLogger("switchtower").setLevel(verbosity_to_level(self._log_level))

    # ------------------------------------------------------------------
    # Variables
    # ------------------------------------------------------------------

    def set(self, key: str, value: Any) -> None:
        self._variables[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._variables:
            return default
        return self._resolve(key)

    def __getitem__(self, key: str) -> Any:
        if key not in self._variables:
            raise KeyError(key)
        return self._resolve(key)

    def __contains__(self, key: object) -> bool:
        return key in self._variables

    def _resolve(self, key: str) -> Any:
        value = self._variables[key]
        if isinstance(value, CredentialSource):
            logger.debug("Acquiring deferred value for %s", key)
            value = value.acquire()
            self._variables[key] = value
        return value

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action(
        self,
        name: str | None = None,
        *,
        description: str = "",
    ) -> Callable[[_Handler], _Handler]:
        """Register the decorated function as an action.

        The action name defaults to the function name and the description
        to the first line of its docstring.  Registering an existing name
        replaces the earlier handler.
        """

        def register(handler: _Handler) -> _Handler:
            action_name = name or handler.__name__
            if action_name in self._actions:
                logger.debug("Redefining action %s", action_name)
            self._actions[action_name] = ActionDefinition(
                name=action_name,
                handler=handler,
                description=description or _summary(handler),
            )
            return handler

        return register

    @property
    def actions(self) -> Mapping[str, ActionDefinition]:
        return MappingProxyType(self._actions)

    @property
    def actor(self) -> Actor:
        if self._actor is None:
            self._actor = Actor(self)
        return self._actor

    # ------------------------------------------------------------------
    # Recipes
    # ------------------------------------------------------------------

    @property
    def loaded_recipes(self) -> tuple[str, ...]:
        return tuple(self._loaded)

    def load(self, name: str) -> None:
        """Load a built-in recipe by name or a recipe file by path.

        Raises
        ------
        LoadError
            If the recipe cannot be found, fails to import, has no
            ``load`` function, or raises while loading.
        """
        entry = self._builtin_entry(name)
        if entry is None:
            entry = self._file_entry(name)

        try:
            entry(self)
        except SwitchTowerError:
            raise
        except Exception as exc:
            raise LoadError(f"Recipe {name!r} failed: {exc}", recipe=name) from exc

        self._loaded.append(name)
        logger.info("Loaded recipe %s", name)

    @staticmethod
    def _builtin_entry(name: str) -> Callable[[Configuration], None] | None:
        if not name.isidentifier():
            return None
        module_name = f"{BUILTIN_RECIPE_PACKAGE}.{name}"
        if importlib.util.find_spec(module_name) is None:
            return None
        shadowed = _existing_recipe_file(name)
        if shadowed is not None:
            logger.warning(
                "Built-in recipe %s takes precedence over %s; pass ./%s to load the file",
                name,
                shadowed,
                shadowed,
            )
        try:
            module = importlib.import_module(module_name)
        except Exception as exc:
            raise LoadError(
                f"Built-in recipe {name!r} could not be imported: {exc}",
                recipe=name,
            ) from exc
        return _entry_point(vars(module), name)

    @staticmethod
    def _file_entry(name: str) -> Callable[[Configuration], None]:
        path = _find_recipe_file(name)
        try:
            namespace = runpy.run_path(str(path), run_name="__recipe__")
        except Exception as exc:
            raise LoadError(
                f"Recipe {name!r} could not be executed: {exc}",
                recipe=name,
            ) from exc
        return _entry_point(namespace, name)


def _existing_recipe_file(name: str) -> Path | None:
    candidates = [Path(name)]
    if not name.endswith(".py"):
        candidates.append(Path(f"{name}.py"))
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def _find_recipe_file(name: str) -> Path:
    path = _existing_recipe_file(name)
    if path is not None:
        return path
    raise LoadError(
        f"Recipe {name!r} not found.",
        recipe=name,
        hint="Pass the path to a Python file that defines load(configuration).",
    )


def _entry_point(namespace: Mapping[str, Any], name: str) -> Callable[[Configuration], None]:
    entry = namespace.get(RECIPE_ENTRY_POINT)
    if not callable(entry):
        raise LoadError(
            f"Recipe {name!r} does not define {RECIPE_ENTRY_POINT}(configuration).",
            recipe=name,
        )
    return entry
