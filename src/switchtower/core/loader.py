"""Core configuration loader — builds the run configuration from options.

The loader only sequences side effects on the configuration; it never
inspects what a recipe or override did.

Order
-----
1. Log level, ``password`` and ``pretend``.
2. The built-in ``standard`` recipe.
3. User recipes, in command-line order.
4. ``--set`` overrides, in resolved order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from switchtower.core.models import Options
from switchtower.core.protocols import Configuration
from switchtower.exceptions import InstallationError, LoadError, SwitchTowerError

logger = logging.getLogger(__name__)

STANDARD_RECIPE: str = "standard"
"""Built-in recipe loaded before any user recipe."""


class ConfigurationLoader:
    """Builds a fresh configuration for one run.

    Parameters
    ----------
    factory:
        Zero-argument callable returning an empty configuration.
    """

    def __init__(self, factory: Callable[[], Configuration]) -> None:
        self._factory = factory

    def load(self, options: Options) -> Configuration:
        """Return a configuration with all recipes and overrides applied.

        Raises
        ------
        InstallationError
            If the standard recipe cannot be loaded.
        LoadError
            If any user recipe cannot be loaded.  Later recipes are not
            attempted.
        """
        configuration = self._factory()
        configuration.log_level = options.verbosity
        configuration.set("password", options.password)
        configuration.set("pretend", options.pretend)

        self._load_standard(configuration)
        for recipe in options.recipes:
            self._load_recipe(configuration, recipe)

        for name, value in options.variables.items():
            logger.debug("Setting %s from the command line", name)
            configuration.set(name, value)

        return configuration

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _load_standard(configuration: Configuration) -> None:
        try:
            configuration.load(STANDARD_RECIPE)
        except Exception as exc:
            raise InstallationError(
                f"Could not load the built-in {STANDARD_RECIPE!r} recipe: {exc}",
                recipe=STANDARD_RECIPE,
                hint="The installation looks broken. Try reinstalling switchtower.",
            ) from exc

    @staticmethod
    def _load_recipe(configuration: Configuration, recipe: str) -> None:
        logger.info("Loading recipe %s", recipe)
        try:
            configuration.load(recipe)
        except SwitchTowerError:
            raise
        except Exception as exc:
            raise LoadError(
                f"Could not load recipe {recipe!r}: {exc}",
                recipe=recipe,
            ) from exc
