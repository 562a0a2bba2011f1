"""CLI console and logging helpers with optional Rich support.

Module-level imports of Rich are avoided so that ``--help`` and
``--version`` keep working even when Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from switchtower.exceptions import EnvironmentError

LOGGER_NAME: str = "switchtower"


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def configure_logging() -> None:
	"""Attach a stderr handler to the ``switchtower`` logger.

	Safe to call more than once.  The level stays at WARNING until a
	configuration applies the ``-v`` count.
	"""
	package_logger = logging.getLogger(LOGGER_NAME)
	if package_logger.handlers:
		return

	handler: logging.Handler
	try:
		from rich.logging import RichHandler

		handler = RichHandler(console=get_rich_console(), show_path=False)
	except (ModuleNotFoundError, EnvironmentError):
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

	package_logger.addHandler(handler)
	package_logger.setLevel(logging.WARNING)
