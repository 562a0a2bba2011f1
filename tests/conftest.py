"""Shared pytest fixtures and configuration for the SwitchTower test suite.

Guidelines
----------
* No real terminal: streams are ``io.StringIO`` and ``termios`` is faked.
* No network access; recipes are tiny files written to ``tmp_path``.
* Collaborators of the loader and dispatcher are recording doubles.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo handler and level changes made by the CLI between tests."""
    package_logger = logging.getLogger("switchtower")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
