"""SwitchTower — recipe-driven remote deployment and automation.

The command-line entry point parses options, loads recipes into a run
configuration and dispatches the requested actions in order.
"""

from switchtower.version import __version__

__all__: list[str] = ["__version__"]
