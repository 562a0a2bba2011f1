"""CLI application entry point for SwitchTower.

This module is the **sole error boundary** for the entire application.
It catches :class:`~switchtower.exceptions.SwitchTowerError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Flow
----
parse → validate → build configuration (standard recipe, user recipes,
overrides) → dispatch actions.  Each stage runs only after the previous
one succeeded.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence

from switchtower.cli import exit_codes
from switchtower.cli.console import configure_logging, console
from switchtower.cli.options import parse_options
from switchtower.core.models import InfoRequest, Options
from switchtower.core.protocols import Configuration
from switchtower.exceptions import DispatchError, LoadError, SwitchTowerError, UsageError

# Most specific first.
_EXIT_CODES: tuple[tuple[type[SwitchTowerError], int], ...] = (
    (UsageError, exit_codes.USAGE_ERROR),
    (LoadError, exit_codes.LOAD_ERROR),
    (DispatchError, exit_codes.DISPATCH_ERROR),
)


def exit_code_for(exc: SwitchTowerError) -> int:
    """Return the process exit code for a known error."""
    for error_type, code in _EXIT_CODES:
        if isinstance(exc, error_type):
            return code
    return exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------

def _handle_run(
    options: Options,
    configuration_factory: Callable[[], Configuration] | None,
) -> int:
    """Build the configuration and dispatch every requested action."""
    from switchtower.core.dispatcher import ActionDispatcher
    from switchtower.core.loader import ConfigurationLoader

    if configuration_factory is None:
        from switchtower.infra.configuration import Configuration as DefaultConfiguration

        configuration_factory = DefaultConfiguration

    configuration = ConfigurationLoader(configuration_factory).load(options)
    ActionDispatcher(configuration.actor).dispatch(options.actions)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    *,
    configuration_factory: Callable[[], Configuration] | None = None,
) -> int:
    """Run the SwitchTower CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    configuration_factory:
        Builds the empty run configuration.  Defaults to
        :class:`~switchtower.infra.configuration.Configuration`.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    SwitchTowerError
        Any usage, load or dispatch failure; :func:`cli` maps it to an
        exit code.
    """
    parsed = parse_options(sys.argv[1:] if argv is None else argv)

    if isinstance(parsed, InfoRequest):
        print(parsed.text)
        return exit_codes.SUCCESS

    configure_logging()
    return _handle_run(parsed, configuration_factory)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli(argv: Sequence[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main(argv)
        sys.exit(code)
    except SwitchTowerError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_code_for(exc))
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
