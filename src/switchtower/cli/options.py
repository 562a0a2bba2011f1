"""Command-line option parsing.

:func:`parse_options` is pure: it never prints and never exits.  Help and
version requests come back as an :class:`~switchtower.core.models.InfoRequest`
for the caller to display, and every input problem is raised as
:class:`~switchtower.exceptions.UsageError`.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from types import MappingProxyType
from typing import Any, NoReturn

from switchtower.core.credentials import LiteralCredential
from switchtower.core.models import InfoRequest, Options
from switchtower.core.protocols import CredentialSource
from switchtower.exceptions import UsageError
from switchtower.infra.prompt import InteractivePromptCredential
from switchtower.version import __version__

PROG: str = "switchtower"


class _InfoRequested(Exception):
    """Stops parsing as soon as help or version is seen."""

    def __init__(self, request: InfoRequest) -> None:
        super().__init__(request.text)
        self.request = request


class _InfoAction(argparse.Action):
    """Zero-argument flag that ends parsing with an :class:`InfoRequest`.

    Runs when argparse reaches the flag, so nothing after it is parsed.
    """

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        help: str | None = None,
    ) -> None:
        super().__init__(
            option_strings=option_strings,
            dest=argparse.SUPPRESS,
            default=argparse.SUPPRESS,
            nargs=0,
            help=help,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        raise _InfoRequested(InfoRequest(self.text(parser)))

    def text(self, parser: argparse.ArgumentParser) -> str:
        raise NotImplementedError


class _HelpAction(_InfoAction):
    def text(self, parser: argparse.ArgumentParser) -> str:
        return parser.format_help().rstrip("\n")


class _VersionAction(_InfoAction):
    def text(self, parser: argparse.ArgumentParser) -> str:
        return version_text()


# Options that always take the next token as their value, even when it
# starts with "-".
_VALUE_OPTIONS: dict[str, str] = {
    "-a": "--action",
    "--action": "--action",
    "-p": "--password",
    "--password": "--password",
    "-r": "--recipe",
    "--recipe": "--recipe",
    "-s": "--set",
    "--set": "--set",
}


def _attach_values(argv: Sequence[str]) -> list[str]:
    """Rewrite ``-p VALUE`` style pairs as ``--password=VALUE``."""
    tokens = list(argv)
    attached: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        long_option = _VALUE_OPTIONS.get(token)
        if long_option is not None and index + 1 < len(tokens):
            attached.append(f"{long_option}={tokens[index + 1]}")
            index += 2
        else:
            attached.append(token)
            index += 1
    return attached


class _OptionParser(argparse.ArgumentParser):
    """``ArgumentParser`` that raises instead of printing and exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, hint=f"Run '{self.prog} --help' for usage.")


def _assignment(text: str) -> tuple[str, str]:
    """Split ``NAME=VALUE`` on the first ``=``."""
    name, separator, value = text.partition("=")
    if not separator:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    if not name:
        raise argparse.ArgumentTypeError(f"missing variable name in {text!r}")
    return name, value


def build_parser() -> argparse.ArgumentParser:
    parser = _OptionParser(
        prog=PROG,
        usage="%(prog)s [options]",
        description="Load recipes and execute actions against remote servers.",
        add_help=False,
    )
    parser.add_argument(
        "-a",
        "--action",
        dest="actions",
        action="append",
        metavar="ACTION",
        help="An action to execute. Multiple actions may be specified, "
        "and are executed in the given order.",
    )
    parser.add_argument(
        "-p",
        "--password",
        metavar="PASSWORD",
        default=None,
        help="The password to use when connecting. (Default: prompt for password)",
    )
    parser.add_argument(
        "-P",
        "--pretend",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Run the action(s), but don't actually connect to or execute "
        "anything on the servers. (Default: don't pretend)",
    )
    parser.add_argument(
        "-r",
        "--recipe",
        dest="recipes",
        action="append",
        metavar="RECIPE",
        help="A recipe file to load. Multiple recipes may be specified, "
        "and are loaded in the given order.",
    )
    parser.add_argument(
        "-s",
        "--set",
        dest="variables",
        action="append",
        type=_assignment,
        metavar="NAME=VALUE",
        help="Specify a variable and its value to set. This will be set "
        "after loading all recipe files.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbosity",
        action="count",
        default=0,
        help="Specify the verbosity of the output. May be given multiple "
        "times. (Default: silent)",
    )
    parser.add_argument(
        "-h",
        "--help",
        action=_HelpAction,
        help="Display this help message.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action=_VersionAction,
        help="Display the version info for this utility.",
    )
    return parser


def version_text() -> str:
    return f"SwitchTower v{__version__}"


def parse_options(argv: Sequence[str]) -> Options | InfoRequest:
    """Parse *argv* (without the program name) into validated options.

    ``--help`` and ``--version`` stop parsing where they appear; the first
    one on the command line wins and later tokens are never checked.
    ``-a``, ``-p``, ``-r`` and ``-s`` take the next token as their value
    even when it starts with ``-``.

    Raises
    ------
    UsageError
        On unknown flags, a malformed ``--set``, or when no recipe or no
        action was given.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(_attach_values(argv))
    except _InfoRequested as request:
        return request.request

    recipes = tuple(args.recipes or ())
    if not recipes:
        raise UsageError(
            "You must specify at least one recipe",
            hint="Use -r/--recipe PATH.",
        )
    actions = tuple(args.actions or ())
    if not actions:
        raise UsageError(
            "You must specify at least one action",
            hint="Use -a/--action NAME.",
        )

    # Re-assigning a key keeps its first position; the value is the last one.
    variables = dict(args.variables or ())

    password: CredentialSource
    if args.password is None:
        password = InteractivePromptCredential()
    else:
        password = LiteralCredential(args.password)

    return Options(
        recipes=recipes,
        actions=actions,
        password=password,
        verbosity=args.verbosity,
        variables=MappingProxyType(variables),
        pretend=args.pretend,
    )
