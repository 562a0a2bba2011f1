"""Infrastructure: interactive password prompt.

:class:`InteractivePromptCredential` is the default password source when
``--password`` is not given.  It satisfies
:class:`~switchtower.core.protocols.CredentialSource` and prompts on every
call to :meth:`~InteractivePromptCredential.acquire`; the configuration
memoizes the result.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from switchtower.exceptions import CredentialError
from switchtower.infra.terminal import TerminalEchoController

PROMPT: str = "Password: "


@contextmanager
def _write_through(stream: TextIO) -> Iterator[None]:
    """Force unbuffered writes on *stream*, restoring the prior setting."""
    previous = getattr(stream, "write_through", None)
    reconfigure = getattr(stream, "reconfigure", None)
    if previous is None or reconfigure is None:
        yield
        return

    reconfigure(write_through=True)
    try:
        yield
    finally:
        reconfigure(write_through=previous)


def _chomp(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


class InteractivePromptCredential:
    """Read a password from stdin with terminal echo disabled.

    Streams default to ``sys.stdin`` / ``sys.stdout`` as they are when
    :meth:`acquire` runs, not when the object is built.
    """

    def __init__(
        self,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        terminal: TerminalEchoController | None = None,
    ) -> None:
        self._stdin = stdin
        self._stdout = stdout
        self._terminal = terminal

    def acquire(self) -> str:
        """Prompt once and return the line entered, without its newline.

        Raises
        ------
        CredentialError
            If standard input is exhausted before a line is read.
        """
        stdin = self._stdin if self._stdin is not None else sys.stdin
        stdout = self._stdout if self._stdout is not None else sys.stdout
        terminal = self._terminal or TerminalEchoController(stdin)

        try:
            with _write_through(stdout), terminal.suppressed():
                stdout.write(PROMPT)
                stdout.flush()
                line = stdin.readline()
        finally:
            stdout.write("\n")
            stdout.flush()

        if not line:
            raise CredentialError(
                "No password entered (end of input).",
                hint="Pass the password with --password when stdin is not interactive.",
            )
        return _chomp(line)

    def __repr__(self) -> str:
        return "InteractivePromptCredential()"
