"""Infrastructure: terminal echo control via :mod:`termios`.

Echo and canonical line editing are switched on the file descriptor
behind a text stream (``sys.stdin`` by default).  On hosts without
``termios``, or when the stream is not a real terminal, every operation
is a silent no-op.

Rules
-----
* Never raises: :class:`~switchtower.exceptions.TerminalError` is logged
  at debug level and swallowed here.
* Terminal attributes are held only for the duration of
  :meth:`TerminalEchoController.suppressed`.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from types import ModuleType
from typing import Any, TextIO

from switchtower.exceptions import TerminalError

logger = logging.getLogger(__name__)


def _import_termios() -> ModuleType:
    """Import termios lazily; unavailable on Windows."""
    try:
        import termios
    except ModuleNotFoundError as exc:
        raise TerminalError("termios is not available on this platform.") from exc
    return termios


class TerminalEchoController:
    """Toggle echo on the terminal behind *stream*.

    Parameters
    ----------
    stream:
        Text stream whose file descriptor is controlled.  ``None`` means
        ``sys.stdin`` as it is at call time.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def echo(self, enable: bool) -> None:
        """Enable or disable echo and canonical mode immediately.

        Idempotent.  A no-op where terminal control is unsupported.
        """
        try:
            termios, fd, attrs = self._attributes()
            flags = termios.ECHO | termios.ICANON
            if enable:
                attrs[3] |= flags
            else:
                attrs[3] &= ~flags
            self._apply(termios, fd, attrs)
        except TerminalError as exc:
            logger.debug("Terminal echo control unavailable: %s", exc)

    @contextmanager
    def suppressed(self) -> Iterator[None]:
        """Disable echo for the ``with`` block, then restore the prior state.

        The saved attributes are restored on every exit path, including
        exceptions and ``KeyboardInterrupt``.
        """
        try:
            saved: tuple[ModuleType, int, list[Any]] | None = self._attributes()
        except TerminalError as exc:
            logger.debug("Terminal echo control unavailable: %s", exc)
            saved = None

        self.echo(False)
        try:
            yield
        finally:
            if saved is None:
                self.echo(True)
            else:
                self._restore(*saved)

    # ------------------------------------------------------------------
    # termios helpers
    # ------------------------------------------------------------------

    def _fileno(self) -> int:
        stream = self._stream if self._stream is not None else sys.stdin
        try:
            return stream.fileno()
        except (AttributeError, OSError, ValueError) as exc:
            raise TerminalError(f"stream has no usable file descriptor: {exc}") from exc

    def _attributes(self) -> tuple[ModuleType, int, list[Any]]:
        termios = _import_termios()
        fd = self._fileno()
        try:
            return termios, fd, termios.tcgetattr(fd)
        except termios.error as exc:
            raise TerminalError(f"cannot read terminal attributes: {exc}") from exc

    @staticmethod
    def _apply(termios: ModuleType, fd: int, attrs: list[Any]) -> None:
        try:
            termios.tcsetattr(fd, termios.TCSANOW, attrs)
        except termios.error as exc:
            raise TerminalError(f"cannot set terminal attributes: {exc}") from exc

    def _restore(self, termios: ModuleType, fd: int, attrs: list[Any]) -> None:
        try:
            self._apply(termios, fd, attrs)
        except TerminalError as exc:
            logger.debug("Could not restore terminal state: %s", exc)
