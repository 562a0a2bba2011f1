"""Tests for credential sources and terminal echo control.

No real terminal is touched: ``termios`` is replaced with an in-memory
fake and the prompt runs against ``io.StringIO`` streams.
"""

from __future__ import annotations

import io
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import pytest

from switchtower.core.credentials import LiteralCredential
from switchtower.core.protocols import CredentialSource
from switchtower.exceptions import CredentialError, TerminalError
from switchtower.infra import terminal as terminal_module
from switchtower.infra.prompt import PROMPT, InteractivePromptCredential
from switchtower.infra.terminal import TerminalEchoController


# ---------------------------------------------------------------------------
# Doubles
# ---------------------------------------------------------------------------

class FakeTermios:
    """In-memory stand-in for the ``termios`` module."""

    ECHO = 0o10
    ICANON = 0o2
    ISIG = 0o1
    TCSANOW = 0

    class error(Exception):  # noqa: N801 - mirrors termios.error
        pass

    def __init__(self) -> None:
        self.lflag = self.ECHO | self.ICANON | self.ISIG
        self.set_calls = 0
        self.fail_get = False

    def tcgetattr(self, fd: int) -> list[Any]:
        if self.fail_get:
            raise self.error("not a tty")
        return [0, 0, 0, self.lflag, 0, 0, []]

    def tcsetattr(self, fd: int, when: int, attrs: list[Any]) -> None:
        self.set_calls += 1
        self.lflag = attrs[3]


class TtyStream(io.StringIO):
    def fileno(self) -> int:
        return 99


class EventTerminal:
    """Terminal double that logs echo transitions into a shared list."""

    def __init__(self, events: list[str]) -> None:
        self.events = events

    @contextmanager
    def suppressed(self) -> Iterator[None]:
        self.events.append("echo off")
        try:
            yield
        finally:
            self.events.append("echo on")


class EventStdout(io.StringIO):
    def __init__(self, events: list[str]) -> None:
        super().__init__()
        self.events = events

    def write(self, text: str) -> int:
        self.events.append(f"write {text!r}")
        return super().write(text)


class EventStdin(io.StringIO):
    def __init__(self, text: str, events: list[str]) -> None:
        super().__init__(text)
        self.events = events

    def readline(self, size: int | None = -1) -> str:  # type: ignore[override]
        self.events.append("read")
        return super().readline()


@pytest.fixture()
def fake_termios(monkeypatch: pytest.MonkeyPatch) -> FakeTermios:
    fake = FakeTermios()
    monkeypatch.setattr(terminal_module, "_import_termios", lambda: fake)
    return fake


# ---------------------------------------------------------------------------
# LiteralCredential
# ---------------------------------------------------------------------------

class TestLiteralCredential:
    def test_returns_value(self) -> None:
        assert LiteralCredential("secret").acquire() == "secret"

    def test_repr_hides_secret(self) -> None:
        assert "secret" not in repr(LiteralCredential("secret"))

    def test_satisfies_protocol(self) -> None:
        assert isinstance(LiteralCredential("x"), CredentialSource)


# ---------------------------------------------------------------------------
# TerminalEchoController
# ---------------------------------------------------------------------------

class TestTerminalEchoController:
    def test_disable_clears_echo_and_canonical(self, fake_termios: FakeTermios) -> None:
        TerminalEchoController(TtyStream()).echo(False)
        assert fake_termios.lflag & FakeTermios.ECHO == 0
        assert fake_termios.lflag & FakeTermios.ICANON == 0
        assert fake_termios.lflag & FakeTermios.ISIG

    def test_enable_sets_both(self, fake_termios: FakeTermios) -> None:
        fake_termios.lflag = FakeTermios.ISIG
        TerminalEchoController(TtyStream()).echo(True)
        assert fake_termios.lflag == FakeTermios.ECHO | FakeTermios.ICANON | FakeTermios.ISIG

    def test_echo_is_idempotent(self, fake_termios: FakeTermios) -> None:
        controller = TerminalEchoController(TtyStream())
        controller.echo(False)
        after_first = fake_termios.lflag
        controller.echo(False)
        assert fake_termios.lflag == after_first

    def test_suppressed_restores_prior_state(self, fake_termios: FakeTermios) -> None:
        before = fake_termios.lflag
        with TerminalEchoController(TtyStream()).suppressed():
            assert fake_termios.lflag & FakeTermios.ECHO == 0
        assert fake_termios.lflag == before

    def test_suppressed_restores_on_error(self, fake_termios: FakeTermios) -> None:
        before = fake_termios.lflag
        with pytest.raises(KeyboardInterrupt):
            with TerminalEchoController(TtyStream()).suppressed():
                raise KeyboardInterrupt
        assert fake_termios.lflag == before

    def test_no_termios_is_noop(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _missing() -> Any:
            raise TerminalError("termios is not available on this platform.")

        monkeypatch.setattr(terminal_module, "_import_termios", _missing)
        controller = TerminalEchoController(TtyStream())
        controller.echo(False)
        with controller.suppressed():
            pass

    def test_stream_without_fd_is_noop(self, fake_termios: FakeTermios) -> None:
        controller = TerminalEchoController(io.StringIO())
        controller.echo(False)
        with controller.suppressed():
            pass
        assert fake_termios.set_calls == 0

    def test_not_a_tty_is_noop(self, fake_termios: FakeTermios) -> None:
        fake_termios.fail_get = True
        controller = TerminalEchoController(TtyStream())
        controller.echo(False)
        with controller.suppressed():
            pass
        assert fake_termios.set_calls == 0

    def test_real_non_tty_stream_is_noop(self) -> None:
        TerminalEchoController(io.StringIO()).echo(False)


# ---------------------------------------------------------------------------
# InteractivePromptCredential
# ---------------------------------------------------------------------------

class TestInteractivePromptCredential:
    def test_returns_line_without_newline(self) -> None:
        stdout = io.StringIO()
        credential = InteractivePromptCredential(
            stdin=io.StringIO("hunter2\n"), stdout=stdout, terminal=EventTerminal([]),
        )
        assert credential.acquire() == "hunter2"
        assert stdout.getvalue() == f"{PROMPT}\n"

    def test_prompt_text(self) -> None:
        assert PROMPT == "Password: "

    def test_cycle_order(self) -> None:
        events: list[str] = []
        credential = InteractivePromptCredential(
            stdin=EventStdin("pw\n", events),
            stdout=EventStdout(events),
            terminal=EventTerminal(events),
        )
        credential.acquire()
        assert events == [
            "echo off",
            "write 'Password: '",
            "read",
            "echo on",
            "write '\\n'",
        ]

    def test_strips_crlf(self) -> None:
        credential = InteractivePromptCredential(
            stdin=io.StringIO("pw\r\n"), stdout=io.StringIO(), terminal=EventTerminal([]),
        )
        assert credential.acquire() == "pw"

    def test_keeps_inner_whitespace(self) -> None:
        credential = InteractivePromptCredential(
            stdin=io.StringIO(" p w \n"), stdout=io.StringIO(), terminal=EventTerminal([]),
        )
        assert credential.acquire() == " p w "

    def test_last_line_without_newline(self) -> None:
        credential = InteractivePromptCredential(
            stdin=io.StringIO("pw"), stdout=io.StringIO(), terminal=EventTerminal([]),
        )
        assert credential.acquire() == "pw"

    def test_each_call_prompts_again(self) -> None:
        stdout = io.StringIO()
        credential = InteractivePromptCredential(
            stdin=io.StringIO("first\nsecond\n"), stdout=stdout, terminal=EventTerminal([]),
        )
        assert credential.acquire() == "first"
        assert credential.acquire() == "second"
        assert stdout.getvalue().count(PROMPT) == 2

    def test_end_of_input_raises_after_restoring(self) -> None:
        events: list[str] = []
        credential = InteractivePromptCredential(
            stdin=io.StringIO(""), stdout=EventStdout(events), terminal=EventTerminal(events),
        )
        with pytest.raises(CredentialError):
            credential.acquire()
        assert events[-2:] == ["echo on", "write '\\n'"]

    def test_interrupt_restores_terminal(self, fake_termios: FakeTermios) -> None:
        class _Interrupting(TtyStream):
            def readline(self, size: int | None = -1) -> str:  # type: ignore[override]
                raise KeyboardInterrupt

        before = fake_termios.lflag
        stdout = io.StringIO()
        credential = InteractivePromptCredential(stdin=_Interrupting(), stdout=stdout)
        with pytest.raises(KeyboardInterrupt):
            credential.acquire()
        assert fake_termios.lflag == before
        assert stdout.getvalue().endswith("\n")

    def test_real_controller_round_trip(self, fake_termios: FakeTermios) -> None:
        seen: list[int] = []

        class _Watching(TtyStream):
            def readline(self, size: int | None = -1) -> str:  # type: ignore[override]
                seen.append(fake_termios.lflag)
                return "pw\n"

        before = fake_termios.lflag
        credential = InteractivePromptCredential(stdin=_Watching(), stdout=io.StringIO())
        assert credential.acquire() == "pw"
        assert seen[0] & FakeTermios.ECHO == 0
        assert fake_termios.lflag == before

    def test_write_through_forced_then_restored(self) -> None:
        stdout = io.TextIOWrapper(io.BytesIO(), encoding="utf-8", write_through=False)
        seen: list[bool] = []

        class _Watching(EventTerminal):
            @contextmanager
            def suppressed(self) -> Iterator[None]:
                seen.append(stdout.write_through)
                yield

        credential = InteractivePromptCredential(
            stdin=io.StringIO("pw\n"), stdout=stdout, terminal=_Watching([]),
        )
        credential.acquire()
        assert seen == [True]
        assert stdout.write_through is False

    def test_defaults_to_process_streams_at_call_time(
        self, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        credential = InteractivePromptCredential()
        stdout = io.StringIO()
        monkeypatch.setattr(sys, "stdin", io.StringIO("late\n"))
        monkeypatch.setattr(sys, "stdout", stdout)
        assert credential.acquire() == "late"
        assert stdout.getvalue() == f"{PROMPT}\n"

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InteractivePromptCredential(), CredentialSource)
