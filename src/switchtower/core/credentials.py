"""Non-interactive credential sources."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LiteralCredential:
    """A secret supplied up front, e.g. with ``--password``."""

    value: str

    def acquire(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return "LiteralCredential(value='***')"
