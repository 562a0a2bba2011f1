"""Single source of truth for the SwitchTower version string."""

from __future__ import annotations

__version__: str = "0.10.0"
