"""Tagged console diagnostics used across the engine."""

from __future__ import annotations

import sys
from typing import Set

from .config import load_settings

__all__ = ["debug", "warn", "warn_once", "set_debug", "debug_enabled"]

TAG = "[CommitArt]"

_debug_enabled = bool(load_settings()["system"]["debug"])
_reported: Set[str] = set()


def set_debug(enabled: bool) -> None:
    global _debug_enabled
    _debug_enabled = bool(enabled)


def debug_enabled() -> bool:
    return _debug_enabled


def debug(message: str) -> None:
    if _debug_enabled:
        print(f"{TAG}[DEBUG] {message}", flush=True)


def warn(message: str) -> None:
    print(f"{TAG}[WARN] {message}", file=sys.stderr, flush=True)


def warn_once(key: str, message: str) -> None:
    """Emit ``message`` only the first time ``key`` is reported."""

    if key in _reported:
        return
    _reported.add(key)
    warn(message)
