"""Runtime settings with environment overrides."""

from __future__ import annotations

import copy
import os
from typing import Dict, Mapping, Optional

__all__ = ["DEFAULTS", "ENV_PREFIX", "load_settings"]

ENV_PREFIX = "COMMITART_"

DEFAULTS = dict(
    surface=dict(width=800, height=400),
    system=dict(frameIntervalMs=16, particleCap=150, debug=False, overlay=True),
)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _coerce_int(value: Optional[str], default: int, minimum: int = 0) -> int:
    if value is None:
        return default
    try:
        number = int(float(value.strip()))
    except (TypeError, ValueError):
        return default
    return number if number >= minimum else default


def _coerce_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    token = value.strip().lower()
    if token in _TRUTHY:
        return True
    if token in _FALSY:
        return False
    return default


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Dict[str, dict]:
    """Return a copy of :data:`DEFAULTS` with ``COMMITART_*`` overrides applied."""

    env = os.environ if environ is None else environ
    settings = copy.deepcopy(DEFAULTS)
    surface = settings["surface"]
    system = settings["system"]
    surface["width"] = _coerce_int(env.get(ENV_PREFIX + "WIDTH"), surface["width"], 1)
    surface["height"] = _coerce_int(env.get(ENV_PREFIX + "HEIGHT"), surface["height"], 1)
    system["frameIntervalMs"] = _coerce_int(
        env.get(ENV_PREFIX + "FRAME_INTERVAL_MS"), system["frameIntervalMs"]
    )
    system["debug"] = _coerce_bool(env.get(ENV_PREFIX + "DEBUG"), system["debug"])
    system["overlay"] = _coerce_bool(env.get(ENV_PREFIX + "OVERLAY"), system["overlay"])
    return settings
