"""Registry of the rendering styles."""

from __future__ import annotations

from typing import Dict

from .base import Scene, Style, StyleState
from .grids import BarcodeStyle, LifeStyle, MosaicStyle, WeaveStyle
from .growth import FractalStyle, SigilStyle, TerrainStyle
from .particle_fields import ConstellationStyle, FlowStyle, NebulaStyle, OrbitStyle
from .signal import CollageStyle, GlitchStyle, RadarStyle, RainStyle

__all__ = ["STYLES", "DEFAULT_STYLE", "get_style", "Scene", "Style", "StyleState"]

DEFAULT_STYLE = "constellation"

STYLES: Dict[str, Style] = {
    style.key: style
    for style in (
        ConstellationStyle(),
        FlowStyle(),
        NebulaStyle(),
        RainStyle(),
        MosaicStyle(),
        FractalStyle(),
        LifeStyle(),
        TerrainStyle(),
        OrbitStyle(),
        SigilStyle(),
        WeaveStyle(),
        GlitchStyle(),
        BarcodeStyle(),
        CollageStyle(),
        RadarStyle(),
    )
}


def get_style(tag: str) -> Style:
    """Return the style registered under ``tag``, or the constellation style."""

    return STYLES.get(tag, STYLES[DEFAULT_STYLE])
