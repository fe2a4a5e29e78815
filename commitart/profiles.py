"""Fixed catalog of style profiles.

A profile pairs one of the rendering algorithms (``style``) with the look
that goes with it: hue shift, palette shape, backdrop, fade rate and the
style-specific knobs in ``params``.  The catalog order is part of the
determinism contract: :func:`commitart.signature.style_index` selects
entries by position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

__all__ = [
    "StyleProfile",
    "PROFILES",
    "PROFILE_KEYS",
    "EXCLUSIONS",
    "DEFAULT_PROFILE",
    "profile_by_key",
    "is_forbidden",
]


@dataclass(frozen=True)
class StyleProfile:
    key: str
    style: str
    label: str
    hue_shift: int = 0
    secondary_offset: Optional[int] = None
    tertiary_offset: Optional[int] = None
    speed_scale: Optional[float] = None
    palette_size: int = 5
    palette_offsets: Optional[Tuple[float, ...]] = None
    saturation: Tuple[float, float] = (0.55, 0.85)
    lightness: Tuple[float, float] = (0.45, 0.70)
    backdrop: str = "flat"
    fade: float = 0.2
    composite: str = "screen"
    grain: bool = False
    border: bool = False
    params: Mapping[str, float] = field(default_factory=dict)

    def param(self, name: str, default: float) -> float:
        value = self.params.get(name, default)
        try:
            return float(value)
        except (TypeError, ValueError):
            return float(default)


PROFILES: Tuple[StyleProfile, ...] = (
    StyleProfile(
        key="constellation",
        style="constellation",
        label="Constellation",
        backdrop="radial-glow",
        fade=0.2,
        params=dict(linkDistance=80.0, drift=0.3),
    ),
    StyleProfile(
        key="flow-silk",
        style="flow",
        label="Silk Flow",
        hue_shift=20,
        backdrop="linear-dusk",
        fade=0.08,
        params=dict(ghosts=50, fieldScale=0.002, step=1.0),
    ),
    StyleProfile(
        key="nebula",
        style="nebula",
        label="Spiral Nebula",
        hue_shift=40,
        secondary_offset=150,
        backdrop="radial-deep",
        fade=0.18,
        grain=True,
        params=dict(ghosts=50, stars=120, clouds=6),
    ),
    StyleProfile(
        key="rain",
        style="rain",
        label="Glyph Rain",
        hue_shift=120,
        lightness=(0.55, 0.75),
        backdrop="flat",
        fade=0.1,
        composite="source-over",
        params=dict(glyph=14.0),
    ),
    StyleProfile(
        key="mosaic",
        style="mosaic",
        label="Voronoi Mosaic",
        saturation=(0.45, 0.65),
        backdrop="flat",
        fade=1.0,
        composite="source-over",
        params=dict(cell=15.0, drift=0.5),
    ),
    StyleProfile(
        key="canopy",
        style="fractal",
        label="Canopy",
        hue_shift=90,
        palette_offsets=(0.0, 20.0, 40.0, -30.0, 60.0),
        backdrop="linear-horizon",
        fade=0.25,
        params=dict(maxDepth=7),
    ),
    StyleProfile(
        key="life",
        style="life",
        label="Cellular Life",
        hue_shift=180,
        backdrop="vignette",
        fade=0.35,
        composite="source-over",
        params=dict(cols=50, rows=50, density=0.2, ageCap=12, cadence=5),
    ),
    StyleProfile(
        key="strata",
        style="terrain",
        label="Strata",
        palette_size=6,
        lightness=(0.30, 0.60),
        backdrop="linear-dusk",
        fade=1.0,
        composite="source-over",
        params=dict(layers=6, roughness=0.004),
    ),
    StyleProfile(
        key="orrery",
        style="orbit",
        label="Orrery",
        hue_shift=300,
        tertiary_offset=120,
        backdrop="radial-deep",
        fade=0.12,
        border=True,
        params=dict(centers=3),
    ),
    StyleProfile(
        key="sigils",
        style="sigils",
        label="Sigils",
        hue_shift=45,
        palette_size=4,
        palette_offsets=(0.0, 30.0, 180.0, 210.0),
        backdrop="vignette",
        fade=0.3,
        grain=True,
        border=True,
        params=dict(cell=64.0),
    ),
    StyleProfile(
        key="loom",
        style="weave",
        label="Loom",
        hue_shift=15,
        palette_size=6,
        backdrop="flat",
        fade=1.0,
        composite="source-over",
        params=dict(threads=24),
    ),
    StyleProfile(
        key="glitch",
        style="glitch",
        label="Glitch Slices",
        hue_shift=270,
        saturation=(0.80, 1.00),
        backdrop="flat",
        fade=0.5,
        composite="plus",
        params=dict(slices=18, shift=40.0),
    ),
    StyleProfile(
        key="barcode",
        style="barcode",
        label="Barcode",
        palette_size=3,
        palette_offsets=(0.0, 0.0, 180.0),
        saturation=(0.10, 0.35),
        lightness=(0.60, 0.90),
        backdrop="linear-horizon",
        fade=1.0,
        composite="source-over",
        border=True,
    ),
    StyleProfile(
        key="collage",
        style="collage",
        label="Collage",
        hue_shift=60,
        secondary_offset=200,
        backdrop="radial-glow",
        fade=0.6,
        composite="source-over",
        grain=True,
        params=dict(shapes=14),
    ),
    StyleProfile(
        key="radar",
        style="radar",
        label="Radar Sweep",
        hue_shift=110,
        backdrop="vignette",
        fade=0.15,
        border=True,
        params=dict(rings=5, sweep=1.5),
    ),
    StyleProfile(
        key="flow-ember",
        style="flow",
        label="Ember Flow",
        hue_shift=200,
        speed_scale=1.4,
        saturation=(0.75, 0.95),
        backdrop="radial-deep",
        fade=0.05,
        params=dict(ghosts=50, fieldScale=0.004, step=1.6),
    ),
    StyleProfile(
        key="constellation-frost",
        style="constellation",
        label="Frost Constellation",
        hue_shift=160,
        tertiary_offset=60,
        speed_scale=0.8,
        backdrop="linear-dusk",
        fade=0.25,
        border=True,
        params=dict(linkDistance=110.0, drift=0.2),
    ),
    StyleProfile(
        key="life-neon",
        style="life",
        label="Neon Life",
        hue_shift=240,
        saturation=(0.85, 1.00),
        backdrop="flat",
        fade=0.5,
        composite="plus",
        params=dict(cols=40, rows=40, density=0.2, ageCap=24, cadence=5),
    ),
)

PROFILE_KEYS: Tuple[str, ...] = tuple(profile.key for profile in PROFILES)
DEFAULT_PROFILE = PROFILES[0]

# Repositories whose name clashes with some looks.  Values are style tags
# (``StyleProfile.style``) or profile keys.
EXCLUSIONS: Dict[str, FrozenSet[str]] = {
    "torvalds/linux": frozenset({"glitch", "collage"}),
    "facebook/react": frozenset({"rain"}),
    "bitcoin/bitcoin": frozenset({"barcode", "flow-ember"}),
    "tensorflow/tensorflow": frozenset({"life"}),
    "rust-lang/rust": frozenset({"glitch"}),
}


def profile_by_key(key: str) -> StyleProfile:
    for profile in PROFILES:
        if profile.key == key:
            return profile
    return DEFAULT_PROFILE


def is_forbidden(repo_name: str, profile: StyleProfile) -> bool:
    forbidden = EXCLUSIONS.get(repo_name)
    if not forbidden:
        return False
    return profile.key in forbidden or profile.style in forbidden
