"""Palette, backdrop and grain shared by every style.

Colour conversion is done with the module helpers rather than Qt's HSL
support so that palettes resolve to the same 8-bit RGB triplets on every
platform and Qt release.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Tuple

from PyQt5 import QtCore, QtGui

from .prng import clamp, create_prng, string_hash
from .signature import Signature

__all__ = [
    "Tone",
    "Palette",
    "build_palette",
    "hue_distance",
    "nearest_tone",
    "nearest_tone_index",
    "hsl_to_rgb",
    "hsl_color",
    "tone_color",
    "BACKDROPS",
    "paint_backdrop",
    "make_grain_tile",
    "paint_grain",
]

GRAIN_TILE_SIZE = 64
GRAIN_OPACITY = 0.08


@dataclass(frozen=True)
class Tone:
    hue: float
    saturation: float
    lightness: float


Palette = Tuple[Tone, ...]


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """Convert ``h`` (0..1), ``s`` and ``l`` (0..1) to 8-bit RGB."""

    def _hue(p: float, q: float, t: float) -> float:
        if t < 0:
            t += 1
        if t > 1:
            t -= 1
        if t < 1 / 6:
            return p + (q - p) * 6 * t
        if t < 1 / 2:
            return q
        if t < 2 / 3:
            return p + (q - p) * (2 / 3 - t) * 6
        return p

    if s == 0:
        v = int(round(l * 255))
        return v, v, v
    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q
    r = _hue(p, q, h + 1 / 3)
    g = _hue(p, q, h)
    b = _hue(p, q, h - 1 / 3)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


def hsl_color(hue_deg: float, saturation: float, lightness: float, alpha: float = 1.0) -> QtGui.QColor:
    r, g, b = hsl_to_rgb((hue_deg % 360.0) / 360.0, clamp(saturation, 0.0, 1.0), clamp(lightness, 0.0, 1.0))
    color = QtGui.QColor(r, g, b)
    color.setAlphaF(clamp(alpha, 0.0, 1.0))
    return color


def tone_color(tone: Tone, alpha: float = 1.0, lighten: float = 0.0) -> QtGui.QColor:
    return hsl_color(tone.hue, tone.saturation, tone.lightness + lighten, alpha)


# ---------------------------------------------------------------------------
# Palette


def build_palette(signature: Signature) -> Palette:
    profile = signature.style_profile
    rng = create_prng(signature.seed ^ string_hash(signature.style_id))
    spread = 30 + signature.seed % 60
    count = max(1, int(profile.palette_size))
    sat_lo, sat_hi = profile.saturation
    light_lo, light_hi = profile.lightness
    tones = []
    for i in range(count):
        if profile.palette_offsets:
            offset = profile.palette_offsets[i % len(profile.palette_offsets)]
        else:
            offset = i * spread + rng() * 30 - 15
        hue = (signature.primary_hue + offset + 360) % 360
        saturation = sat_lo + rng() * (sat_hi - sat_lo)
        lightness = light_lo + rng() * (light_hi - light_lo)
        tones.append(Tone(hue, saturation, lightness))
    return tuple(tones)


def hue_distance(a: float, b: float) -> float:
    delta = abs(a - b) % 360.0
    return min(delta, 360.0 - delta)


def nearest_tone_index(hue: float, palette: Sequence[Tone]) -> int:
    """Index of the tone closest to ``hue`` on the colour wheel; first wins ties."""

    best = 0
    best_distance = float("inf")
    for idx, tone in enumerate(palette):
        distance = hue_distance(hue, tone.hue)
        if distance < best_distance:
            best = idx
            best_distance = distance
    return best


def nearest_tone(hue: float, palette: Sequence[Tone]) -> Tone:
    return palette[nearest_tone_index(hue, palette)]


# ---------------------------------------------------------------------------
# Backdrop

BackdropPainter = Callable[[QtGui.QPainter, QtCore.QRectF, Signature], None]


def _flat(painter: QtGui.QPainter, rect: QtCore.QRectF, signature: Signature) -> None:
    painter.fillRect(rect, hsl_color(signature.primary_hue, 0.30, 0.05))


def _radial_glow(painter: QtGui.QPainter, rect: QtCore.QRectF, signature: Signature) -> None:
    gradient = QtGui.QRadialGradient(rect.center(), max(rect.width(), rect.height()) * 0.7)
    gradient.setColorAt(0.0, hsl_color(signature.primary_hue, 0.45, 0.12))
    gradient.setColorAt(0.6, hsl_color(signature.secondary_hue, 0.30, 0.06))
    gradient.setColorAt(1.0, hsl_color(signature.tertiary_hue, 0.25, 0.03))
    painter.fillRect(rect, QtGui.QBrush(gradient))


def _radial_deep(painter: QtGui.QPainter, rect: QtCore.QRectF, signature: Signature) -> None:
    focus = QtCore.QPointF(rect.left() + rect.width() * 0.3, rect.top() + rect.height() * 0.2)
    gradient = QtGui.QRadialGradient(focus, max(rect.width(), rect.height()))
    gradient.setColorAt(0.0, hsl_color(signature.secondary_hue, 0.35, 0.10))
    gradient.setColorAt(0.45, hsl_color(signature.primary_hue, 0.40, 0.05))
    gradient.setColorAt(1.0, hsl_color(signature.primary_hue, 0.20, 0.01))
    painter.fillRect(rect, QtGui.QBrush(gradient))


def _linear_dusk(painter: QtGui.QPainter, rect: QtCore.QRectF, signature: Signature) -> None:
    gradient = QtGui.QLinearGradient(rect.topLeft(), rect.bottomLeft())
    gradient.setColorAt(0.0, hsl_color(signature.primary_hue, 0.35, 0.09))
    gradient.setColorAt(1.0, hsl_color(signature.secondary_hue, 0.30, 0.03))
    painter.fillRect(rect, QtGui.QBrush(gradient))


def _linear_horizon(painter: QtGui.QPainter, rect: QtCore.QRectF, signature: Signature) -> None:
    gradient = QtGui.QLinearGradient(rect.topLeft(), rect.topRight())
    gradient.setColorAt(0.0, hsl_color(signature.tertiary_hue, 0.25, 0.04))
    gradient.setColorAt(0.5, hsl_color(signature.primary_hue, 0.30, 0.10))
    gradient.setColorAt(1.0, hsl_color(signature.secondary_hue, 0.25, 0.04))
    painter.fillRect(rect, QtGui.QBrush(gradient))


def _vignette(painter: QtGui.QPainter, rect: QtCore.QRectF, signature: Signature) -> None:
    gradient = QtGui.QRadialGradient(rect.center(), max(rect.width(), rect.height()) * 0.6)
    gradient.setColorAt(0.0, hsl_color(signature.primary_hue, 0.25, 0.08))
    gradient.setColorAt(1.0, QtGui.QColor(0, 0, 0))
    painter.fillRect(rect, QtGui.QBrush(gradient))


BACKDROPS: Dict[str, BackdropPainter] = {
    "flat": _flat,
    "radial-glow": _radial_glow,
    "radial-deep": _radial_deep,
    "linear-dusk": _linear_dusk,
    "linear-horizon": _linear_horizon,
    "vignette": _vignette,
}


def paint_backdrop(
    painter: QtGui.QPainter,
    width: int,
    height: int,
    signature: Signature,
    opacity: float = 1.0,
) -> None:
    """Composite the profile's backdrop over the whole surface at ``opacity``."""

    rect = QtCore.QRectF(0.0, 0.0, float(width), float(height))
    handler = BACKDROPS.get(signature.style_profile.backdrop, _flat)
    painter.save()
    painter.setCompositionMode(QtGui.QPainter.CompositionMode_SourceOver)
    painter.setOpacity(clamp(opacity, 0.0, 1.0))
    handler(painter, rect, signature)
    painter.restore()


def make_grain_tile(seed: int, size: int = GRAIN_TILE_SIZE) -> QtGui.QImage:
    rng = create_prng(seed ^ string_hash("grain"))
    tile = QtGui.QImage(size, size, QtGui.QImage.Format_ARGB32)
    for y in range(size):
        for x in range(size):
            tone = int(rng() * 255)
            alpha = int(rng() * 60)
            tile.setPixelColor(x, y, QtGui.QColor(tone, tone, tone, alpha))
    return tile


def paint_grain(painter: QtGui.QPainter, width: int, height: int, tile: QtGui.QImage) -> None:
    painter.save()
    painter.setCompositionMode(QtGui.QPainter.CompositionMode_SourceOver)
    painter.setOpacity(GRAIN_OPACITY)
    painter.fillRect(QtCore.QRectF(0.0, 0.0, float(width), float(height)), QtGui.QBrush(tile))
    painter.restore()
