"""Screen-signal styles: glyph rain, glitch slices, radar sweep, collage."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from PyQt5 import QtCore, QtGui

from ..palette import hsl_color, tone_color
from ..prng import create_prng, string_hash
from .base import Scene, Style, StyleState, ellipse, polar

__all__ = ["RainStyle", "GlitchStyle", "RadarStyle", "CollageStyle", "glyph_for"]

GLYPH_BASE = 0x30A0
GLYPH_RANGE = 96


def glyph_for(commit_id: str) -> str:
    return chr(GLYPH_BASE + string_hash(commit_id or "x") % GLYPH_RANGE)


# ---------------------------------------------------------------------------
# Falling glyph rain


@dataclass
class RainState(StyleState):
    glyph: float = 14.0
    columns: int = 1
    column_of: List[int] = field(default_factory=list)
    glyphs: List[str] = field(default_factory=list)
    fonts: Dict[int, QtGui.QFont] = field(default_factory=dict)

    def font(self, pixel_size: int) -> QtGui.QFont:
        font = self.fonts.get(pixel_size)
        if font is None:
            font = QtGui.QFont("monospace")
            font.setStyleHint(QtGui.QFont.Monospace)
            font.setPixelSize(pixel_size)
            self.fonts[pixel_size] = font
        return font


class RainStyle(Style):
    """Commits fall down fixed glyph columns, one katakana glyph each."""

    key = "rain"

    def initialize(self, scene: Scene) -> RainState:
        glyph = max(6.0, scene.profile.param("glyph", 14.0))
        columns = max(1, int(scene.width // glyph))
        state = RainState(glyph=glyph, columns=columns)
        for p in scene.particles:
            state.column_of.append(min(columns - 1, max(0, int(p.origin_x / glyph))))
            commit_id = p.commit.id if p.commit is not None else ""
            state.glyphs.append(glyph_for(commit_id))
        return state

    def advance(self, scene: Scene, state: RainState, painter: QtGui.QPainter, t: float) -> None:
        height = scene.height
        painter.setPen(QtCore.Qt.NoPen)
        painter.setBrush(tone_color(scene.tone_at(0), 0.12))
        for col in range(state.columns):
            ellipse(painter, col * state.glyph + state.glyph / 2, 4.0, 1.0)

        for i, p in enumerate(scene.particles):
            y = p.y + p.size * 0.5
            if y > height:
                y = 0.0
            x = state.column_of[i] * state.glyph + state.glyph / 2
            p.move_to(x, y)
            pixel = max(6, int(p.size * 2))
            painter.setFont(state.font(pixel))
            painter.setPen(scene.color_for(p, p.alpha * 0.3))
            painter.drawText(QtCore.QPointF(x - pixel / 3, y - pixel), state.glyphs[i])
            painter.setPen(scene.color_for(p, p.alpha, 0.15))
            painter.drawText(QtCore.QPointF(x - pixel / 3, y), state.glyphs[i])


# ---------------------------------------------------------------------------
# Glitch slices


@dataclass
class GlitchState(StyleState):
    slices: List[Tuple[float, float, float]] = field(default_factory=list)
    shift: float = 40.0


class GlitchStyle(Style):
    """Horizontal bands slide against each other; commits are split blocks."""

    key = "glitch"

    def initialize(self, scene: Scene) -> GlitchState:
        rng = create_prng(scene.signature.seed ^ string_hash("glitch"))
        count = max(2, int(scene.profile.param("slices", 18)))
        cuts = sorted(rng() * scene.height for _ in range(count - 1))
        edges = [0.0] + cuts + [float(scene.height)]
        slices = [(edges[k], edges[k + 1] - edges[k], 0.3 + rng() * 0.7) for k in range(count)]
        return GlitchState(slices=slices, shift=scene.profile.param("shift", 40.0))

    def _slice_shift(self, scene: Scene, state: GlitchState, k: int, t: float) -> float:
        return scene.noise(t * 2, k * 0.37 + 0.5) * state.shift * state.slices[k][2]

    def advance(self, scene: Scene, state: GlitchState, painter: QtGui.QPainter, t: float) -> None:
        width = float(scene.width)
        signature = scene.signature
        shifts = [self._slice_shift(scene, state, k, t) for k in range(len(state.slices))]
        painter.setPen(QtCore.Qt.NoPen)
        for k, (top, span, _gain) in enumerate(state.slices):
            if abs(shifts[k]) > state.shift * 0.3:
                painter.fillRect(QtCore.QRectF(0.0, top, width, max(1.0, span * 0.08)), tone_color(scene.tone_at(k), 0.18))

        for p in scene.live:
            x = (p.origin_x + t * 20 * (1 + p.vx)) % width
            k = self._slice_for(state, p.y)
            x += shifts[k]
            p.move_to(x, p.y)
            w, h = p.size * 2.5, p.size
            painter.fillRect(QtCore.QRectF(x - w / 2 - 3, p.y - h / 2, w, h), hsl_color(signature.secondary_hue, 0.9, 0.5, 0.35))
            painter.fillRect(QtCore.QRectF(x - w / 2 + 3, p.y - h / 2, w, h), hsl_color(signature.tertiary_hue, 0.9, 0.5, 0.35))
            painter.fillRect(QtCore.QRectF(x - w / 2, p.y - h / 2, w, h), scene.color_for(p, 0.9))

    @staticmethod
    def _slice_for(state: GlitchState, y: float) -> int:
        for k, (top, span, _gain) in enumerate(state.slices):
            if y < top + span:
                return k
        return len(state.slices) - 1


# ---------------------------------------------------------------------------
# Radar sweep


@dataclass
class RadarState(StyleState):
    cx: float = 0.0
    cy: float = 0.0
    radius: float = 1.0
    rings: int = 5
    sweep_speed: float = 1.5
    blips: List[Tuple[float, float]] = field(default_factory=list)


class RadarStyle(Style):
    """A rotating beam lights commits placed by time (angle) and author (range)."""

    key = "radar"

    def initialize(self, scene: Scene) -> RadarState:
        radius = min(scene.width, scene.height) * 0.45
        state = RadarState(
            cx=scene.width / 2,
            cy=scene.height / 2,
            radius=radius,
            rings=max(1, int(scene.profile.param("rings", 5))),
            sweep_speed=scene.profile.param("sweep", 1.5),
        )
        for p in scene.particles:
            angle = (p.origin_x / max(1, scene.width)) * math.pi * 2
            reach = min(1.0, max(0.05, p.origin_y / max(1, scene.height))) * radius
            state.blips.append((angle, reach))
        return state

    def advance(self, scene: Scene, state: RadarState, painter: QtGui.QPainter, t: float) -> None:
        hue = scene.signature.primary_hue
        painter.setBrush(QtCore.Qt.NoBrush)
        painter.setPen(QtGui.QPen(hsl_color(hue, 0.6, 0.5, 0.25), 1.0))
        for ring in range(1, state.rings + 1):
            ellipse(painter, state.cx, state.cy, state.radius * ring / state.rings)
        painter.drawLine(QtCore.QLineF(state.cx - state.radius, state.cy, state.cx + state.radius, state.cy))
        painter.drawLine(QtCore.QLineF(state.cx, state.cy - state.radius, state.cx, state.cy + state.radius))

        two_pi = math.pi * 2
        sweep = (t * state.sweep_speed) % two_pi
        centre = QtCore.QPointF(state.cx, state.cy)
        for k in range(16):
            angle = sweep - k * 0.03
            painter.setPen(QtGui.QPen(hsl_color(hue, 0.7, 0.6, 0.5 * (1 - k / 16)), 2.0))
            painter.drawLine(QtCore.QLineF(centre, polar(state.cx, state.cy, angle, state.radius)))

        painter.setPen(QtCore.Qt.NoPen)
        for i, p in enumerate(scene.particles):
            angle, reach = state.blips[i]
            position = polar(state.cx, state.cy, angle, reach)
            p.move_to(position.x(), position.y())
            since = (sweep - angle) % two_pi
            intensity = (1 - since / two_pi) ** 2
            painter.setBrush(scene.color_for(p, 0.15 + 0.85 * intensity, 0.2 * intensity))
            ellipse(painter, p.x, p.y, p.size * 0.5 * (0.5 + intensity))


# ---------------------------------------------------------------------------
# Collage


@dataclass
class CutOut:
    kind: int
    x: float
    y: float
    w: float
    h: float
    rotation: float
    tone: int
    speed: float
    alpha: float


@dataclass
class CollageState(StyleState):
    shapes: List[CutOut] = field(default_factory=list)
    pins: List[Tuple[int, float, float]] = field(default_factory=list)


class CollageStyle(Style):
    """Translucent paper cut-outs drift; commits are pinned onto them."""

    key = "collage"

    def initialize(self, scene: Scene) -> CollageState:
        signature = scene.signature
        rng = create_prng(signature.seed ^ string_hash("collage"))
        width, height = scene.width, scene.height
        count = max(1, int(scene.profile.param("shapes", 14)) + int(signature.complexity))
        state = CollageState()
        for k in range(count):
            state.shapes.append(
                CutOut(
                    kind=int(rng() * 3),
                    x=rng() * width,
                    y=rng() * height,
                    w=width * (0.08 + rng() * 0.22),
                    h=height * (0.1 + rng() * 0.35),
                    rotation=(rng() - 0.5) * 60,
                    tone=k,
                    speed=0.5 + rng(),
                    alpha=0.25 + rng() * 0.4,
                )
            )
        for p in scene.particles:
            shape = state.shapes[p.commit_hash % count]
            u = ((p.commit_hash // 7) % 100) / 100 - 0.5
            v = ((p.author_hash // 3) % 100) / 100 - 0.5
            state.pins.append((p.commit_hash % count, u * shape.w * 0.8, v * shape.h * 0.8))
        return state

    def _transform(self, shape: CutOut, k: int, t: float) -> Tuple[float, float, float]:
        x = shape.x + math.sin(t * 0.2 * shape.speed + k) * 10
        y = shape.y + math.cos(t * 0.15 * shape.speed + k) * 8
        rotation = shape.rotation + math.sin(t * 0.3 + k) * 8
        return x, y, rotation

    def advance(self, scene: Scene, state: CollageState, painter: QtGui.QPainter, t: float) -> None:
        transforms = []
        for k, shape in enumerate(state.shapes):
            x, y, rotation = self._transform(shape, k, t)
            transforms.append((x, y, rotation))
            painter.save()
            painter.translate(x, y)
            painter.rotate(rotation)
            painter.setPen(QtGui.QPen(QtGui.QColor(255, 255, 255, 50), 1.0))
            painter.setBrush(tone_color(scene.tone_at(shape.tone), shape.alpha))
            rect = QtCore.QRectF(-shape.w / 2, -shape.h / 2, shape.w, shape.h)
            if shape.kind == 0:
                painter.drawRect(rect)
            elif shape.kind == 1:
                painter.drawEllipse(rect)
            else:
                painter.drawPolygon(
                    QtGui.QPolygonF(
                        [
                            QtCore.QPointF(0.0, -shape.h / 2),
                            QtCore.QPointF(shape.w / 2, shape.h / 2),
                            QtCore.QPointF(-shape.w / 2, shape.h / 2),
                        ]
                    )
                )
            painter.restore()

        painter.setPen(QtCore.Qt.NoPen)
        for i, p in enumerate(scene.particles):
            k, u, v = state.pins[i]
            x, y, rotation = transforms[k]
            rad = math.radians(rotation)
            px = x + u * math.cos(rad) - v * math.sin(rad)
            py = y + u * math.sin(rad) + v * math.cos(rad)
            p.move_to(px, py)
            painter.setBrush(QtGui.QColor(0, 0, 0, 80))
            ellipse(painter, px + 1.5, py + 1.5, p.size * 0.4)
            painter.setBrush(scene.color_for(p, 0.95, 0.15))
            ellipse(painter, px, py, p.size * 0.4)
