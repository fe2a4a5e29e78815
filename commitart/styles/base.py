"""Shared contract and helpers for the rendering styles."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List

from PyQt5 import QtCore, QtGui

from ..noise import SeededNoise
from ..palette import Palette, Tone, nearest_tone, tone_color
from ..particles import Particle
from ..profiles import StyleProfile
from ..signature import Signature

__all__ = ["Scene", "Style", "StyleState", "ellipse", "polar", "wrap"]


@dataclass
class Scene:
    """Everything a style may read while initializing or advancing."""

    signature: Signature
    palette: Palette
    particles: List[Particle]
    width: int
    height: int
    noise: SeededNoise
    _tones: Dict[int, Tone] = field(default_factory=dict, repr=False)

    @property
    def profile(self) -> StyleProfile:
        return self.signature.style_profile

    @property
    def live(self) -> List[Particle]:
        return [p for p in self.particles if not p.is_background]

    def tone_for(self, particle: Particle) -> Tone:
        tone = self._tones.get(particle.index)
        if tone is None:
            tone = nearest_tone(particle.hue, self.palette)
            self._tones[particle.index] = tone
        return tone

    def tone_at(self, index: int) -> Tone:
        return self.palette[index % len(self.palette)]

    def color_for(self, particle: Particle, alpha: float = 1.0, lighten: float = 0.0) -> QtGui.QColor:
        return tone_color(self.tone_for(particle), alpha, lighten)


class StyleState:
    """Base class for the per-run auxiliary structures of a style."""

    tick: int = 0


class Style:
    """One rendering algorithm.

    ``initialize`` builds the style's auxiliary state for a run;
    ``advance`` mutates particles and state for time ``t`` and draws on
    ``painter``.  Both must cope with an empty particle list.
    """

    key = "base"

    def initialize(self, scene: Scene) -> StyleState:
        return StyleState()

    def advance(self, scene: Scene, state: StyleState, painter: QtGui.QPainter, t: float) -> None:
        raise NotImplementedError


def wrap(value: float, size: float) -> float:
    if value < 0:
        return value + size
    if value > size:
        return value - size
    return value


def ellipse(painter: QtGui.QPainter, x: float, y: float, radius: float) -> None:
    radius = max(0.0, radius)
    painter.drawEllipse(QtCore.QPointF(x, y), radius, radius)


def polar(cx: float, cy: float, angle: float, radius: float) -> QtCore.QPointF:
    return QtCore.QPointF(cx + math.cos(angle) * radius, cy + math.sin(angle) * radius)
