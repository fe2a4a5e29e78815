"""Styles where commit particles move freely: constellation, flow, nebula, orbit."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from PyQt5 import QtCore, QtGui

from ..palette import hsl_color, tone_color
from ..prng import create_prng, string_hash
from .base import Scene, Style, StyleState, ellipse, wrap

__all__ = ["ConstellationStyle", "FlowStyle", "NebulaStyle", "OrbitStyle"]


# ---------------------------------------------------------------------------
# Constellation graph


@dataclass
class ConstellationState(StyleState):
    link_distance: float = 80.0
    drift: float = 0.3


class ConstellationStyle(Style):
    """Nodes wobble around their mapped position; close pairs are linked."""

    key = "constellation"

    def initialize(self, scene: Scene) -> ConstellationState:
        profile = scene.profile
        return ConstellationState(
            link_distance=profile.param("linkDistance", 80.0),
            drift=profile.param("drift", 0.3),
        )

    def advance(self, scene: Scene, state: ConstellationState, painter: QtGui.QPainter, t: float) -> None:
        nodes = scene.live
        for p in nodes:
            p.move_to(p.x + math.cos(t + p.phase) * state.drift, p.y + math.sin(t + p.phase) * state.drift)

        limit = state.link_distance
        for i, p1 in enumerate(nodes):
            for p2 in nodes[i + 1:]:
                dist = math.hypot(p1.x - p2.x, p1.y - p2.y)
                if dist >= limit:
                    continue
                pen = QtGui.QPen(scene.color_for(p1, (1 - dist / limit) * 0.4, 0.1), 1.0)
                painter.setPen(pen)
                painter.drawLine(QtCore.QLineF(p1.x, p1.y, p2.x, p2.y))

        painter.setPen(QtCore.Qt.NoPen)
        for p in nodes:
            pulse = math.sin(t * 2 + p.phase) * 0.5 + 1
            painter.setBrush(scene.color_for(p, 0.15))
            ellipse(painter, p.x, p.y, p.size * pulse)
            painter.setBrush(scene.color_for(p, p.alpha, 0.1))
            ellipse(painter, p.x, p.y, (p.size / 2) * pulse)


# ---------------------------------------------------------------------------
# Flow field


@dataclass
class FlowState(StyleState):
    field_scale: float = 0.002
    step: float = 1.0


class FlowStyle(Style):
    """Particles are advected along angles sampled from the noise field."""

    key = "flow"

    def initialize(self, scene: Scene) -> FlowState:
        profile = scene.profile
        return FlowState(
            field_scale=profile.param("fieldScale", 0.002),
            step=profile.param("step", 1.0),
        )

    def advance(self, scene: Scene, state: FlowState, painter: QtGui.QPainter, t: float) -> None:
        width, height = scene.width, scene.height
        scale = state.field_scale
        for p in scene.particles:
            angle = scene.noise(p.x * scale, p.y * scale + t * 0.1) * math.pi * 4
            x = wrap(p.x + math.cos(angle) * state.step, width)
            y = wrap(p.y + math.sin(angle) * state.step, height)
            p.move_to(x, y)

            if p.is_background:
                alpha, size = 0.2, p.size
            else:
                alpha, size = 0.8, p.size * (math.sin(t + p.phase) * 0.2 + 1)
                if abs(p.x - p.prev_x) < state.step * 2 and abs(p.y - p.prev_y) < state.step * 2:
                    painter.setPen(QtGui.QPen(scene.color_for(p, 0.3), max(1.0, size * 0.5)))
                    painter.drawLine(QtCore.QLineF(p.prev_x, p.prev_y, p.x, p.y))
            painter.setPen(QtCore.Qt.NoPen)
            painter.setBrush(scene.color_for(p, alpha))
            ellipse(painter, p.x, p.y, size)


# ---------------------------------------------------------------------------
# Spiral nebula


@dataclass
class NebulaState(StyleState):
    radius_scale: float = 150.0
    stars: List[Tuple[float, float, float, float]] = field(default_factory=list)
    clouds: List[Tuple[float, float, float, int]] = field(default_factory=list)


class NebulaStyle(Style):
    """Particles spiral around the centre over a star field and gas clouds."""

    key = "nebula"

    def initialize(self, scene: Scene) -> NebulaState:
        signature = scene.signature
        rng = create_prng(signature.seed ^ string_hash("nebula"))
        width, height = scene.width, scene.height
        stars = []
        for _ in range(int(scene.profile.param("stars", 120))):
            stars.append((rng() * width, rng() * height, 0.4 + rng() * 1.2, rng() * math.pi * 2))
        clouds = []
        for idx in range(int(scene.profile.param("clouds", 6))):
            clouds.append(
                (
                    width * (0.25 + rng() * 0.5),
                    height * (0.25 + rng() * 0.5),
                    min(width, height) * (0.2 + rng() * 0.3),
                    idx,
                )
            )
        return NebulaState(radius_scale=min(width, height) * 0.375, stars=stars, clouds=clouds)

    def advance(self, scene: Scene, state: NebulaState, painter: QtGui.QPainter, t: float) -> None:
        width, height = scene.width, scene.height
        painter.setPen(QtCore.Qt.NoPen)
        for x, y, r, twinkle in state.stars:
            painter.setBrush(QtGui.QColor(255, 255, 255, int(255 * (0.3 + 0.3 * math.sin(t * 3 + twinkle)))))
            ellipse(painter, x, y, r)

        for x, y, radius, idx in state.clouds:
            cx = x + math.sin(t * 0.1 + idx) * 20
            cy = y + math.cos(t * 0.13 + idx) * 12
            gradient = QtGui.QRadialGradient(QtCore.QPointF(cx, cy), radius)
            gradient.setColorAt(0.0, tone_color(scene.tone_at(idx), 0.12))
            gradient.setColorAt(1.0, tone_color(scene.tone_at(idx), 0.0))
            painter.setBrush(QtGui.QBrush(gradient))
            ellipse(painter, cx, cy, radius)

        cx, cy = width / 2, height / 2
        for i, p in enumerate(scene.particles):
            angle_offset = (p.origin_x / width) * math.pi * 2
            radius_base = (p.origin_y / height) * state.radius_scale
            angle = t * 0.2 + angle_offset
            radius = radius_base + math.sin(t * 2 + i) * 10
            p.move_to(cx + math.cos(angle) * radius, cy + math.sin(angle) * radius)

            if p.is_background:
                painter.setBrush(scene.color_for(p, 0.2))
                ellipse(painter, p.x, p.y, p.size)
                continue
            painter.setBrush(scene.color_for(p, 0.25))
            ellipse(painter, p.x, p.y, p.size * 2)
            painter.setBrush(scene.color_for(p, 0.8, 0.1))
            ellipse(painter, p.x, p.y, p.size)


# ---------------------------------------------------------------------------
# Multi-body orbit


@dataclass
class OrbitState(StyleState):
    centers: List[Tuple[float, float, float]] = field(default_factory=list)
    assignment: List[int] = field(default_factory=list)
    radii: List[float] = field(default_factory=list)
    start_angles: List[float] = field(default_factory=list)
    speeds: List[float] = field(default_factory=list)
    angles: List[float] = field(default_factory=list)


class OrbitStyle(Style):
    """Each author's commits circle one of a few seeded centres."""

    key = "orbit"

    def initialize(self, scene: Scene) -> OrbitState:
        signature = scene.signature
        rng = create_prng(signature.seed ^ string_hash("orbit"))
        width, height = scene.width, scene.height
        span = min(width, height)
        count = int(scene.profile.param("centers", 3)) + signature.seed % 3
        centers = []
        for _ in range(count):
            angle = rng() * math.pi * 2
            radius = rng() * span * 0.3
            mass = 3 + rng() * 6
            centers.append((width / 2 + math.cos(angle) * radius * 1.6, height / 2 + math.sin(angle) * radius, mass))

        state = OrbitState(centers=centers)
        for p in scene.particles:
            direction = 1.0 if p.author_hash % 2 == 0 else -1.0
            radius = 18 + (p.commit_hash % 100) / 100 * span * 0.22
            state.assignment.append(p.author_hash % count)
            state.radii.append(radius)
            state.start_angles.append(p.phase)
            state.speeds.append(direction * (0.6 + (p.commit_hash % 60) / 60) * 40 / radius)
            state.angles.append(p.phase)
        return state

    def advance(self, scene: Scene, state: OrbitState, painter: QtGui.QPainter, t: float) -> None:
        signature = scene.signature
        painter.setBrush(QtCore.Qt.NoBrush)
        for cx, cy, mass in state.centers:
            for ring in (1, 2, 3):
                painter.setPen(QtGui.QPen(hsl_color(signature.tertiary_hue, 0.4, 0.5, 0.06), 1.0))
                ellipse(painter, cx, cy, mass * 12 * ring)

        for i, p in enumerate(scene.particles):
            cx, cy, _mass = state.centers[state.assignment[i]]
            angle = state.start_angles[i] + state.speeds[i] * t * 3
            state.angles[i] = angle
            radius = state.radii[i]
            p.move_to(cx + math.cos(angle) * radius, cy + math.sin(angle) * radius)
            if state.tick > 0:
                painter.setPen(QtGui.QPen(scene.color_for(p, 0.5), max(1.0, p.size * 0.4)))
                painter.drawLine(QtCore.QLineF(p.prev_x, p.prev_y, p.x, p.y))
            painter.setPen(QtCore.Qt.NoPen)
            painter.setBrush(scene.color_for(p, p.alpha))
            ellipse(painter, p.x, p.y, p.size * 0.6)

        painter.setPen(QtCore.Qt.NoPen)
        for cx, cy, mass in state.centers:
            gradient = QtGui.QRadialGradient(QtCore.QPointF(cx, cy), mass * 3)
            gradient.setColorAt(0.0, hsl_color(signature.tertiary_hue, 0.6, 0.85, 0.9))
            gradient.setColorAt(1.0, hsl_color(signature.tertiary_hue, 0.6, 0.5, 0.0))
            painter.setBrush(QtGui.QBrush(gradient))
            ellipse(painter, cx, cy, mass * 3)
        state.tick += 1
