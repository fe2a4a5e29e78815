"""Generated structures: fractal tree, layered terrain, sigils."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from PyQt5 import QtCore, QtGui

from ..palette import tone_color
from ..prng import create_prng
from .base import Scene, Style, StyleState, ellipse

__all__ = ["Branch", "FractalStyle", "TerrainStyle", "SigilStyle", "grow_tree"]


# ---------------------------------------------------------------------------
# Recursive fractal growth


@dataclass
class Branch:
    parent: int
    depth: int
    angle: float
    length: float
    x0: float = 0.0
    y0: float = 0.0
    x1: float = 0.0
    y1: float = 0.0
    heading: float = 0.0


def branch_count(seed: int, depth: int) -> int:
    return 2 + seed % 2 if depth < 4 else 2


def branch_spread(seed: int) -> float:
    return 0.5 + (seed % 10) / 20


def grow_tree(seed: int, trunk: float, max_depth: int) -> List[Branch]:
    """Return the branches in pre-order (parents always before children).

    ``angle`` is relative to the parent's heading; the root points up.
    """

    branches: List[Branch] = []
    spread = branch_spread(seed)

    def _grow(parent: int, depth: int, angle: float, length: float) -> None:
        branches.append(Branch(parent=parent, depth=depth, angle=angle, length=length))
        index = len(branches) - 1
        if depth >= max_depth:
            return
        count = branch_count(seed, depth)
        for i in range(count):
            _grow(index, depth + 1, spread * (i - (count - 1) / 2), length * 0.7)

    _grow(-1, 0, -math.pi / 2, trunk)
    return branches


@dataclass
class FractalState(StyleState):
    branches: List[Branch] = field(default_factory=list)
    leaves: List[int] = field(default_factory=list)
    max_depth: int = 7


class FractalStyle(Style):
    """A tree grown from the signature, swaying in the noise field.

    Commits blossom on the leaves.
    """

    key = "fractal"

    def initialize(self, scene: Scene) -> FractalState:
        max_depth = max(1, min(9, int(scene.profile.param("maxDepth", 7))))
        branches = grow_tree(scene.signature.seed, scene.height / 4, max_depth)
        leaves = [idx for idx, branch in enumerate(branches) if branch.depth == max_depth]
        return FractalState(branches=branches, leaves=leaves, max_depth=max_depth)

    def advance(self, scene: Scene, state: FractalState, painter: QtGui.QPainter, t: float) -> None:
        root_x, root_y = scene.width / 2, float(scene.height)
        winds = [scene.noise(depth * 0.1, t * 0.2) * 0.5 - 0.25 for depth in range(state.max_depth + 1)]
        for branch in state.branches:
            if branch.parent < 0:
                branch.x0, branch.y0 = root_x, root_y
                heading = branch.angle
            else:
                parent = state.branches[branch.parent]
                branch.x0, branch.y0 = parent.x1, parent.y1
                heading = parent.heading + branch.angle
            branch.heading = heading + winds[branch.depth]
            branch.x1 = branch.x0 + math.cos(branch.heading) * branch.length
            branch.y1 = branch.y0 + math.sin(branch.heading) * branch.length

            tone = scene.tone_at(branch.depth)
            pen = QtGui.QPen(tone_color(tone, 0.8, 0.2 - branch.depth * 0.05), max(1.0, (state.max_depth - branch.depth) * 0.7))
            pen.setCapStyle(QtCore.Qt.RoundCap)
            painter.setPen(pen)
            painter.drawLine(QtCore.QLineF(branch.x0, branch.y0, branch.x1, branch.y1))

        if not state.leaves:
            return
        painter.setPen(QtCore.Qt.NoPen)
        for p in scene.live:
            leaf = state.branches[state.leaves[p.index % len(state.leaves)]]
            p.move_to(leaf.x1, leaf.y1)
            pulse = math.sin(t * 2 + p.phase) * 0.3 + 1
            painter.setBrush(scene.color_for(p, p.alpha * 0.8, 0.15))
            ellipse(painter, p.x, p.y, p.size * 0.45 * pulse)


# ---------------------------------------------------------------------------
# Layered terrain


@dataclass
class TerrainLayer:
    base: float
    amplitude: float
    frequency: float
    offset: float


@dataclass
class TerrainState(StyleState):
    layers: List[TerrainLayer] = field(default_factory=list)
    step: int = 8
    members: List[List[int]] = field(default_factory=list)


class TerrainStyle(Style):
    """Noise ridges stacked back to front; commits glow along their ridge."""

    key = "terrain"

    def initialize(self, scene: Scene) -> TerrainState:
        count = max(2, int(scene.profile.param("layers", 6)))
        roughness = scene.profile.param("roughness", 0.004)
        height = scene.height
        state = TerrainState(step=max(4, scene.width // 120))
        for layer in range(count):
            state.layers.append(
                TerrainLayer(
                    base=height * (0.35 + 0.5 * layer / (count - 1)),
                    amplitude=height * max(0.04, 0.18 - 0.02 * layer),
                    frequency=roughness * (1 + layer * 0.5),
                    offset=layer * 37.1 + scene.signature.seed % 97,
                )
            )
            state.members.append([])
        for idx, p in enumerate(scene.particles):
            state.members[p.author_hash % count].append(idx)
        return state

    @staticmethod
    def ridge(scene: Scene, layer: TerrainLayer, index: int, x: float, t: float) -> float:
        return layer.base + scene.noise(x * layer.frequency + layer.offset, t * 0.05 + index) * layer.amplitude

    def advance(self, scene: Scene, state: TerrainState, painter: QtGui.QPainter, t: float) -> None:
        width, height = float(scene.width), float(scene.height)
        count = len(state.layers)
        for index, layer in enumerate(state.layers):
            points = [QtCore.QPointF(0.0, height)]
            x = 0.0
            while x < width + state.step:
                points.append(QtCore.QPointF(x, self.ridge(scene, layer, index, x, t)))
                x += state.step
            points.append(QtCore.QPointF(width, height))
            haze = 0.25 * (1 - index / max(1, count - 1))
            painter.setPen(QtCore.Qt.NoPen)
            painter.setBrush(tone_color(scene.tone_at(index), 1.0, haze - 0.1))
            painter.drawPolygon(QtGui.QPolygonF(points))

            for pidx in state.members[index]:
                p = scene.particles[pidx]
                y = self.ridge(scene, layer, index, p.origin_x, t) - p.size - 2
                p.move_to(p.origin_x, y)
                flicker = 0.6 + 0.4 * math.sin(t * 3 + p.phase)
                painter.setBrush(scene.color_for(p, 0.25 * flicker, 0.25))
                ellipse(painter, p.x, p.y, p.size)
                painter.setBrush(scene.color_for(p, flicker, 0.3))
                ellipse(painter, p.x, p.y, p.size * 0.35)


# ---------------------------------------------------------------------------
# Procedural sigils

_LATTICE = [(-1.0, -1.0), (0.0, -1.0), (1.0, -1.0), (-1.0, 0.0), (0.0, 0.0), (1.0, 0.0), (-1.0, 1.0), (0.0, 1.0), (1.0, 1.0)]


@dataclass
class Rune:
    particle: int
    x: float
    y: float
    scale: float
    strokes: List[Tuple[int, int]]
    ring: bool


@dataclass
class SigilState(StyleState):
    cell: float = 64.0
    cols: int = 1
    rows: int = 1
    runes: List[Rune] = field(default_factory=list)


def make_strokes(seed: int) -> Tuple[List[Tuple[int, int]], bool]:
    rng = create_prng(seed)
    strokes: List[Tuple[int, int]] = []
    for _ in range(3 + seed % 4):
        a = int(rng() * 9)
        b = int(rng() * 9)
        if a == b:
            b = (b + 1 + seed % 8) % 9
        strokes.append((a, b))
    return strokes, seed % 3 == 0


class SigilStyle(Style):
    """Each commit is written as a rune on a 3x3 lattice."""

    key = "sigils"

    def initialize(self, scene: Scene) -> SigilState:
        cell = max(16.0, scene.profile.param("cell", 64.0))
        cols = max(1, int(scene.width // cell))
        rows = max(1, int(scene.height // cell))
        slots = cols * rows
        taken: List[Optional[int]] = [None] * slots
        state = SigilState(cell=cell, cols=cols, rows=rows)
        pad_x = (scene.width - cols * cell) / 2
        pad_y = (scene.height - rows * cell) / 2
        for idx, p in enumerate(scene.live):
            if len(state.runes) >= slots:
                break
            slot = p.commit_hash % slots
            while taken[slot] is not None:
                slot = (slot + 1) % slots
            taken[slot] = idx
            strokes, ring = make_strokes(p.commit_hash)
            col, row = slot % cols, slot // cols
            state.runes.append(
                Rune(
                    particle=idx,
                    x=pad_x + col * cell + cell / 2,
                    y=pad_y + row * cell + cell / 2,
                    scale=cell * (0.18 + p.size / 100),
                    strokes=strokes,
                    ring=ring,
                )
            )
        return state

    def advance(self, scene: Scene, state: SigilState, painter: QtGui.QPainter, t: float) -> None:
        painter.setPen(QtCore.Qt.NoPen)
        painter.setBrush(tone_color(scene.tone_at(0), 0.15))
        pad_x = (scene.width - state.cols * state.cell) / 2
        pad_y = (scene.height - state.rows * state.cell) / 2
        for col in range(state.cols + 1):
            for row in range(state.rows + 1):
                ellipse(painter, pad_x + col * state.cell, pad_y + row * state.cell, 1.2)

        live = scene.live
        painter.setBrush(QtCore.Qt.NoBrush)
        for rune in state.runes:
            p = live[rune.particle]
            p.move_to(rune.x, rune.y)
            glow = 0.5 + 0.5 * math.sin(t * 2 + p.phase)
            painter.save()
            painter.translate(rune.x, rune.y)
            painter.rotate(math.degrees(math.sin(t * 0.5 + p.phase) * 0.2))
            pen = QtGui.QPen(scene.color_for(p, 0.35 + 0.55 * glow, 0.1), 2.0)
            pen.setCapStyle(QtCore.Qt.RoundCap)
            painter.setPen(pen)
            for a, b in rune.strokes:
                ax, ay = _LATTICE[a]
                bx, by = _LATTICE[b]
                painter.drawLine(QtCore.QLineF(ax * rune.scale, ay * rune.scale, bx * rune.scale, by * rune.scale))
            if rune.ring:
                ellipse(painter, 0.0, 0.0, rune.scale * 1.45)
            painter.restore()
