"""Cell and bar based styles: mosaic, life, weave, barcode."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from PyQt5 import QtCore, QtGui

from ..palette import Tone, hsl_color, tone_color
from ..prng import create_prng
from .base import Scene, Style, StyleState, ellipse

__all__ = [
    "MosaicStyle",
    "LifeStyle",
    "WeaveStyle",
    "BarcodeStyle",
    "MAX_GRID_CELLS",
    "life_step",
    "seed_life_grid",
]

MAX_GRID_CELLS = 2500

Grid = List[List[int]]


# ---------------------------------------------------------------------------
# Voronoi mosaic


@dataclass
class MosaicState(StyleState):
    cell: int = 15
    cols: int = 0
    rows: int = 0
    drift: float = 0.5
    owners: List[int] = field(default_factory=list)


class MosaicStyle(Style):
    """Each grid cell takes the tone of the nearest commit particle."""

    key = "mosaic"

    def initialize(self, scene: Scene) -> MosaicState:
        cell = max(2, int(scene.profile.param("cell", 15)))
        while math.ceil(scene.width / cell) * math.ceil(scene.height / cell) > MAX_GRID_CELLS:
            cell += 1
        cols = int(math.ceil(scene.width / cell))
        rows = int(math.ceil(scene.height / cell))
        return MosaicState(
            cell=cell,
            cols=cols,
            rows=rows,
            drift=scene.profile.param("drift", 0.5),
            owners=[-1] * (cols * rows),
        )

    def advance(self, scene: Scene, state: MosaicState, painter: QtGui.QPainter, t: float) -> None:
        seeds = scene.live
        for p in seeds:
            p.move_to(p.x + math.cos(t + p.phase) * state.drift, p.y + math.sin(t + p.phase) * state.drift)
        if not seeds:
            return

        cell = state.cell
        half = cell / 2
        painter.setPen(QtCore.Qt.NoPen)
        for col in range(state.cols):
            cx = col * cell + half
            for row in range(state.rows):
                cy = row * cell + half
                nearest = seeds[0]
                best = float("inf")
                for p in seeds:
                    dx = cx - p.x
                    dy = cy - p.y
                    dist = dx * dx + dy * dy
                    if dist < best:
                        best = dist
                        nearest = p
                state.owners[col * state.rows + row] = nearest.index
                painter.fillRect(QtCore.QRectF(col * cell, row * cell, cell, cell), scene.color_for(nearest, 0.8))

        painter.setBrush(QtGui.QColor(255, 255, 255, 90))
        for p in seeds:
            ellipse(painter, p.x, p.y, 1.5)


# ---------------------------------------------------------------------------
# Cellular automaton


def seed_life_grid(seed: int, cols: int, rows: int, density: float) -> Grid:
    rng = create_prng(seed)
    threshold = 1.0 - density
    return [[1 if rng() > threshold else 0 for _ in range(rows)] for _ in range(cols)]


def life_step(grid: Grid, ages: Grid, age_cap: int) -> Tuple[Grid, Grid]:
    """Apply one Conway generation on a torus.

    ``grid[col][row]`` holds 0/1.  Surviving cells age by one up to
    ``age_cap``; newborn cells start at 1 and dead cells at 0.
    """

    cols = len(grid)
    rows = len(grid[0]) if cols else 0
    next_grid: Grid = [[0] * rows for _ in range(cols)]
    next_ages: Grid = [[0] * rows for _ in range(cols)]
    for i in range(cols):
        for j in range(rows):
            neighbors = 0
            for dx in (-1, 0, 1):
                column = grid[(i + dx) % cols]
                for dy in (-1, 0, 1):
                    if dx == 0 and dy == 0:
                        continue
                    neighbors += column[(j + dy) % rows]
            alive = grid[i][j] == 1
            if alive and neighbors in (2, 3):
                next_grid[i][j] = 1
                next_ages[i][j] = min(ages[i][j] + 1, age_cap)
            elif not alive and neighbors == 3:
                next_grid[i][j] = 1
                next_ages[i][j] = 1
    return next_grid, next_ages


@dataclass
class LifeState(StyleState):
    cols: int = 50
    rows: int = 50
    age_cap: int = 12
    cadence: int = 5
    grid: Grid = field(default_factory=list)
    ages: Grid = field(default_factory=list)
    generation: int = 0


class LifeStyle(Style):
    """Conway's rule on a toroidal grid seeded from the signature and commits."""

    key = "life"

    def initialize(self, scene: Scene) -> LifeState:
        profile = scene.profile
        cols = max(3, int(profile.param("cols", 50)))
        rows = max(3, int(profile.param("rows", 50)))
        grid = seed_life_grid(scene.signature.seed, cols, rows, profile.param("density", 0.2))
        for p in scene.live:
            col = int(p.x / max(1, scene.width) * cols) % cols
            row = int(p.y / max(1, scene.height) * rows) % rows
            grid[col][row] = 1
        ages = [[1 if alive else 0 for alive in column] for column in grid]
        return LifeState(
            cols=cols,
            rows=rows,
            age_cap=max(1, int(profile.param("ageCap", 12))),
            cadence=max(1, int(profile.param("cadence", 5))),
            grid=grid,
            ages=ages,
        )

    def advance(self, scene: Scene, state: LifeState, painter: QtGui.QPainter, t: float) -> None:
        cell_w = scene.width / state.cols
        cell_h = scene.height / state.rows
        painter.setPen(QtCore.Qt.NoPen)
        for i, column in enumerate(state.grid):
            for j, alive in enumerate(column):
                if not alive:
                    continue
                age = state.ages[i][j]
                tone = scene.tone_at(age * len(scene.palette) // (state.age_cap + 1))
                color = tone_color(tone, 0.8, 0.15 * (1 - age / state.age_cap))
                painter.fillRect(QtCore.QRectF(i * cell_w, j * cell_h, cell_w - 1, cell_h - 1), color)

        for p in scene.live:
            painter.setBrush(scene.color_for(p, 0.35))
            ellipse(painter, p.x, p.y, p.size * 0.5)

        state.tick += 1
        if state.tick % state.cadence == 0:
            state.grid, state.ages = life_step(state.grid, state.ages, state.age_cap)
            state.generation += 1


# ---------------------------------------------------------------------------
# Woven grid


@dataclass
class WeaveState(StyleState):
    warp: List[Tuple[float, float, Tone]] = field(default_factory=list)
    weft: List[Tuple[float, float, Tone]] = field(default_factory=list)


class WeaveStyle(Style):
    """Vertical threads coloured by commits cross palette-coloured wefts."""

    key = "weave"

    def initialize(self, scene: Scene) -> WeaveState:
        width, height = scene.width, scene.height
        warp_count = max(4, int(scene.profile.param("threads", 24)))
        weft_count = max(4, int(round(warp_count * height / max(1, width))))
        live = scene.live
        warp_pitch = width / warp_count
        weft_pitch = height / weft_count
        state = WeaveState()
        for k in range(warp_count):
            if live:
                p = live[k * len(live) // warp_count]
                tone, thickness = scene.tone_for(p), min(0.9, 0.35 + p.size / 30)
            else:
                tone, thickness = scene.tone_at(k), 0.5
            state.warp.append((k * warp_pitch + warp_pitch / 2, warp_pitch * thickness, tone))
        for j in range(weft_count):
            state.weft.append((j * weft_pitch + weft_pitch / 2, weft_pitch * 0.6, scene.tone_at(j + 1)))
        return state

    def advance(self, scene: Scene, state: WeaveState, painter: QtGui.QPainter, t: float) -> None:
        width, height = float(scene.width), float(scene.height)
        painter.setPen(QtCore.Qt.NoPen)
        wefts = [(y + math.sin(t + j * 0.7) * 3, w, tone) for j, (y, w, tone) in enumerate(state.weft)]
        warps = [(x + math.sin(t * 0.8 + k) * 3, w, tone) for k, (x, w, tone) in enumerate(state.warp)]

        for y, w, tone in wefts:
            painter.fillRect(QtCore.QRectF(0.0, y - w / 2, width, w), tone_color(tone, 0.85, -0.1))
        for x, w, tone in warps:
            painter.fillRect(QtCore.QRectF(x - w / 2, 0.0, w, height), tone_color(tone, 0.9))

        shift = int(t * 2) % 2
        for k, (x, ww, _warp_tone) in enumerate(warps):
            for j, (y, wh, tone) in enumerate(wefts):
                if (k + j + shift) % 2 == 0:
                    painter.fillRect(QtCore.QRectF(x - ww / 2, y - wh / 2, ww, wh), tone_color(tone, 0.95))


# ---------------------------------------------------------------------------
# Barcode


@dataclass
class BarcodeState(StyleState):
    bars: List[Tuple[float, float, int]] = field(default_factory=list)


class BarcodeStyle(Style):
    """One bar per commit, left to right in history order."""

    key = "barcode"

    def initialize(self, scene: Scene) -> BarcodeState:
        live = scene.live
        state = BarcodeState()
        if not live:
            return state
        raw = [p.size * 0.6 for p in live]
        gap = 1.0
        usable = scene.width * 0.8
        scale = (usable - gap * (len(raw) - 1)) / max(1e-6, sum(raw))
        x = scene.width * 0.1
        for idx, p in enumerate(live):
            bar = max(0.5, raw[idx] * scale)
            state.bars.append((x, bar, idx))
            x += bar + gap
        return state

    def advance(self, scene: Scene, state: BarcodeState, painter: QtGui.QPainter, t: float) -> None:
        width, height = scene.width, scene.height
        live = scene.live
        baseline = height * 0.82
        painter.setPen(QtGui.QPen(hsl_color(scene.signature.primary_hue, 0.2, 0.8, 0.3), 1.0))
        painter.drawLine(QtCore.QLineF(width * 0.1, baseline + 6, width * 0.9, baseline + 6))

        scan = ((t * 0.5) % 1.0) * width
        painter.setPen(QtCore.Qt.NoPen)
        for x, bar, idx in state.bars:
            p = live[idx]
            span = height * 0.6 * (0.6 + 0.4 * math.sin(t * 2 + p.phase))
            glow = max(0.0, 1 - abs(x - scan) / 60)
            painter.fillRect(QtCore.QRectF(x, baseline - span, bar, span), scene.color_for(p, 0.85, 0.2 * glow))
            p.move_to(x + bar / 2, baseline - span)

        painter.fillRect(QtCore.QRectF(scan - 1, height * 0.1, 2, height * 0.75), QtGui.QColor(255, 255, 255, 60))
