"""Frame composition on the shared raster surface."""

from __future__ import annotations

from typing import List, Mapping, Optional

from PyQt5 import QtCore, QtGui

from .config import load_settings
from .descriptor import RepositoryDescriptor
from .diagnostics import debug, warn_once
from .noise import SeededNoise
from .palette import Palette, build_palette, hsl_color, make_grain_tile, paint_backdrop, paint_grain
from .particles import Particle, map_commits
from .signature import Signature, derive_signature
from .styles import DEFAULT_STYLE, Scene, Style, StyleState, get_style

__all__ = ["VisualizationEngine", "map_blend_mode"]


def map_blend_mode(name: Optional[str]) -> QtGui.QPainter.CompositionMode:
    mode = (name or "").lower()
    mapping = {
        "normal": QtGui.QPainter.CompositionMode_SourceOver,
        "source-over": QtGui.QPainter.CompositionMode_SourceOver,
        "screen": QtGui.QPainter.CompositionMode_Screen,
        "lighten": QtGui.QPainter.CompositionMode_Lighten,
        "lighter": QtGui.QPainter.CompositionMode_Plus,
        "multiply": QtGui.QPainter.CompositionMode_Multiply,
        "overlay": QtGui.QPainter.CompositionMode_Overlay,
        "plus": QtGui.QPainter.CompositionMode_Plus,
    }
    return mapping.get(mode, QtGui.QPainter.CompositionMode_SourceOver)


class VisualizationEngine:
    """Owns the surface and the per-run state, and renders one frame at a time.

    The engine never schedules anything itself; :class:`RenderLoop` calls
    :meth:`render_frame` on every tick.
    """

    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        settings: Optional[Mapping[str, dict]] = None,
    ) -> None:
        self.settings = settings if settings is not None else load_settings()
        surface_cfg = self.settings["surface"]
        self.width = int(width or surface_cfg["width"])
        self.height = int(height or surface_cfg["height"])
        self.particle_cap = int(self.settings["system"]["particleCap"])
        self.surface = self._make_surface(self.width, self.height)

        self.descriptor: Optional[RepositoryDescriptor] = None
        self.signature: Optional[Signature] = None
        self.palette: Palette = ()
        self.noise: Optional[SeededNoise] = None
        self.particles: List[Particle] = []
        self.scene: Optional[Scene] = None
        self.style: Optional[Style] = None
        self.state: Optional[StyleState] = None
        self.grain: Optional[QtGui.QImage] = None
        self.time = 0.0
        self.frame = 0

    @staticmethod
    def _make_surface(width: int, height: int) -> QtGui.QImage:
        image = QtGui.QImage(width, height, QtGui.QImage.Format_ARGB32_Premultiplied)
        image.fill(QtCore.Qt.black)
        return image

    # ------------------------------------------------------------------
    # Run setup

    def visualize(self, descriptor: RepositoryDescriptor) -> Signature:
        signature = derive_signature(descriptor)
        self.descriptor = descriptor
        self.signature = signature
        self.palette = build_palette(signature)
        self.noise = SeededNoise(signature.seed)
        self.style = get_style(signature.style)
        self.grain = make_grain_tile(signature.seed) if signature.style_profile.grain else None
        debug(
            "visualize %s: style=%s profile=%s hue=%d speed=%.4f"
            % (signature.repo_name, signature.style, signature.style_id, signature.primary_hue, signature.animation_speed)
        )
        self._rebuild()
        return signature

    def resize(self, width: int, height: int) -> bool:
        """Adopt a new surface size; non-positive sizes are ignored."""

        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            debug(f"resize ignored: {width}x{height}")
            return False
        self.width, self.height = width, height
        self.surface = self._make_surface(width, height)
        if self.signature is not None:
            self._rebuild()
        return True

    def _rebuild(self) -> None:
        if self.descriptor is None or self.signature is None or self.noise is None or self.style is None:
            return
        self.particles = map_commits(
            self.descriptor.commits, self.signature, self.width, self.height, self.particle_cap
        )
        self.scene = Scene(
            signature=self.signature,
            palette=self.palette,
            particles=self.particles,
            width=self.width,
            height=self.height,
            noise=self.noise,
        )
        try:
            self.state = self.style.initialize(self.scene)
        except Exception as exc:
            warn_once(
                f"{self.style.key}:init:{type(exc).__name__}",
                f"style '{self.style.key}' failed to initialize, using '{DEFAULT_STYLE}': {exc!r}",
            )
            self.style = get_style(DEFAULT_STYLE)
            self.state = self.style.initialize(self.scene)
        self.time = 0.0
        self.frame = 0
        debug(f"rebuilt {len(self.particles)} particles at {self.width}x{self.height}")

    # ------------------------------------------------------------------
    # Frame

    def render_frame(self) -> bool:
        if self.signature is None or self.scene is None or self.style is None:
            return False
        signature = self.signature
        profile = signature.style_profile
        self.time += signature.animation_speed

        painter = QtGui.QPainter(self.surface)
        try:
            painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
            paint_backdrop(painter, self.width, self.height, signature, 1.0 if self.frame == 0 else profile.fade)
            painter.setCompositionMode(map_blend_mode(profile.composite))
            painter.save()
            try:
                self.style.advance(self.scene, self.state, painter, self.time)
            except Exception as exc:
                warn_once(
                    f"{self.style.key}:{type(exc).__name__}",
                    f"style '{self.style.key}' failed on frame {self.frame}: {exc!r}",
                )
            finally:
                painter.restore()
            painter.setCompositionMode(QtGui.QPainter.CompositionMode_SourceOver)
            if self.grain is not None:
                paint_grain(painter, self.width, self.height, self.grain)
            if profile.border:
                painter.setBrush(QtCore.Qt.NoBrush)
                painter.setPen(QtGui.QPen(hsl_color(signature.primary_hue, 0.6, 0.6, 0.5), 2.0))
                painter.drawRect(QtCore.QRectF(1.0, 1.0, self.width - 2.0, self.height - 2.0))
        finally:
            painter.end()
        self.frame += 1
        return True
