from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Mapping, Optional, Tuple

from PyQt5 import QtCore, QtGui, QtWidgets

from ..config import load_settings
from ..descriptor import RepositoryDescriptor
from ..palette import hsl_color, tone_color
from ..signature import Signature
from ..visualizer import Visualizer

__all__ = ["CommitArtViewWidget", "overlay_lines", "timeline_legend"]


def _format_day(epoch_ms: float) -> Optional[str]:
    try:
        return datetime.fromtimestamp(epoch_ms / 1000.0, tz=timezone.utc).strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError):
        return None


def overlay_lines(signature: Signature) -> List[str]:
    """Text shown in the top-left corner for a run."""

    stats = f"{signature.commit_count} commits · {signature.language_count} languages"
    if signature.contributor_count:
        stats += f" · {signature.contributor_count} contributors"
    return [signature.repo_name or "(unnamed)", stats, signature.style_profile.label]


def timeline_legend(descriptor: RepositoryDescriptor) -> Optional[Tuple[str, str]]:
    """Oldest/newest day labels, or ``None`` when no commit has a usable time."""

    times = [t for t in (commit.epoch_ms() for commit in descriptor.commits) if t is not None]
    if not times:
        return None
    oldest, newest = _format_day(min(times)), _format_day(max(times))
    if oldest is None or newest is None:
        return None
    return f"Oldest {oldest}", f"Newest {newest}"


class CommitArtViewWidget(QtWidgets.QWidget):
    """Raster widget that shows a :class:`Visualizer` surface.

    The overlay is painted on the widget only, never on the shared surface.
    """

    def __init__(
        self,
        parent: Optional[QtWidgets.QWidget] = None,
        settings: Optional[Mapping[str, dict]] = None,
    ) -> None:
        super().__init__(parent)
        self.setAttribute(QtCore.Qt.WA_OpaquePaintEvent, True)
        self.setAutoFillBackground(False)
        self.settings = settings if settings is not None else load_settings()
        self.visualizer = Visualizer(settings=self.settings)
        self.visualizer.add_frame_listener(self.update)
        self._overlay = bool(self.settings["system"]["overlay"])
        self._frame_interval_ms = int(self.settings["system"]["frameIntervalMs"])

    # ------------------------------------------------------------------
    # Public API

    def visualize(self, descriptor: RepositoryDescriptor) -> Signature:
        if self.width() > 0 and self.height() > 0:
            self.visualizer.resize(self.width(), self.height())
        signature = self.visualizer.visualize(descriptor)
        self._apply_frame_interval(self._frame_interval_ms)
        self.update()
        return signature

    def stop(self) -> None:
        self.visualizer.stop()

    def set_overlay(self, enabled: bool) -> None:
        self._overlay = bool(enabled)
        self.update()

    def set_frame_interval(self, interval_ms: int) -> None:
        self._frame_interval_ms = max(int(interval_ms), 0)
        self._apply_frame_interval(self._frame_interval_ms)

    def _apply_frame_interval(self, interval_ms: int) -> None:
        loop = self.visualizer.loop
        if loop is not None:
            loop.set_interval(interval_ms)

    # ------------------------------------------------------------------
    # Qt events

    def sizeHint(self) -> QtCore.QSize:  # type: ignore[override]
        surface = self.settings["surface"]
        return QtCore.QSize(surface["width"], surface["height"])

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # type: ignore[override]
        del event
        painter = QtGui.QPainter(self)
        try:
            painter.fillRect(self.rect(), QtCore.Qt.black)
            painter.drawImage(QtCore.QRectF(self.rect()), self.visualizer.surface)
            if self._overlay and self.visualizer.signature is not None:
                self._paint_overlay(painter)
        finally:
            painter.end()

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self.visualizer.resize(event.size().width(), event.size().height())
        self.update()

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:  # type: ignore[override]
        self.stop()
        super().closeEvent(event)

    # ------------------------------------------------------------------
    # Overlay

    def _paint_overlay(self, painter: QtGui.QPainter) -> None:
        signature = self.visualizer.signature
        if signature is None:
            return
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
        font = QtGui.QFont(self.font())
        font.setPixelSize(13)
        painter.setFont(font)
        metrics = QtGui.QFontMetrics(font)
        line_height = metrics.height()

        y = 12 + metrics.ascent()
        for idx, line in enumerate(overlay_lines(signature)):
            painter.setPen(QtGui.QColor(255, 255, 255, 220 if idx == 0 else 150))
            painter.drawText(QtCore.QPointF(12.0, y), line)
            y += line_height

        descriptor = self.visualizer.engine.descriptor
        legend = timeline_legend(descriptor) if descriptor is not None else None
        if legend is None:
            return
        oldest, newest = legend
        bottom = self.height() - 12.0
        bar = QtCore.QRectF(12.0, bottom - line_height - 8, max(40.0, self.width() - 24.0), 3.0)
        gradient = QtGui.QLinearGradient(bar.topLeft(), bar.topRight())
        palette = self.visualizer.engine.palette
        if palette:
            gradient.setColorAt(0.0, tone_color(palette[0], 0.8))
            gradient.setColorAt(1.0, tone_color(palette[-1], 0.8))
        else:
            gradient.setColorAt(0.0, hsl_color(signature.primary_hue, 0.6, 0.5, 0.8))
            gradient.setColorAt(1.0, hsl_color(signature.secondary_hue, 0.6, 0.5, 0.8))
        painter.fillRect(bar, QtGui.QBrush(gradient))
        painter.setPen(QtGui.QColor(255, 255, 255, 150))
        painter.drawText(QtCore.QPointF(12.0, bottom), oldest)
        painter.drawText(QtCore.QPointF(self.width() - 12.0 - metrics.horizontalAdvance(newest), bottom), newest)
