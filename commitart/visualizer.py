"""Public entry point: one visualizer per display surface."""

from __future__ import annotations

from typing import Callable, List, Mapping, Optional

from PyQt5 import QtGui

from .config import load_settings
from .descriptor import RepositoryDescriptor
from .engine import VisualizationEngine
from .render_loop import RenderLoop
from .signature import Signature

__all__ = ["Visualizer"]


class Visualizer:
    """Runs at most one render loop at a time over a shared surface.

    ``visualize`` cancels the running loop before it touches any state, so a
    new descriptor always replaces the previous run.  Listeners registered
    with :meth:`add_frame_listener` are called after every rendered frame.
    """

    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        settings: Optional[Mapping[str, dict]] = None,
        autostart: bool = True,
    ) -> None:
        self.settings = settings if settings is not None else load_settings()
        self.engine = VisualizationEngine(width, height, self.settings)
        self.autostart = autostart
        self._loop: Optional[RenderLoop] = None
        self._listeners: List[Callable[[], None]] = []

    @property
    def signature(self) -> Optional[Signature]:
        return self.engine.signature

    @property
    def surface(self) -> QtGui.QImage:
        return self.engine.surface

    @property
    def loop(self) -> Optional[RenderLoop]:
        return self._loop

    def add_frame_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def visualize(self, descriptor: RepositoryDescriptor) -> Signature:
        self.stop()
        signature = self.engine.visualize(descriptor)
        self._loop = RenderLoop(self._render, self.settings["system"]["frameIntervalMs"])
        if self.autostart:
            self._loop.start()
        return signature

    def resize(self, width: int, height: int) -> bool:
        return self.engine.resize(width, height)

    def stop(self) -> None:
        if self._loop is not None:
            self._loop.stop()

    def is_running(self) -> bool:
        return self._loop is not None and self._loop.is_running()

    def _render(self) -> None:
        if self.engine.render_frame():
            for listener in self._listeners:
                listener()
