"""Cancellable frame driver built on ``QTimer``."""

from __future__ import annotations

from typing import Callable, Optional

from PyQt5 import QtCore

from .diagnostics import debug

__all__ = ["RenderLoop"]


class RenderLoop:
    """Calls ``frame`` on every timer tick until stopped.

    A stopped loop is finished for good; start a new one for the next run.
    ``stop`` may be called any number of times.
    """

    def __init__(self, frame: Callable[[], object], interval_ms: int = 16, parent: Optional[QtCore.QObject] = None) -> None:
        self._frame = frame
        self._interval_ms = max(int(interval_ms), 0)
        self._timer = QtCore.QTimer(parent)
        self._timer.timeout.connect(self.tick)
        self._stopped = False
        self.ticks = 0

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def is_running(self) -> bool:
        return not self._stopped and self._timer.isActive()

    def start(self) -> None:
        if self._stopped:
            return
        if self._interval_ms <= 0:
            debug("render loop not started: frame interval is 0")
            return
        self._timer.start(self._interval_ms)

    def set_interval(self, interval_ms: int) -> None:
        """Change the refresh interval; 0 pauses the timer without stopping the loop."""

        interval_ms = max(int(interval_ms), 0)
        if interval_ms == self._interval_ms and self._timer.isActive() == (interval_ms > 0):
            return
        self._interval_ms = interval_ms
        if self._stopped:
            return
        if interval_ms <= 0:
            if self._timer.isActive():
                self._timer.stop()
            return
        if self._timer.isActive():
            self._timer.setInterval(interval_ms)
        else:
            self._timer.start(interval_ms)

    def tick(self) -> None:
        if self._stopped:
            return
        self.ticks += 1
        self._frame()

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        if self._timer.isActive():
            self._timer.stop()
        debug(f"render loop stopped after {self.ticks} ticks")
