from __future__ import annotations

from conftest import make_descriptor
from PyQt5 import QtTest

from commitart.config import load_settings
from commitart.descriptor import RepositoryDescriptor
from commitart.render_loop import RenderLoop
from commitart.visualizer import Visualizer


def _visualizer(autostart: bool = False, interval: int = 16) -> Visualizer:
    settings = load_settings({})
    settings["system"]["frameIntervalMs"] = interval
    return Visualizer(200, 120, settings=settings, autostart=autostart)


def test_stop_is_idempotent() -> None:
    calls = []
    loop = RenderLoop(lambda: calls.append(1), 16)
    loop.start()
    assert loop.is_running()
    loop.stop()
    loop.stop()
    assert not loop.is_running()
    loop.tick()
    loop.start()
    assert calls == []
    assert not loop.is_running()


def test_zero_interval_does_not_start() -> None:
    loop = RenderLoop(lambda: None, 0)
    loop.start()
    assert not loop.is_running()
    loop.set_interval(20)
    assert loop.is_running()
    loop.set_interval(0)
    assert not loop.is_running()
    loop.stop()


def test_tick_renders_and_notifies(acme: RepositoryDescriptor) -> None:
    visualizer = _visualizer()
    seen = []
    visualizer.add_frame_listener(lambda: seen.append(visualizer.engine.frame))
    visualizer.visualize(acme)
    visualizer.loop.tick()
    visualizer.loop.tick()
    assert seen == [1, 2]


def test_visualize_cancels_previous_run(acme: RepositoryDescriptor) -> None:
    visualizer = _visualizer(autostart=True)
    first = visualizer.visualize(acme)
    first_loop = visualizer.loop
    assert visualizer.is_running()
    second = visualizer.visualize(make_descriptor("acme/other", 20))
    assert not first_loop.is_running()
    assert visualizer.loop is not first_loop
    assert visualizer.is_running()
    assert visualizer.signature == second != first
    visualizer.stop()
    visualizer.stop()
    assert not visualizer.is_running()


def test_timer_drives_frames(acme: RepositoryDescriptor) -> None:
    visualizer = _visualizer(autostart=True, interval=5)
    visualizer.visualize(acme)
    QtTest.QTest.qWait(200)
    visualizer.stop()
    frames = visualizer.engine.frame
    assert frames > 0
    QtTest.QTest.qWait(50)
    assert visualizer.engine.frame == frames


def test_signature_is_none_before_first_run() -> None:
    visualizer = _visualizer()
    assert visualizer.signature is None
    assert visualizer.surface.width() == 200
    visualizer.stop()
