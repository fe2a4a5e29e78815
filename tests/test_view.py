from __future__ import annotations

import json

from PyQt5 import QtGui

from commitart.config import load_settings
from commitart.descriptor import Commit, RepositoryDescriptor
from commitart.main import load_descriptor, main
from commitart.signature import derive_signature
from commitart.view import CommitArtViewWidget
from commitart.view.view_widget import overlay_lines, timeline_legend


def test_overlay_lines(acme: RepositoryDescriptor) -> None:
    lines = overlay_lines(derive_signature(acme))
    assert lines[0] == "acme/widgets"
    assert lines[1] == "50 commits · 2 languages · 3 contributors"
    assert lines[2] == "Loom"


def test_timeline_legend(acme: RepositoryDescriptor, empty_repo: RepositoryDescriptor) -> None:
    assert timeline_legend(acme) == ("Oldest 2020-09-13", "Newest 2021-09-13")
    assert timeline_legend(empty_repo) is None


def test_timeline_legend_skips_unrepresentable_dates() -> None:
    far_future = RepositoryDescriptor(name="far/future", commits=[Commit(id="1", timestamp=1.6e12), Commit(id="2", timestamp=1e20)])
    assert timeline_legend(far_future) is None


def test_widget_follows_its_size(acme: RepositoryDescriptor) -> None:
    settings = load_settings({})
    settings["system"]["frameIntervalMs"] = 0
    widget = CommitArtViewWidget(settings=settings)
    widget.resize(260, 140)
    widget.show()
    signature = widget.visualize(acme)
    assert signature.style_id == "loom"
    assert (widget.visualizer.surface.width(), widget.visualizer.surface.height()) == (260, 140)
    assert not widget.visualizer.is_running()
    widget.visualizer.loop.tick()
    image = widget.grab().toImage()
    assert image.width() == 260
    widget.set_frame_interval(10)
    assert widget.visualizer.is_running()
    widget.close()
    assert not widget.visualizer.is_running()


def test_load_descriptor_from_json(tmp_path) -> None:
    path = tmp_path / "repo.json"
    path.write_text(json.dumps({"name": "json/repo", "languages": {"Go": 1}}), encoding="utf-8")
    descriptor = load_descriptor(str(path))
    assert descriptor.name == "json/repo"
    assert load_descriptor("acme/widgets").name == "acme/widgets"


def test_main_headless() -> None:
    assert main(["acme/widgets"], headless=True) == 0
    assert main(["nonsense"], headless=True) == 2


def test_overlay_before_visualize_draws_nothing() -> None:
    widget = CommitArtViewWidget(settings=load_settings({}))
    image = QtGui.QImage(40, 30, QtGui.QImage.Format_ARGB32_Premultiplied)
    image.fill(0)
    painter = QtGui.QPainter(image)
    try:
        widget._paint_overlay(painter)
    finally:
        painter.end()
    assert all(image.pixel(x, y) == 0 for x in range(40) for y in range(30))
    widget.close()
