from __future__ import annotations

import pytest
from PyQt5 import QtGui

from commitart.config import load_settings
from commitart.descriptor import ChangeStats, Commit, RepositoryDescriptor
from commitart.engine import VisualizationEngine, map_blend_mode
from commitart.styles import DEFAULT_STYLE, STYLES


def _engine(width: int = 200, height: int = 120) -> VisualizationEngine:
    return VisualizationEngine(width, height, load_settings({}))


def test_render_before_visualize_is_a_no_op() -> None:
    assert _engine().render_frame() is False


def test_rebuild_before_visualize_is_a_no_op() -> None:
    engine = _engine()
    engine._rebuild()
    assert engine.scene is None and engine.state is None
    assert engine.particles == []


def test_frames_are_reproducible(acme: RepositoryDescriptor) -> None:
    a, b = _engine(), _engine()
    assert a.visualize(acme) == b.visualize(acme)
    for _ in range(3):
        a.render_frame()
        b.render_frame()
    assert a.surface == b.surface
    assert a.frame == 3
    assert a.time == pytest.approx(a.signature.animation_speed * 3)


def test_resize_rebuilds_run(acme: RepositoryDescriptor) -> None:
    engine = _engine()
    engine.visualize(acme)
    engine.render_frame()
    engine.render_frame()
    assert engine.resize(320, 240) is True
    assert (engine.surface.width(), engine.surface.height()) == (320, 240)
    assert engine.frame == 0 and engine.time == 0.0
    assert engine.scene.width == 320
    assert all(p.x == p.origin_x for p in engine.particles)


def test_non_positive_resize_is_ignored(acme: RepositoryDescriptor) -> None:
    engine = _engine()
    engine.visualize(acme)
    engine.render_frame()
    particles = engine.particles
    assert engine.resize(0, 100) is False
    assert engine.resize(100, -5) is False
    assert engine.width == 200 and engine.height == 120
    assert engine.particles is particles
    assert engine.frame == 1


def test_particle_cap_comes_from_settings(acme: RepositoryDescriptor) -> None:
    settings = load_settings({})
    settings["system"]["particleCap"] = 10
    engine = VisualizationEngine(200, 120, settings)
    engine.visualize(acme)
    assert len(engine.particles) == 10


class _StyleExploded(RuntimeError):
    pass


def test_failing_style_is_reported_once(acme: RepositoryDescriptor, monkeypatch, capsys) -> None:
    engine = _engine()
    engine.visualize(acme)

    def boom(*args, **kwargs):
        raise _StyleExploded("bad frame")

    monkeypatch.setattr(engine.style, "advance", boom)
    assert all(engine.render_frame() for _ in range(3))
    err = capsys.readouterr().err
    assert err.count("[CommitArt][WARN]") == 1
    assert "bad frame" in err


def test_blend_mode_mapping() -> None:
    assert map_blend_mode("screen") == QtGui.QPainter.CompositionMode_Screen
    assert map_blend_mode("PLUS") == QtGui.QPainter.CompositionMode_Plus
    assert map_blend_mode(None) == QtGui.QPainter.CompositionMode_SourceOver
    assert map_blend_mode("nonsense") == QtGui.QPainter.CompositionMode_SourceOver


def test_negative_change_totals_render() -> None:
    commits = [Commit(id=f"n{i}", author_name="alice", timestamp=1.6e12 + i, stats=ChangeStats(total=-3)) for i in range(5)]
    engine = _engine()
    engine.visualize(RepositoryDescriptor(name="neg/total", commits=commits))
    assert engine.render_frame() is True
    assert all(p.size == 2 for p in engine.particles if not p.is_background)


class _InitExploded(RuntimeError):
    pass


def test_failing_initialize_falls_back_to_default_style(acme: RepositoryDescriptor, monkeypatch, capsys) -> None:
    engine = _engine()
    tag = engine.visualize(acme).style
    assert tag != DEFAULT_STYLE

    def boom(scene):
        raise _InitExploded("bad setup")

    monkeypatch.setattr(STYLES[tag], "initialize", boom)
    engine.visualize(acme)
    assert engine.style is STYLES[DEFAULT_STYLE]
    assert engine.state is not None
    assert engine.render_frame() is True
    err = capsys.readouterr().err
    assert err.count("[CommitArt][WARN]") == 1
    assert "bad setup" in err
