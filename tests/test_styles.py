from __future__ import annotations

import dataclasses
from unittest import mock

import pytest
from PyQt5 import QtGui

from commitart.descriptor import RepositoryDescriptor
from commitart.noise import SeededNoise
from commitart.palette import build_palette
from commitart.particles import map_commits
from commitart.profiles import PROFILES
from commitart.signature import Signature, derive_signature
from commitart.styles import DEFAULT_STYLE, STYLES, Scene, get_style
from commitart.styles.signal import glyph_for

WIDTH, HEIGHT = 240, 160

STYLE_PROFILES = {}
for _profile in PROFILES:
    STYLE_PROFILES.setdefault(_profile.style, _profile)


def _signature_for(descriptor: RepositoryDescriptor, tag: str) -> Signature:
    profile = STYLE_PROFILES[tag]
    return dataclasses.replace(derive_signature(descriptor), style_profile=profile, style_id=profile.key)


def _run(descriptor: RepositoryDescriptor, tag: str, frames: int = 3) -> QtGui.QImage:
    signature = _signature_for(descriptor, tag)
    scene = Scene(
        signature=signature,
        palette=build_palette(signature),
        particles=map_commits(descriptor.commits, signature, WIDTH, HEIGHT),
        width=WIDTH,
        height=HEIGHT,
        noise=SeededNoise(signature.seed),
    )
    style = get_style(tag)
    state = style.initialize(scene)
    image = QtGui.QImage(WIDTH, HEIGHT, QtGui.QImage.Format_ARGB32_Premultiplied)
    image.fill(0)
    t = 0.0
    for _ in range(frames):
        t += signature.animation_speed
        painter = QtGui.QPainter(image)
        try:
            style.advance(scene, state, painter, t)
        finally:
            painter.end()
    return image


def test_registry_has_fifteen_styles() -> None:
    assert len(STYLES) == 15
    assert set(STYLES) == set(STYLE_PROFILES)
    assert all(key == style.key for key, style in STYLES.items())


def test_unknown_style_falls_back() -> None:
    assert get_style("no-such-style") is STYLES[DEFAULT_STYLE]


@pytest.mark.parametrize("tag", sorted(STYLE_PROFILES))
def test_style_draws_with_commits(tag: str, acme: RepositoryDescriptor) -> None:
    image = _run(acme, tag)
    assert image.width() == WIDTH
    assert any(image.pixel(x, y) != 0 for x in range(0, WIDTH, 4) for y in range(0, HEIGHT, 4))


@pytest.mark.parametrize("tag", sorted(STYLE_PROFILES))
def test_style_survives_zero_particles(tag: str, empty_repo: RepositoryDescriptor) -> None:
    image = _run(empty_repo, tag, frames=6)
    assert image.width() == WIDTH


@pytest.mark.parametrize("tag", sorted(STYLE_PROFILES))
def test_first_frames_are_reproducible(tag: str, acme: RepositoryDescriptor) -> None:
    assert _run(acme, tag, frames=2) == _run(acme, tag, frames=2)


def test_glyphs_are_katakana() -> None:
    assert 0x30A0 <= ord(glyph_for("deadbeef")) < 0x30A0 + 96
    assert glyph_for("") == glyph_for("x")


def test_orbit_trails_start_on_second_frame(acme: RepositoryDescriptor) -> None:
    signature = _signature_for(acme, "orbit")
    scene = Scene(
        signature=signature,
        palette=build_palette(signature),
        particles=map_commits(acme.commits, signature, WIDTH, HEIGHT),
        width=WIDTH,
        height=HEIGHT,
        noise=SeededNoise(signature.seed),
    )
    style = get_style("orbit")
    state = style.initialize(scene)
    painter = mock.MagicMock(spec=QtGui.QPainter)

    style.advance(scene, state, painter, signature.animation_speed)
    assert painter.drawLine.call_count == 0
    assert state.tick == 1

    style.advance(scene, state, painter, signature.animation_speed * 2)
    assert painter.drawLine.call_count == len(scene.particles)
    assert state.tick == 2
