from __future__ import annotations

import dataclasses

from PyQt5 import QtGui

from commitart.descriptor import RepositoryDescriptor
from commitart.palette import (
    Tone,
    build_palette,
    hsl_color,
    hsl_to_rgb,
    hue_distance,
    make_grain_tile,
    nearest_tone,
    nearest_tone_index,
    paint_backdrop,
)
from commitart.profiles import profile_by_key
from commitart.signature import derive_signature


def test_palette_follows_profile(acme: RepositoryDescriptor) -> None:
    signature = derive_signature(acme)
    palette = build_palette(signature)
    profile = signature.style_profile
    assert len(palette) == profile.palette_size
    for tone in palette:
        assert 0 <= tone.hue < 360
        assert profile.saturation[0] <= tone.saturation <= profile.saturation[1]
        assert profile.lightness[0] <= tone.lightness <= profile.lightness[1]
    assert build_palette(signature) == palette


def test_palette_offset_table(acme: RepositoryDescriptor) -> None:
    signature = dataclasses.replace(derive_signature(acme), style_profile=profile_by_key("sigils"), style_id="sigils")
    palette = build_palette(signature)
    hues = [tone.hue for tone in palette]
    primary = signature.primary_hue
    assert hues == [(primary + offset + 360) % 360 for offset in (0.0, 30.0, 180.0, 210.0)]


def test_hue_distance_is_circular() -> None:
    assert hue_distance(350, 10) == 20
    assert hue_distance(10, 350) == 20
    assert hue_distance(0, 180) == 180


def test_nearest_tone_first_wins_ties() -> None:
    palette = (Tone(0, 0.5, 0.5), Tone(100, 0.5, 0.5), Tone(200, 0.5, 0.5))
    assert nearest_tone_index(50, palette) == 0
    assert nearest_tone_index(150, palette) == 1
    assert nearest_tone_index(340, palette) == 0
    assert nearest_tone(190, palette) is palette[2]


def test_hsl_to_rgb_primaries() -> None:
    assert hsl_to_rgb(0.0, 1.0, 0.5) == (255, 0, 0)
    assert hsl_to_rgb(1 / 3, 1.0, 0.5) == (0, 255, 0)
    assert hsl_to_rgb(2 / 3, 1.0, 0.5) == (0, 0, 255)
    assert hsl_to_rgb(0.5, 0.0, 1.0) == (255, 255, 255)


def test_unknown_backdrop_paints_flat_fill(acme: RepositoryDescriptor) -> None:
    base = derive_signature(acme)
    profile = dataclasses.replace(base.style_profile, backdrop="no-such-backdrop")
    signature = dataclasses.replace(base, style_profile=profile)
    image = QtGui.QImage(4, 4, QtGui.QImage.Format_ARGB32)
    image.fill(0)
    painter = QtGui.QPainter(image)
    try:
        paint_backdrop(painter, 4, 4, signature)
    finally:
        painter.end()
    assert image.pixel(2, 2) == hsl_color(signature.primary_hue, 0.30, 0.05).rgba()


def test_grain_tile_is_seeded() -> None:
    tile = make_grain_tile(5, size=16)
    assert tile == make_grain_tile(5, size=16)
    assert tile != make_grain_tile(6, size=16)
    assert all(tile.pixelColor(x, y).alpha() < 60 for x in range(16) for y in range(16))


def test_exact_hue_returns_its_tone(acme: RepositoryDescriptor) -> None:
    palette = build_palette(derive_signature(acme))
    for tone in palette:
        assert nearest_tone(tone.hue, palette).hue == tone.hue
    opposite = (Tone(10, 0.5, 0.5), Tone(190, 0.5, 0.5))
    assert {nearest_tone_index(100, opposite) for _ in range(5)} == {0}
