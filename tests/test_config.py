from __future__ import annotations

from commitart import diagnostics
from commitart.config import DEFAULTS, load_settings


def test_defaults_without_environment() -> None:
    settings = load_settings({})
    assert settings == DEFAULTS
    assert settings is not DEFAULTS
    settings["system"]["debug"] = True
    assert DEFAULTS["system"]["debug"] is False


def test_environment_overrides() -> None:
    settings = load_settings(
        {
            "COMMITART_FRAME_INTERVAL_MS": "33",
            "COMMITART_DEBUG": "yes",
            "COMMITART_WIDTH": "1024",
            "COMMITART_HEIGHT": "0",
            "COMMITART_OVERLAY": "off",
        }
    )
    assert settings["system"]["frameIntervalMs"] == 33
    assert settings["system"]["debug"] is True
    assert settings["surface"]["width"] == 1024
    assert settings["surface"]["height"] == DEFAULTS["surface"]["height"]
    assert settings["system"]["overlay"] is False


def test_invalid_values_fall_back() -> None:
    settings = load_settings({"COMMITART_FRAME_INTERVAL_MS": "fast", "COMMITART_DEBUG": "maybe"})
    assert settings["system"]["frameIntervalMs"] == 16
    assert settings["system"]["debug"] is False


def test_debug_lines_only_when_enabled(capsys) -> None:
    previous = diagnostics.debug_enabled()
    try:
        diagnostics.set_debug(False)
        diagnostics.debug("hidden")
        diagnostics.set_debug(True)
        diagnostics.debug("shown")
    finally:
        diagnostics.set_debug(previous)
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "[CommitArt][DEBUG] shown" in out


def test_warn_once(capsys) -> None:
    diagnostics.warn_once("config-test", "first")
    diagnostics.warn_once("config-test", "second")
    err = capsys.readouterr().err
    assert "[CommitArt][WARN] first" in err
    assert "second" not in err
