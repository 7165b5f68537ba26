from __future__ import annotations

import json

import pytest

from sketchlang.config import (
    RuntimeConfig,
    apply_env_overrides,
    env_flag,
    load_workspace_config,
    locate_config_file,
)


def test_defaults() -> None:
    config = RuntimeConfig()

    assert config.entry_function == "run"
    assert config.color_limit == 5
    assert config.default_color == "rgb(0,0,0)"
    assert config.default_canvas == (800, 600)
    assert config.max_frames is None
    assert config.halt_on_error is False
    assert config.propagate_nested_return is False


def test_with_overrides_ignores_none() -> None:
    config = RuntimeConfig()

    assert config.with_overrides(entry_function=None) is config
    assert config.with_overrides(max_frames=3, frame_rate=None).max_frames == 3


def test_missing_config_uses_defaults(tmp_path) -> None:
    workspace = load_workspace_config(tmp_path, environ={})

    assert workspace.source is None
    assert workspace.runtime == RuntimeConfig()


def test_toml_runtime_section(tmp_path) -> None:
    (tmp_path / "sketch.toml").write_text(
        "[runtime]\n"
        'entry_function = "draw"\n'
        "color_limit = 3\n"
        "default_canvas = [320, 200]\n"
        "max_frames = 10\n"
        "halt_on_error = true\n",
        encoding="utf-8",
    )

    workspace = load_workspace_config(tmp_path, environ={})

    assert workspace.source == tmp_path.resolve() / "sketch.toml"
    assert workspace.runtime.entry_function == "draw"
    assert workspace.runtime.color_limit == 3
    assert workspace.runtime.default_canvas == (320, 200)
    assert workspace.runtime.max_frames == 10
    assert workspace.runtime.halt_on_error is True
    assert workspace.raw["runtime"]["color_limit"] == 3


def test_json_sketchrc(tmp_path) -> None:
    (tmp_path / ".sketchrc").write_text(
        json.dumps({"runtime": {"frame_rate": 30, "propagate_nested_return": "yes"}}),
        encoding="utf-8",
    )

    runtime = load_workspace_config(tmp_path, environ={}).runtime

    assert runtime.frame_rate == 30.0
    assert runtime.propagate_nested_return is True


def test_toml_wins_over_sketchrc(tmp_path) -> None:
    (tmp_path / "sketch.toml").write_text("[runtime]\n", encoding="utf-8")
    (tmp_path / ".sketchrc").write_text("{}", encoding="utf-8")

    assert locate_config_file(tmp_path) == tmp_path / "sketch.toml"


def test_explicit_missing_file_is_none(tmp_path) -> None:
    assert locate_config_file(tmp_path, tmp_path / "absent.toml") is None


def test_environment_overrides_file(tmp_path) -> None:
    (tmp_path / "sketch.toml").write_text('[runtime]\nentry_function = "draw"\n', encoding="utf-8")
    environ = {
        "SKETCHLANG_ENTRY": "main",
        "SKETCHLANG_FPS": "24",
        "SKETCHLANG_MAX_FRAMES": "5",
        "SKETCHLANG_HALT_ON_ERROR": "1",
    }

    runtime = load_workspace_config(tmp_path, environ=environ).runtime

    assert runtime.entry_function == "main"
    assert runtime.frame_rate == 24.0
    assert runtime.max_frames == 5
    assert runtime.halt_on_error is True


def test_env_overrides_read_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("SKETCHLANG_ENTRY", "loop")

    assert apply_env_overrides(RuntimeConfig()).entry_function == "loop"


def test_invalid_json_raises(tmp_path) -> None:
    (tmp_path / ".sketchrc").write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError):
        load_workspace_config(tmp_path, environ={})


@pytest.mark.parametrize(
    "value, expected",
    [("1", True), ("YES", True), (" on ", True), ("0", False), ("", False), ("maybe", False)],
)
def test_env_flag(value: str, expected: bool) -> None:
    assert env_flag("SKETCHLANG_DEBUG", {"SKETCHLANG_DEBUG": value}) is expected


def test_env_flag_missing_variable() -> None:
    assert env_flag("SKETCHLANG_DEBUG", {}) is False
