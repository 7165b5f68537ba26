"""Workspace and runtime configuration support for sketchlang."""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple


_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class RuntimeConfig:
    """Knobs that shape a single run of a program."""

    entry_function: str = "run"
    color_limit: int = 5
    default_color: str = "rgb(0,0,0)"
    default_canvas: Tuple[int, int] = (800, 600)
    frame_rate: float = 60.0
    max_frames: Optional[int] = None
    halt_on_error: bool = False
    # Off keeps the one-level scan of a function body for `return`.
    propagate_nested_return: bool = False
    max_call_depth: int = 50

    def with_overrides(self, **overrides: Any) -> "RuntimeConfig":
        values = {key: value for key, value in overrides.items() if value is not None}
        if not values:
            return self
        return replace(self, **values)


@dataclass
class WorkspaceConfig:
    """Resolved workspace configuration."""

    root: Path
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    source: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict)


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


def _parse_runtime(data: Mapping[str, Any]) -> RuntimeConfig:
    section = data.get("runtime") or {}
    defaults = RuntimeConfig()
    canvas_raw = section.get("default_canvas")
    canvas = defaults.default_canvas
    if isinstance(canvas_raw, (list, tuple)) and len(canvas_raw) == 2:
        canvas = (int(canvas_raw[0]), int(canvas_raw[1]))
    max_frames_raw = section.get("max_frames")
    return RuntimeConfig(
        entry_function=str(section.get("entry_function") or defaults.entry_function),
        color_limit=int(section.get("color_limit", defaults.color_limit)),
        default_color=str(section.get("default_color") or defaults.default_color),
        default_canvas=canvas,
        frame_rate=float(section.get("frame_rate", defaults.frame_rate)),
        max_frames=int(max_frames_raw) if max_frames_raw is not None else None,
        halt_on_error=_as_bool(section.get("halt_on_error", defaults.halt_on_error)),
        propagate_nested_return=_as_bool(
            section.get("propagate_nested_return", defaults.propagate_nested_return)
        ),
        max_call_depth=int(section.get("max_call_depth", defaults.max_call_depth)),
    )


def env_flag(name: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    """True when environment variable ``name`` holds a truthy word such as ``1`` or ``yes``."""
    env = os.environ if environ is None else environ
    return _as_bool(env.get(name, ""))


def apply_env_overrides(config: RuntimeConfig, environ: Optional[Mapping[str, str]] = None) -> RuntimeConfig:
    env = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}
    if env.get("SKETCHLANG_ENTRY"):
        overrides["entry_function"] = env["SKETCHLANG_ENTRY"]
    if env.get("SKETCHLANG_FPS"):
        overrides["frame_rate"] = float(env["SKETCHLANG_FPS"])
    if env.get("SKETCHLANG_MAX_FRAMES"):
        overrides["max_frames"] = int(env["SKETCHLANG_MAX_FRAMES"])
    if env.get("SKETCHLANG_HALT_ON_ERROR"):
        overrides["halt_on_error"] = _as_bool(env["SKETCHLANG_HALT_ON_ERROR"])
    return config.with_overrides(**overrides)


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    candidates = ["sketch.toml", ".sketchrc"]
    for candidate in candidates:
        path = root / candidate
        if path.exists():
            return path
    return None


def load_workspace_config(
    root: Path,
    explicit: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> WorkspaceConfig:
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        return WorkspaceConfig(root=root, runtime=apply_env_overrides(RuntimeConfig(), environ))

    if config_path.suffix == ".toml":
        data = _read_toml_config(config_path)
    else:
        data = _read_json_config(config_path)

    runtime = apply_env_overrides(_parse_runtime(data), environ)
    return WorkspaceConfig(root=root, runtime=runtime, source=config_path, raw=data)


__all__ = [
    "RuntimeConfig",
    "WorkspaceConfig",
    "apply_env_overrides",
    "env_flag",
    "locate_config_file",
    "load_workspace_config",
]
