"""Configuration helpers for the Preset Builder application."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional
import tomllib

from .fields import DEFAULT_PRESET_NAME


_CONFIG_ENV_PREFIX = "PRESETWORKS_PRESET_BUILDER__"


def _find_pyproject(start: Optional[Path] = None) -> Optional[Path]:
    """Locate the nearest ``pyproject.toml`` relative to *start*."""

    current = (start or Path.cwd()).resolve()
    for candidate in [current, *current.parents]:
        pyproject = candidate / "pyproject.toml"
        if pyproject.exists():
            return pyproject
    return None


def _coerce_int(value: object, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except Exception:
        return default


def _as_path(value: object) -> Optional[Path]:
    if value is None:
        return None
    if isinstance(value, Path):
        return value
    if isinstance(value, str) and value.strip():
        return Path(value).expanduser()
    return None


@dataclass(frozen=True)
class PresetBuilderSettings:
    """Default configuration values sourced from project metadata."""

    default_preset_name: str = DEFAULT_PRESET_NAME
    default_output_dir: Path = Path("outputs/presets")
    max_preset_name_length: int = 100
    output_suffix: str = ".xmp"


def _merge_dict(
    base: Dict[str, object], override: Optional[Dict[str, object]]
) -> Dict[str, object]:
    merged = base.copy()
    if not override:
        return merged
    for key, value in override.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def _load_pyproject_settings(start: Optional[Path]) -> Dict[str, object]:
    pyproject = _find_pyproject(start)
    if not pyproject:
        return {}
    try:
        with pyproject.open("rb") as handle:
            data = tomllib.load(handle)
    except Exception:
        return {}

    tool_cfg = data.get("tool", {}).get("presetworks", {})
    if not isinstance(tool_cfg, dict):
        return {}

    builder_cfg = tool_cfg.get("preset_builder")
    return builder_cfg if isinstance(builder_cfg, dict) else {}


def _load_env_settings() -> Dict[str, object]:
    values: Dict[str, object] = {}
    for env_key, env_value in os.environ.items():
        if not env_key.startswith(_CONFIG_ENV_PREFIX):
            continue
        key = env_key[len(_CONFIG_ENV_PREFIX) :].lower()
        values[key] = env_value
    return values


def load_config(start: Optional[Path] = None) -> PresetBuilderSettings:
    """Load project-level defaults for the preset builder.

    Precedence: environment (``PRESETWORKS_PRESET_BUILDER__*``) over
    ``[tool.presetworks.preset_builder]`` over built-in defaults.
    """

    defaults = PresetBuilderSettings()
    result: Dict[str, object] = {
        "default_preset_name": defaults.default_preset_name,
        "default_output_dir": defaults.default_output_dir,
        "max_preset_name_length": defaults.max_preset_name_length,
        "output_suffix": defaults.output_suffix,
    }

    result = _merge_dict(result, _load_pyproject_settings(start))
    result = _merge_dict(result, _load_env_settings())

    preset_name = (
        str(result.get("default_preset_name", defaults.default_preset_name)).strip()
        or defaults.default_preset_name
    )
    output_dir = (
        _as_path(result.get("default_output_dir")) or defaults.default_output_dir
    )
    max_length = _coerce_int(
        result.get("max_preset_name_length"), defaults.max_preset_name_length
    )
    if max_length <= 0:
        max_length = defaults.max_preset_name_length
    suffix = str(result.get("output_suffix", defaults.output_suffix)).strip()
    if not suffix:
        suffix = defaults.output_suffix
    elif not suffix.startswith("."):
        suffix = f".{suffix}"

    return PresetBuilderSettings(
        default_preset_name=preset_name,
        default_output_dir=output_dir,
        max_preset_name_length=max_length,
        output_suffix=suffix.lower(),
    )
