"""Getting candidate settings in, and preset names out, at the I/O boundary."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from .fields import DEFAULT_PRESET_NAME

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:[^\n]+)?\n([\s\S]*?)```$")
_PRESET_NAME_UNSAFE = re.compile(r"[^a-zA-Z0-9._\-()\[\] ]")
_FILENAME_UNSAFE = re.compile(r"[^a-zA-Z0-9._-]")


class SettingsLoadError(RuntimeError):
    """Raised when candidate settings cannot be read or decoded."""


def strip_code_fence(text: str) -> str:
    """Remove a single Markdown code fence wrapped around model output."""

    stripped = text.strip()
    match = _CODE_FENCE.match(stripped)
    if match:
        return match.group(1)
    return stripped


def load_settings_text(text: str) -> Any:
    """Decode JSON candidate settings, tolerating a surrounding code fence.

    The decoded value is returned untouched; it may be any JSON value and is
    expected to go through :func:`normalize_settings` next.
    """

    payload = strip_code_fence(text)
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise SettingsLoadError(f"Settings are not valid JSON: {exc}") from exc


def load_settings_file(path: Path) -> Any:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsLoadError(f"Cannot read settings file {path}: {exc}") from exc
    logger.debug("Loaded %d characters of settings from %s", len(text), path)
    return load_settings_text(text)


def sanitize_preset_name(
    name: str | None,
    *,
    max_length: int = 100,
    fallback: str = DEFAULT_PRESET_NAME,
) -> str:
    """Restrict a user supplied name to a conservative character set."""

    if not name:
        return fallback
    clean = _PRESET_NAME_UNSAFE.sub("", name)[:max_length].strip()
    return clean or fallback


def preset_filename(name: str, suffix: str = ".xmp") -> str:
    """Filesystem-safe file name for a preset called *name*."""

    stem = _FILENAME_UNSAFE.sub("", re.sub(r"\s+", "_", name.strip()))
    return f"{stem or 'preset'}{suffix}"
