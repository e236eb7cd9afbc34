"""Plain-text listing of a settings record for manual entry in Lightroom."""

from __future__ import annotations

import re
from typing import Any, List

from .fields import COLOR_GRADE_ZONES, CURVE_FIELD_KEYS, HSL_KEY_INDEX
from .models import LightroomSettings
from .serializer import format_value

DISPLAY_HEADER = "Suggested Lightroom Settings:"

_ZONE_LABELS = {
    "Shadow": "Shadows",
    "Midtone": "Midtones",
    "Highlight": "Highlights",
    "Global": "Global",
}


def _split_camel(key: str) -> str:
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", key)
    return spaced[:1].upper() + spaced[1:]


def _color_grade_label(key: str) -> str:
    part = key[len("colorGrade") :]
    for zone in COLOR_GRADE_ZONES:
        if part.startswith(zone):
            return f"Color Grading {_ZONE_LABELS[zone]} {part[len(zone):]}"
    return f"Color Grading {part}"


def field_label(key: str) -> str:
    """Readable label for an external settings key."""

    if key in HSL_KEY_INDEX:
        bucket, channel = HSL_KEY_INDEX[key]
        return f"HSL {channel.value} {bucket.value}"
    if key in CURVE_FIELD_KEYS:
        channel = key[len("toneCurve") :]
        return f"Tone Curve {channel}" if channel else "Tone Curve"
    if key.startswith("colorGrade"):
        return _color_grade_label(key)
    return _split_camel(key)


def _display_value(key: str, value: Any) -> str:
    if key in CURVE_FIELD_KEYS:
        return ", ".join(
            f"({format_value(x)},{format_value(y)})" for x, y in value
        )
    return format_value(value)


def format_settings_for_display(settings: LightroomSettings) -> str:
    lines: List[str] = [DISPLAY_HEADER]
    for key, value in settings.items():
        lines.append(f"- {field_label(key)}: {_display_value(key, value)}")
    return "\n".join(lines) + "\n"


__all__ = ["DISPLAY_HEADER", "field_label", "format_settings_for_display"]
