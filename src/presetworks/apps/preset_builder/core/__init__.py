"""Core modules for the Preset Builder application."""

from .config import PresetBuilderSettings, load_config  # noqa: F401
from .display import format_settings_for_display  # noqa: F401
from .loading import (  # noqa: F401
    SettingsLoadError,
    load_settings_file,
    load_settings_text,
    preset_filename,
    sanitize_preset_name,
)
from .models import LightroomSettings  # noqa: F401
from .normalizer import NormalizationIssue, normalize_settings  # noqa: F401
from .serializer import save_preset_to_file, settings_to_xmp  # noqa: F401

__all__ = [
    "LightroomSettings",
    "NormalizationIssue",
    "PresetBuilderSettings",
    "SettingsLoadError",
    "format_settings_for_display",
    "load_config",
    "load_settings_file",
    "load_settings_text",
    "normalize_settings",
    "preset_filename",
    "sanitize_preset_name",
    "save_preset_to_file",
    "settings_to_xmp",
]
