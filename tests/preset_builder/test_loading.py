import pytest

from presetworks.apps.preset_builder.core.loading import (
    SettingsLoadError,
    load_settings_file,
    load_settings_text,
    preset_filename,
    sanitize_preset_name,
    strip_code_fence,
)


def test_plain_json():
    assert load_settings_text('{"exposure": 0.4}') == {"exposure": 0.4}


def test_code_fenced_model_output():
    text = '\n```json\n{"contrast": 12, "toneCurve": [[0, 0], [255, 255]]}\n```\n'
    assert load_settings_text(text) == {
        "contrast": 12,
        "toneCurve": [[0, 0], [255, 255]],
    }


def test_fence_without_language():
    assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}\n'


def test_non_object_json_is_returned_as_is():
    assert load_settings_text("[1, 2]") == [1, 2]


def test_invalid_json_raises():
    with pytest.raises(SettingsLoadError):
        load_settings_text("exposure: +1")


def test_load_settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text('{"tint": 3}', encoding="utf-8")
    assert load_settings_file(path) == {"tint": 3}

    with pytest.raises(SettingsLoadError):
        load_settings_file(tmp_path / "missing.json")


def test_sanitize_preset_name():
    assert sanitize_preset_name("Sunset (v2) [final].jpg") == "Sunset (v2) [final].jpg"
    assert sanitize_preset_name("Café <script>") == "Caf script"
    assert sanitize_preset_name("x" * 150, max_length=100) == "x" * 100
    assert sanitize_preset_name("") == "AI Generated Preset"
    assert sanitize_preset_name(None, fallback="Mine") == "Mine"
    assert sanitize_preset_name("***") == "AI Generated Preset"


def test_preset_filename():
    assert preset_filename("Golden Hour (v2)") == "Golden_Hour_v2.xmp"
    assert preset_filename("   ", ".lrtemplate") == "preset.lrtemplate"
