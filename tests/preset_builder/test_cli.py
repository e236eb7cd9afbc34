import json

from lxml import etree as ET
from typer.testing import CliRunner

from presetworks.apps.preset_builder.cli.main import app
from presetworks.apps.preset_builder.core.fields import NS_CRS

runner = CliRunner()


def _write_settings(directory, payload, name="settings.json"):
    path = directory / name
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
    return path


def _crs_text(path, tag):
    root = ET.fromstring(path.read_bytes())
    element = root.find(f".//{{{NS_CRS}}}{tag}")
    return None if element is None else element.text


def test_convert_writes_normalized_preset(isolated_project):
    settings_path = _write_settings(
        isolated_project, {"exposure": 10, "contrast": "high", "tint": 3}
    )
    output = isolated_project / "out" / "look.xmp"

    result = runner.invoke(
        app, ["convert", str(settings_path), "--output", str(output), "--name", "Look"]
    )

    assert result.exit_code == 0, result.output
    assert output.exists()
    assert _crs_text(output, "Exposure2012") == "5"
    assert _crs_text(output, "Contrast2012") == "0"
    assert _crs_text(output, "PresetName") == "Look"
    assert "Saved XMP preset 'Look'" in result.output


def test_convert_default_output_location(isolated_project):
    settings_path = _write_settings(isolated_project, {"exposure": 1})

    result = runner.invoke(app, ["convert", str(settings_path), "--name", "Blue Hour"])

    assert result.exit_code == 0, result.output
    expected = isolated_project / "outputs" / "presets" / "Blue_Hour.xmp"
    assert expected.exists()


def test_convert_raw_keeps_values_as_given(isolated_project):
    settings_path = _write_settings(isolated_project, {"exposure": 10})
    output = isolated_project / "raw.xmp"

    result = runner.invoke(
        app, ["convert", str(settings_path), "--output", str(output), "--raw"]
    )

    assert result.exit_code == 0, result.output
    assert _crs_text(output, "Exposure2012") == "10"
    assert _crs_text(output, "ProcessVersion") == "6.7"


def test_convert_rejects_invalid_json(isolated_project):
    settings_path = _write_settings(isolated_project, "{not json")

    result = runner.invoke(app, ["convert", str(settings_path)])

    assert result.exit_code == 1
    assert "not valid JSON" in result.output


def test_show_prints_listing(isolated_project):
    settings_path = _write_settings(
        isolated_project, {"toneCurve": [[0, 0], [128, 140], [255, 255]]}
    )

    result = runner.invoke(app, ["show", str(settings_path)])

    assert result.exit_code == 0, result.output
    assert result.output.startswith("Suggested Lightroom Settings:")
    assert "- Tone Curve: (0,0), (128,140), (255,255)" in result.output


def test_validate_json_output(isolated_project):
    settings_path = _write_settings(
        isolated_project, {"hslHueRed": 2.5, "processVersion": "7.0"}
    )

    result = runner.invoke(app, ["validate", str(settings_path), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["settings"]["hslHueRed"] == 0
    assert payload["settings"]["processVersion"] == "13.3"
    assert {issue["field"] for issue in payload["issues"]} == {
        "hslHueRed",
        "processVersion",
    }


def test_validate_fails_for_non_object(isolated_project):
    settings_path = _write_settings(isolated_project, "[1, 2, 3]")

    result = runner.invoke(app, ["validate", str(settings_path)])

    assert result.exit_code == 1


def test_convert_raw_rejects_malformed_curve_point(isolated_project):
    settings_path = _write_settings(isolated_project, {"toneCurve": [[1]]})
    output = isolated_project / "raw.xmp"

    result = runner.invoke(
        app, ["convert", str(settings_path), "--output", str(output), "--raw"]
    )

    assert result.exit_code == 1
    assert "Cannot use settings as given" in result.output
    assert not output.exists()


def test_invalid_log_level_is_rejected(isolated_project):
    settings_path = _write_settings(isolated_project, {"exposure": 1})

    result = runner.invoke(app, ["--log-level", "loud", "show", str(settings_path)])

    assert result.exit_code == 2
