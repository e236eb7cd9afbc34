import pytest
from lxml import etree as ET

from presetworks.apps.preset_builder.core.fields import NS_CRS

try:
    from fastapi.testclient import TestClient
    from presetworks.apps.preset_builder.api.main import app

    client = TestClient(app)
except Exception:  # pragma: no cover - optional dependency in dev
    TestClient = None
    client = None

pytestmark = pytest.mark.skipif(client is None, reason="httpx not installed for TestClient")


def _crs_text(xmp: str, tag: str):
    root = ET.fromstring(xmp.encode("utf-8"))
    element = root.find(f".//{{{NS_CRS}}}{tag}")
    return None if element is None else element.text


def test_healthz():
    r = client.get("/healthz")
    assert r.status_code == 200 and r.json().get("status") == "ok"


def test_create_preset(isolated_project):
    r = client.post(
        "/presets",
        json={
            "settings": {"exposure": 10, "contrast": "high", "toneCurve": [[0, 0], [999, 999]]},
            "presetName": "IMG_0042 <edit>.jpg",
        },
    )
    assert r.status_code == 200
    data = r.json()

    assert data["message"] == "Preset generated successfully."
    assert data["presetName"] == "IMG_0042 edit.jpg"
    assert data["settings"]["exposure"] == 5
    assert data["settings"]["toneCurve"] == [[0, 0], [255, 255]]
    assert {issue["field"] for issue in data["issues"]} == {"contrast"}
    assert data["displaySettings"].startswith("Suggested Lightroom Settings:")
    assert data["generatedAt"]
    assert _crs_text(data["xmp"], "Exposure2012") == "5"
    assert _crs_text(data["xmp"], "PresetName") == "IMG_0042 edit.jpg"


def test_create_preset_with_non_object_settings(isolated_project):
    r = client.post("/presets", json={"settings": "warm and moody"})
    assert r.status_code == 200
    data = r.json()

    assert data["settings"] == {"processVersion": "13.3"}
    assert data["issues"][0]["field"] == "<root>"
    assert data["presetName"] == "AI Generated Preset"


def test_download_preset(isolated_project):
    r = client.post(
        "/presets/xmp", json={"settings": {"tint": 8}, "presetName": "Warm Tint"}
    )
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/rdf+xml")
    assert 'filename="Warm_Tint.xmp"' in r.headers["content-disposition"]
    assert _crs_text(r.text, "Tint") == "8"


def test_create_preset_with_control_characters_in_strings(isolated_project):
    r = client.post(
        "/presets", json={"settings": {"cameraProfile": "Adobe\u0001Standard"}}
    )
    assert r.status_code == 200
    data = r.json()

    assert data["settings"]["cameraProfile"] == "AdobeStandard"
    assert [issue["field"] for issue in data["issues"]] == ["cameraProfile"]
    assert _crs_text(data["xmp"], "CameraProfile") == "AdobeStandard"
