from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from fastapi import FastAPI
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from ..core.config import load_config
from ..core.display import format_settings_for_display
from ..core.loading import preset_filename, sanitize_preset_name
from ..core.normalizer import NormalizationIssue, normalize_settings
from ..core.serializer import settings_to_xmp

logger = logging.getLogger(__name__)

app = FastAPI(title="PresetWorks - Preset Builder API", version="0.1.0")


class PresetRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Validated by normalize_settings, not pydantic.
    settings: Any = None
    preset_name: Optional[str] = Field(default=None, alias="presetName")


class PresetIssue(BaseModel):
    field: str
    reason: str
    value: str


class PresetResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    xmp: str
    display_settings: str = Field(alias="displaySettings")
    settings: dict
    issues: List[PresetIssue] = Field(default_factory=list)
    preset_name: str = Field(alias="presetName")
    generated_at: str = Field(alias="generatedAt")


def _preset_name(requested: Optional[str]) -> str:
    cfg = load_config()
    return sanitize_preset_name(
        requested,
        max_length=cfg.max_preset_name_length,
        fallback=cfg.default_preset_name,
    )


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


@app.post("/presets", response_model=PresetResponse, response_model_by_alias=True)
def create_preset(request: PresetRequest) -> PresetResponse:
    issues: List[NormalizationIssue] = []
    settings = normalize_settings(request.settings, issues=issues)
    name = _preset_name(request.preset_name)
    logger.info("Generated preset %r with %d adjusted field(s)", name, len(issues))

    return PresetResponse(
        message="Preset generated successfully.",
        xmp=settings_to_xmp(settings, name),
        display_settings=format_settings_for_display(settings),
        settings=settings.to_dict(),
        issues=[PresetIssue(**issue.to_json()) for issue in issues],
        preset_name=name,
        generated_at=datetime.now(timezone.utc).isoformat(),
    )


@app.post("/presets/xmp")
def download_preset(request: PresetRequest) -> Response:
    settings = normalize_settings(request.settings)
    name = _preset_name(request.preset_name)
    filename = preset_filename(name)
    return Response(
        content=settings_to_xmp(settings, name),
        media_type="application/rdf+xml",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def run(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    import uvicorn

    from presetworks.logging_utils import configure_logging

    # /healthz is polled; keep per-request access lines out of the log.
    configure_logging("preset_builder_api", suppressed_loggers=("uvicorn.access",))
    uvicorn.run(
        "presetworks.apps.preset_builder.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )
