"""Render :class:`LightroomSettings` as an importable XMP preset."""

from __future__ import annotations

import logging
import math
import re
from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping, Optional, Set

from lxml import etree as ET

from .fields import (
    CURVE_FIELD_KEYS,
    DEFAULT_PRESET_NAME,
    LEGACY_PROCESS_VERSION,
    NS_CRS,
    NS_RDF,
    NS_X,
    PRESET_TYPE,
    TAG_MAP,
    TONE_CURVE_FIELD_KEYS,
    XMP_TOOLKIT,
)
from .models import LightroomSettings

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# Anything outside the XML 1.0 Char production; lxml refuses these.
_XML_INVALID_CHARS = re.compile(
    "[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _qname(namespace: str, local: str) -> str:
    return f"{{{namespace}}}{local}"


def xml_safe_text(text: str) -> str:
    """Drop control characters and lone surrogates that XML cannot carry."""

    return _XML_INVALID_CHARS.sub("", text)


def _format_float(value: float) -> str:
    # Exponent notation only below 1e-6 or from 1e21 up, written ``1e-7``.
    text = repr(value)
    if "e" not in text:
        return text
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    return f"{mantissa}e{int(exponent):+d}"


def format_value(value: Any) -> str:
    """Canonical text for a scalar: ``5`` not ``5.0``, ``0.5`` as is."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return _format_float(value)
    return str(value)


def format_point(point: Any) -> str:
    return f"{format_value(point[0])}, {format_value(point[1])}"


def _build_envelope() -> ET._Element:
    root = ET.Element(_qname(NS_X, "xmpmeta"), nsmap={"x": NS_X})
    root.set(_qname(NS_X, "xmptk"), XMP_TOOLKIT)
    rdf = ET.SubElement(root, _qname(NS_RDF, "RDF"), nsmap={"rdf": NS_RDF})
    description = ET.SubElement(
        rdf, _qname(NS_RDF, "Description"), nsmap={"crs": NS_CRS}
    )
    description.set(_qname(NS_RDF, "about"), "")
    return root


def _add_text(parent: ET._Element, tag: str, text: str) -> ET._Element:
    element = ET.SubElement(parent, _qname(NS_CRS, tag))
    element.text = xml_safe_text(text)
    return element


def _add_curve(parent: ET._Element, tag: str, points: Any) -> ET._Element:
    container = ET.SubElement(parent, _qname(NS_CRS, tag))
    if points:
        seq = ET.SubElement(container, _qname(NS_RDF, "Seq"))
        for point in points:
            item = ET.SubElement(seq, _qname(NS_RDF, "li"))
            item.text = xml_safe_text(format_point(point))
    return container


def settings_to_xmp(
    settings: LightroomSettings,
    preset_name: Optional[str] = None,
    *,
    tag_map: Mapping[str, str] = TAG_MAP,
) -> str:
    """Convert a settings record into an XMP sidecar Lightroom can import.

    Args:
        settings: Normalized settings; absent fields are skipped.
        preset_name: Name shown in Lightroom's preset list. Inserted as text,
            so markup characters are escaped by the builder.
        tag_map: External key to ``crs:`` tag table. When two keys share a
            tag, the one that comes first in the record wins.

    Returns:
        The UTF-8 document as a ``str``, two-space indented.
    """

    root = _build_envelope()
    description = root[0][0]

    seen_tags: Set[str] = set()
    for key, value in settings.items():
        tag = tag_map.get(key)
        if tag is None:
            continue
        if tag in seen_tags:
            logger.debug("Skipping %s: crs:%s already written", key, tag)
            continue

        if key in CURVE_FIELD_KEYS and isinstance(value, (list, tuple)):
            _add_curve(description, tag, value)
        else:
            _add_text(description, tag, format_value(value))
        seen_tags.add(tag)

    _add_text(description, "PresetType", PRESET_TYPE)
    _add_text(
        description,
        "PresetName",
        xml_safe_text(preset_name or "") or DEFAULT_PRESET_NAME,
    )
    _add_text(
        description,
        "ProcessVersion",
        format_value(settings.process_version or LEGACY_PROCESS_VERSION),
    )

    if settings.has_any(TONE_CURVE_FIELD_KEYS):
        _add_text(description, "HasToneCurve", "True")
    if settings.has_hsl:
        _add_text(description, "HasSettings", "True")

    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")
    return f"{XML_DECLARATION}\n{body}\n"


def save_preset_to_file(
    settings: LightroomSettings,
    output_path: Path,
    preset_name: Optional[str] = None,
) -> Path:
    """Write the XMP for *settings* to *output_path* and return the path."""

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(settings_to_xmp(settings, preset_name), encoding="utf-8")
    logger.info("Saved XMP preset to %s", output_path)
    return output_path


__all__ = [
    "XML_DECLARATION",
    "format_point",
    "format_value",
    "save_preset_to_file",
    "settings_to_xmp",
    "xml_safe_text",
]
