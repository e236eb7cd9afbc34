"""Validation and clamping of loosely typed preset candidates.

The candidate is whatever JSON-shaped value a model, a file or a person
produced. Field-level problems never abort normalization: each bad value
falls back to its default (or is dropped) and is reported as a
:class:`NormalizationIssue`. Only a top-level value that is not a mapping is
treated as unusable, in which case a minimal record is returned.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .fields import (
    CURVE_MAX,
    CURVE_MIN,
    DEFAULT_PROCESS_VERSION,
    FIELD_SPECS,
    FIELDS_BY_KEY,
    KNOWN_PROCESS_VERSIONS,
    FieldKind,
    FieldSpec,
)
from .models import Curve, LightroomSettings
from .serializer import xml_safe_text

logger = logging.getLogger(__name__)

Number = Union[int, float]

ROOT_FIELD = "<root>"


@dataclass(frozen=True)
class NormalizationIssue:
    """A single field that could not be taken at face value."""

    field: str
    reason: str
    value: Any = None

    def to_json(self) -> Dict[str, Any]:
        return {"field": self.field, "reason": self.reason, "value": repr(self.value)}


def clamp(value: Number, minimum: Number, maximum: Number) -> Number:
    return max(minimum, min(maximum, value))


def is_number(value: object) -> bool:
    """True for real ints/floats that are not booleans or NaN."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def _is_integral(value: Number) -> bool:
    if isinstance(value, int):
        return True
    return math.isfinite(value) and value.is_integer()


def _tidy(value: Number) -> Number:
    """Collapse integral floats (``5.0``) to ``int`` so output reads ``5``."""

    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return value


class _FieldReader:
    """Apply the per-field rules against one candidate mapping."""

    def __init__(self, raw: Mapping[str, Any], issues: List[NormalizationIssue]):
        self.raw = raw
        self.issues = issues

    def _report(self, key: str, reason: str, value: Any) -> None:
        logger.warning("Preset setting %s: %s (got %r)", key, reason, value)
        self.issues.append(NormalizationIssue(field=key, reason=reason, value=value))

    @staticmethod
    def _fallback_number(spec: FieldSpec) -> Optional[Number]:
        if spec.default is None:
            return None
        default = spec.default
        if spec.minimum is not None and spec.maximum is not None:
            default = clamp(default, spec.minimum, spec.maximum)
        return _tidy(default) if spec.integer else default

    def number(self, spec: FieldSpec) -> Optional[Number]:
        if spec.key not in self.raw:
            return self._fallback_number(spec)

        value = self.raw[spec.key]
        if not is_number(value):
            self._report(
                spec.key,
                f"expected number, got {type(value).__name__}; using default",
                value,
            )
            return self._fallback_number(spec)
        if spec.integer and not _is_integral(value):
            self._report(spec.key, "expected integer, got fraction; using default", value)
            return self._fallback_number(spec)

        if spec.minimum is not None and spec.maximum is not None:
            clamped = clamp(value, spec.minimum, spec.maximum)
            if clamped != value:
                logger.debug(
                    "Preset setting %s clamped from %r to %r", spec.key, value, clamped
                )
            value = clamped
        return _tidy(value) if spec.integer else value

    def string(self, spec: FieldSpec) -> Optional[str]:
        if spec.key not in self.raw:
            return spec.default  # type: ignore[return-value]

        value = self.raw[spec.key]
        if not isinstance(value, str):
            self._report(
                spec.key,
                f"expected string, got {type(value).__name__}; using default",
                value,
            )
            return spec.default  # type: ignore[return-value]

        cleaned = xml_safe_text(value)
        if cleaned != value:
            self._report(spec.key, "removed characters XML cannot hold", value)
        return cleaned

    def curve(self, spec: FieldSpec) -> Optional[Curve]:
        if spec.key not in self.raw:
            return None

        data = self.raw[spec.key]
        if not isinstance(data, (list, tuple)):
            self._report(
                spec.key, f"expected list of points, got {type(data).__name__}", data
            )
            return None

        points: List[Tuple[Number, Number]] = []
        for point in data:
            if not _is_curve_point(point):
                self._report(spec.key, "dropping malformed curve point", point)
                continue
            x, y = point
            points.append(
                (
                    _tidy(clamp(x, CURVE_MIN, CURVE_MAX)),
                    _tidy(clamp(y, CURVE_MIN, CURVE_MAX)),
                )
            )

        if not points:
            self._report(spec.key, "no valid curve points; dropping curve", data)
            return None
        return tuple(points)


def _is_curve_point(point: object) -> bool:
    if not isinstance(point, (list, tuple)) or len(point) != 2:
        return False
    return all(is_number(coord) and math.isfinite(coord) for coord in point)


def normalize_settings(
    raw: Any, *, issues: Optional[List[NormalizationIssue]] = None
) -> LightroomSettings:
    """Turn an untyped candidate into a clamped :class:`LightroomSettings`.

    Args:
        raw: Parsed candidate, usually a ``dict`` decoded from JSON. An
            existing :class:`LightroomSettings` is accepted too, which makes
            normalization a fixed point.
        issues: Optional list that receives one :class:`NormalizationIssue`
            per anomaly found.

    Returns:
        A record with every recognised field validated, clamped and
        defaulted. Keys the table does not know are ignored.
    """

    collected: List[NormalizationIssue] = issues if issues is not None else []

    if isinstance(raw, LightroomSettings):
        raw = raw.to_dict()

    if not isinstance(raw, Mapping):
        logger.warning(
            "Preset settings candidate is not an object (%s); returning minimal settings",
            type(raw).__name__,
        )
        collected.append(
            NormalizationIssue(
                field=ROOT_FIELD,
                reason=f"expected object, got {type(raw).__name__}",
                value=raw,
            )
        )
        return LightroomSettings(process_version=DEFAULT_PROCESS_VERSION)

    unknown = [key for key in raw if key not in FIELDS_BY_KEY]
    if unknown:
        logger.debug("Ignoring unrecognised preset keys: %s", ", ".join(map(str, unknown)))

    reader = _FieldReader(raw, collected)
    values: Dict[str, Any] = {}
    for spec in FIELD_SPECS:
        if spec.kind is FieldKind.NUMBER:
            values[spec.key] = reader.number(spec)
        elif spec.kind is FieldKind.STRING:
            values[spec.key] = reader.string(spec)
        else:
            values[spec.key] = reader.curve(spec)

    version = values.get("processVersion")
    if version not in KNOWN_PROCESS_VERSIONS:
        logger.warning(
            "Preset setting processVersion: unknown version %r; using %s",
            version,
            DEFAULT_PROCESS_VERSION,
        )
        collected.append(
            NormalizationIssue(
                field="processVersion",
                reason=f"unknown process version; using {DEFAULT_PROCESS_VERSION}",
                value=version,
            )
        )
        values["processVersion"] = DEFAULT_PROCESS_VERSION

    return LightroomSettings.from_values(
        {key: value for key, value in values.items() if value is not None}
    )


def is_structurally_invalid(issues: List[NormalizationIssue]) -> bool:
    """True when normalization fell back to the minimal record."""

    return any(issue.field == ROOT_FIELD for issue in issues)


__all__ = [
    "NormalizationIssue",
    "ROOT_FIELD",
    "clamp",
    "is_number",
    "is_structurally_invalid",
    "normalize_settings",
]
