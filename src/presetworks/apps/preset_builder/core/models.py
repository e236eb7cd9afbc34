"""Typed settings record produced by the normalizer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .fields import (
    FIELD_SPECS,
    FIELDS_BY_KEY,
    HSL_FIELD_KEYS,
    HSL_KEY_INDEX,
    FieldKind,
    HslChannel,
    HueBucket,
)

Number = Union[int, float]
CurvePoint = Tuple[Number, Number]
Curve = Tuple[CurvePoint, ...]
HslRow = Tuple[Optional[int], Optional[int], Optional[int]]
HslTable = Tuple[HslRow, ...]

_HSL_BUCKETS: Tuple[HueBucket, ...] = tuple(HueBucket)
_HSL_CHANNELS: Tuple[HslChannel, ...] = tuple(HslChannel)


def empty_hsl_table() -> HslTable:
    return tuple((None, None, None) for _ in _HSL_BUCKETS)


@dataclass(frozen=True)
class LightroomSettings:
    """One Lightroom preset worth of adjustments.

    ``None`` means "no opinion" and the key is left out of :meth:`to_dict`,
    the XMP document and the display listing. The 24 HSL values live in
    ``hsl``, one row per :class:`HueBucket` ordered hue, saturation,
    luminance; they are exposed under the flat ``hslHueRed`` style keys.
    """

    exposure: Optional[Number] = None
    contrast: Optional[Number] = None
    highlights: Optional[Number] = None
    shadows: Optional[Number] = None
    whites: Optional[Number] = None
    blacks: Optional[Number] = None
    texture: Optional[Number] = None
    clarity: Optional[Number] = None
    dehaze: Optional[Number] = None
    vibrance: Optional[Number] = None
    saturation: Optional[Number] = None

    temperature: Optional[int] = None
    tint: Optional[int] = None

    tone_curve_pv: Optional[str] = None
    tone_curve: Optional[Curve] = None
    tone_curve_red: Optional[Curve] = None
    tone_curve_green: Optional[Curve] = None
    tone_curve_blue: Optional[Curve] = None

    hsl: HslTable = field(default_factory=empty_hsl_table)

    sharpening_amount: Optional[int] = None
    sharpening_radius: Optional[Number] = None
    sharpening_detail: Optional[int] = None
    sharpening_masking: Optional[int] = None

    grain_amount: Optional[int] = None
    grain_size: Optional[int] = None
    grain_frequency: Optional[int] = None

    color_grade_shadow_hue: Optional[int] = None
    color_grade_shadow_sat: Optional[int] = None
    color_grade_shadow_lum: Optional[Number] = None
    color_grade_midtone_hue: Optional[int] = None
    color_grade_midtone_sat: Optional[int] = None
    color_grade_midtone_lum: Optional[Number] = None
    color_grade_highlight_hue: Optional[int] = None
    color_grade_highlight_sat: Optional[int] = None
    color_grade_highlight_lum: Optional[Number] = None
    color_grade_global_hue: Optional[int] = None
    color_grade_global_sat: Optional[int] = None
    color_grade_global_lum: Optional[Number] = None
    color_grade_blending: Optional[int] = None
    color_grade_balance: Optional[Number] = None

    split_toning_highlight_hue: Optional[int] = None
    split_toning_highlight_saturation: Optional[int] = None
    split_toning_shadow_hue: Optional[int] = None
    split_toning_shadow_saturation: Optional[int] = None
    split_toning_balance: Optional[Number] = None

    camera_profile: Optional[str] = None
    process_version: Optional[str] = None

    # ------------------------------------------------------------------
    # Flat key access
    # ------------------------------------------------------------------
    def hsl_value(self, bucket: HueBucket, channel: HslChannel) -> Optional[int]:
        return self.hsl[_HSL_BUCKETS.index(bucket)][_HSL_CHANNELS.index(channel)]

    def get(self, key: str) -> Any:
        """Return the value stored under an external key, or ``None``."""

        if key in HSL_KEY_INDEX:
            bucket, channel = HSL_KEY_INDEX[key]
            return self.hsl_value(bucket, channel)
        spec = FIELDS_BY_KEY.get(key)
        if spec is None:
            return None
        return getattr(self, spec.attr)

    def items(self) -> Iterator[Tuple[str, Any]]:
        """Yield ``(key, value)`` for every present field in declared order."""

        for spec in FIELD_SPECS:
            value = self.get(spec.key)
            if value is not None:
                yield spec.key, value

    def has_any(self, keys: Tuple[str, ...]) -> bool:
        return any(self.get(key) is not None for key in keys)

    @property
    def has_hsl(self) -> bool:
        return self.has_any(HSL_FIELD_KEYS)

    def to_dict(self) -> Dict[str, Any]:
        """Flat camelCase mapping with absent fields omitted (JSON friendly)."""

        result: Dict[str, Any] = {}
        for key, value in self.items():
            if isinstance(value, tuple):
                result[key] = curve_as_lists(value)
            else:
                result[key] = value
        return result

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> "LightroomSettings":
        """Build a record from already validated flat values.

        No range checks happen here; untrusted input goes through
        :func:`normalize_settings` instead.
        """

        kwargs: Dict[str, Any] = {}
        rows: List[List[Optional[int]]] = [[None, None, None] for _ in _HSL_BUCKETS]
        for key, value in values.items():
            if value is None:
                continue
            if key in HSL_KEY_INDEX:
                bucket, channel = HSL_KEY_INDEX[key]
                rows[_HSL_BUCKETS.index(bucket)][_HSL_CHANNELS.index(channel)] = value
                continue
            spec = FIELDS_BY_KEY.get(key)
            if spec is None:
                continue
            if spec.kind is FieldKind.CURVE and isinstance(value, (list, tuple)):
                value = tuple(_as_point(key, point) for point in value)
            kwargs[spec.attr] = value
        kwargs["hsl"] = tuple(tuple(row) for row in rows)
        return cls(**kwargs)


def _as_point(key: str, point: Any) -> CurvePoint:
    if not isinstance(point, (list, tuple)) or len(point) != 2:
        raise ValueError(f"{key}: curve point must be an (x, y) pair, got {point!r}")
    return (point[0], point[1])


def curve_as_lists(curve: Curve) -> List[List[Number]]:
    return [list(point) for point in curve]
