"""Read-only field tables shared by the normalizer and the XMP serializer.

Each Lightroom adjustment the preset builder understands is described once
here: its external (camelCase) key, valid range, default, whether it must be
an integer, and the ``crs:`` tag it is written under. The tables are built at
import time and never mutated afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

Number = Union[int, float]

NS_X = "adobe:ns:meta/"
NS_RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
NS_CRS = "http://ns.adobe.com/camera-raw-settings/1.0/"
XMP_TOOLKIT = "Adobe XMP Core SDK 1.0"

DEFAULT_PRESET_NAME = "AI Generated Preset"
PRESET_TYPE = "Normal"

# Normalizer fills this in when the candidate has no usable version; the
# serializer falls back to the legacy value when a record carries none.
DEFAULT_PROCESS_VERSION = "13.3"
LEGACY_PROCESS_VERSION = "6.7"
KNOWN_PROCESS_VERSIONS: Tuple[str, ...] = (
    "6.7",
    "11.0",
    "12.0",
    "13.0",
    "13.1",
    "13.2",
    "13.3",
    "14.0",
    "15.0",
    "16.0",
)

CURVE_MIN = 0
CURVE_MAX = 255


class HueBucket(str, Enum):
    """The eight colour ranges of the HSL / Color Mixer panel."""

    RED = "Red"
    ORANGE = "Orange"
    YELLOW = "Yellow"
    GREEN = "Green"
    AQUA = "Aqua"
    BLUE = "Blue"
    PURPLE = "Purple"
    MAGENTA = "Magenta"


class HslChannel(str, Enum):
    HUE = "Hue"
    SATURATION = "Saturation"
    LUMINANCE = "Luminance"


class FieldKind(str, Enum):
    NUMBER = "number"
    STRING = "string"
    CURVE = "curve"


@dataclass(frozen=True)
class FieldSpec:
    """Validation rule and XMP tag for a single settings key."""

    key: str
    kind: FieldKind
    tag: Optional[str] = None
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    default: Optional[Union[Number, str]] = None
    integer: bool = False

    @property
    def attr(self) -> str:
        """Attribute name on :class:`LightroomSettings` (``toneCurvePV`` -> ``tone_curve_pv``)."""

        return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", self.key).lower()


def _number(
    key: str,
    tag: Optional[str],
    minimum: Number,
    maximum: Number,
    default: Optional[Number] = None,
    *,
    integer: bool = False,
) -> FieldSpec:
    return FieldSpec(
        key=key,
        kind=FieldKind.NUMBER,
        tag=tag,
        minimum=minimum,
        maximum=maximum,
        default=default,
        integer=integer,
    )


def _string(key: str, tag: Optional[str], default: Optional[str]) -> FieldSpec:
    return FieldSpec(key=key, kind=FieldKind.STRING, tag=tag, default=default)


def _curve(key: str, tag: str) -> FieldSpec:
    return FieldSpec(key=key, kind=FieldKind.CURVE, tag=tag)


def hsl_key(channel: HslChannel, bucket: HueBucket) -> str:
    """Return the flat external key, e.g. ``hslSaturationAqua``."""

    return f"hsl{channel.value}{bucket.value}"


def hsl_tag(channel: HslChannel, bucket: HueBucket) -> str:
    return f"{channel.value}Adjustment{bucket.value}"


# Curve channel suffix ("" for the composite curve) -> external key.
CURVE_KEYS: Tuple[Tuple[str, str], ...] = (
    ("", "toneCurve"),
    ("Red", "toneCurveRed"),
    ("Green", "toneCurveGreen"),
    ("Blue", "toneCurveBlue"),
)

COLOR_GRADE_ZONES: Tuple[str, ...] = ("Shadow", "Midtone", "Highlight", "Global")


def _color_grade_specs() -> Tuple[FieldSpec, ...]:
    specs = []
    for zone in COLOR_GRADE_ZONES:
        specs.append(
            _number(f"colorGrade{zone}Hue", f"ColorGrade{zone}Hue", 0, 359, 0, integer=True)
        )
        specs.append(
            _number(f"colorGrade{zone}Sat", f"ColorGrade{zone}Sat", 0, 100, 0, integer=True)
        )
        specs.append(_number(f"colorGrade{zone}Lum", f"ColorGrade{zone}Lum", -100, 100, 0))
    specs.append(
        _number("colorGradeBlending", "ColorGradeBlending", 0, 100, 50, integer=True)
    )
    specs.append(_number("colorGradeBalance", "ColorGradeBalance", -100, 100, 0))
    return tuple(specs)


def _hsl_specs() -> Tuple[FieldSpec, ...]:
    return tuple(
        _number(
            hsl_key(channel, bucket),
            hsl_tag(channel, bucket),
            -100,
            100,
            0,
            integer=True,
        )
        for bucket in HueBucket
        for channel in HslChannel
    )


# Declared order is the order keys are emitted in.
FIELD_SPECS: Tuple[FieldSpec, ...] = (
    # Basic panel
    _number("exposure", "Exposure2012", -5, 5, 0),
    _number("contrast", "Contrast2012", -100, 100, 0),
    _number("highlights", "Highlights2012", -100, 100, 0),
    _number("shadows", "Shadows2012", -100, 100, 0),
    _number("whites", "Whites2012", -100, 100, 0),
    _number("blacks", "Blacks2012", -100, 100, 0),
    _number("texture", "Texture", -100, 100, 0),
    _number("clarity", "Clarity2012", -100, 100, 0),
    _number("dehaze", "Dehaze", -100, 100, 0),
    _number("vibrance", "Vibrance", -100, 100, 0),
    _number("saturation", "Saturation", -100, 100, 0),
    # White balance
    _number("temperature", "Temperature", 2000, 50000, 6500, integer=True),
    _number("tint", "Tint", -150, 150, 0, integer=True),
    # Tone curve
    _string("toneCurvePV", "ToneCurvePV", "2012"),
    *(_curve(key, f"ToneCurvePV2012{suffix}") for suffix, key in CURVE_KEYS),
    # HSL
    *_hsl_specs(),
    # Detail
    _number("sharpeningAmount", "Sharpness", 0, 150, 0, integer=True),
    _number("sharpeningRadius", "SharpenRadius", 0.5, 3.0, 1.0),
    _number("sharpeningDetail", "SharpenDetail", 0, 100, 25, integer=True),
    _number("sharpeningMasking", "SharpenEdgeMasking", 0, 100, 0, integer=True),
    # Effects
    _number("grainAmount", "GrainAmount", 0, 100, 0, integer=True),
    _number("grainSize", "GrainSize", 0, 100, 25, integer=True),
    _number("grainFrequency", "GrainFrequency", 0, 100, 50, integer=True),
    # Color grading
    *_color_grade_specs(),
    # Split toning (older process versions)
    _number("splitToningHighlightHue", "SplitToningHighlightHue", 0, 359, integer=True),
    _number(
        "splitToningHighlightSaturation",
        "SplitToningHighlightSaturation",
        0,
        100,
        integer=True,
    ),
    _number("splitToningShadowHue", "SplitToningShadowHue", 0, 359, integer=True),
    _number(
        "splitToningShadowSaturation",
        "SplitToningShadowSaturation",
        0,
        100,
        integer=True,
    ),
    _number("splitToningBalance", "SplitToningBalance", -100, 100),
    # Identity / compatibility
    _string("cameraProfile", "CameraProfile", "Adobe Standard"),
    # ProcessVersion is written with the preset metadata, not from the table.
    _string("processVersion", None, DEFAULT_PROCESS_VERSION),
)

FIELDS_BY_KEY: Mapping[str, FieldSpec] = MappingProxyType(
    {spec.key: spec for spec in FIELD_SPECS}
)

TAG_MAP: Mapping[str, str] = MappingProxyType(
    {spec.key: spec.tag for spec in FIELD_SPECS if spec.tag is not None}
)

CURVE_FIELD_KEYS: Tuple[str, ...] = tuple(key for _, key in CURVE_KEYS)
TONE_CURVE_FIELD_KEYS: Tuple[str, ...] = ("toneCurvePV",) + CURVE_FIELD_KEYS
HSL_FIELD_KEYS: Tuple[str, ...] = tuple(
    hsl_key(channel, bucket) for bucket in HueBucket for channel in HslChannel
)

# hslHueRed -> (HueBucket.RED, HslChannel.HUE)
HSL_KEY_INDEX: Mapping[str, Tuple[HueBucket, HslChannel]] = MappingProxyType(
    {
        hsl_key(channel, bucket): (bucket, channel)
        for bucket in HueBucket
        for channel in HslChannel
    }
)

__all__ = [
    "COLOR_GRADE_ZONES",
    "CURVE_FIELD_KEYS",
    "CURVE_KEYS",
    "CURVE_MAX",
    "CURVE_MIN",
    "DEFAULT_PRESET_NAME",
    "DEFAULT_PROCESS_VERSION",
    "FIELD_SPECS",
    "FIELDS_BY_KEY",
    "FieldKind",
    "FieldSpec",
    "HSL_FIELD_KEYS",
    "HSL_KEY_INDEX",
    "HslChannel",
    "HueBucket",
    "KNOWN_PROCESS_VERSIONS",
    "LEGACY_PROCESS_VERSION",
    "NS_CRS",
    "NS_RDF",
    "NS_X",
    "PRESET_TYPE",
    "TAG_MAP",
    "TONE_CURVE_FIELD_KEYS",
    "XMP_TOOLKIT",
    "hsl_key",
    "hsl_tag",
]
