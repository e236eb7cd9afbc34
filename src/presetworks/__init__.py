"""PresetWorks: turn AI-suggested Lightroom adjustments into XMP presets."""

__version__ = "0.1.0"
