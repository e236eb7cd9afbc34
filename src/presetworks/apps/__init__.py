"""Applications bundled with PresetWorks."""
