from __future__ import annotations

import dataclasses
import logging
from typing import Any

from pathtype.errors import ConfigOutOfRange
from pathtype.model.settings import LAYOUTS, SHIFT_MODES, TEXT_DIRECTIONS, Layer, SketchSettings
from pathtype.util.limits import (
    MAX_DPI,
    MAX_FPS,
    MAX_LAYERS,
    MAX_MOTIF_LEN,
    MAX_OCTAVES,
    MAX_ROWS,
    MIN_CONTRAST,
    MIN_DPI,
    MIN_FPS,
    MIN_OCTAVES,
    MIN_ROWS,
)

_LOGGER = logging.getLogger("pathtype.validate")


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


CURRENT_SCHEMA_VERSION = 2

# Keys used by the browser sketches' settings exports.
LEGACY_KEYS = {
    "nRows": "n_rows",
    "lineSpacing": "line_spacing",
    "shiftTextPattern": "shift_mode",
    "centerText": "center_text",
    "angularNoise": "positional_noise",
    "positionalNoise": "positional_noise",
    "angularResolution": "grid_resolution",
    "positionalResolution": "grid_resolution",
    "yScaleFactor": "y_scale_factor",
    "noiseScale": "noise_scale",
    "noiseOctaves": "noise_octaves",
    "noisePersistence": "noise_persistence",
    "noiseContrast": "noise_contrast",
    "noiseLacunarity": "noise_lacunarity",
    "inverseWidthMapping": "inverse_width_mapping",
    "fontSizeVariation": "font_size_variation",
    "fontSizeVariationAmount": "font_size_variation_amount",
    "fontSizeNoiseScale": "font_size_noise_scale",
    "adaptiveSpacing": "adaptive_spacing",
    "useTransparency": "use_transparency",
    "colBG": "background",
    "colFG": "foreground",
    "textDirection": "text_direction",
    "outerDiameter": "outer_diameter_mm",
    "innerDiameter": "inner_diameter_mm",
    "horizontalBleed": "horizontal_bleed",
    "animationEnabled": "animation_enabled",
    "animationSpeed": "animation_speed",
    "performanceMode": "performance_mode",
}


def _migrate_layer(entry: dict[str, Any]) -> dict[str, Any]:
    out = {LEGACY_KEYS.get(k, k): v for k, v in entry.items()}
    return {k: out[k] for k in ("n_rows", "foreground", "visible") if k in out}


def _guess_layout(controls: dict[str, Any]) -> str:
    if "outerDiameter" in controls or "textDirection" in controls:
        return "circle"
    if "positionalNoise" in controls or "positionalResolution" in controls:
        return "line"
    return "arc"


def migrate_settings_dict(d: dict[str, Any]) -> dict[str, Any]:
    """Migrate a settings dict to the latest schema.

    v1 is the browser export: ``{"controlSettings": {key: {"value": ...}},
    "seed": ...}`` with camelCase keys. The multi-layer sketches write
    ``sharedSettings`` plus a ``layers`` list and ``backgroundColor``.
    Unknown keys are dropped.
    """

    schema = int(d.get("schema_version", 1) or 1)

    # v1 -> v2: flatten control entries and rename keys
    if schema < 2:
        layers = d.get("layers")
        controls = d.get("controlSettings") or d.get("sharedSettings")
        if isinstance(controls, dict):
            out: dict[str, Any] = {}
            for key, entry in controls.items():
                value = entry.get("value") if isinstance(entry, dict) else entry
                name = LEGACY_KEYS.get(key)
                if name is not None and value is not None:
                    out[name] = value
            seed = d.get("seed")
            if isinstance(seed, dict):
                seed = seed.get("hash")
            if seed:
                out["seed"] = str(seed)
            if d.get("backgroundColor"):
                out["background"] = str(d["backgroundColor"])
            out["layout"] = d.get("layout") or _guess_layout(controls)
            d = out
        else:
            for key, name in LEGACY_KEYS.items():
                if key in d and name not in d:
                    d[name] = d.pop(key)
        if isinstance(layers, list):
            d["layers"] = [_migrate_layer(x) for x in layers if isinstance(x, dict)]
        schema = 2

    d["schema_version"] = CURRENT_SCHEMA_VERSION
    return d


def validate_settings(settings: SketchSettings) -> tuple[SketchSettings, list[ConfigOutOfRange]]:
    """Clamp every field into range.

    Never raises: each correction is returned as a ConfigOutOfRange note and
    logged at warning level.
    """

    changes: dict[str, Any] = {}
    notes: list[ConfigOutOfRange] = []

    def fix(name: str, clamped: Any) -> None:
        value = getattr(settings, name)
        if clamped != value:
            changes[name] = clamped
            notes.append(ConfigOutOfRange(name, value, clamped))

    def bounded(name: str, lo: float, hi: float, cast: type = float) -> None:
        value = getattr(settings, name)
        if value is None:
            return
        fix(name, cast(clamp(cast(value), lo, hi)))

    def choice(name: str, allowed: tuple[str, ...], default: str) -> None:
        value = str(getattr(settings, name)).strip().lower()
        fix(name, value if value in allowed else default)

    choice("layout", LAYOUTS, "arc")
    choice("shift_mode", SHIFT_MODES, "forward")
    choice("text_direction", TEXT_DIRECTIONS, "counter-clockwise")

    motif = settings.motif or "LLAL"
    fix("motif", motif[:MAX_MOTIF_LEN])

    bounded("n_rows", MIN_ROWS, MAX_ROWS, int)
    bounded("line_spacing", 0.1, 5.0)
    bounded("grid_resolution", 1e-4, 360.0)
    bounded("y_scale_factor", 0.0, 10.0)
    bounded("noise_scale", 1e-4, 1.0)
    bounded("noise_octaves", MIN_OCTAVES, MAX_OCTAVES, int)
    bounded("noise_persistence", 0.0, 1.0)
    bounded("noise_lacunarity", 0.01, 4.0)
    bounded("noise_contrast", MIN_CONTRAST, 5.0)
    bounded("font_size_variation_amount", 0.0, 2.0)
    bounded("font_size_noise_scale", 1e-4, 1.0)
    bounded("dpi", MIN_DPI, MAX_DPI, int)
    bounded("doc_width_mm", 1.0, 5000.0)
    bounded("doc_height_mm", 1.0, 5000.0)
    bounded("margin_mm", 0.0, 1000.0)
    bounded("outer_diameter_mm", 0.0, 10000.0)
    bounded("inner_diameter_mm", 0.0, 10000.0)
    bounded("left_angle", -180.0, 180.0)
    bounded("right_angle", -180.0, 180.0)
    bounded("horizontal_bleed", 0.0, 45.0)
    bounded("animation_speed", 0.0, 10.0)
    bounded("target_fps", MIN_FPS, MAX_FPS, int)

    if settings.layers:
        fix(
            "layers",
            tuple(
                Layer(int(clamp(int(layer.n_rows), MIN_ROWS, MAX_ROWS)), layer.foreground, layer.visible)
                for layer in settings.layers[:MAX_LAYERS]
            ),
        )

    for n in notes:
        _LOGGER.warning("%s", n)

    if changes:
        settings = dataclasses.replace(settings, **changes)
    return settings, notes


def load_settings_dict(d: dict[str, Any]) -> tuple[SketchSettings, list[ConfigOutOfRange]]:
    """migrate -> from_dict -> validate."""

    return validate_settings(SketchSettings.from_dict(migrate_settings_dict(dict(d))))
