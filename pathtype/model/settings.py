from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pathtype.model.types import NoiseConfig

LAYOUTS = ("arc", "circle", "line")
SHIFT_MODES = ("none", "forward", "backward", "random")
TEXT_DIRECTIONS = ("clockwise", "counter-clockwise")


def _opt_float(v: Any) -> float | None:
    return None if v is None else float(v)


def _opt_bool(v: Any) -> bool | None:
    return None if v is None else bool(v)


@dataclass(frozen=True)
class Layer:
    """One stacked pass over the shared guide path with its own row count and colour."""

    n_rows: int = 72
    foreground: str = "#000000"
    visible: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"n_rows": self.n_rows, "foreground": self.foreground, "visible": self.visible}

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Layer":
        dflt = Layer()
        return Layer(
            n_rows=int(d.get("n_rows", dflt.n_rows)),
            foreground=str(d.get("foreground", dflt.foreground)),
            visible=bool(d.get("visible", dflt.visible)),
        )


@dataclass(frozen=True)
class SketchSettings:
    """Every knob of a layout pass, flat and immutable.

    Controllers never mutate a snapshot; they build a new one with
    ``dataclasses.replace`` (see ``LayoutEngine.update``). Fields left as ``None``
    take the per-family default from ``pathtype.layout.profiles``.

    ``layers`` stacks several row sets on the same path. Left empty, the sketch
    is one layer built from ``n_rows`` and ``foreground``.
    """

    layout: str = "arc"
    seed: str | None = None

    # rows
    motif: str = "LLAL"
    n_rows: int = 72
    line_spacing: float = 1.5
    shift_mode: str = "forward"
    center_text: bool = False
    adaptive_spacing: bool = True
    bleed_row: bool | None = None

    # width noise
    positional_noise: bool = True
    grid_resolution: float | None = None
    y_scale_factor: float = 0.45
    noise_scale: float = 0.06
    noise_octaves: int = 3
    noise_persistence: float = 0.6
    noise_lacunarity: float = 0.75
    noise_contrast: float = 0.9
    inverse_width_mapping: bool = False

    # font size noise
    font_size_variation: bool = False
    font_size_variation_amount: float = 0.3
    font_size_noise_scale: float = 0.05

    use_transparency: bool = True

    # document geometry (mm unless noted)
    dpi: int = 72
    doc_width_mm: float | None = None
    doc_height_mm: float | None = None
    margin_mm: float | None = None
    outer_diameter_mm: float | None = None
    inner_diameter_mm: float | None = None
    left_angle: float | None = None  # degrees
    right_angle: float | None = None  # degrees
    horizontal_bleed: float | None = None  # degrees
    text_direction: str = "counter-clockwise"

    background: str = "#ffffff"
    foreground: str = "#000000"
    layers: tuple[Layer, ...] = ()

    # animation
    animation_enabled: bool = False
    animation_speed: float = 0.5
    target_fps: int = 25
    performance_mode: bool = False

    def layer_list(self) -> tuple[Layer, ...]:
        if self.layers:
            return self.layers
        return (Layer(n_rows=self.n_rows, foreground=self.foreground),)

    def noise_config(self) -> NoiseConfig:
        return NoiseConfig(
            scale=self.noise_scale,
            octaves=self.noise_octaves,
            persistence=self.noise_persistence,
            lacunarity=self.noise_lacunarity,
            contrast=self.noise_contrast,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": 2,
            "layout": self.layout,
            "seed": self.seed,
            "motif": self.motif,
            "n_rows": self.n_rows,
            "line_spacing": self.line_spacing,
            "shift_mode": self.shift_mode,
            "center_text": self.center_text,
            "adaptive_spacing": self.adaptive_spacing,
            "bleed_row": self.bleed_row,
            "positional_noise": self.positional_noise,
            "grid_resolution": self.grid_resolution,
            "y_scale_factor": self.y_scale_factor,
            "noise_scale": self.noise_scale,
            "noise_octaves": self.noise_octaves,
            "noise_persistence": self.noise_persistence,
            "noise_lacunarity": self.noise_lacunarity,
            "noise_contrast": self.noise_contrast,
            "inverse_width_mapping": self.inverse_width_mapping,
            "font_size_variation": self.font_size_variation,
            "font_size_variation_amount": self.font_size_variation_amount,
            "font_size_noise_scale": self.font_size_noise_scale,
            "use_transparency": self.use_transparency,
            "dpi": self.dpi,
            "doc_width_mm": self.doc_width_mm,
            "doc_height_mm": self.doc_height_mm,
            "margin_mm": self.margin_mm,
            "outer_diameter_mm": self.outer_diameter_mm,
            "inner_diameter_mm": self.inner_diameter_mm,
            "left_angle": self.left_angle,
            "right_angle": self.right_angle,
            "horizontal_bleed": self.horizontal_bleed,
            "text_direction": self.text_direction,
            "background": self.background,
            "foreground": self.foreground,
            "layers": [layer.to_dict() for layer in self.layers],
            "animation_enabled": self.animation_enabled,
            "animation_speed": self.animation_speed,
            "target_fps": self.target_fps,
            "performance_mode": self.performance_mode,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "SketchSettings":
        dflt = SketchSettings()
        return SketchSettings(
            layout=str(d.get("layout", dflt.layout)),
            seed=(str(d["seed"]) if d.get("seed") else None),
            motif=str(d.get("motif", dflt.motif)),
            n_rows=int(d.get("n_rows", dflt.n_rows)),
            line_spacing=float(d.get("line_spacing", dflt.line_spacing)),
            shift_mode=str(d.get("shift_mode", dflt.shift_mode)),
            center_text=bool(d.get("center_text", dflt.center_text)),
            adaptive_spacing=bool(d.get("adaptive_spacing", dflt.adaptive_spacing)),
            bleed_row=_opt_bool(d.get("bleed_row")),
            positional_noise=bool(d.get("positional_noise", dflt.positional_noise)),
            grid_resolution=_opt_float(d.get("grid_resolution")),
            y_scale_factor=float(d.get("y_scale_factor", dflt.y_scale_factor)),
            noise_scale=float(d.get("noise_scale", dflt.noise_scale)),
            noise_octaves=int(d.get("noise_octaves", dflt.noise_octaves)),
            noise_persistence=float(d.get("noise_persistence", dflt.noise_persistence)),
            noise_lacunarity=float(d.get("noise_lacunarity", dflt.noise_lacunarity)),
            noise_contrast=float(d.get("noise_contrast", dflt.noise_contrast)),
            inverse_width_mapping=bool(d.get("inverse_width_mapping", dflt.inverse_width_mapping)),
            font_size_variation=bool(d.get("font_size_variation", dflt.font_size_variation)),
            font_size_variation_amount=float(d.get("font_size_variation_amount", dflt.font_size_variation_amount)),
            font_size_noise_scale=float(d.get("font_size_noise_scale", dflt.font_size_noise_scale)),
            use_transparency=bool(d.get("use_transparency", dflt.use_transparency)),
            dpi=int(d.get("dpi", dflt.dpi)),
            doc_width_mm=_opt_float(d.get("doc_width_mm")),
            doc_height_mm=_opt_float(d.get("doc_height_mm")),
            margin_mm=_opt_float(d.get("margin_mm")),
            outer_diameter_mm=_opt_float(d.get("outer_diameter_mm")),
            inner_diameter_mm=_opt_float(d.get("inner_diameter_mm")),
            left_angle=_opt_float(d.get("left_angle")),
            right_angle=_opt_float(d.get("right_angle")),
            horizontal_bleed=_opt_float(d.get("horizontal_bleed")),
            text_direction=str(d.get("text_direction", dflt.text_direction)),
            background=str(d.get("background", dflt.background)),
            foreground=str(d.get("foreground", dflt.foreground)),
            layers=tuple(Layer.from_dict(x) for x in d.get("layers") or ()),
            animation_enabled=bool(d.get("animation_enabled", dflt.animation_enabled)),
            animation_speed=float(d.get("animation_speed", dflt.animation_speed)),
            target_fps=int(d.get("target_fps", dflt.target_fps)),
            performance_mode=bool(d.get("performance_mode", dflt.performance_mode)),
        )
