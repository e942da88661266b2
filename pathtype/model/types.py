from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union

from pathtype.util.geometry import (
    arc_length,
    arc_path_d,
    circle_length,
    circle_path_d,
    line_path_d,
)

WIDTH_CLASSES = (50, 100, 150, 200)


@dataclass(frozen=True)
class NoiseConfig:
    """Fractal noise knobs.

    ``scale`` converts glyph/row coordinates into noise space; the other fields
    shape the octave sum.
    """

    scale: float = 0.06
    octaves: int = 3
    persistence: float = 0.6
    lacunarity: float = 0.75
    contrast: float = 0.9

    def with_octave_cap(self, cap: int) -> "NoiseConfig":
        if self.octaves <= cap:
            return self
        return NoiseConfig(
            scale=self.scale,
            octaves=int(cap),
            persistence=self.persistence,
            lacunarity=self.lacunarity,
            contrast=self.contrast,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "scale": self.scale,
            "octaves": self.octaves,
            "persistence": self.persistence,
            "lacunarity": self.lacunarity,
            "contrast": self.contrast,
        }


@dataclass(frozen=True)
class ArcPath:
    """Partial circle; rows are concentric arcs between the two radii."""

    center: tuple[float, float]
    outer_radius: float
    inner_radius: float
    start_angle: float
    end_angle: float
    sweep_flag: int = 0

    family = "arc"

    @property
    def inner_boundary(self) -> float:
        return self.inner_radius

    @property
    def outer_boundary(self) -> float:
        return self.outer_radius

    @property
    def span(self) -> float:
        return self.outer_radius - self.inner_radius

    @property
    def sweep_angle(self) -> float:
        return abs(self.end_angle - self.start_angle)

    def row_length(self, placement: float) -> float:
        return arc_length(placement, self.start_angle, self.end_angle)

    def row_path_d(self, placement: float) -> str:
        return arc_path_d(self.center, placement, self.start_angle, self.end_angle, self.sweep_flag)


@dataclass(frozen=True)
class CirclePath:
    center: tuple[float, float]
    radius: float
    inner_radius: float
    direction: str = "counter-clockwise"

    family = "circle"

    @property
    def inner_boundary(self) -> float:
        return self.inner_radius

    @property
    def outer_boundary(self) -> float:
        return self.radius

    @property
    def span(self) -> float:
        return self.radius - self.inner_radius

    @property
    def sweep_angle(self) -> float:
        return 360.0

    def row_length(self, placement: float) -> float:
        return circle_length(placement)

    def row_path_d(self, placement: float) -> str:
        return circle_path_d(self.center, placement, self.direction)


@dataclass(frozen=True)
class LinePath:
    """Horizontal rows stacked top to bottom from ``y`` over ``height``."""

    y: float
    x_start: float
    x_end: float
    height: float

    family = "line"

    @property
    def inner_boundary(self) -> float:
        return self.y

    @property
    def outer_boundary(self) -> float:
        return self.y + self.height

    @property
    def span(self) -> float:
        return self.height

    @property
    def sweep_angle(self) -> float:
        return 0.0

    def row_length(self, placement: float) -> float:
        return abs(self.x_end - self.x_start)

    def row_path_d(self, placement: float) -> str:
        return line_path_d(self.x_start, self.x_end, placement)


PathSpec = Union[ArcPath, CirclePath, LinePath]


@dataclass(frozen=True)
class RowEntry:
    index: int
    font_size: float
    placement: float
    bleed: bool = False


@dataclass(frozen=True)
class RowPlan:
    """Rows in ascending slot order.

    Placements increase strictly along the sweep axis. The optional bleed row
    always takes slot 0.
    """

    rows: tuple[RowEntry, ...]
    base_font_size: float
    scale_factor: float = 1.0

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[RowEntry]:
        return iter(self.rows)

    @property
    def visible_count(self) -> int:
        return sum(1 for r in self.rows if not r.bleed)

    @property
    def has_bleed(self) -> bool:
        return any(r.bleed for r in self.rows)


@dataclass(frozen=True)
class GlyphRecord:
    char_index: int
    character: str
    width_class: int
    opacity_class: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "i": self.char_index,
            "char": self.character,
            "width": self.width_class,
            "opacity": self.opacity_class,
        }


@dataclass
class RenderRow:
    index: int
    bleed: bool
    font_size: float
    placement: float
    path_d: str
    path_length: float
    layer: int = 0
    glyphs: list[GlyphRecord] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(g.character for g in self.glyphs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "layer": self.layer,
            "bleed": self.bleed,
            "font_size": round(self.font_size, 6),
            "placement": round(self.placement, 6),
            "path_d": self.path_d,
            "path_length": round(self.path_length, 6),
            "glyphs": [g.to_dict() for g in self.glyphs],
        }


@dataclass
class RenderOutput:
    """Symbolic result of one layout pass, ready for a renderer."""

    seed: str
    layout: str
    rows: list[RenderRow] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    time: float | None = None
    base_font_size: float = 0.0
    scale_factor: float = 1.0

    @property
    def visible_row_count(self) -> int:
        return sum(1 for r in self.rows if not r.bleed)

    @property
    def glyph_count(self) -> int:
        return sum(len(r.glyphs) for r in self.rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "layout": self.layout,
            "time": self.time,
            "base_font_size": round(self.base_font_size, 6),
            "scale_factor": round(self.scale_factor, 6),
            "visible_row_count": self.visible_row_count,
            "glyph_count": self.glyph_count,
            "warnings": list(self.warnings),
            "rows": [r.to_dict() for r in self.rows],
        }
