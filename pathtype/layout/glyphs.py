from __future__ import annotations

import math
from dataclasses import dataclass

from pathtype.layout.profiles import LayoutProfile
from pathtype.model.types import WIDTH_CLASSES, GlyphRecord, NoiseConfig, PathSpec, RowEntry, RowPlan
from pathtype.util.limits import MAX_GLYPHS_PER_ROW
from pathtype.util.noise import NoiseField
from pathtype.util.rng import SeededRandom

AVG_CHAR_WIDTH = 0.4  # of font size

# (noise weight, row weight) per width class
OPACITY_WEIGHTS = {
    50: (0.9, 0.1),
    100: (0.8, 0.2),
    150: (0.6, 0.4),
    200: (0.4, 0.6),
}
# blended opacity at or above this stays fully opaque
OPACITY_THRESHOLDS = {50: 0.95, 100: 0.7, 150: 0.9, 200: 1.0}


@dataclass(frozen=True)
class GlyphConfig:
    positional: bool = True
    resolution: float = 0.15
    y_scale: float = 0.45
    inverse: bool = False
    transparency: bool = True
    performance: bool = False


def repetitions_for(length: float, font_size: float, motif_len: int, profile: LayoutProfile, performance: bool = False) -> int:
    if performance:
        safety, minimum = profile.perf_safety_factor, profile.perf_min_repetitions
    else:
        safety, minimum = profile.safety_factor, profile.min_repetitions
    motif_w = font_size * AVG_CHAR_WIDTH * max(1, motif_len)
    needed = math.ceil(length / motif_w) if motif_w > 0 else 0
    reps = max(math.ceil(needed * safety), minimum)
    if profile.max_repetitions is not None:
        reps = min(reps, profile.max_repetitions)
    return max(1, min(reps, MAX_GLYPHS_PER_ROW // max(1, motif_len)))


def tile_motif(motif: str, repetitions: int) -> str:
    return motif * max(0, int(repetitions))


def shift_amount(mode: str, row: int, motif_len: int, rng: SeededRandom | None = None) -> int:
    if motif_len <= 0:
        return 0
    if mode == "forward":
        return row % motif_len
    if mode == "backward":
        return motif_len - row % motif_len
    if mode == "random":
        if rng is None:
            raise ValueError("random shift needs a seeded generator")
        return int(math.floor(rng.next() * motif_len))
    return 0


def shift_text(text: str, amount: int) -> str:
    if not text:
        return text
    s = amount % len(text)
    return text[s:] + text[:s]


def grid_position(family: str, i: int, total: int, sweep_angle: float) -> float:
    """Glyph position relative to the row, in the family's grid units."""

    if total <= 0:
        return 0.0
    if family == "arc":
        return (i / total) * sweep_angle - sweep_angle / 2
    if family == "circle":
        return (i / total) * 360.0
    return i / total - 0.5


def noise_coords(
    path: PathSpec,
    i: int,
    total: int,
    row: int,
    noise: NoiseConfig,
    cfg: GlyphConfig,
    offset: tuple[float, float] = (0.0, 0.0),
) -> tuple[float, float]:
    if cfg.positional:
        cell = math.floor(grid_position(path.family, i, total, path.sweep_angle) / cfg.resolution)
        x = cell * noise.scale
    else:
        x = i * noise.scale
    y = row * noise.scale * cfg.y_scale
    return x + offset[0], y + offset[1]


def width_class(value: float, inverse: bool = False) -> int:
    n = (value + 1) / 2
    if inverse:
        n = 1 - n
    idx = max(0, min(len(WIDTH_CLASSES) - 1, math.floor(n * len(WIDTH_CLASSES))))
    return WIDTH_CLASSES[idx]


def opacity_class(width: int, row: int, n_slots: int, value: float, profile: LayoutProfile, transparency: bool = True) -> int:
    if not transparency:
        return 100

    if n_slots <= 1:
        row_pos = 0.0
    else:
        row_pos = max(0.0, min(1.0, (row - 1) / (n_slots - 1)))
    row_factor = row_pos ** profile.opacity_exponent

    noise_op = 1 - (value + 1) / 2
    row_op = 1 - row_factor
    w_noise, w_row = OPACITY_WEIGHTS.get(width, (0.8, 0.2))
    blended = noise_op * w_noise + row_op * w_row

    if blended >= OPACITY_THRESHOLDS.get(width, 0.0):
        return 100

    levels = profile.opacity_levels
    idx = max(0, min(len(levels) - 1, math.floor(blended * len(levels))))
    return levels[idx]


def generate_glyphs(
    path: PathSpec,
    row: RowEntry,
    plan: RowPlan,
    motif: str,
    noise: NoiseConfig,
    shift_mode: str,
    *,
    field: NoiseField,
    glyph_cfg: GlyphConfig,
    profile: LayoutProfile,
    rng: SeededRandom | None = None,
    offset: tuple[float, float] = (0.0, 0.0),
) -> list[GlyphRecord]:
    """Tile, shift and classify one row's glyphs.

    Consumes one draw from ``rng`` when ``shift_mode`` is "random".
    """

    length = path.row_length(row.placement)
    reps = repetitions_for(length, row.font_size, len(motif), profile, glyph_cfg.performance)
    text = shift_text(tile_motif(motif, reps), shift_amount(shift_mode, row.index, len(motif), rng))

    total = len(text)
    n_slots = len(plan)
    out: list[GlyphRecord] = []
    for i, ch in enumerate(text):
        x, y = noise_coords(path, i, total, row.index, noise, glyph_cfg, offset)
        v = field.sample_fractal(x, y, noise)
        w = width_class(v, glyph_cfg.inverse)
        op = opacity_class(w, row.index, n_slots, v, profile, glyph_cfg.transparency)
        out.append(GlyphRecord(char_index=i, character=ch, width_class=w, opacity_class=op))
    return out
