from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from pathtype.errors import InsufficientSpace
from pathtype.model.types import NoiseConfig, PathSpec, RowEntry, RowPlan
from pathtype.util.limits import MAX_ROWS, MIN_ROW_PITCH_PX, MIN_SPAN_PX
from pathtype.util.noise import NoiseField

_LOGGER = logging.getLogger("pathtype.rows")

MIN_FONT_FACTOR = 0.3
MAX_FONT_FACTOR = 2.0


@dataclass(frozen=True)
class FontSizeConfig:
    line_spacing: float = 1.5
    variation: bool = False
    amount: float = 0.3
    noise_scale: float = 0.05


@dataclass(frozen=True)
class SpacingConfig:
    adaptive: bool = True
    bleed: bool = False


@dataclass(frozen=True)
class Span:
    """Extent along the sweep axis (radius for arc/circle, y for line)."""

    start: float
    end: float

    @property
    def length(self) -> float:
        return self.end - self.start

    @staticmethod
    def of_path(path: PathSpec) -> "Span":
        return Span(start=path.inner_boundary, end=path.outer_boundary)


def require_space(span: Span, n_rows: int) -> None:
    if span.length < MIN_SPAN_PX:
        raise InsufficientSpace(
            f"not enough space between boundaries ({span.length:.2f}px < {MIN_SPAN_PX}px)",
            span=span.length,
            n_rows=n_rows,
        )
    if n_rows > MAX_ROWS or span.length / max(1, n_rows) < MIN_ROW_PITCH_PX:
        raise InsufficientSpace(
            f"too many rows for the available space ({n_rows} rows in {span.length:.2f}px)",
            span=span.length,
            n_rows=n_rows,
        )


def base_font_size(n_rows: int, span_length: float, line_spacing: float) -> float:
    return (span_length / max(1, int(n_rows))) * line_spacing


def row_font_sizes(
    slots: int,
    base: float,
    font: FontSizeConfig,
    *,
    field: NoiseField | None = None,
    noise: NoiseConfig | None = None,
    offset: tuple[float, float] = (0.0, 0.0),
) -> list[float]:
    if not font.variation or field is None or noise is None:
        return [base] * slots

    ox, oy = offset
    lo, hi = base * MIN_FONT_FACTOR, base * MAX_FONT_FACTOR
    sizes: list[float] = []
    for slot in range(slots):
        v = field.sample_fractal(0.0 + ox, slot * font.noise_scale + oy, noise)
        sizes.append(max(lo, min(hi, base * (1 + v * font.amount))))
    return sizes


def fixed_placements(n_rows: int, span: Span) -> list[float]:
    if n_rows <= 1:
        return [span.start]
    step = span.length / (n_rows - 1)
    return [span.start + i * step for i in range(n_rows)]


def adaptive_placements(sizes: list[float], line_spacing: float, span: Span) -> tuple[list[float], float]:
    """Cumulative placement from the start boundary.

    Returns (placements, scale). Spacing is only ever scaled down so the rows
    fit; a surplus is left empty at the outer edge.
    """

    spacings = [s * line_spacing for s in sizes]
    total = sum(spacings)
    scale = span.length / total if total > span.length and total > 0 else 1.0

    out: list[float] = []
    pos = span.start
    for i in range(len(sizes)):
        if i > 0:
            pos = min(pos + spacings[i - 1] * scale, span.end)
        out.append(pos)
    return out, scale


def plan_rows(
    n_rows: int,
    font: FontSizeConfig,
    spacing: SpacingConfig,
    span: Span,
    *,
    field: NoiseField | None = None,
    noise: NoiseConfig | None = None,
    offset: tuple[float, float] = (0.0, 0.0),
) -> RowPlan:
    """Font size and placement for every row slot.

    Slot 0 is the bleed row when ``spacing.bleed`` is set. Raises
    InsufficientSpace when the span cannot hold the rows.
    """

    n_rows = int(n_rows)
    require_space(span, n_rows)

    base = base_font_size(n_rows, span.length, font.line_spacing)
    lead = 1 if spacing.bleed else 0
    sizes = row_font_sizes(n_rows + lead, base, font, field=field, noise=noise, offset=offset)
    visible_sizes = sizes[lead:]

    if spacing.adaptive:
        placements, scale = adaptive_placements(visible_sizes, font.line_spacing, span)
        bleed_gap = sizes[0] * font.line_spacing * scale
    else:
        placements, scale = fixed_placements(n_rows, span), 1.0
        bleed_gap = span.length / (n_rows - 1) if n_rows > 1 else 0.0

    rows: list[RowEntry] = []
    if spacing.bleed:
        bleed_at = span.start - bleed_gap
        if bleed_gap <= 0 or bleed_at <= 0:
            _LOGGER.debug("bleed row would sit at %.3f; planning without it", bleed_at)
            return plan_rows(
                n_rows,
                font,
                dataclasses.replace(spacing, bleed=False),
                span,
                field=field,
                noise=noise,
                offset=offset,
            )
        rows.append(RowEntry(index=0, font_size=sizes[0], placement=bleed_at, bleed=True))

    for i, (size, placement) in enumerate(zip(visible_sizes, placements)):
        rows.append(RowEntry(index=i + lead, font_size=size, placement=placement))

    return RowPlan(rows=tuple(rows), base_font_size=base, scale_factor=scale)
