from __future__ import annotations

import pytest

from pathtype.errors import InsufficientSpace
from pathtype.layout.rows import (
    FontSizeConfig,
    Span,
    SpacingConfig,
    base_font_size,
    plan_rows,
)
from pathtype.model.types import NoiseConfig
from pathtype.util.limits import MAX_ROWS
from pathtype.util.noise import NoiseField


def _placements(plan) -> list[float]:
    return [r.placement for r in plan.rows]


def test_fixed_spacing_is_even() -> None:
    plan = plan_rows(5, FontSizeConfig(), SpacingConfig(adaptive=False), Span(10, 50))
    assert _placements(plan) == pytest.approx([10, 20, 30, 40, 50])
    assert plan.base_font_size == pytest.approx(40 / 5 * 1.5)


def test_single_row_sits_at_start() -> None:
    for adaptive in (False, True):
        plan = plan_rows(1, FontSizeConfig(), SpacingConfig(adaptive=adaptive), Span(10, 50))
        assert len(plan) == 1
        assert plan.rows[0].placement == 10
        assert plan.rows[0].font_size == pytest.approx(40 * 1.5)


def test_adaptive_scales_down_to_fit() -> None:
    span = Span(10, 50)
    plan = plan_rows(5, FontSizeConfig(line_spacing=1.5), SpacingConfig(adaptive=True), span)
    p = _placements(plan)
    assert plan.scale_factor == pytest.approx(40 / 90)
    assert all(b > a for a, b in zip(p, p[1:]))
    assert p[0] == span.start
    assert p[-1] <= span.end


def test_adaptive_never_expands() -> None:
    plan = plan_rows(5, FontSizeConfig(line_spacing=0.5), SpacingConfig(adaptive=True), Span(10, 50))
    assert plan.scale_factor == 1.0
    assert _placements(plan) == pytest.approx([10, 12, 14, 16, 18])


def test_adaptive_with_font_variation_stays_monotonic() -> None:
    span = Span(100, 400)
    font = FontSizeConfig(line_spacing=1.5, variation=True, amount=1.5, noise_scale=0.3)
    plan = plan_rows(
        40,
        font,
        SpacingConfig(adaptive=True),
        span,
        field=NoiseField(77),
        noise=NoiseConfig(octaves=3),
    )
    p = _placements(plan)
    assert len(plan) == 40
    assert all(b > a for a, b in zip(p, p[1:]))
    assert all(span.start <= x <= span.end for x in p)

    base = base_font_size(40, span.length, 1.5)
    sizes = [r.font_size for r in plan.rows]
    assert all(0.3 * base - 1e-9 <= s <= 2.0 * base + 1e-9 for s in sizes)
    assert len(set(sizes)) > 1


def test_bleed_row_takes_slot_zero() -> None:
    plan = plan_rows(5, FontSizeConfig(), SpacingConfig(adaptive=False, bleed=True), Span(100, 200))
    assert len(plan) == 6
    assert plan.visible_count == 5
    assert plan.rows[0].bleed
    assert plan.rows[0].placement == pytest.approx(75)
    assert [r.index for r in plan.rows] == [0, 1, 2, 3, 4, 5]


def test_bleed_row_dropped_when_it_would_cross_zero() -> None:
    plan = plan_rows(3, FontSizeConfig(), SpacingConfig(adaptive=False, bleed=True), Span(5, 100))
    assert len(plan) == 3
    assert not plan.has_bleed
    assert [r.index for r in plan.rows] == [0, 1, 2]


def test_too_small_span_raises() -> None:
    with pytest.raises(InsufficientSpace):
        plan_rows(3, FontSizeConfig(), SpacingConfig(), Span(0, 3))


def test_too_many_rows_raises() -> None:
    with pytest.raises(InsufficientSpace):
        plan_rows(MAX_ROWS + 1, FontSizeConfig(), SpacingConfig(), Span(0, 10_000))
