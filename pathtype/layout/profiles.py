from __future__ import annotations

"""Per-family layout constants and document geometry.

Each guide-path family has a frozen profile: how much motif text a row gets,
how opacity falls off across rows, whether a bleed row is added, and the
default document it is drawn on.
"""

from dataclasses import dataclass
from typing import Dict, List

from pathtype.model.settings import SketchSettings
from pathtype.model.types import ArcPath, CirclePath, LinePath, PathSpec
from pathtype.util.geometry import mm_to_px

_LEVELS_FROM_0 = tuple(range(0, 101, 5))
_LEVELS_FROM_5 = tuple(range(5, 101, 5))


@dataclass(frozen=True)
class LayoutProfile:
    name: str

    # motif repetitions per row: max(ceil(ceil(L / motif_w) * safety), min), capped
    safety_factor: float
    min_repetitions: int
    max_repetitions: int | None
    perf_safety_factor: float
    perf_min_repetitions: int

    opacity_exponent: float
    opacity_levels: tuple[int, ...]

    bleed_row: bool
    grid_resolution: float

    doc_width_mm: float
    doc_height_mm: float
    outer_diameter_mm: float = 0.0
    inner_diameter_mm: float = 0.0
    left_angle: float = 0.0
    right_angle: float = 0.0
    horizontal_bleed: float = 0.0
    margin_mm: float = 0.0


_PROFILES: Dict[str, LayoutProfile] = {}


def _register(p: LayoutProfile) -> None:
    _PROFILES[p.name] = p


def _init_registry() -> None:
    if _PROFILES:
        return
    _register(
        LayoutProfile(
            name="arc",
            safety_factor=2.0,
            min_repetitions=16,
            max_repetitions=None,
            perf_safety_factor=1.3,
            perf_min_repetitions=8,
            opacity_exponent=2.0,
            opacity_levels=_LEVELS_FROM_0,
            bleed_row=True,
            grid_resolution=0.15,
            doc_width_mm=305.988,
            doc_height_mm=284.889,
            outer_diameter_mm=750.0,
            inner_diameter_mm=199.12,
            left_angle=23.96,
            right_angle=23.99,
            horizontal_bleed=1.5,
        )
    )
    _register(
        LayoutProfile(
            name="circle",
            safety_factor=1.5,
            min_repetitions=12,
            max_repetitions=50,
            perf_safety_factor=1.3,
            perf_min_repetitions=8,
            opacity_exponent=0.6,
            opacity_levels=_LEVELS_FROM_5,
            bleed_row=False,
            grid_resolution=1.5,
            doc_width_mm=100.0,
            doc_height_mm=100.0,
            outer_diameter_mm=95.0,
            inner_diameter_mm=15.0,
        )
    )
    _register(
        LayoutProfile(
            name="line",
            safety_factor=2.0,
            min_repetitions=12,
            max_repetitions=None,
            perf_safety_factor=1.3,
            perf_min_repetitions=8,
            opacity_exponent=2.0,
            opacity_levels=_LEVELS_FROM_0,
            bleed_row=False,
            grid_resolution=0.01,
            doc_width_mm=216.0,
            doc_height_mm=303.0,
            margin_mm=3.0,
        )
    )


def list_profiles() -> List[LayoutProfile]:
    _init_registry()
    return list(_PROFILES.values())


def get_profile(name: str) -> LayoutProfile | None:
    _init_registry()
    return _PROFILES.get(str(name).strip().lower())


def require_profile(name: str) -> LayoutProfile:
    p = get_profile(name)
    if p is None:
        raise ValueError(f"unknown layout: {name!r} (expected one of {', '.join(sorted(_PROFILES))})")
    return p


def _pick(value: float | None, default: float) -> float:
    return default if value is None else float(value)


def document_size_px(settings: SketchSettings, profile: LayoutProfile) -> tuple[float, float]:
    w = mm_to_px(_pick(settings.doc_width_mm, profile.doc_width_mm), settings.dpi)
    h = mm_to_px(_pick(settings.doc_height_mm, profile.doc_height_mm), settings.dpi)
    return w, h


def path_from_settings(settings: SketchSettings, profile: LayoutProfile | None = None) -> PathSpec:
    """Build the guide-path region for the settings' layout family."""

    profile = profile or require_profile(settings.layout)
    w, h = document_size_px(settings, profile)
    dpi = settings.dpi

    if profile.name == "line":
        m = mm_to_px(_pick(settings.margin_mm, profile.margin_mm), dpi)
        return LinePath(y=m, x_start=0.0, x_end=w, height=max(0.0, h - 2 * m))

    r_out = mm_to_px(_pick(settings.outer_diameter_mm, profile.outer_diameter_mm), dpi) / 2
    r_in = mm_to_px(_pick(settings.inner_diameter_mm, profile.inner_diameter_mm), dpi) / 2

    if profile.name == "circle":
        return CirclePath(center=(w / 2, h / 2), radius=r_out, inner_radius=r_in, direction=settings.text_direction)

    bleed = _pick(settings.horizontal_bleed, profile.horizontal_bleed)
    start = 90 + _pick(settings.left_angle, profile.left_angle) + bleed
    end = 90 - _pick(settings.right_angle, profile.right_angle) - bleed
    return ArcPath(
        center=(w / 2, h - r_out),
        outer_radius=r_out,
        inner_radius=r_in,
        start_angle=start,
        end_angle=end,
        sweep_flag=0,
    )
