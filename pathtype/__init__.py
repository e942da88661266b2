"""Seeded, noise-driven glyph layouts along guide paths.

Pipeline:
- init_seed(token) -> Seed, derive(seed) -> SeededRandom
- NoiseField(noise_seed) -> fractal noise in [-1, 1]
- plan_rows(...) -> RowPlan (font size + placement per row)
- generate_glyphs(...) -> GlyphRecord per character (width + opacity class)
- LayoutEngine(settings).render(time) runs the whole pass
"""

from .layout.engine import LayoutEngine
from .layout.animation import AnimationScheduler
from .model.settings import Layer, SketchSettings
from .model.types import GlyphRecord, NoiseConfig, RenderOutput, RowPlan
from .util.rng import Seed, derive, init_seed

__all__ = [
    "LayoutEngine",
    "AnimationScheduler",
    "SketchSettings",
    "Layer",
    "GlyphRecord",
    "NoiseConfig",
    "RenderOutput",
    "RowPlan",
    "Seed",
    "derive",
    "init_seed",
]
