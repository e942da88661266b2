from __future__ import annotations

import dataclasses
import logging
from typing import Any

from pathtype.errors import InsufficientSpace
from pathtype.layout.glyphs import GlyphConfig, generate_glyphs
from pathtype.layout.motion import font_size_offset, glyph_offset
from pathtype.layout.profiles import LayoutProfile, path_from_settings, require_profile
from pathtype.layout.rows import FontSizeConfig, Span, SpacingConfig, plan_rows
from pathtype.model.settings import SketchSettings
from pathtype.model.types import NoiseConfig, PathSpec, RenderOutput, RenderRow, RowPlan
from pathtype.util.noise import NoiseField
from pathtype.util.rng import Seed, SeededRandom, derive, init_seed, noise_seed_for
from pathtype.util.validate import validate_settings

_LOGGER = logging.getLogger("pathtype.engine")

PERFORMANCE_MAX_OCTAVES = 2


class LayoutEngine:
    """Seed + settings -> symbolic layout.

    Settings are an immutable snapshot. ``update`` swaps in a new validated
    snapshot between passes; ``render`` reads whatever snapshot is current when
    it starts and never mutates engine state.
    """

    def __init__(self, settings: SketchSettings | None = None, seed: Seed | str | None = None) -> None:
        settings, self.notes = validate_settings(settings or SketchSettings())
        if isinstance(seed, Seed):
            self.seed = seed
        else:
            self.seed = init_seed(seed or settings.seed)
        self.settings = dataclasses.replace(settings, seed=self.seed.token)
        self.field = NoiseField(noise_seed_for(self.seed))

    # -- controller side -------------------------------------------------

    def update(self, **changes: Any) -> SketchSettings:
        new, notes = validate_settings(dataclasses.replace(self.settings, **changes))
        if new.seed and new.seed != self.seed.token:
            self._reseed(init_seed(new.seed))
        self.settings = dataclasses.replace(new, seed=self.seed.token)
        self.notes = notes
        return self.settings

    def new_seed(self, token: str | None = None) -> Seed:
        self._reseed(init_seed(token))
        self.settings = dataclasses.replace(self.settings, seed=self.seed.token)
        return self.seed

    def _reseed(self, seed: Seed) -> None:
        self.seed = seed
        self.field = NoiseField(noise_seed_for(seed))
        _LOGGER.debug("seed %s (noise seed %d)", seed.token, self.field.seed)

    # -- pass side -------------------------------------------------------

    @property
    def profile(self) -> LayoutProfile:
        return require_profile(self.settings.layout)

    def path(self) -> PathSpec:
        return path_from_settings(self.settings, self.profile)

    def noise_config(self, settings: SketchSettings | None = None) -> NoiseConfig:
        s = settings or self.settings
        cfg = s.noise_config()
        if s.performance_mode:
            cfg = cfg.with_octave_cap(PERFORMANCE_MAX_OCTAVES)
        return cfg

    def plan(
        self,
        time: float | None = None,
        settings: SketchSettings | None = None,
        n_rows: int | None = None,
    ) -> RowPlan:
        s = settings or self.settings
        profile = require_profile(s.layout)
        path = path_from_settings(s, profile)
        return plan_rows(
            s.n_rows if n_rows is None else n_rows,
            FontSizeConfig(
                line_spacing=s.line_spacing,
                variation=s.font_size_variation,
                amount=s.font_size_variation_amount,
                noise_scale=s.font_size_noise_scale,
            ),
            SpacingConfig(
                adaptive=s.adaptive_spacing,
                bleed=profile.bleed_row if s.bleed_row is None else s.bleed_row,
            ),
            Span.of_path(path),
            field=self.field,
            noise=self.noise_config(s),
            offset=font_size_offset(time, s.performance_mode),
        )

    def _pass_rng(self) -> SeededRandom:
        rng = derive(self.seed)
        rng.next()  # the noise seed draw
        return rng

    def render(self, time: float | None = None) -> RenderOutput:
        """One full layout pass.

        Visible layers are laid out in order on the same path, each with its
        own row plan. Same settings, seed and time give the same output. A
        layer that hits InsufficientSpace is reported as a warning and skipped.
        """

        s = self.settings
        profile = require_profile(s.layout)
        out = RenderOutput(seed=self.seed.token, layout=s.layout, time=time)
        out.warnings.extend(str(n) for n in self.notes)

        path = path_from_settings(s, profile)
        noise = self.noise_config(s)
        cfg = GlyphConfig(
            positional=s.positional_noise,
            resolution=s.grid_resolution or profile.grid_resolution,
            y_scale=s.y_scale_factor,
            inverse=s.inverse_width_mapping,
            transparency=s.use_transparency,
            performance=s.performance_mode,
        )
        offset = glyph_offset(time, s.performance_mode)
        rng = self._pass_rng()

        for layer_index, layer in enumerate(s.layer_list()):
            if not layer.visible:
                continue
            try:
                plan = self.plan(time, s, n_rows=layer.n_rows)
            except InsufficientSpace as e:
                _LOGGER.warning("layer %d: %s", layer_index, e)
                out.warnings.append(str(e))
                continue

            if not out.rows:
                out.base_font_size = plan.base_font_size
                out.scale_factor = plan.scale_factor
            for entry in plan:
                glyphs = generate_glyphs(
                    path,
                    entry,
                    plan,
                    s.motif,
                    noise,
                    s.shift_mode,
                    field=self.field,
                    glyph_cfg=cfg,
                    profile=profile,
                    rng=rng,
                    offset=offset,
                )
                out.rows.append(
                    RenderRow(
                        index=entry.index,
                        bleed=entry.bleed,
                        font_size=entry.font_size,
                        placement=entry.placement,
                        path_d=path.row_path_d(entry.placement),
                        path_length=path.row_length(entry.placement),
                        layer=layer_index,
                        glyphs=glyphs,
                    )
                )

        _LOGGER.debug("rendered %d rows, %d glyphs", len(out.rows), out.glyph_count)
        return out
