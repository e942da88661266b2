from __future__ import annotations

import logging
from typing import Callable

from pathtype.layout.engine import LayoutEngine
from pathtype.model.types import RenderOutput

_LOGGER = logging.getLogger("pathtype.animation")

PERFORMANCE_FPS = 15


class AnimationScheduler:
    """Throttled per-frame recompute driven by explicit ticks.

    The host calls ``tick(delta_ms)`` from its own loop; there are no timers
    here. Frames arriving before the frame interval has elapsed are dropped.
    """

    def __init__(self, engine: LayoutEngine, *, sink: Callable[[RenderOutput], None] | None = None) -> None:
        self.engine = engine
        self.sink = sink
        self.running = False
        self.elapsed_ms = 0.0
        self.since_frame_ms = 0.0
        self.frame_count = 0
        self.frames_rendered = 0
        self._in_flight = False

    @property
    def target_fps(self) -> int:
        s = self.engine.settings
        return PERFORMANCE_FPS if s.performance_mode else int(s.target_fps)

    @property
    def frame_interval_ms(self) -> float:
        return 1000.0 / self.target_fps

    @property
    def animation_time(self) -> float:
        return self.elapsed_ms * 0.001 * self.engine.settings.animation_speed

    def start(self) -> None:
        if not self.engine.settings.animation_enabled:
            _LOGGER.debug("animation disabled in settings, not starting")
            return
        self.running = True
        self.elapsed_ms = 0.0
        self.since_frame_ms = 0.0
        self.frame_count = 0
        _LOGGER.debug("animation started at %d fps", self.target_fps)

    def stop(self) -> None:
        self.running = False

    def tick(self, delta_ms: float) -> RenderOutput | None:
        if not self.running or self._in_flight:
            return None

        self.elapsed_ms += float(delta_ms)
        self.since_frame_ms += float(delta_ms)
        if self.since_frame_ms < self.frame_interval_ms:
            return None
        self.since_frame_ms = 0.0
        self.frame_count += 1

        # performance mode recomputes on even frames only
        if self.engine.settings.performance_mode and self.frame_count % 2:
            return None

        self._in_flight = True
        try:
            out = self.engine.render(time=self.animation_time)
            self.frames_rendered += 1
            if self.sink is not None and self.running:
                self.sink(out)
        finally:
            self._in_flight = False
        return out
