from __future__ import annotations

import pytest

from pathtype.layout.animation import AnimationScheduler
from pathtype.layout.engine import LayoutEngine
from pathtype.model.settings import SketchSettings


def _engine(**extra) -> LayoutEngine:
    return LayoutEngine(SketchSettings(layout="circle", seed="abc123", n_rows=4, animation_enabled=True, **extra))


def test_ticks_before_start_do_nothing() -> None:
    sched = AnimationScheduler(_engine())
    assert sched.tick(1000) is None


def test_throttles_to_target_fps() -> None:
    sched = AnimationScheduler(_engine(target_fps=25))
    sched.start()
    assert sched.frame_interval_ms == pytest.approx(40.0)
    assert sched.tick(10) is None
    assert sched.tick(10) is None
    assert sched.tick(10) is None
    out = sched.tick(10)
    assert out is not None
    assert out.time == pytest.approx(0.040 * 0.5)
    assert sched.tick(39) is None
    assert sched.tick(1) is not None
    assert sched.frames_rendered == 2


def test_stop_cancels() -> None:
    sched = AnimationScheduler(_engine())
    sched.start()
    assert sched.tick(50) is not None
    sched.stop()
    assert sched.tick(50) is None


def test_performance_mode_recomputes_on_even_frames() -> None:
    sched = AnimationScheduler(_engine(performance_mode=True))
    sched.start()
    assert sched.target_fps == 15
    assert sched.tick(70) is None  # frame 1
    assert sched.tick(70) is not None  # frame 2
    assert sched.tick(70) is None
    assert sched.frame_count == 3


def test_no_reentrant_passes() -> None:
    inner: list[object] = []
    sched: AnimationScheduler

    def sink(out) -> None:
        inner.append(sched.tick(1000))

    sched = AnimationScheduler(_engine(), sink=sink)
    sched.start()
    assert sched.tick(100) is not None
    assert inner == [None]


def test_frames_follow_settings_swaps() -> None:
    engine = _engine()
    sched = AnimationScheduler(engine)
    sched.start()
    assert len(sched.tick(100).rows) == 4
    engine.update(n_rows=6)
    assert len(sched.tick(100).rows) == 6


def test_start_does_nothing_when_animation_is_disabled() -> None:
    sched = AnimationScheduler(LayoutEngine(SketchSettings(layout="circle", seed="abc123", n_rows=4)))
    sched.start()
    assert not sched.running
    assert sched.tick(1000) is None
    assert sched.frames_rendered == 0
