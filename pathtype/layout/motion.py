from __future__ import annotations

"""Time-driven drift through noise space.

Offsets are added to noise coordinates before the per-octave frequency
multiply. A static render uses no offset at all.
"""

import math


def glyph_offset(time: float | None, performance: bool = False) -> tuple[float, float]:
    if time is None:
        return 0.0, 0.0
    if performance:
        t = time * 0.2
        return math.sin(t) * 0.5, math.cos(t * 0.8) * 0.2
    t = time * 0.3
    return (
        math.cos(t * 0.7) * 0.8 + math.sin(t * 1.3) * 0.4,
        math.sin(t * 0.5) * 0.3 + math.cos(t * 0.9) * 0.2,
    )


def font_size_offset(time: float | None, performance: bool = False) -> tuple[float, float]:
    if time is None:
        return 0.0, 0.0
    if performance:
        t = time * 0.1
        return math.sin(t) * 0.3, math.cos(t * 0.7) * 0.1
    t = time * 0.15
    return (
        math.cos(t * 0.4) * 0.5 + math.sin(t * 0.8) * 0.3,
        math.sin(t * 0.3) * 0.2 + math.cos(t * 0.6) * 0.1,
    )
