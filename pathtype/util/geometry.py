from __future__ import annotations

"""Guide-path math.

Angles are in degrees with 0 pointing right and 90 pointing down (SVG y-down).
All coordinates are pixels.
"""

import math


def mm_to_px(mm: float, dpi: float = 72) -> float:
    return float(mm) * float(dpi) / 25.4


def fmt(x: float) -> str:
    s = f"{x:.4f}".rstrip("0").rstrip(".")
    if s in {"", "-0"}:
        return "0"
    return s


def point_on_circle(center: tuple[float, float], r: float, angle_deg: float) -> tuple[float, float]:
    a = math.radians(angle_deg)
    return center[0] + r * math.cos(a), center[1] + r * math.sin(a)


def arc_endpoints(
    center: tuple[float, float], r: float, start_angle: float, end_angle: float
) -> tuple[tuple[float, float], tuple[float, float]]:
    return point_on_circle(center, r, start_angle), point_on_circle(center, r, end_angle)


def large_arc_flag(start_angle: float, end_angle: float) -> int:
    return 1 if abs(end_angle - start_angle) > 180 else 0


def arc_length(r: float, start_angle: float, end_angle: float) -> float:
    return float(r) * math.radians(abs(end_angle - start_angle))


def arc_path_d(
    center: tuple[float, float], r: float, start_angle: float, end_angle: float, sweep_flag: int = 0
) -> str:
    (sx, sy), (ex, ey) = arc_endpoints(center, r, start_angle, end_angle)
    large = large_arc_flag(start_angle, end_angle)
    return f"M {fmt(sx)} {fmt(sy)} A {fmt(r)} {fmt(r)} 0 {large} {int(sweep_flag)} {fmt(ex)} {fmt(ey)}"


def circle_path_d(center: tuple[float, float], r: float, direction: str = "counter-clockwise") -> str:
    """Full circle as two half arcs (a single arc cannot close on itself)."""

    cx, cy = center
    if direction == "clockwise":
        x0, x1, sweep = cx - r, cx + r, 1
    else:
        x0, x1, sweep = cx + r, cx - r, 0
    rr = fmt(r)
    return (
        f"M {fmt(x0)} {fmt(cy)} "
        f"A {rr} {rr} 0 0 {sweep} {fmt(x1)} {fmt(cy)} "
        f"A {rr} {rr} 0 0 {sweep} {fmt(x0)} {fmt(cy)}"
    )


def circle_length(r: float) -> float:
    return 2.0 * math.pi * float(r)


def line_path_d(x_start: float, x_end: float, y: float) -> str:
    return f"M {fmt(x_start)} {fmt(y)} L {fmt(x_end)} {fmt(y)}"
