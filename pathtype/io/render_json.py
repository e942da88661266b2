from __future__ import annotations

import json
from pathlib import Path

from pathtype.model.types import RenderOutput


def dump_render(output: RenderOutput, path: str | Path) -> str:
    out_path = Path(path).expanduser()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(output.to_dict(), indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return str(out_path)


def render_summary(output: RenderOutput) -> list[str]:
    """One line per row: layer/slot, placement, font size, glyph count, text head."""

    lines = []
    for r in output.rows:
        tag = " bleed" if r.bleed else ""
        lines.append(
            f"L{r.layer} {r.index:>3}{tag:<6} at={r.placement:9.3f} size={r.font_size:7.3f} "
            f"glyphs={len(r.glyphs):5d} {r.text[:24]}"
        )
    return lines
