from __future__ import annotations

import json
from pathlib import Path

import svgwrite

from pathtype.io.settings_json import SETTINGS_ATTR
from pathtype.layout.profiles import document_size_px, path_from_settings, require_profile
from pathtype.model.settings import SketchSettings
from pathtype.model.types import RenderOutput
from pathtype.util.geometry import fmt

WIDTH_FACES = {
    50: "Condensed",
    100: "Regular",
    150: "Extended",
    200: "Expanded",
}


def stylesheet(settings: SketchSettings, font_family: str = "LLALLogoLinear") -> str:
    profile = require_profile(settings.layout)
    lines = [f".st0 {{ font-family: '{font_family}', sans-serif; }}"]
    for i, layer in enumerate(settings.layer_list()):
        lines.append(f".layer-{i} {{ fill: {layer.foreground}; }}")
    for width, face in WIDTH_FACES.items():
        lines.append(f".width-{width} {{ font-family: '{font_family}-{face}'; }}")
    levels = sorted(set(profile.opacity_levels) | {100})
    for level in levels:
        lines.append(f".op-{level} {{ opacity: {fmt(level / 100)}; }}")
    return "\n".join(lines)


def build_drawing(
    output: RenderOutput,
    settings: SketchSettings,
    *,
    filename: str = "noname.svg",
    font_family: str = "LLALLogoLinear",
    guides: bool = False,
) -> svgwrite.Drawing:
    """Symbolic textPath document for one render pass.

    Each row is a guide path in <defs> with one <text>/<textPath> coloured by
    its layer class, and each glyph is a <tspan> carrying its width and
    opacity classes. The settings snapshot is embedded on the root element.
    """

    profile = require_profile(settings.layout)
    w, h = document_size_px(settings, profile)

    dwg = svgwrite.Drawing(filename, size=(fmt(w), fmt(h)), profile="full", debug=False)
    dwg.viewbox(0, 0, w, h)
    dwg.attribs[SETTINGS_ATTR] = json.dumps(
        {"settings": settings.to_dict(), "seed": output.seed}, sort_keys=True
    )

    dwg.defs.add(dwg.style(stylesheet(settings, font_family)))
    dwg.add(dwg.rect(insert=(0, 0), size=(fmt(w), fmt(h)), fill=settings.background, id="background-rect"))

    if guides:
        path = path_from_settings(settings, profile)
        g = dwg.g(id="guides", fill="none", stroke=settings.foreground, stroke_width=0.5, opacity=0.25)
        for r in (path.inner_boundary, path.outer_boundary):
            g.add(dwg.path(d=path.row_path_d(r)))
        dwg.add(g)

    layer = dwg.g(id="rows")
    for row in output.rows:
        pid = f"row-path-layer{row.layer}-{row.index}"
        dwg.defs.add(dwg.path(d=row.path_d, id=pid, fill="none"))

        text = dwg.text("", class_=f"st0 layer-{row.layer}", style=f"font-size:{fmt(row.font_size)}px")
        if settings.center_text:
            text["text-anchor"] = "middle"
            tp = dwg.textPath(f"#{pid}", "", startOffset="50%")
        else:
            tp = dwg.textPath(f"#{pid}", "")
        for glyph in row.glyphs:
            cls = f"st0 width-{glyph.width_class} op-{glyph.opacity_class}"
            tp.add(dwg.tspan(glyph.character, class_=cls))
        text.add(tp)
        layer.add(text)
    dwg.add(layer)
    return dwg


def export_svg(
    output: RenderOutput,
    settings: SketchSettings,
    path: str | Path,
    *,
    font_family: str = "LLALLogoLinear",
    guides: bool = False,
) -> str:
    out_path = Path(path).expanduser()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    dwg = build_drawing(output, settings, filename=str(out_path), font_family=font_family, guides=guides)
    dwg.save()
    return str(out_path)
