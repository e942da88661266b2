from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path

from pathtype.io.render_json import dump_render
from pathtype.io.settings_json import SETTINGS_ATTR, load_settings, settings_data_from_svg
from pathtype.io.svg import export_svg, stylesheet
from pathtype.layout.engine import LayoutEngine
from pathtype.model.settings import Layer, SketchSettings

NS = "{http://www.w3.org/2000/svg}"


def _render(**extra):
    engine = LayoutEngine(SketchSettings(layout="circle", seed="abc123", n_rows=5, **extra))
    return engine, engine.render()


def test_svg_has_one_tspan_per_glyph(tmp_path: Path) -> None:
    engine, out = _render()
    path = export_svg(out, engine.settings, tmp_path / "out.svg")

    root = ET.parse(path).getroot()
    tspans = list(root.iter(f"{NS}tspan"))
    assert len(tspans) == out.glyph_count
    assert len(list(root.iter(f"{NS}textPath"))) == len(out.rows)

    first = out.rows[0].glyphs[0]
    assert tspans[0].text == first.character
    assert tspans[0].get("class") == f"st0 width-{first.width_class} op-{first.opacity_class}"


def test_svg_embeds_settings_snapshot(tmp_path: Path) -> None:
    engine, out = _render(background="#101010")
    path = export_svg(out, engine.settings, tmp_path / "out.svg")

    raw = ET.parse(path).getroot().get(SETTINGS_ATTR)
    payload = json.loads(raw)
    assert payload["seed"] == "abc123"

    assert load_settings(path) == engine.settings


def test_center_text_sets_anchor(tmp_path: Path) -> None:
    engine, out = _render(center_text=True)
    root = ET.parse(export_svg(out, engine.settings, tmp_path / "c.svg")).getroot()
    tp = next(root.iter(f"{NS}textPath"))
    assert tp.get("startOffset") == "50%"
    assert next(root.iter(f"{NS}text")).get("text-anchor") == "middle"


def test_browser_svg_settings_are_readable() -> None:
    payload = {"controlSettings": {"nRows": {"value": 33}}, "seed": "abc123"}
    svg = f"<svg xmlns='http://www.w3.org/2000/svg' {SETTINGS_ATTR}='{json.dumps(payload)}'/>"
    data = settings_data_from_svg(svg)
    assert data["controlSettings"]["nRows"]["value"] == 33


def test_stylesheet_lists_width_faces_and_levels() -> None:
    css = stylesheet(SketchSettings(layout="arc"), "Face")
    assert ".width-150 { font-family: 'Face-Extended'; }" in css
    assert ".op-0 { opacity: 0; }" in css
    assert ".op-55 { opacity: 0.55; }" in css


def test_render_dump(tmp_path: Path) -> None:
    _, out = _render()
    payload = json.loads(Path(dump_render(out, tmp_path / "r.json")).read_text(encoding="utf-8"))
    assert payload["seed"] == "abc123"
    assert payload["visible_row_count"] == 5
    assert len(payload["rows"]) == 5
    assert payload["glyph_count"] == out.glyph_count


def test_layers_get_their_own_paths_and_fill(tmp_path: Path) -> None:
    engine, out = _render(layers=(Layer(n_rows=2, foreground="#ff5909"), Layer(n_rows=3, foreground="#381c4a")))
    root = ET.parse(export_svg(out, engine.settings, tmp_path / "l.svg")).getroot()

    ids = [p.get("id") for p in root.iter(f"{NS}path") if p.get("id")]
    assert ids == [
        "row-path-layer0-0",
        "row-path-layer0-1",
        "row-path-layer1-0",
        "row-path-layer1-1",
        "row-path-layer1-2",
    ]
    assert [t.get("class") for t in root.iter(f"{NS}text")] == ["st0 layer-0"] * 2 + ["st0 layer-1"] * 3

    css = stylesheet(engine.settings)
    assert ".layer-0 { fill: #ff5909; }" in css
    assert ".layer-1 { fill: #381c4a; }" in css


def test_single_layer_fill_uses_foreground() -> None:
    assert ".layer-0 { fill: #222222; }" in stylesheet(SketchSettings(foreground="#222222"))
