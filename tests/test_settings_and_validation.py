from __future__ import annotations

import json
from pathlib import Path

import yaml

from pathtype.io.settings_json import load_settings, save_settings
from pathtype.model.settings import Layer, SketchSettings
from pathtype.util.config import AppConfig, load_config, save_config
from pathtype.util.limits import MAX_LAYERS, MAX_MOTIF_LEN, MAX_OCTAVES
from pathtype.util.validate import (
    CURRENT_SCHEMA_VERSION,
    load_settings_dict,
    migrate_settings_dict,
    validate_settings,
)


def test_settings_dict_roundtrip() -> None:
    s = SketchSettings(layout="line", seed="abc123", n_rows=40, grid_resolution=0.02, bleed_row=True)
    assert SketchSettings.from_dict(s.to_dict()) == s


def test_save_and_load_json_and_yaml(tmp_path: Path) -> None:
    s = SketchSettings(layout="circle", seed="abc123", n_rows=24, text_direction="clockwise")
    for name in ("s.json", "s.yaml"):
        out = save_settings(s, tmp_path / name)
        assert load_settings(out) == s

    data = yaml.safe_load((tmp_path / "s.yaml").read_text(encoding="utf-8"))
    assert data["schema_version"] == CURRENT_SCHEMA_VERSION


def test_browser_export_is_migrated(tmp_path: Path) -> None:
    payload = {
        "controlSettings": {
            "outerDiameter": {"value": 90, "locked": True},
            "nRows": {"value": 24, "locked": False, "hidden": False},
            "noiseOctaves": {"value": 9},
            "angularResolution": {"value": 1.5},
            "colBG": {"value": "#000000"},
            "showAdvancedControls": {"value": True},
        },
        "staticSettings": {"opacityLevels": [5, 10]},
        "seed": "abc123",
    }
    pth = tmp_path / "old.json"
    pth.write_text(json.dumps(payload), encoding="utf-8")

    s = load_settings(pth)
    assert s.layout == "circle"
    assert s.n_rows == 24
    assert s.outer_diameter_mm == 90
    assert s.noise_octaves == MAX_OCTAVES
    assert s.grid_resolution == 1.5
    assert s.background == "#000000"
    assert s.seed == "abc123"


def test_flat_camel_case_keys_are_renamed() -> None:
    d = migrate_settings_dict({"nRows": 30, "lineSpacing": 2.0, "layout": "line"})
    assert d["n_rows"] == 30
    assert d["line_spacing"] == 2.0
    assert d["schema_version"] == CURRENT_SCHEMA_VERSION


def test_validate_clamps_and_reports() -> None:
    s, notes = validate_settings(
        SketchSettings(
            layout="spiral",
            shift_mode="sideways",
            noise_octaves=0,
            noise_persistence=3.0,
            motif="",
        )
    )
    assert s.layout == "arc"
    assert s.shift_mode == "forward"
    assert s.noise_octaves == 1
    assert s.noise_persistence == 1.0
    assert s.motif == "LLAL"
    assert {n.field for n in notes} == {"layout", "shift_mode", "noise_octaves", "noise_persistence", "motif"}


def test_long_motif_is_truncated() -> None:
    s, _ = load_settings_dict({"motif": "X" * (MAX_MOTIF_LEN + 10)})
    assert len(s.motif) == MAX_MOTIF_LEN


def test_valid_settings_pass_untouched() -> None:
    s = SketchSettings()
    out, notes = validate_settings(s)
    assert out is s
    assert notes == []


def test_app_config_roundtrip(tmp_path: Path) -> None:
    p = tmp_path / "config.json"
    assert load_config(p) == AppConfig()
    save_config(AppConfig(out_dir="renders", font_family="Mono"), p)
    assert load_config(p) == AppConfig(out_dir="renders", font_family="Mono")


def test_render_path_uses_out_dir() -> None:
    assert AppConfig(out_dir="renders").render_path("arc", "abc123") == Path("renders") / "arc_abc123.svg"


def test_layers_roundtrip(tmp_path: Path) -> None:
    s = SketchSettings(seed="abc123", layers=(Layer(144, "#FF5909"), Layer(36, "#381C4A", visible=False)))
    assert SketchSettings.from_dict(s.to_dict()) == s
    assert load_settings(save_settings(s, tmp_path / "layers.yaml")) == s


def test_multi_layer_export_is_migrated() -> None:
    payload = {
        "sharedSettings": {
            "lineSpacing": {"value": 1.2, "locked": False, "hidden": False},
            "angularNoise": {"value": True},
        },
        "layers": [
            {"id": "layer-1", "name": "Layer 1", "visible": True, "nRows": 144, "colFG": "#FF5909"},
            {"id": "layer-2", "name": "Layer 2", "visible": False, "nRows": 72, "colFG": "#381C4A"},
        ],
        "backgroundColor": "#fafafa",
    }
    s, notes = load_settings_dict(payload)
    assert notes == []
    assert s.layout == "arc"
    assert s.line_spacing == 1.2
    assert s.background == "#fafafa"
    assert s.layers == (Layer(144, "#FF5909", True), Layer(72, "#381C4A", False))


def test_layer_rows_and_count_are_clamped() -> None:
    s, notes = validate_settings(SketchSettings(layers=tuple(Layer(n_rows=0) for _ in range(MAX_LAYERS + 2))))
    assert len(s.layers) == MAX_LAYERS
    assert all(layer.n_rows == 1 for layer in s.layers)
    assert [n.field for n in notes] == ["layers"]


def test_no_layers_means_one_implicit_layer() -> None:
    s = SketchSettings(n_rows=12, foreground="#123456")
    assert s.layer_list() == (Layer(12, "#123456", True),)
