from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

import yaml

from pathtype.model.settings import SketchSettings
from pathtype.util.validate import load_settings_dict

SETTINGS_ATTR = "data-sketch-settings"


def _is_yaml(p: Path) -> bool:
    return p.suffix.lower() in {".yaml", ".yml"}


def read_settings_data(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    raw = p.read_text(encoding="utf-8")
    if p.suffix.lower() == ".svg":
        return settings_data_from_svg(raw)
    data = yaml.safe_load(raw) if _is_yaml(p) else json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("settings must be a mapping at top-level")
    return data


def load_settings(path: str | Path) -> SketchSettings:
    """Load a JSON/YAML snapshot (or an exported SVG) as validated settings."""

    settings, _ = load_settings_dict(read_settings_data(path))
    return settings


def save_settings(settings: SketchSettings, path: str | Path) -> str:
    out_path = Path(path).expanduser()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    payload = settings.to_dict()
    if _is_yaml(out_path):
        text = yaml.safe_dump(payload, sort_keys=True)
    else:
        text = json.dumps(payload, indent=2, sort_keys=True) + "\n"
    out_path.write_text(text, encoding="utf-8")
    return str(out_path)


def settings_data_from_svg(svg_text: str) -> dict[str, Any]:
    """Pull the embedded snapshot out of an exported SVG.

    Accepts both the current ``{"settings": {...}, "seed": ...}`` payload and
    the browser export ``{"controlSettings": {...}, "seed": ...}``.
    """

    root = ET.fromstring(svg_text)
    raw = root.get(SETTINGS_ATTR)
    if not raw:
        raise ValueError(f"SVG has no {SETTINGS_ATTR} attribute")
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise ValueError(f"{SETTINGS_ATTR} must hold a JSON object")

    if isinstance(payload.get("settings"), dict):
        data = dict(payload["settings"])
        if payload.get("seed"):
            data["seed"] = payload["seed"]
        return data
    return payload
