from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any


def default_config_dir() -> Path:
    return Path.home() / ".config" / "pathtype"


def default_config_path() -> Path:
    return default_config_dir() / "config.json"


@dataclass
class AppConfig:
    out_dir: str = "out"
    font_family: str = "LLALLogoLinear"  # base name; width faces append -Condensed etc.

    def to_dict(self) -> dict[str, Any]:
        return {
            "out_dir": self.out_dir,
            "font_family": self.font_family,
        }

    def render_path(self, layout: str, seed: str, suffix: str = ".svg") -> Path:
        return Path(self.out_dir).expanduser() / f"{layout}_{seed}{suffix}"

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "AppConfig":
        return AppConfig(
            out_dir=str(d.get("out_dir") or "out"),
            font_family=str(d.get("font_family") or "LLALLogoLinear"),
        )


def load_config(path: Path | None = None) -> AppConfig:
    p = path or default_config_path()
    if not p.exists():
        return AppConfig()
    data = json.loads(p.read_text(encoding="utf-8"))
    return AppConfig.from_dict(data)


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    p = path or default_config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(cfg.to_dict(), indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return p
