from __future__ import annotations

import dataclasses
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pathtype.io.render_json import dump_render
from pathtype.io.settings_json import load_settings, save_settings
from pathtype.io.svg import export_svg
from pathtype.layout.animation import AnimationScheduler
from pathtype.layout.engine import LayoutEngine
from pathtype.model.settings import Layer, SketchSettings
from pathtype.model.types import RenderOutput
from pathtype.util.config import AppConfig
from pathtype.util.validate import LEGACY_KEYS

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class HeadlessContext:
    engine: LayoutEngine | None = None
    config: AppConfig = field(default_factory=AppConfig)
    last_output: RenderOutput | None = None


def coerce_setting(name: str, raw: str) -> tuple[str, Any]:
    """Turn a script token into a typed SketchSettings field value."""

    name = LEGACY_KEYS.get(name, name)
    if name == "layers":
        raise ValueError("layers are set one at a time: layer <index> n_rows=.. foreground=.. visible=..")
    types = {f.name: str(f.type) for f in dataclasses.fields(SketchSettings)}
    if name not in types:
        raise ValueError(f"unknown setting: {name}")

    t = types[name]
    low = raw.strip().lower()
    if "None" in t and low in {"none", "null", "default"}:
        return name, None
    if t.startswith("bool"):
        if low in _TRUE:
            return name, True
        if low in _FALSE:
            return name, False
        raise ValueError(f"{name} expects a boolean, got {raw!r}")
    if t.startswith("int"):
        return name, int(raw)
    if t.startswith("float"):
        return name, float(raw)
    return name, raw


def _opts(args: list[str]) -> dict[str, str]:
    return {a.split("=", 1)[0]: a.split("=", 1)[1] for a in args if "=" in a}


def _time(opts: dict[str, str]) -> float | None:
    return float(opts["time"]) if "time" in opts else None


class HeadlessRunner:
    def __init__(self, *, config: AppConfig | None = None, strict: bool = False, dry_run: bool = False) -> None:
        self.ctx = HeadlessContext(config=config or AppConfig())
        self.strict = strict
        self.dry_run = dry_run
        self.commands_executed = 0
        self.warnings: list[str] = []
        self.written: list[str] = []

    def run_lines(self, lines: list[str], *, base_dir: Path | None = None) -> None:
        base = base_dir
        for lineno, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            if line.startswith("include "):
                inc = line.split(" ", 1)[1].strip().strip('"')
                inc_path = Path(inc)
                if base is not None and not inc_path.is_absolute():
                    inc_path = base / inc_path
                if not inc_path.exists():
                    msg = f"include not found: {inc_path}"
                    if self.strict:
                        raise FileNotFoundError(msg)
                    self.warnings.append(msg)
                    continue
                self.run_lines(inc_path.read_text(encoding="utf-8").splitlines(), base_dir=inc_path.parent)
                continue

            try:
                self.run_command(line)
                self.commands_executed += 1
            except Exception as e:
                msg = f"Headless error line {lineno}: {line} ({e})"
                if self.strict:
                    raise RuntimeError(msg) from e
                self.warnings.append(msg)
                continue

    def run_command(self, line: str) -> None:
        cmd, *args = line.split()

        if cmd == "layout":
            # layout <arc|circle|line> [seed]
            settings = SketchSettings(layout=args[0], seed=args[1] if len(args) > 1 else None)
            self.ctx.engine = LayoutEngine(settings)
            return

        if cmd == "load_settings":
            self.ctx.engine = LayoutEngine(load_settings(args[0]))
            return

        if cmd == "save_settings":
            engine = self.require_engine()
            if not self.dry_run:
                self.written.append(save_settings(engine.settings, args[0]))
            return

        if cmd == "set":
            # set <key> <value...>
            if len(args) < 2:
                raise ValueError("usage: set <key> <value>")
            name, value = coerce_setting(args[0], " ".join(args[1:]))
            self.require_engine().update(**{name: value})
            return

        if cmd == "layer":
            # layer <index> [n_rows=<n>] [foreground=<colour>] [visible=0|1]
            engine = self.require_engine()
            layers = list(engine.settings.layer_list())
            idx = int(args[0])
            if not 0 <= idx <= len(layers):
                raise ValueError(f"layer index out of range: {idx} (have {len(layers)})")
            opts = _opts(args[1:])
            base = layers[idx] if idx < len(layers) else Layer(n_rows=engine.settings.n_rows)
            new = Layer(
                n_rows=int(opts.get("n_rows", base.n_rows)),
                foreground=opts.get("foreground", base.foreground),
                visible=opts["visible"].lower() in _TRUE if "visible" in opts else base.visible,
            )
            if idx < len(layers):
                layers[idx] = new
            else:
                layers.append(new)
            engine.update(layers=tuple(layers))
            return

        if cmd == "seed":
            self.require_engine().update(seed=args[0])
            return

        if cmd == "new_seed":
            self.require_engine().new_seed()
            return

        if cmd == "render_svg":
            # render_svg <out.svg> [time=<t>] [guides=1]
            engine = self.require_engine()
            opts = _opts(args[1:])
            out = self._render(engine, _time(opts))
            if not self.dry_run:
                self.written.append(
                    export_svg(
                        out,
                        engine.settings,
                        args[0],
                        font_family=self.ctx.config.font_family,
                        guides=opts.get("guides", "0").lower() in _TRUE,
                    )
                )
            return

        if cmd == "dump_render":
            # dump_render <out.json> [time=<t>]
            engine = self.require_engine()
            out = self._render(engine, _time(_opts(args[1:])))
            if not self.dry_run:
                self.written.append(dump_render(out, args[0]))
            return

        if cmd == "animate":
            # animate <ticks> [delta_ms=40] [out=<prefix>]
            engine = self.require_engine()
            ticks = int(args[0])
            opts = _opts(args[1:])
            delta = float(opts.get("delta_ms", 1000.0 / max(1, engine.settings.target_fps)))
            prefix = opts.get("out")
            if not engine.settings.animation_enabled:
                self.warnings.append("animate: animation_enabled is off, no frames rendered")
                return

            sched = AnimationScheduler(engine)
            sched.start()
            for _ in range(max(0, ticks)):
                frame = sched.tick(delta)
                if frame is None:
                    continue
                self.ctx.last_output = frame
                if prefix and not self.dry_run:
                    path = f"{prefix}_{sched.frames_rendered:04d}.svg"
                    self.written.append(
                        export_svg(frame, engine.settings, path, font_family=self.ctx.config.font_family)
                    )
            sched.stop()
            return

        raise ValueError(f"Unknown command: {cmd}")

    def _render(self, engine: LayoutEngine, time: float | None) -> RenderOutput:
        out = engine.render(time=time)
        self.ctx.last_output = out
        self.warnings.extend(out.warnings)
        return out

    def require_engine(self) -> LayoutEngine:
        if not self.ctx.engine:
            raise RuntimeError("No layout (use: layout <arc|circle|line> or load_settings <path>)")
        return self.ctx.engine


def read_lines_from_path_or_stdin(path: str | None) -> list[str]:
    if path and path != "-":
        return Path(path).read_text(encoding="utf-8").splitlines()
    return sys.stdin.read().splitlines()
