from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pathtype.logging_utils import configure_logging

if TYPE_CHECKING:
    from pathtype.layout.engine import LayoutEngine


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pathtype",
        add_help=True,
        formatter_class=argparse.RawTextHelpFormatter,
        description="pathtype: seeded, noise-driven glyph layouts along arcs, circles and lines\n",
    )

    p.add_argument("--version", action="store_true", help="Print version and exit.")
    p.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-v info, -vv debug).")

    p.add_argument("--headless", action="store_true", help="Run a headless script (layout/set/render_svg/...).")
    p.add_argument("--script", default=None, help="Path to headless script (.txt), or - for stdin")

    sub = p.add_subparsers(dest="cmd")

    def add_source(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--settings", default=None, help="Settings snapshot (.json/.yaml) or exported .svg")
        sp.add_argument("--layout", default=None, choices=["arc", "circle", "line"], help="Guide-path family")
        sp.add_argument("--seed", default=None, help="Seed token (fresh one if omitted)")
        sp.add_argument("--time", type=float, default=None, help="Animation time for the pass")

    render = sub.add_parser("render", help="Render one pass to SVG and/or JSON.")
    add_source(render)
    render.add_argument("--out", default=None, help="SVG output path (default: <out_dir>/<layout>_<seed>.svg)")
    render.add_argument("--json", default=None, dest="json_out", help="Also dump the symbolic render as JSON")
    render.add_argument("--guides", action="store_true", help="Draw the boundary guides")

    plan = sub.add_parser("plan", help="Print the row plan of one pass.")
    add_source(plan)

    sub.add_parser("seed", help="Print a fresh seed token.")
    sub.add_parser("profiles", help="List layout families and their defaults.")

    config = sub.add_parser("config", help="Show the user config, or update it with the flags below.")
    config.add_argument("--out-dir", default=None, help="Default directory for rendered files")
    config.add_argument("--font-family", default=None, help="Base font family for the SVG stylesheet")
    config.add_argument("--path", default=None, help="Config file (default: ~/.config/pathtype/config.json)")

    return p


def _engine_from_args(args: argparse.Namespace) -> LayoutEngine:
    from pathtype.io.settings_json import load_settings
    from pathtype.layout.engine import LayoutEngine
    from pathtype.model.settings import SketchSettings

    settings = load_settings(args.settings) if args.settings else SketchSettings()
    if args.layout:
        settings = dataclasses.replace(settings, layout=args.layout)
    return LayoutEngine(settings, seed=args.seed or settings.seed)


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.version:
        try:
            from importlib.metadata import version

            v = version("pathtype")
        except Exception:
            v = "0.0.0"
        print(f"pathtype {v}")
        return

    if args.headless:
        if not args.script:
            raise SystemExit("ERROR: --headless requires --script <path>")

        from pathtype.cli.headless import HeadlessRunner, read_lines_from_path_or_stdin
        from pathtype.util.config import load_config

        base = Path(args.script).expanduser().resolve().parent if args.script != "-" else Path.cwd()
        lines = read_lines_from_path_or_stdin(args.script)
        r = HeadlessRunner(config=load_config(), strict=True)
        r.run_lines(lines, base_dir=base)
        for w in r.warnings:
            print(f"warning: {w}", file=sys.stderr)
        for path in r.written:
            print(path)
        return

    if args.cmd == "seed":
        from pathtype.util.rng import new_token

        print(new_token())
        return

    if args.cmd == "profiles":
        from pathtype.layout.profiles import list_profiles

        for prof in list_profiles():
            print(
                f"{prof.name}: {prof.doc_width_mm}x{prof.doc_height_mm}mm "
                f"bleed_row={prof.bleed_row} grid={prof.grid_resolution} "
                f"opacity_exp={prof.opacity_exponent}"
            )
        return

    if args.cmd == "config":
        from pathtype.util.config import load_config, save_config

        cfg_path = Path(args.path).expanduser() if args.path else None
        cfg = load_config(cfg_path)
        if args.out_dir is None and args.font_family is None:
            print(json.dumps(cfg.to_dict(), indent=2, sort_keys=True))
            return
        cfg = dataclasses.replace(
            cfg,
            out_dir=args.out_dir or cfg.out_dir,
            font_family=args.font_family or cfg.font_family,
        )
        print(save_config(cfg, cfg_path))
        return

    if args.cmd in {"render", "plan"}:
        from pathtype.io.render_json import dump_render, render_summary
        from pathtype.io.svg import export_svg
        from pathtype.util.config import load_config

        try:
            engine = _engine_from_args(args)
        except (OSError, ValueError) as e:
            raise SystemExit(f"ERROR: could not load settings ({e})")

        out = engine.render(time=args.time)
        for w in out.warnings:
            print(f"warning: {w}", file=sys.stderr)

        if args.cmd == "plan":
            print(f"seed: {out.seed}")
            print(f"layout: {out.layout} base_font_size={out.base_font_size:.3f} scale={out.scale_factor:.3f}")
            for line in render_summary(out):
                print(line)
            return

        cfg = load_config()
        svg_path = args.out or str(cfg.render_path(out.layout, out.seed))
        print(export_svg(out, engine.settings, svg_path, font_family=cfg.font_family, guides=args.guides))
        if args.json_out:
            print(dump_render(out, args.json_out))
        return

    parser.print_help()


if __name__ == "__main__":
    main()
