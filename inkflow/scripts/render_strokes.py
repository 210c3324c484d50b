#!/usr/bin/env python3
"""
Render Strokes Script.

Render a saved stroke list to PNG and/or SVG.

Usage:
    python -m inkflow.scripts.render_strokes --input strokes.yaml --png sketch.png
    python -m inkflow.scripts.render_strokes -i strokes.yaml --svg sketch.svg --no-background
    python -m inkflow.scripts.render_strokes -i strokes.yaml --png out.png --width 1200 --height 900 --scale 2
"""

from __future__ import annotations

import argparse
import logging
import sys

from inkflow.configs.loader import ConfigError, load_config
from inkflow.render.raster import export_png
from inkflow.render.svg import export_svg
from inkflow.session.storage import load_strokes
from inkflow.utils.logging_config import push_context, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a stroke list to PNG / SVG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--input",
        "-i",
        type=str,
        required=True,
        help="Stroke list (strokes.inkflow.v1 YAML)",
    )
    parser.add_argument("--png", type=str, help="PNG output path")
    parser.add_argument("--svg", type=str, help="SVG output path")
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Configuration file path",
    )
    parser.add_argument("--width", type=int, help="Canvas width (canvas units)")
    parser.add_argument("--height", type=int, help="Canvas height (canvas units)")
    parser.add_argument(
        "--scale",
        type=float,
        default=1.0,
        help="Device pixel ratio for PNG output",
    )
    parser.add_argument("--background", type=str, help="Paper color override")
    parser.add_argument(
        "--no-background",
        action="store_true",
        help="Transparent output (no paper color)",
    )
    parser.add_argument("--log-level", type=str, help="Logging level override")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.png and not args.svg:
        parser.error("at least one of --png / --svg is required")

    try:
        config = load_config(args.config)
    except (ConfigError, FileNotFoundError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging(
        args.log_level or config.logging.level,
        json=config.logging.json,
        context={"app": "render"},
    )

    width = args.width or config.render.width
    height = args.height or config.render.height
    if args.no_background:
        background = None
    else:
        background = args.background or config.render.background

    push_context(input=args.input)
    try:
        strokes = load_strokes(args.input)
        if args.png:
            export_png(
                strokes,
                args.png,
                int(round(width * args.scale)),
                int(round(height * args.scale)),
                background=background,
                scale=args.scale,
                curve_steps=config.render.curve_steps,
            )
        if args.svg:
            export_svg(
                strokes,
                args.svg,
                width,
                height,
                background=background,
                precision=config.render.svg_precision,
            )
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        logger.error("Render failed: %s", e)
        return 1

    logger.info("Rendered %d strokes", len(strokes))
    return 0


if __name__ == "__main__":
    sys.exit(main())
