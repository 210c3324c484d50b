#!/usr/bin/env python3
"""
Make Demo Script.

Replay synthetic mouse gestures through the stroke recorder and save the
resulting stroke list.  Useful for eyeballing the brush without a UI.

Usage:
    python -m inkflow.scripts.make_demo --output demo.yaml
    python -m inkflow.scripts.make_demo -o demo.yaml --pattern wave --pattern dot
    python -m inkflow.scripts.make_demo -o demo.yaml --erase-line
"""

from __future__ import annotations

import argparse
import logging
import sys

from inkflow.brush.types import Tool
from inkflow.configs.loader import ConfigError, load_config
from inkflow.session.history import StrokeHistory
from inkflow.session.patterns import PATTERNS, line, record
from inkflow.session.recorder import StrokeRecorder
from inkflow.session.storage import save_strokes
from inkflow.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Where each pattern is placed on an 800x600 canvas
_LAYOUT = {
    "line": {"start": (80.0, 80.0), "end": (720.0, 80.0)},
    "wave": {"origin": (80.0, 220.0), "length": 640.0},
    "spiral": {"origin": (400.0, 430.0), "radius": 140.0},
    "dot": {"origin": (700.0, 520.0)},
}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate a demo stroke list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Available patterns: {', '.join(PATTERNS)}",
    )
    parser.add_argument("--output", "-o", type=str, required=True, help="Output YAML path")
    parser.add_argument(
        "--pattern",
        "-p",
        action="append",
        choices=list(PATTERNS),
        help="Pattern to draw (repeatable, default: all)",
    )
    parser.add_argument(
        "--erase-line",
        action="store_true",
        help="Finish with an eraser stroke across the canvas",
    )
    parser.add_argument("--config", "-c", type=str, help="Configuration file path")
    parser.add_argument("--log-level", type=str, help="Logging level override")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (ConfigError, FileNotFoundError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging(
        args.log_level or config.logging.level,
        json=config.logging.json,
        context={"app": "demo"},
    )

    recorder = StrokeRecorder.from_config(config)
    history = StrokeHistory()

    t0 = 0.0
    for name in args.pattern or list(PATTERNS):
        samples = PATTERNS[name](t0=t0, **_LAYOUT[name])
        if history.commit(record(recorder, samples)):
            logger.info("Recorded %s (%d samples offered)", name, len(samples))
        else:
            logger.warning("Pattern %s produced no stroke", name)
        t0 = samples[-1][3] + 250.0

    if args.erase_line:
        recorder.tool = Tool.ERASER
        history.commit(record(recorder, line((60.0, 300.0), (740.0, 300.0), t0=t0)))

    try:
        save_strokes(history, args.output)
    except RuntimeError as e:
        logger.error("Could not save demo: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
