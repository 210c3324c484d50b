"""InkFlow: pressure-simulated calligraphy brush.

Subpackages (lowest layer first):
    - utils: logging, atomic file I/O, stroke-file schemas, color parsing
    - brush: pressure estimation, taper, outline builder, path smoothing
    - configs: YAML defaults loaded into frozen dataclasses
    - session: pointer-event recorder and undo/redo stroke history
    - render: raster compositing, PNG and SVG export
    - scripts: command-line entrypoints
"""

__version__ = "0.1.0"
