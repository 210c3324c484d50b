"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Atomic I/O and YAML (fs)
    - Unified logging (logging_config)
    - Stroke-file schemas (validators)
    - Color token parsing (color)

No module in utils/ may import from upper layers (brush, session, render).

Convenience imports:
    from inkflow.utils import fs, validators
    from inkflow.utils.logging_config import setup_logging, get_logger
"""

from . import color
from . import fs
from . import logging_config
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    'color',
    'fs',
    'logging_config',
    'validators',
    'setup_logging',
    'get_logger',
    'push_context',
]
