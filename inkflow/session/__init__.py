"""
Drawing session: pointer-event recorder, stroke history, persistence.
"""

from inkflow.session.history import StrokeHistory
from inkflow.session.recorder import StrokeRecorder
from inkflow.session.storage import load_strokes, save_strokes

__all__ = [
    "StrokeHistory",
    "StrokeRecorder",
    "load_strokes",
    "save_strokes",
]
