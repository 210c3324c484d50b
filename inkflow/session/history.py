"""Undo/redo history of finished strokes.

Committed strokes render in order, oldest first.  Committing a new stroke
clears the redo stack.  Every method is a no-op (returning ``None`` or
doing nothing) when there is nothing to act on.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from inkflow.brush.types import Stroke

logger = logging.getLogger(__name__)


class StrokeHistory:
    """Ordered list of committed strokes plus a redo stack."""

    def __init__(self, strokes: Iterable[Stroke] = ()) -> None:
        self._strokes: list[Stroke] = list(strokes)
        self._redo: list[Stroke] = []

    def __len__(self) -> int:
        return len(self._strokes)

    def __iter__(self) -> Iterator[Stroke]:
        return iter(tuple(self._strokes))

    @property
    def strokes(self) -> tuple[Stroke, ...]:
        return tuple(self._strokes)

    @property
    def can_undo(self) -> bool:
        return bool(self._strokes)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def commit(self, stroke: Stroke | None) -> bool:
        """Append a finished stroke.

        ``None`` (a discarded stroke from the recorder) is ignored so the
        result of ``pointer_up`` can be passed straight through.
        Returns True if a stroke was added.
        """
        if stroke is None:
            return False
        self._strokes.append(stroke)
        self._redo.clear()
        return True

    def undo(self) -> Stroke | None:
        if not self._strokes:
            return None
        stroke = self._strokes.pop()
        self._redo.append(stroke)
        logger.debug("Undo: %d strokes left", len(self._strokes))
        return stroke

    def redo(self) -> Stroke | None:
        if not self._redo:
            return None
        stroke = self._redo.pop()
        self._strokes.append(stroke)
        return stroke

    def clear(self) -> None:
        self._strokes.clear()
        self._redo.clear()
