"""File output for stroke lists and exports.

Every write goes to a sibling tmp file first and is moved over the target
only once complete, so a crashed export never leaves a truncated PNG, SVG
or stroke list behind.  The tmp file keeps the target's extension last
(``sketch.tmp.png``) so format inference by suffix still works.

Readers are plain: ``load_yaml`` parses with ``yaml.safe_load``.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

import numpy as np
import yaml
from PIL import Image

PathLike = str | Path


def ensure_dir(p: PathLike) -> Path:
    """Create ``p`` and its parents if needed; returns it as a Path."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


@contextmanager
def _staged(target: PathLike) -> Iterator[Path]:
    """Yield a tmp path next to ``target``; move it into place on success.

    Raises
    ------
    RuntimeError
        If staging or the final rename fails.  The tmp file is removed.
    """
    target = Path(target)
    ensure_dir(target.parent)
    staging = target.with_name(f"{target.stem}.tmp{target.suffix}")
    try:
        yield staging
        staging.replace(target)
    except Exception as e:
        staging.unlink(missing_ok=True)
        raise RuntimeError(f"Failed to write {target} atomically: {e}") from e


def atomic_write_bytes(path: PathLike, data: bytes) -> None:
    """Write ``data`` to ``path`` atomically (fsync before rename)."""
    with _staged(path) as staging:
        with open(staging, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())


def atomic_write_text(path: PathLike, text: str, encoding: str = "utf-8") -> None:
    atomic_write_bytes(path, text.encode(encoding))


def atomic_save_image(
    img: np.ndarray,
    path: PathLike,
    pil_kwargs: dict[str, Any] | None = None,
) -> None:
    """Save an RGB or RGBA array through Pillow, atomically.

    Parameters
    ----------
    img : np.ndarray
        (H, W, 3) or (H, W, 4).  uint8 is written as is; any other dtype
        is read as [0, 1] floats and quantised.
    path : str | Path
        Target; its suffix picks the format.
    pil_kwargs : dict, optional
        Forwarded to ``Image.save`` (e.g. ``{"optimize": True}``).

    Raises
    ------
    ValueError
        Unsupported array shape.
    RuntimeError
        If the write fails.
    """
    if img.ndim != 3 or img.shape[2] not in (3, 4):
        raise ValueError(f"Expected (H, W, 3|4) image, got shape {img.shape}")
    if img.dtype != np.uint8:
        img = (np.clip(img, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)

    picture = Image.fromarray(img)
    with _staged(path) as staging:
        picture.save(staging, **(pil_kwargs or {}))


def atomic_yaml_dump(obj: Any, path: PathLike) -> None:
    """Dump ``obj`` as block-style YAML, keys in insertion order."""
    text = yaml.safe_dump(obj, sort_keys=False, default_flow_style=False, allow_unicode=True)
    atomic_write_text(path, text)


def load_yaml(path: PathLike) -> Any:
    """Parse a YAML file.

    Raises
    ------
    FileNotFoundError
        Missing file.
    yaml.YAMLError
        Malformed YAML; the message names the file.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"YAML file not found: {path}")
    with open(path, encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Malformed YAML in {path}: {e}") from e
