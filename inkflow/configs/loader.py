"""Configuration loader for InkFlow.

Loads and validates ``inkflow.yaml`` into typed, frozen dataclasses.
Every tunable of the brush pipeline (default brush settings, pressure
simulation constants, taper window, sample spacing, export defaults)
comes from the config; the shipped file reproduces the built-in
constants exactly.

Usage::

    from inkflow.configs.loader import load_config
    cfg = load_config()                        # default path
    cfg = load_config("/custom/inkflow.yaml")  # explicit path
    settings = cfg.brush.to_settings()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from inkflow.brush.types import StrokeSettings
from inkflow.utils.color import is_hex_color
from inkflow.utils.fs import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "inkflow.yaml"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BrushConfig:
    """Default brush settings for new strokes."""

    size: float
    thinning: float
    smoothing: float
    color: str
    simulate_pressure: bool

    def to_settings(self) -> StrokeSettings:
        return StrokeSettings(
            size=self.size,
            thinning=self.thinning,
            smoothing=self.smoothing,
            color=self.color,
            simulate_pressure=self.simulate_pressure,
        )


@dataclass(frozen=True)
class PressureConfig:
    """Velocity-to-pressure simulation.

    ``max_velocity`` is in canvas units per millisecond.  ``start`` is the
    pressure forced on the first sample of each stroke.
    """

    max_velocity: float
    min: float
    max: float
    start: float


@dataclass(frozen=True)
class TaperConfig:
    """Longest taper window at each end of a stroke, in points."""

    max_points: int


@dataclass(frozen=True)
class RecorderConfig:
    """Pointer sample filtering."""

    min_distance: float


@dataclass(frozen=True)
class RenderConfig:
    """Export defaults."""

    width: int
    height: int
    background: str
    curve_steps: int
    svg_precision: int


@dataclass(frozen=True)
class LoggingConfig:
    level: str
    json: bool = False


@dataclass(frozen=True)
class InkflowConfig:
    """Complete configuration loaded from ``inkflow.yaml``."""

    brush: BrushConfig
    pressure: PressureConfig
    taper: TaperConfig
    recorder: RecorderConfig
    render: RenderConfig
    logging: LoggingConfig


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _require_unit(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ConfigError(f"{name} must be in [0, 1], got {value}")


def _validate_config(cfg: InkflowConfig) -> None:
    """Validate ranges and cross-field consistency.

    Raises
    ------
    ConfigError
        On any invalid value or combination.
    """
    # -- brush --------------------------------------------------------------
    if cfg.brush.size <= 0:
        raise ConfigError(f"brush.size must be > 0, got {cfg.brush.size}")
    _require_unit("brush.thinning", cfg.brush.thinning)
    _require_unit("brush.smoothing", cfg.brush.smoothing)
    if not is_hex_color(cfg.brush.color):
        raise ConfigError(f"brush.color must be a hex color, got {cfg.brush.color!r}")

    # -- pressure -----------------------------------------------------------
    p = cfg.pressure
    if p.max_velocity <= 0:
        raise ConfigError(f"pressure.max_velocity must be > 0, got {p.max_velocity}")
    for name, value in (("min", p.min), ("max", p.max), ("start", p.start)):
        _require_unit(f"pressure.{name}", value)
    if p.min > p.max:
        raise ConfigError(
            f"pressure.min ({p.min}) must not exceed pressure.max ({p.max})"
        )

    # -- taper / recorder ---------------------------------------------------
    if cfg.taper.max_points < 0:
        raise ConfigError(
            f"taper.max_points must be >= 0, got {cfg.taper.max_points}"
        )
    if cfg.recorder.min_distance < 0:
        raise ConfigError(
            f"recorder.min_distance must be >= 0, got {cfg.recorder.min_distance}"
        )
    if cfg.recorder.min_distance == 0:
        logger.warning(
            "recorder.min_distance is 0: duplicate samples will reach the "
            "velocity estimator"
        )

    # -- render -------------------------------------------------------------
    r = cfg.render
    if r.width <= 0 or r.height <= 0:
        raise ConfigError(f"render size must be positive, got {r.width}x{r.height}")
    if r.curve_steps < 1:
        raise ConfigError(f"render.curve_steps must be >= 1, got {r.curve_steps}")
    if r.svg_precision < 0:
        raise ConfigError(f"render.svg_precision must be >= 0, got {r.svg_precision}")
    if not is_hex_color(r.background):
        raise ConfigError(f"render.background must be a hex color, got {r.background!r}")

    # -- logging ------------------------------------------------------------
    if cfg.logging.level.upper() not in _LEVELS:
        raise ConfigError(
            f"logging.level must be one of {_LEVELS}, got {cfg.logging.level!r}"
        )


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _require_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{name} must be true or false, got {value!r}")
    return value


def _parse_config(data: dict[str, Any]) -> InkflowConfig:
    br = data["brush"]
    brush = BrushConfig(
        size=float(br["size"]),
        thinning=float(br["thinning"]),
        smoothing=float(br.get("smoothing", 0.5)),
        color=str(br["color"]),
        simulate_pressure=_require_bool(
            "brush.simulate_pressure", br.get("simulate_pressure", True)
        ),
    )

    pr = data["pressure"]
    pressure = PressureConfig(
        max_velocity=float(pr["max_velocity"]),
        min=float(pr["min"]),
        max=float(pr["max"]),
        start=float(pr["start"]),
    )

    taper = TaperConfig(max_points=int(data["taper"]["max_points"]))
    recorder = RecorderConfig(
        min_distance=float(data["recorder"]["min_distance"]),
    )

    rd = data["render"]
    render = RenderConfig(
        width=int(rd["width"]),
        height=int(rd["height"]),
        background=str(rd["background"]),
        curve_steps=int(rd.get("curve_steps", 8)),
        svg_precision=int(rd.get("svg_precision", 2)),
    )

    lg = data.get("logging", {})
    log_cfg = LoggingConfig(
        level=str(lg.get("level", "INFO")),
        json=_require_bool("logging.json", lg.get("json", False)),
    )

    return InkflowConfig(
        brush=brush,
        pressure=pressure,
        taper=taper,
        recorder=recorder,
        render=render,
        logging=log_cfg,
    )


def load_config(path: str | Path | None = None) -> InkflowConfig:
    """Load and validate configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to ``inkflow.yaml``.  ``None`` loads the default shipped
        alongside this module.

    Returns
    -------
    InkflowConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If the file is not valid YAML, or any field is missing or fails
        validation.
    FileNotFoundError
        If *path* does not exist.
    """
    path = DEFAULT_CONFIG_PATH if path is None else Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from %s", path)

    try:
        data = load_yaml(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"Configuration file is not valid YAML: {path}: {e}") from e
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping: {path}")

    try:
        cfg = _parse_config(data)
    except KeyError as e:
        raise ConfigError(f"Missing required config key: {e}") from e
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config value: {e}") from e

    _validate_config(cfg)
    logger.debug("Configuration loaded successfully")
    return cfg
