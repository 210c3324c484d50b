"""Configuration loading and validation."""

from inkflow.configs.loader import (
    BrushConfig,
    ConfigError,
    InkflowConfig,
    LoggingConfig,
    PressureConfig,
    RecorderConfig,
    RenderConfig,
    TaperConfig,
    load_config,
)

__all__ = [
    "BrushConfig",
    "ConfigError",
    "InkflowConfig",
    "LoggingConfig",
    "PressureConfig",
    "RecorderConfig",
    "RenderConfig",
    "TaperConfig",
    "load_config",
]
