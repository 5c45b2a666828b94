"""Configuration management for SteadyInk pipelines."""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import yaml

from .filters import (
    EmaFilter,
    KalmanFilter,
    LinearPredictionFilter,
    MovingAverageFilter,
    NoiseFilter,
    OneEuroFilter,
    StringFilter,
)
from .kernels import PaddingMode, bilateral_kernel, box_kernel, gaussian_kernel, triangle_kernel
from .pointer import StabilizedPointer
from .presets import create_from_preset, create_stabilized_pointer
from .types import Filter, FilterType

logger = logging.getLogger("steadyink.config")

FILTER_FACTORIES: Dict[FilterType, Callable[..., Filter]] = {
    FilterType.NOISE: NoiseFilter,
    FilterType.EMA: EmaFilter,
    FilterType.KALMAN: KalmanFilter,
    FilterType.MOVING_AVERAGE: MovingAverageFilter,
    FilterType.STRING: StringFilter,
    FilterType.ONE_EURO: OneEuroFilter,
    FilterType.LINEAR_PREDICTION: LinearPredictionFilter,
}

KERNEL_FACTORIES: Dict[str, Callable[..., Any]] = {
    "box": box_kernel,
    "triangle": triangle_kernel,
    "gaussian": gaussian_kernel,
    "bilateral": bilateral_kernel,
}


@dataclass
class FilterConfig:
    type: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PostProcessConfig:
    type: str
    params: Dict[str, Any] = field(default_factory=dict)
    padding: str = "reflect"
    preserve_endpoints: bool = True


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class SteadyInkConfig:
    # An explicit filter list wins over preset/level
    preset: Optional[str] = None
    level: Optional[float] = None
    filters: List[FilterConfig] = field(default_factory=list)
    post_process: List[PostProcessConfig] = field(default_factory=list)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SteadyInkConfig":
        config = cls()
        config.preset = data.get("preset", config.preset)
        config.level = data.get("level", config.level)

        config.filters = [
            FilterConfig(type=f["type"], params=f.get("params") or {})
            for f in data.get("filters") or []
        ]

        config.post_process = [
            PostProcessConfig(
                type=p["type"],
                params=p.get("params") or {},
                padding=p.get("padding", "reflect"),
                preserve_endpoints=p.get("preserve_endpoints", True),
            )
            for p in data.get("post_process") or []
        ]

        if "logging" in data:
            lg = data["logging"] or {}
            config.logging = LoggingConfig(level=lg.get("level", "INFO"))

        return config

    @classmethod
    def from_yaml(cls, path: str) -> "SteadyInkConfig":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "SteadyInkConfig":
        """Load config from path, falling back to defaults."""
        search_paths = [
            path,
            os.environ.get("STEADYINK_CONFIG"),
            os.path.expanduser("~/.steadyink/config.yaml"),
            "/etc/steadyink/config.yaml",
        ]
        for p in search_paths:
            if p and os.path.isfile(p):
                logger.info("Loading config from %s", p)
                return cls.from_yaml(p)
        logger.debug("No config file found, using defaults")
        return cls()


def _make_filter(entry: FilterConfig) -> Optional[Filter]:
    try:
        factory = FILTER_FACTORIES[FilterType(entry.type)]
    except ValueError:
        logger.warning("Unknown filter type %r, skipping", entry.type)
        return None
    try:
        return factory(**entry.params)
    except TypeError as e:
        logger.warning("Invalid parameters for filter %s: %s", entry.type, e)
        return None


def build_pointer(config: SteadyInkConfig) -> StabilizedPointer:
    """Build a pipeline from configuration.

    Filters come from the explicit ``filters`` list if present, otherwise
    from ``preset`` or ``level``. Post-processors are appended in order.
    Entries with unknown types or bad parameters are logged and skipped.
    """
    if config.filters:
        pointer = StabilizedPointer()
        for entry in config.filters:
            filter = _make_filter(entry)
            if filter is not None:
                pointer.add_filter(filter)
    elif config.preset is not None:
        pointer = create_from_preset(config.preset)
    elif config.level is not None:
        pointer = create_stabilized_pointer(config.level)
    else:
        pointer = StabilizedPointer()

    for entry in config.post_process:
        factory = KERNEL_FACTORIES.get(entry.type)
        if factory is None:
            logger.warning("Unknown kernel type %r, skipping", entry.type)
            continue
        try:
            kernel = factory(**entry.params)
            padding = PaddingMode(entry.padding)
        except (TypeError, ValueError) as e:
            logger.warning("Invalid post-process %s: %s", entry.type, e)
            continue
        pointer.add_post_process(kernel, padding=padding,
                                 preserve_endpoints=entry.preserve_endpoints)

    logger.info("Built pipeline: filters=%s, post_process=%s",
                pointer.filter_types, pointer.post_process_types)
    return pointer
