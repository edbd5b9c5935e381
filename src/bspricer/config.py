"""Configuration and logging setup for the command line and batch tools."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class DisplayConfig:
    """How numbers are rendered in reports.

    ``per_day_theta`` divides theta by ``days_per_year``; ``vega_per_pct``
    and ``rho_per_pct`` rescale to a one-percentage-point move.
    """
    precision: int = 4
    days_per_year: float = 365.0
    per_day_theta: bool = False
    vega_per_pct: bool = False
    rho_per_pct: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise ValueError(f"precision must be an integer, got {self.precision!r}")
        if self.precision < 0:
            raise ValueError("precision must be >= 0")
        if self.days_per_year <= 0:
            raise ValueError("days_per_year must be > 0")


@dataclass(frozen=True)
class AnalysisConfig:
    """(low, high) thresholds for banding Greek magnitudes.

    Values below ``low`` band as "low", above ``high`` as "high", otherwise
    "medium".  Theta is compared per day, vega and rho per 1% move.
    """
    delta: tuple[float, float] = (0.3, 0.7)
    gamma: tuple[float, float] = (0.01, 0.05)
    theta: tuple[float, float] = (0.01, 0.05)
    vega: tuple[float, float] = (0.1, 0.3)
    rho: tuple[float, float] = (0.1, 0.3)
    atm_band: float = 0.01

    def __post_init__(self) -> None:
        for f in ("delta", "gamma", "theta", "vega", "rho"):
            lo, hi = getattr(self, f)
            if lo < 0 or hi < lo:
                raise ValueError(f"{f} thresholds must satisfy 0 <= low <= high")
            object.__setattr__(self, f, (float(lo), float(hi)))
        if self.atm_band < 0:
            raise ValueError("atm_band must be >= 0")


@dataclass(frozen=True)
class Config:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")


def _build(cls, section: Optional[dict[str, Any]], name: str):
    section = section or {}
    known = {f.name for f in fields(cls)}
    unknown = set(section) - known
    if unknown:
        raise ValueError(f"Unknown keys in '{name}' config: {sorted(unknown)}")
    kwargs = {k: tuple(v) if isinstance(v, list) else v for k, v in section.items()}
    return cls(**kwargs)


def config_from_dict(data: Optional[dict[str, Any]]) -> Config:
    data = dict(data or {})
    unknown = set(data) - {"display", "analysis", "log_level"}
    if unknown:
        raise ValueError(f"Unknown top-level config keys: {sorted(unknown)}")
    return Config(
        display=_build(DisplayConfig, data.get("display"), "display"),
        analysis=_build(AnalysisConfig, data.get("analysis"), "analysis"),
        log_level=data.get("log_level", "WARNING"),
    )


def load_config(config_path: Optional[str | Path] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file; ``None`` or a missing file gives defaults

    Returns:
        Config
    """
    if config_path is None:
        return Config()
    path = Path(config_path)
    if not path.exists():
        logger.info(f"Config file {path} not found, using defaults")
        return Config()
    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    config = config_from_dict(data)
    logger.info(f"Loaded configuration from {path}")
    return config


def setup_logging(log_level: str = "WARNING", log_file: Optional[str] = None):
    """
    Setup logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    logger.debug(f"Logging configured at {log_level} level")
