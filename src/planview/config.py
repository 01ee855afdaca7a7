"""Configuration for planview (planview_config.yaml)."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigError

CONFIG_FILENAME = "planview_config.yaml"


class CriticalPathStrategy(str, Enum):
    """How the longest dependency chain is searched."""

    MEMOIZED = "memoized"  # One longest-path result per task id
    RECURSIVE = "recursive"  # Re-walks shared descendants for every path reaching them


class TimelineConfig(BaseModel):
    """Configuration for timeline aggregation."""

    fallback_days: int = Field(default=30, ge=0)  # Window length when no dates exist


class CriticalPathConfig(BaseModel):
    """Configuration for the critical-path estimator."""

    strategy: CriticalPathStrategy = CriticalPathStrategy.MEMOIZED


class HierarchyConfig(BaseModel):
    """Configuration for the task hierarchy builder."""

    detect_cycles: bool = False  # Report parent cycles; never changes the tree


class GanttConfig(BaseModel):
    """Configuration for Mermaid gantt rendering."""

    title: str = "Project Schedule"
    mark_critical: bool = True  # Tag critical-path tasks with "crit"


class PlanviewConfig(BaseModel):
    """Top-level configuration; every section is optional."""

    timeline: TimelineConfig = Field(default_factory=TimelineConfig)
    critical_path: CriticalPathConfig = Field(default_factory=CriticalPathConfig)
    hierarchy: HierarchyConfig = Field(default_factory=HierarchyConfig)
    gantt: GanttConfig = Field(default_factory=GanttConfig)


def load_config(config_path: Path | str) -> PlanviewConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to planview_config.yaml

    Returns:
        Validated PlanviewConfig

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigError: If the file is not valid YAML or fails validation
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config {config_path}: {e}") from e

    if data is None:
        return PlanviewConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping at the root level")

    try:
        return PlanviewConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e
