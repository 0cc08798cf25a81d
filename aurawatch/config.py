"""
Configuration loading and validation for Aurawatch.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from aurawatch.watcher import DEFAULT_FILE_GLOB

DEFAULT_LOG_DIR = str(Path.home() / "AppData" / "LocalLow" / "VRChat" / "VRChat")


class WatchConfig(BaseModel):
    """Which log files to follow and how often."""
    log_dir: str = DEFAULT_LOG_DIR
    file_glob: str = DEFAULT_FILE_GLOB
    poll_interval: float = Field(default=1.0, gt=0)
    wake_on_change: bool = False


class ClassifierConfig(BaseModel):
    """Configuration for a line classifier."""
    type: str  # "authentication", "aura_unlock", etc.
    config: dict[str, Any] = Field(default_factory=dict)  # Type-specific configuration


class NotifierConfig(BaseModel):
    """Configuration for notification destinations."""
    type: str  # "console", etc.
    config: dict[str, Any] = Field(default_factory=dict)  # Type-specific configuration


def _default_classifiers() -> list[ClassifierConfig]:
    return [
        ClassifierConfig(type="authentication"),
        ClassifierConfig(type="aura_unlock"),
    ]


def _default_notifiers() -> list[NotifierConfig]:
    return [NotifierConfig(type="console")]


class Config(BaseModel):
    """Main configuration for Aurawatch."""
    watch: WatchConfig = Field(default_factory=WatchConfig)
    classifiers: list[ClassifierConfig] = Field(default_factory=_default_classifiers)
    notifiers: list[NotifierConfig] = Field(default_factory=_default_notifiers)
    auras_json: str | None = None  # Auras.json (or its directory); bundled copy if unset
    ignored_tiers: list[int] = Field(default_factory=lambda: [5])


def load_config(config_path: str | Path) -> Config:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Validated Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
        yaml.YAMLError: If YAML parsing fails
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with path.open('r', encoding='utf-8') as f:
        raw_config: dict[str, Any] | None = yaml.safe_load(f)

    try:
        return Config.model_validate(raw_config or {})
    except ValidationError as e:
        raise ValueError(f"Configuration validation error: {e}") from e
