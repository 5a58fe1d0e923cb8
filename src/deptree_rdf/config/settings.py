"""
Configuration management for deptree-rdf.
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = "deptree-rdf.yaml"


class OutputConfig(BaseModel):
    """Output configuration."""

    # Kept as a plain string: unsupported values are reported by the pipeline
    format: str = "xml"
    output_dir: Path = Path("./target/dependencies-rdf")
    validate_output: bool = True


class SourceConfig(BaseModel):
    """Where the resolved dependency tree comes from.

    A tree_file wins over running Maven in project_dir.
    """

    tree_file: Path | None = None
    tree_format: Literal["auto", "json", "text"] = "auto"
    project_dir: Path = Path(".")
    maven_executable: str = "mvn"
    maven_args: list[str] = Field(default_factory=list)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    log_file: Path | None = None


class Settings(BaseSettings):
    """Main configuration class."""

    model_config = SettingsConfigDict(
        env_prefix="DEPRDF_",
        env_nested_delimiter="__",
    )

    output: OutputConfig = Field(default_factory=OutputConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Settings object with loaded configuration
    """
    config_file = Path(config_path)

    if config_file.exists():
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}
    else:
        config_dict = {}

    # Create settings, which will also load from environment variables
    settings = Settings(**config_dict)

    return settings


# Global settings instance
_settings: Settings | None = None


def get_settings(config_path: str | Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = load_config(config_path)
    return _settings


def reset_settings() -> None:
    """Forget the global settings instance."""
    global _settings
    _settings = None
