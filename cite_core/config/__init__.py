"""Configuration management for citeview."""

import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List

from pydantic import BaseModel, Field, ValidationError, field_validator

from cite_core.constants import (
    DEFAULT_CONFIG_PATH, DEFAULT_EXECUTABLE, DEFAULT_ENGINES,
    DEFAULT_LOG_LEVEL, DEFAULT_RECORD_HEIGHT, DEFAULT_BUFFER_NAME
)

logger = logging.getLogger(__name__)

class EnginesConfig(BaseModel):
    """Engine selection configuration model."""
    available: List[str] = Field(default_factory=lambda: list(DEFAULT_ENGINES),
                                 description="Engines the external program understands")
    favorites: List[str] = Field(default_factory=list,
                                 description="Engines used for a search when none are given")

    @field_validator('available', 'favorites', mode='before')
    @classmethod
    def empty_list_for_null(cls, v: Any) -> Any:
        """Treat an empty YAML key as an empty list."""
        return [] if v is None else v

class BibliographyConfig(BaseModel):
    """Bibliography targets, handed to the fetch command as given."""
    file: Optional[str] = Field(default=None, description="Primary bibliography file")
    secondary_folder: Optional[str] = Field(default=None,
                                            description="Optional secondary bibliography folder")

class ResultsConfig(BaseModel):
    """Result view configuration model."""
    record_height: int = Field(default=DEFAULT_RECORD_HEIGHT,
                               description="Number of lines in one citation record")
    buffer_name: str = Field(default=DEFAULT_BUFFER_NAME, description="Name of the output buffer")

    @field_validator('record_height')
    @classmethod
    def validate_record_height(cls, v: int) -> int:
        """Validate record height."""
        if v < 1:
            logger.warning(f"Invalid record height: {v}. Using default: {DEFAULT_RECORD_HEIGHT}")
            return DEFAULT_RECORD_HEIGHT
        return v

class FetchConfig(BaseModel):
    """Fetch dispatch configuration model."""
    wait: bool = Field(default=False,
                       description="Wait for the fetch to finish and report its exit status")

class LoggingConfig(BaseModel):
    """Logging configuration model."""
    level: str = Field(default=DEFAULT_LOG_LEVEL, description="Logging level")
    file: Optional[str] = Field(default=None, description="Log file path")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            logger.warning(f"Invalid logging level: {v}. Using default: {DEFAULT_LOG_LEVEL}")
            return DEFAULT_LOG_LEVEL
        return v.upper()

class CiteConfig(BaseModel):
    """Main configuration model."""
    executable: str = Field(default=DEFAULT_EXECUTABLE, description="External citation program")
    engines: EnginesConfig = Field(default_factory=EnginesConfig, description="Engine configuration")
    bibliography: BibliographyConfig = Field(default_factory=BibliographyConfig,
                                             description="Bibliography targets")
    results: ResultsConfig = Field(default_factory=ResultsConfig, description="Result view configuration")
    fetch: FetchConfig = Field(default_factory=FetchConfig, description="Fetch configuration")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    @field_validator('executable')
    @classmethod
    def validate_executable(cls, v: str) -> str:
        """Validate executable name."""
        if not v or not v.strip():
            logger.warning(f"Empty executable. Using default: {DEFAULT_EXECUTABLE}")
            return DEFAULT_EXECUTABLE
        return v

    def resolve_engines(self) -> List[str]:
        """Favorite engines if any are set, otherwise every available engine."""
        if self.engines.favorites:
            return list(self.engines.favorites)
        return list(self.engines.available)

def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from the YAML config file.

    Args:
        config_path: Path to the config file. If None, default is used.

    Returns:
        Dict with raw configuration values.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    config: Dict[str, Any] = {}

    try:
        resolved_path = resolve_path(path)
        config_file = Path(resolved_path)
        if config_file.exists():
            with open(config_file, 'r', encoding='utf-8') as f:
                raw_config = yaml.safe_load(f) or {}
            if isinstance(raw_config, dict):
                config = raw_config
                logger.debug(f"Loaded configuration from {resolved_path}")
            else:
                logger.error(f"Config file '{resolved_path}' does not contain a mapping")
        else:
            logger.warning(f"Config file '{resolved_path}' not found. Using defaults.")
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading config file '{path}': {e}")

    return config

def load_settings(config_path: Optional[str] = None) -> CiteConfig:
    """
    Load and validate configuration, resolving defaults once.

    Args:
        config_path: Path to the config file. If None, default is used.

    Returns:
        Validated CiteConfig instance
    """
    raw_config = load_config(config_path)
    try:
        settings = CiteConfig(**raw_config)
        logger.debug(f"Validated configuration: {settings.model_dump()}")
    except (ValidationError, TypeError) as validation_error:
        logger.error(f"Configuration validation error: {validation_error}")
        logger.warning("Using default configuration")
        settings = CiteConfig()
    return settings

def resolve_path(path: Optional[str]) -> Optional[str]:
    """Resolve path with environment variables and user home."""
    if path is None:
        return None
    return os.path.expanduser(os.path.expandvars(path))
