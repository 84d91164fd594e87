"""Extraction configuration loader.

Loads and validates tokensmith.config.json configuration files.
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError, describe_validation_error
from .token_logging import get_logger

logger = get_logger()

# Default configuration file name
CONFIG_FILENAME = "tokensmith.config.json"
CONFIG_ENV_VAR = "TOKENSMITH_CONFIG"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")


class ExtractionConfig(BaseModel):
    """Settings for a token import run."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    # Input limits
    max_input_bytes: int = Field(default=1024 * 1024, gt=0, alias="maxInputBytes")
    max_css_files: int = Field(default=5, ge=0, alias="maxCssFiles")

    # Source selection
    shadcn_css_names: list[str] = Field(
        default_factory=lambda: ["globals.css", "app.css"], alias="shadcnCssNames"
    )

    # Classification and output
    semantic_color_roles: bool = Field(default=False, alias="semanticColorRoles")
    normalize_colors: bool = Field(default=False, alias="normalizeColors")

    # Logging
    log_level: str = Field(default="INFO", alias="logLevel")
    log_format: str = Field(default="text", alias="logFormat")

    @field_validator("shadcn_css_names")
    @classmethod
    def validate_css_names(cls, v: list[str]) -> list[str]:
        names = [name.strip() for name in v]
        for name in names:
            if not name.lower().endswith(".css"):
                raise ValueError(f"Theme file names must end in .css: {name!r}")
        return names

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        fmt = v.strip().lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
        return fmt

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase file form."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExtractionConfig":
        """Create from a dictionary using snake_case or camelCase keys."""
        return cls.model_validate(data)


class ConfigLoader:
    """Loader for extraction configuration."""

    def __init__(self, project_path: Path | None = None):
        """Initialize the config loader.

        Args:
            project_path: Path to the project root. Defaults to current directory.
        """
        self.project_path = Path(project_path) if project_path else Path.cwd()

    def load(self, config_path: Path | None = None) -> ExtractionConfig:
        """Load extraction configuration.

        Precedence (highest to lowest):
        1. Explicit config_path
        2. Environment variable TOKENSMITH_CONFIG
        3. tokensmith.config.json in project root
        4. Default configuration

        Args:
            config_path: Optional explicit path to config file.

        Returns:
            Loaded ExtractionConfig instance.

        Raises:
            ConfigurationError: If an explicitly named file is missing, or
                the selected file is invalid.
        """
        if config_path is not None:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigurationError(
                    f"Config file not found: {config_path}",
                    config_file=str(config_path),
                    suggestion="Pass an existing file to --config",
                )
            return self._load_from_file(config_path)

        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            env_config_path = Path(env_path)
            if env_config_path.exists():
                return self._load_from_file(env_config_path)
            logger.warning(f"{CONFIG_ENV_VAR} points to a missing file: {env_path}")

        project_config = self.project_path / CONFIG_FILENAME
        if project_config.exists():
            return self._load_from_file(project_config)

        logger.debug("No tokensmith config found, using defaults")
        return ExtractionConfig()

    def _load_from_file(self, config_path: Path) -> ExtractionConfig:
        """Load configuration from a file.

        Raises:
            ConfigurationError: If the file is not a valid JSON object or
                fails validation.
        """
        logger.debug(f"Loading tokensmith config from {config_path}")
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}", config_file=str(config_path)
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object", config_file=str(config_path)
            )

        try:
            return ExtractionConfig.from_dict(data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {describe_validation_error(e)}",
                config_file=str(config_path),
            ) from e

    def save(self, config: ExtractionConfig, config_path: Path | None = None) -> Path:
        """Save configuration to a file.

        Returns:
            Path where config was saved.
        """
        if config_path is None:
            config_path = self.project_path / CONFIG_FILENAME

        content = json.dumps(config.to_dict(), indent=2)
        config_path.write_text(content, encoding="utf-8")
        logger.info(f"Saved tokensmith config to {config_path}")
        return config_path


def load_config(
    project_path: Path | None = None, config_path: Path | None = None
) -> ExtractionConfig:
    """Convenience function to load extraction configuration."""
    loader = ConfigLoader(project_path)
    return loader.load(config_path)
