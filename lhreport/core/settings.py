"""lhreport configuration management.

Configuration is loaded from multiple sources with the following priority
(highest to lowest):
1. Explicit overrides (CLI options)
2. Environment variables (with LHREPORT_ prefix)
3. Configuration file (lhreport.config.yaml)
4. Default values

Example usage:
    from lhreport.core.settings import get_settings

    settings = get_settings()
    print(settings.flat_clumps)

Environment variable support:
    LHREPORT_LOG_LEVEL=DEBUG
    LHREPORT_STRICT_REFERENCES=true
    LHREPORT_LOGGING__JSON_OUTPUT=true
    LHREPORT_LOGGING__MODULE_LEVELS='{"lhreport.report": "DEBUG"}'
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lhreport.report.models import Clump
from lhreport.reporters.registry import get_registry

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = ["lhreport.config.yaml", "lhreport.config.yml"]


def _find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file by searching current directory and parents.

    Args:
        start_dir: Directory to start search from.
            Defaults to current working directory.

    Returns:
        Path to config file if found, None otherwise.
    """
    search_dir = start_dir or Path.cwd()

    for _ in range(10):
        for filename in CONFIG_FILE_NAMES:
            config_path = search_dir / filename
            if config_path.exists():
                return config_path

        parent = search_dir.parent
        if parent == search_dir:
            break
        search_dir = parent

    return None


def _load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Unreadable or malformed files are logged and treated as empty.
    """
    try:
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}
            return config if isinstance(config, dict) else {}
    except yaml.YAMLError as e:
        logger.warning("Failed to parse config file %s: %s", config_path, e)
        return {}
    except OSError as e:
        logger.warning("Failed to read config file %s: %s", config_path, e)
        return {}


def _validate_level(v: str) -> str:
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    upper_v = v.upper()
    if upper_v not in valid_levels:
        raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
    return upper_v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_output: bool | None = Field(
        default=None,
        description="Output logs in JSON format (auto-detected when unset)",
    )
    file: str | None = Field(
        default=None,
        description="Log file path (optional)",
    )
    module_levels: dict[str, str] = Field(
        default_factory=dict,
        description="Logger name to level, e.g. {'lhreport.report': 'DEBUG'}",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        return _validate_level(v)

    @field_validator("module_levels")
    @classmethod
    def validate_module_levels(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate every per-module level."""
        return {module: _validate_level(level) for module, level in v.items()}


class ReportSettings(BaseSettings):
    """Main lhreport settings.

    Example:
        settings = ReportSettings(strict_references=True)
        print(settings.logging.level)
    """

    model_config = SettingsConfigDict(
        env_prefix="LHREPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    log_level: str = Field(
        default="INFO",
        description="Application log level",
    )
    strict_references: bool = Field(
        default=False,
        description=(
            "Abort the whole report on the first dangling audit or group "
            "reference instead of skipping the affected category"
        ),
    )
    default_format: str = Field(
        default="console",
        description="Default output format for the report command",
    )
    flat_clumps: list[str] = Field(
        default_factory=lambda: [Clump.PASSED.value],
        description="Clumps rendered as one ungrouped run",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        return _validate_level(v)

    @field_validator("default_format")
    @classmethod
    def validate_default_format(cls, v: str) -> str:
        """Validate the output format is one the CLI can produce."""
        lowered = v.lower()
        formats = get_registry().formats
        if lowered not in formats:
            raise ValueError(f"Invalid output format: {v}. Must be one of {formats}")
        return lowered

    @field_validator("flat_clumps")
    @classmethod
    def validate_flat_clumps(cls, v: list[str]) -> list[str]:
        """Validate every entry names a known clump."""
        valid = {clump.value for clump in Clump}
        unknown = [name for name in v if name not in valid]
        if unknown:
            raise ValueError(
                f"Unknown clump(s) {unknown}. Must be among {sorted(valid)}"
            )
        return v

    @model_validator(mode="before")
    @classmethod
    def load_from_config_file(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Merge values from lhreport.config.yaml under explicit values."""
        if data.get("_skip_file_loading"):
            data.pop("_skip_file_loading", None)
            return data

        config_path = _find_config_file()
        if config_path:
            file_config = _load_yaml_config(config_path)
            if file_config:
                logger.debug("Loaded configuration from %s", config_path)
                merged = {**file_config, **data}
                if isinstance(file_config.get("logging"), dict):
                    merged["logging"] = {
                        **file_config["logging"],
                        **(
                            data["logging"]
                            if isinstance(data.get("logging"), dict)
                            else {}
                        ),
                    }
                return merged

        return data

    @property
    def flat_clump_set(self) -> frozenset[Clump]:
        """Flat clumps as enum members."""
        return frozenset(Clump(name) for name in self.flat_clumps)

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a plain dictionary."""
        return self.model_dump()


def get_settings(
    config_file: Path | None = None,
    **overrides: Any,
) -> ReportSettings:
    """Get a settings instance.

    Args:
        config_file: Optional explicit path to a YAML configuration file.
        **overrides: Explicit configuration overrides.

    Returns:
        Configured ReportSettings instance.
    """
    if config_file and config_file.exists():
        file_config = _load_yaml_config(config_file)
        merged = {**file_config, **overrides, "_skip_file_loading": True}
        return ReportSettings(**merged)

    return ReportSettings(**overrides)


@lru_cache
def get_cached_settings() -> ReportSettings:
    """Get cached settings instance.

    The cache can be cleared with get_cached_settings.cache_clear().
    """
    return get_settings()
