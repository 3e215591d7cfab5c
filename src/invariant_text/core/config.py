"""
Configuration management for invariant-text.

Loads settings from environment variables and provides a centralized
settings object for the CLI and logging. The rendering engine itself
never reads these settings: library calls receive an explicit
``RenderOptions`` or the defaults.

Configuration precedence (highest to lowest):
1. CLI arguments (passed as kwargs to EngineSettings)
2. Environment variables (INVARIANT_TEXT_* prefix)
3. .env file
4. pyproject.toml [tool.invariant_text] section
5. Hardcoded defaults
"""

import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

# Import tomllib for Python 3.11+, tomli for Python 3.10
if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore

from ..models.enums import LogLevel, TimeSpanStyle
from ..models.options import RenderOptions

logger = logging.getLogger(__name__)


def load_pyproject_defaults(pyproject_path: Path | None = None) -> dict[str, Any]:
    """
    Load defaults from [tool.invariant_text] section in pyproject.toml.

    Args:
        pyproject_path: File to read (default: ./pyproject.toml)

    Returns:
        Dictionary of configuration overrides from pyproject.toml
    """
    if tomllib is None:
        import warnings

        warnings.warn(
            "tomli package not installed. Install with 'pip install tomli' "
            "for Python 3.10 to enable pyproject.toml configuration support.",
            ImportWarning,
            stacklevel=2,
        )
        return {}

    pyproject_path = pyproject_path or Path("pyproject.toml")

    if not pyproject_path.exists():
        return {}

    try:
        with pyproject_path.open("rb") as f:
            data = tomllib.load(f)

        tool_config = data.get("tool", {}).get("invariant_text", {})

        if tool_config:
            logger.debug(f"Loaded {len(tool_config)} settings from pyproject.toml")

        return tool_config

    except OSError as e:
        logger.warning(f"Could not load pyproject.toml: {e}")
        return {}
    except Exception as e:
        # tomllib.TOMLDecodeError and any other parsing errors
        logger.warning(f"Could not parse pyproject.toml: {e}")
        return {}


class PyProjectTomlSettingsSource(PydanticBaseSettingsSource):
    """
    A pydantic-settings source that loads configuration from pyproject.toml.
    """

    def get_field_value(self, field_name: str, field_info: Any) -> tuple[Any, str, bool]:
        """Not used in this implementation."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load and return configuration from pyproject.toml."""
        return load_pyproject_defaults()


class EngineSettings(BaseSettings):
    """
    Process-level settings: logging plus the default render options
    used by the command-line interface.
    """

    model_config = SettingsConfigDict(
        env_prefix="INVARIANT_TEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Default render options for the CLI
    null_string: str = Field(default="<null>", description="Text rendered for None")
    max_nesting_depth: int = Field(default=10, description="Depth budget for nested values")
    max_collection_items: int | None = Field(
        default=100, description="Items rendered per collection level (None = unlimited)"
    )
    show_collection_count: bool = Field(default=True, description="Append item counts")
    show_array_dimensions: bool = Field(
        default=False, description="Prefix multi-dimensional arrays with their shape"
    )
    time_span_format: TimeSpanStyle = Field(
        default=TimeSpanStyle.CONSTANT, description="Duration style: c, g or G"
    )

    # Monitoring and Logging
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    enable_rich_console: bool = Field(
        default=True, description="Enable rich console output (tables, tracebacks)"
    )

    # Log Rotation Configuration
    log_file: Path | None = Field(
        default=None,
        description="Path to application log file (set to None to disable file logging)",
    )
    log_max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Maximum log file size before rotation"  # 10MB
    )
    log_backup_count: int = Field(default=5, description="Number of backup log files to keep")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize the sources and their priority for loading configuration.

        Returns:
            Tuple of settings sources in priority order
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            PyProjectTomlSettingsSource(settings_cls),
            file_secret_settings,
        )

    @field_validator("max_nesting_depth")
    @classmethod
    def validate_max_nesting_depth(cls, v: int) -> int:
        """Ensure the depth budget is usable"""
        if v < 0:
            raise ValueError(f"max_nesting_depth must be >= 0, got {v}")
        if v > 200:
            logger.warning(
                f"Very high max_nesting_depth ({v}). "
                "Deeply nested or self-referential values may exhaust the stack."
            )
        return v

    @field_validator("max_collection_items")
    @classmethod
    def validate_max_collection_items(cls, v: int | None) -> int | None:
        """Ensure the breadth bound is non-negative"""
        if v is not None and v < 0:
            raise ValueError(f"max_collection_items must be >= 0 or unset, got {v}")
        return v

    @model_validator(mode="after")
    def validate_log_rotation(self) -> "EngineSettings":
        """Cross-field validation of log rotation settings"""
        if self.log_file is not None and self.log_max_bytes <= 0:
            raise ValueError(
                f"log_max_bytes must be positive when log_file is set, got {self.log_max_bytes}"
            )
        return self

    def to_render_options(self, **overrides: Any) -> RenderOptions:
        """
        Build render options from these settings.

        Args:
            **overrides: RenderOptions fields that take precedence

        Returns:
            Frozen RenderOptions instance
        """
        values: dict[str, Any] = {
            "null_string": self.null_string,
            "max_nesting_depth": self.max_nesting_depth,
            "max_collection_items": self.max_collection_items,
            "show_collection_count": self.show_collection_count,
            "show_array_dimensions": self.show_array_dimensions,
            "time_span_format": self.time_span_format.value,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RenderOptions(**values)

    def ensure_log_directory(self) -> None:
        """Ensure the log directory exists."""
        if self.log_file and self.log_file.parent:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


# Global settings instance
_settings: EngineSettings | None = None


def get_settings() -> EngineSettings:
    """
    Get the global settings instance.

    Returns:
        EngineSettings instance
    """
    global _settings
    if _settings is None:
        _settings = EngineSettings()
        _settings.ensure_log_directory()
    return _settings


def reset_settings() -> None:
    """Reset the global settings (mainly for testing)."""
    global _settings
    _settings = None
