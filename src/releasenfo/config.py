"""Configuration management for releasenfo."""

import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, TypeAdapter, field_validator

CONFIG_ENV_VAR = "RELEASENFO_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/releasenfo/config.yaml")

# Environment variables consulted between command-line flags and the config file
ENV_NOTES = "RELEASENFO_NOTES"
ENV_SOURCE = "RELEASENFO_SOURCE"
ENV_USE_FILENAME = "RELEASENFO_USE_FILENAME"
ENV_KEEP_CASE = "RELEASENFO_KEEPCASE"
ENV_TMDB_API_KEY = "RELEASENFO_TMDB_API_KEY"


class DefaultsConfig(BaseModel):
    """Defaults for release options not given on the command line."""

    notes: str = Field(default="none", description="Notes field of the report")
    source: Optional[str] = Field(default=None, description="Default source platform")
    use_filename: bool = Field(
        default=False, description="Use the file name instead of the directory as release name"
    )
    keep_case: bool = Field(default=False, description="Keep original case of the NFO file name")


class TMDBConfig(BaseModel):
    """TMDB API configuration."""

    api_key: Optional[str] = Field(default=None, description="TMDB API key")
    base_url: str = Field(default="https://api.themoviedb.org/3", description="TMDB API base URL")
    timeout_seconds: float = Field(default=10.0, description="Request timeout")


class TVMazeConfig(BaseModel):
    """TVmaze API configuration."""

    base_url: str = Field(default="https://api.tvmaze.com", description="TVmaze API base URL")
    timeout_seconds: float = Field(default=10.0, description="Request timeout")


class ProbeConfig(BaseModel):
    """Media probe configuration."""

    binary: str = Field(default="mediainfo", description="mediainfo executable")
    timeout_seconds: int = Field(default=30, description="Timeout per mediainfo call")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    format: str = Field(default="text", description="Log format (json or text)")
    level: str = Field(default="warning", description="Log level")
    output: Optional[str] = Field(default=None, description="Optional log file path")

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        if v.lower() not in ("debug", "info", "warning", "error", "critical"):
            raise ValueError("Invalid log level")
        return v.lower()


class ReleaseOptions(BaseModel):
    """Release options after flag, environment and config-file resolution."""

    notes: str
    source: Optional[str] = None
    use_filename: bool = False
    keep_case: bool = False
    tmdb_api_key: Optional[str] = None


def resolve_option(
    flag: Any,
    env_var: str,
    config_value: Any,
    default: Any = None,
    cast: type = str,
) -> Any:
    """Resolve one setting: flag > environment variable > config file > default.

    Args:
        flag: Value given on the command line (None if not given)
        env_var: Name of the environment variable to consult
        config_value: Value from the config file (None if not set)
        default: Built-in default
        cast: Type the environment string is validated into

    Returns:
        The first value that is set
    """
    if flag is not None:
        return flag

    env_value = os.environ.get(env_var)
    if env_value is not None and env_value != "":
        return TypeAdapter(cast).validate_python(env_value)

    if config_value is not None:
        return config_value

    return default


class Config(BaseModel):
    """Main configuration model."""

    defaults: DefaultsConfig = Field(
        default_factory=DefaultsConfig, description="Release option defaults"
    )
    tmdb: TMDBConfig = Field(default_factory=TMDBConfig, description="TMDB configuration")
    tvmaze: TVMazeConfig = Field(
        default_factory=TVMazeConfig, description="TVmaze configuration"
    )
    probe: ProbeConfig = Field(default_factory=ProbeConfig, description="Probe configuration")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)

        if raw_config is None:
            raw_config = {}

        # Substitute environment variables
        raw_config = cls._substitute_env_vars(raw_config)

        return cls(**raw_config)

    @staticmethod
    def _substitute_env_vars(obj: Any) -> Any:
        """Recursively substitute environment variables in configuration.

        Replaces ${VAR_NAME} with os.environ['VAR_NAME'].

        Args:
            obj: Configuration object (dict, list, str, etc.)

        Returns:
            Object with environment variables substituted
        """
        if isinstance(obj, dict):
            return {key: Config._substitute_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [Config._substitute_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            pattern = r"\$\{([^}]+)\}"

            def replace_var(match):
                var_name = match.group(1)
                value = os.environ.get(var_name)
                if value is None:
                    raise ValueError(
                        f"Environment variable '{var_name}' not found "
                        f"(referenced in configuration)"
                    )
                return value

            return re.sub(pattern, replace_var, obj)
        else:
            return obj

    @classmethod
    def from_defaults(cls) -> "Config":
        """Create configuration with default values."""
        return cls()

    def resolve_release_options(
        self,
        notes: Optional[str] = None,
        source: Optional[str] = None,
        use_filename: Optional[bool] = None,
        keep_case: Optional[bool] = None,
    ) -> ReleaseOptions:
        """Resolve release options against environment and config file.

        Arguments are the command-line values, None when not given.

        Returns:
            ReleaseOptions with every layer applied
        """
        return ReleaseOptions(
            notes=resolve_option(notes, ENV_NOTES, self.defaults.notes, "none"),
            source=resolve_option(source, ENV_SOURCE, self.defaults.source),
            use_filename=resolve_option(
                use_filename, ENV_USE_FILENAME, self.defaults.use_filename, False, bool
            ),
            keep_case=resolve_option(
                keep_case, ENV_KEEP_CASE, self.defaults.keep_case, False, bool
            ),
            tmdb_api_key=resolve_option(None, ENV_TMDB_API_KEY, self.tmdb.api_key),
        )


def default_config_path() -> Optional[Path]:
    """Config file used when none is given explicitly, if one exists."""
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        return Path(env_path)

    path = DEFAULT_CONFIG_PATH.expanduser()
    if path.is_file():
        return path
    return None


def load_config(path: Optional[str | Path] = None) -> Config:
    """Load configuration from file or use defaults.

    Args:
        path: Optional path to configuration file. If None, the file named by
            $RELEASENFO_CONFIG or ~/.config/releasenfo/config.yaml is used
            when present.

    Returns:
        Config instance
    """
    if path is None:
        path = default_config_path()

    if path is None:
        return Config.from_defaults()

    return Config.from_yaml(path)
