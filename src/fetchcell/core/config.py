# src/fetchcell/core/config.py
"""
Configuration schema and loading for fetchcell.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


class SourceSettings(BaseModel):
    """Resource retrieval configuration.

    The parent context resolves relative paths. It is either a directory on
    disk (files_root) or a base URL (files_base_url), never both. With
    neither configured, relative directives fail with a retrieval error.

    Example YAML:
        sources:
          timeout_seconds: 10
          files_root: ./notebook-files
    """

    model_config = {"frozen": True}

    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout for network retrieval",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Follow HTTP redirects when fetching URLs",
    )
    max_response_bytes: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Reject payloads larger than this many bytes",
    )
    files_root: Path | None = Field(
        default=None,
        description="Directory that relative paths resolve against",
    )
    files_base_url: str | None = Field(
        default=None,
        description="Base URL that relative paths resolve against",
    )

    @field_validator("files_base_url")
    @classmethod
    def validate_base_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"files_base_url must be an http(s) URL, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_single_parent_context(self) -> "SourceSettings":
        if self.files_root is not None and self.files_base_url is not None:
            raise ValueError("configure at most one of files_root and files_base_url")
        return self


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level",
    )
    json_output: bool = Field(
        default=False,
        description="Emit JSON lines instead of console output",
    )


class FetchCellSettings(BaseModel):
    """Top-level fetchcell configuration.

    All settings are validated and frozen after construction. Every field
    has a default, so FetchCellSettings() is a usable configuration.
    """

    model_config = {"frozen": True}

    sources: SourceSettings = Field(
        default_factory=SourceSettings,
        description="Resource retrieval configuration",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )
    namespace_api_name: str = Field(
        default="fetchcell",
        description="Namespace variable the notebook API object is bound to",
    )

    @field_validator("namespace_api_name")
    @classmethod
    def validate_api_name(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"namespace_api_name must be a valid identifier, got {v!r}")
        return v


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values.

    Unresolvable references are left as-is so validation reports them.
    """

    def _expand_string(value: str) -> str:
        def replacer(match: re.Match[str]) -> str:
            env_value = os.environ.get(match.group(1))
            if env_value is not None:
                return env_value
            if match.group(2) is not None:
                return match.group(2)
            return match.group(0)

        return _ENV_VAR_PATTERN.sub(replacer, value)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _expand_string(value)
        elif isinstance(value, dict):
            return {k: _expand_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [_expand_value(item) for item in value]
        else:
            return value

    return {k: _expand_value(v) for k, v in config.items()}


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value


def load_settings(config_path: Path) -> FetchCellSettings:
    """Load settings from a YAML file with environment variable overrides.

    Precedence, highest first:
    1. Environment variables (FETCHCELL_*, nested with __)
    2. Config file
    3. Pydantic defaults

    Example: FETCHCELL_SOURCES__TIMEOUT_SECONDS=5

    Relative files_root values are resolved against the config file's
    directory.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated FetchCellSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="FETCHCELL",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k: v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    raw_config = _lower_keys(raw_config)
    raw_config = _expand_env_vars(raw_config)

    sources = raw_config.get("sources")
    if isinstance(sources, dict) and sources.get("files_root"):
        files_root = Path(sources["files_root"])
        if not files_root.is_absolute():
            sources["files_root"] = (config_path.parent / files_root).resolve()

    return FetchCellSettings(**raw_config)
