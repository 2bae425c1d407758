"""Hierarchical configuration system for ansisgr.

Loads configuration from multiple sources in priority order:
1. Built-in defaults (in code)
2. Global config: ~/.config/ansisgr/config.toml
3. Project config: .ansisgr/config.toml (searched in CWD and parents)
4. Explicit config file (``--config``)
5. Environment variables: ANSISGR_* prefix
6. CLI overrides (passed as kwargs)
"""

from __future__ import annotations

import logging
import os
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ansisgr.constants import DEFAULT_CLASS_PREFIX, DEFAULT_LOG_LEVEL, GLOBAL_CONFIG, PROJECT_CONFIG
from ansisgr.core.parser import ParseMode

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class OutputKind(str, Enum):
    """Output produced by ``ansisgr render``."""

    RICH = "rich"
    HTML = "html"
    JSON = "json"
    TEXT = "text"


class GeneralConfig(BaseModel):
    """General settings."""

    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept standard logging level names, case-insensitively."""
        v = v.lower()
        if v not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(_LOG_LEVELS)}")
        return v


class ParseConfig(BaseModel):
    """Parser settings."""

    mode: ParseMode = ParseMode.LENIENT
    track_format: bool = True


class RenderConfig(BaseModel):
    """Rendering settings."""

    output: OutputKind = OutputKind.RICH
    class_prefix: str = DEFAULT_CLASS_PREFIX
    wrap: bool = True
    merge: bool = False


class StreamConfig(BaseModel):
    """Streaming input settings."""

    chunk_size: int = Field(default=0, ge=0)  # 0 = read whole input


class AnsiSgrConfig(BaseModel):
    """Root configuration model."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    parse: ParseConfig = Field(default_factory=ParseConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    stream: StreamConfig = Field(default_factory=StreamConfig)


def find_project_config() -> Path | None:
    """Walk up from CWD looking for .ansisgr/config.toml."""
    current = Path.cwd()

    for parent in [current, *current.parents]:
        config_path = parent / PROJECT_CONFIG
        if config_path.exists():
            return config_path

    return None


def _load_toml(path: Path) -> dict:
    """Load a TOML file.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML data as dict, or {} if the file is missing or unreadable
    """
    if not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load %s: %s", path, e)
        return {}


def _merge_dicts(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries into a new one."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes", "on")


# Environment variable -> (section, key, converter)
_ENV_MAPPINGS: dict[str, tuple[str, str, Any]] = {
    "ANSISGR_LOG_LEVEL": ("general", "log_level", str),
    "ANSISGR_PARSE_MODE": ("parse", "mode", str),
    "ANSISGR_TRACK_FORMAT": ("parse", "track_format", _parse_bool),
    "ANSISGR_OUTPUT": ("render", "output", str),
    "ANSISGR_CLASS_PREFIX": ("render", "class_prefix", str),
    "ANSISGR_WRAP": ("render", "wrap", _parse_bool),
    "ANSISGR_MERGE": ("render", "merge", _parse_bool),
    "ANSISGR_CHUNK_SIZE": ("stream", "chunk_size", int),
}


def _apply_env_vars(config: dict) -> dict:
    """Apply ANSISGR_* environment variables to config."""
    result = config.copy()

    for env_var, (section, key, convert) in _ENV_MAPPINGS.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        section_dict = dict(result.get(section, {}))
        section_dict[key] = convert(value)
        result[section] = section_dict

    return result


def load_config(config_path: str | Path | None = None, **cli_overrides: Any) -> AnsiSgrConfig:
    """Load configuration from all sources and merge them.

    Args:
        config_path: Extra TOML file layered over the global and project files
        **cli_overrides: Nested section dicts, e.g. ``parse={"mode": "strict"}``,
            or the flat key ``log_level``

    Returns:
        Validated AnsiSgrConfig instance

    Raises:
        pydantic.ValidationError: If a merged value is invalid

    Examples:
        >>> config = load_config()
        >>> config = load_config(render={"output": "html"})
    """
    config_dict: dict[str, Any] = {}

    config_dict = _merge_dicts(config_dict, _load_toml(GLOBAL_CONFIG))

    project_config_path = find_project_config()
    if project_config_path:
        config_dict = _merge_dicts(config_dict, _load_toml(project_config_path))

    if config_path:
        config_dict = _merge_dicts(config_dict, _load_toml(Path(config_path).expanduser()))

    config_dict = _apply_env_vars(config_dict)

    if cli_overrides:
        cli_config: dict[str, Any] = {}
        for key, value in cli_overrides.items():
            if key == "log_level":
                cli_config.setdefault("general", {})[key] = value
            else:
                cli_config[key] = value
        config_dict = _merge_dicts(config_dict, cli_config)

    return AnsiSgrConfig(**config_dict)
