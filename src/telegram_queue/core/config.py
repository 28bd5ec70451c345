"""Configuration system for telegram-queue.

This module implements the configuration schema using Pydantic for
validation, with support for ``${VARIABLE}`` environment variable resolution
and fail-fast validation with actionable error messages. Every setting has a
default, so running without a configuration file is valid.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# Matches ${VARIABLE_NAME} where VARIABLE_NAME contains upper-case letters, digits and underscores
ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Z0-9_]+)\}")

# Telegram Bot API limit for message text
DEFAULT_MAX_MESSAGE_LENGTH: Final[int] = 4096


class _StrictSection(BaseModel):
    """Base for configuration sections rejecting unknown keys."""

    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        extra="forbid",
        str_strip_whitespace=True,
        validate_default=True,
    )


class TelegramSettings(_StrictSection):
    """Settings applied to messages bound for Telegram."""

    max_message_length: Annotated[
        int,
        Field(
            ge=1,
            le=100_000,
            description="Maximum message length in characters before truncation",
        ),
    ] = DEFAULT_MAX_MESSAGE_LENGTH
    default_chat_id: Annotated[
        int | None,
        Field(
            description="Chat ID used when none is given on the command line",
        ),
    ] = None


class ApplicationConfig(_StrictSection):
    """Application-level settings."""

    log_level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "INFO"
    syslog_enabled: Annotated[
        bool,
        Field(
            description="Enable syslog integration",
        ),
    ] = False


class MainConfig(_StrictSection):
    """Top-level configuration container."""

    telegram: Annotated[
        TelegramSettings,
        Field(
            default_factory=TelegramSettings,
            description="Telegram message settings",
        ),
    ]
    application: Annotated[
        ApplicationConfig,
        Field(
            default_factory=ApplicationConfig,
            description="Application-level configuration",
        ),
    ]


class EnvironmentVariableError(Exception):
    """Exception raised when environment variable resolution fails.

    The message names the missing variable but never includes any value.
    """


class ConfigurationError(Exception):
    """Exception raised when configuration loading or validation fails."""


def resolve_env_var(value: str) -> str:
    """Resolve environment variable references in a string value.

    Args:
        value: String potentially containing ``${VARIABLE}`` references

    Returns:
        String with environment variables resolved

    Raises:
        EnvironmentVariableError: If a referenced environment variable is not set

    Examples:
        >>> os.environ["TEST_VAR"] = "42"
        >>> resolve_env_var("${TEST_VAR}")
        '42'
        >>> resolve_env_var("no variables here")
        'no variables here'
    """

    def replace_match(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)

        if env_value is None:
            msg = (
                f"Required environment variable '{var_name}' is not set. "
                f"Please set this variable before starting the application."
            )
            raise EnvironmentVariableError(msg)

        return env_value

    return ENV_VAR_PATTERN.sub(replace_match, value)


def resolve_env_vars_in_dict(data: Mapping[str, object]) -> dict[str, object]:
    """Recursively resolve environment variables in a dictionary.

    Nested dictionaries and lists are traversed; non-string values are kept
    as-is. Intended for raw YAML data before Pydantic validation.

    Args:
        data: Dictionary potentially containing environment variable references

    Returns:
        New dictionary with environment variables resolved

    Raises:
        EnvironmentVariableError: If a referenced environment variable is missing
    """
    return {key: _resolve_value(value) for key, value in data.items()}


def _resolve_value(value: object) -> object:
    if isinstance(value, str):
        return resolve_env_var(value)
    if isinstance(value, dict):
        return resolve_env_vars_in_dict(value)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
    if isinstance(value, list):
        return [_resolve_value(item) for item in value]  # pyright: ignore[reportUnknownVariableType]  # YAML boundary
    return value


def _read_yaml(config_path: Path) -> dict[str, object]:
    """Read a YAML mapping from ``config_path``; an empty file reads as ``{}``."""
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path} (create it or omit --config)")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {config_path}: {e}") from e

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        msg = f"Expected YAML dictionary at the top of {config_path}, got {type(raw_data).__name__}"
        raise ConfigurationError(msg)
    return raw_data  # pyright: ignore[reportUnknownVariableType]  # YAML boundary


def _describe_validation_error(config_path: Path, error: ValidationError) -> str:
    lines = [f"Configuration validation failed for {config_path}:"]
    for err in error.errors():
        field_path = " → ".join(str(loc) for loc in err["loc"])
        lines.append(f"  {field_path}: {err['msg']}")
    return "\n".join(lines)


def load_config(config_path: Path | None) -> MainConfig:
    """Load and validate configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file, or None for defaults

    Returns:
        Validated MainConfig instance

    Raises:
        ConfigurationError: If the file cannot be loaded, references a missing
            environment variable, or fails validation
    """
    if config_path is None:
        return MainConfig()

    raw_data = _read_yaml(config_path)

    try:
        resolved_data = resolve_env_vars_in_dict(raw_data)
    except EnvironmentVariableError as e:
        raise ConfigurationError(f"{config_path}: {e}") from e

    try:
        return MainConfig.model_validate(resolved_data)
    except ValidationError as e:
        raise ConfigurationError(_describe_validation_error(config_path, e)) from e
