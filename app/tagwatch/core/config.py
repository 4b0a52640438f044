"""Client configuration file I/O.

This module provides functions for loading and saving the tagwatch
config.toml with validation through the Pydantic models.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from tagwatch.core.paths import get_config_path
from tagwatch.models.config import DEFAULT_WEBHOOK_TIMEOUT, Config

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the config content is invalid."""


def load_config(path: Path | None = None) -> Config:
    """Load and validate the client configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated Config object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return config


def load_config_or_default(path: Path | None = None) -> Config:
    """Load the configuration, falling back to defaults when the file is absent.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded Config, or the default Config if no file exists.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file found, using defaults")
        return Config()


def save_config(config: Config, path: Path | None = None) -> Path:
    """Save the configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        config: The Config object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: Config) -> dict[str, Any]:
    """Convert a Config to a dictionary suitable for TOML serialization.

    Unset optional values are left out to keep the file clean.

    Args:
        config: The Config object to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, Any] = {
        "client": {"grpc_authority": config.client.grpc_authority},
    }

    meta = config.meta.model_dump(exclude_none=True)
    if meta:
        result["meta"] = meta

    webhook = config.notif.webhook
    if webhook is not None:
        webhook_data: dict[str, Any] = {"endpoint": webhook.endpoint}
        if webhook.timeout != DEFAULT_WEBHOOK_TIMEOUT:
            webhook_data["timeout"] = webhook.timeout
        if webhook.headers:
            webhook_data["headers"] = dict(webhook.headers)
        result["notif"] = {"webhook": webhook_data}

    return result
