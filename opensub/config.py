from dataclasses import dataclass, replace
from typing import Any

import yaml

from opensub.constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_LANGUAGE,
    DEFAULT_RESULT_LIMIT,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from opensub.errors import ConfigError


@dataclass(frozen=True)
class Settings:
    """Effective settings for a single run."""

    user_agent: str = DEFAULT_USER_AGENT
    language: str = DEFAULT_LANGUAGE
    limit: int = DEFAULT_RESULT_LIMIT
    timeout: int = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES


def load_config(path: str = DEFAULT_CONFIG_PATH) -> dict[str, Any] | None:
    """Loads the configuration from a YAML file."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return None
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def load_settings(path: str = DEFAULT_CONFIG_PATH) -> Settings:
    """Builds settings from the defaults overlaid with the `settings` section of the config file."""
    config_data = load_config(path) or {}
    section = config_data.get("settings") or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'settings' in {path} must be a mapping")

    defaults = Settings()

    def value(key: str) -> Any:
        # A null value (`language: ~`) means "not set"
        found = section.get(key)
        return getattr(defaults, key) if found is None else found

    try:
        settings = replace(
            defaults,
            user_agent=str(value("user_agent")).strip(),
            language=str(value("language")).strip(),
            limit=int(value("limit")),
            timeout=int(value("timeout")),
            retries=int(value("retries")),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in {path}: {e}") from e

    if not settings.user_agent:
        raise ConfigError(f"'user_agent' in {path} must not be empty")
    if not settings.language:
        raise ConfigError(f"'language' in {path} must not be empty")
    if settings.limit < 1:
        raise ConfigError(f"'limit' in {path} must be at least 1, got {settings.limit}")
    if settings.timeout <= 0:
        raise ConfigError(f"'timeout' in {path} must be positive, got {settings.timeout}")
    if settings.retries < 1:
        raise ConfigError(f"'retries' in {path} must be at least 1, got {settings.retries}")
    return settings
