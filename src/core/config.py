"""Pydantic settings loaded from YAML configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

_settings: Settings | None = None

_DEFAULT_CONFIG_PATH = Path("config/notifier.yaml")


class _AliasedModel(BaseModel):
    """Accepts both the camelCase keys of the notifier YAML and field names."""

    model_config = {"populate_by_name": True}


class SecretConfig(_AliasedModel):
    """A named secret; ``value`` is the resource name handed to the secret getter."""

    name: str
    value: str


class TemplateConfig(_AliasedModel):
    """Where the Block Kit template lives."""

    type: str = "jinja2"
    uri: str = ""


class NotificationConfig(_AliasedModel):
    """Filter, params, delivery block and template for one notifier."""

    filter: str = ""
    params: dict[str, str] = Field(default_factory=dict)
    delivery: dict[str, Any] = Field(default_factory=dict)
    template: TemplateConfig = TemplateConfig()


class NotifierSpec(_AliasedModel):
    """The ``spec`` section of the notifier config."""

    notification: NotificationConfig = NotificationConfig()
    secrets: list[SecretConfig] = Field(default_factory=list)


class NotifierMetadata(_AliasedModel):
    name: str = ""


class NotifierConfig(_AliasedModel):
    """Cloud Build notifier configuration document."""

    api_version: str = Field(default="cloud-build-notifiers/v1", alias="apiVersion")
    kind: str = "SlackNotifier"
    metadata: NotifierMetadata = NotifierMetadata()
    spec: NotifierSpec = NotifierSpec()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"


class Settings(NotifierConfig):
    """Root settings container: the notifier document plus process settings."""

    logging: LoggingConfig = LoggingConfig()
    delivery_timeout_secs: float = 10.0


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from a YAML file and cache globally.

    Args:
        path: Path to YAML config. Defaults to config/notifier.yaml.

    Returns:
        Parsed Settings instance.
    """
    global _settings  # noqa: PLW0603

    config_path = Path(path) if path else _DEFAULT_CONFIG_PATH

    data: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f)
            if isinstance(raw, dict):
                data = raw

    _settings = Settings(**data)
    return _settings


def get_settings() -> Settings:
    """Return the cached settings, loading defaults if not yet loaded."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Reset the cached settings (useful for testing)."""
    global _settings  # noqa: PLW0603
    _settings = None
