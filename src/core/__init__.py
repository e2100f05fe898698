"""Core module — config, types, logging."""

from src.core.config import (
    NotifierConfig,
    Settings,
    get_settings,
    load_settings,
    reset_settings,
)
from src.core.logging import setup_logging
from src.core.types import (
    BuildEvent,
    BuildStatus,
    GitSource,
    RepoSource,
    Source,
    StorageSource,
)

__all__ = [
    "BuildEvent",
    "BuildStatus",
    "GitSource",
    "NotifierConfig",
    "RepoSource",
    "Settings",
    "Source",
    "StorageSource",
    "get_settings",
    "load_settings",
    "reset_settings",
    "setup_logging",
]
