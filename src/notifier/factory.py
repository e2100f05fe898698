"""Convenience factory for wiring a notifier from settings."""

from __future__ import annotations

from pathlib import Path

from src.core.config import Settings
from src.notifier.bindings import ConfigBindingResolver
from src.notifier.exceptions import SetupError
from src.notifier.notifier import SlackNotifier
from src.notifier.secrets import SecretGetter


def read_template(uri: str | Path) -> str:
    """Read template text from a local path (``file://`` prefix allowed)."""
    path = str(uri)
    if not path:
        raise SetupError("no template configured (spec.notification.template.uri)")
    if "://" in path and not path.startswith("file://"):
        raise SetupError(f"unsupported template URI {path!r}")
    try:
        return Path(path.removeprefix("file://")).read_text(encoding="utf-8")
    except OSError as exc:
        raise SetupError(f"failed to read template {path!r}: {exc}") from exc


def create_notifier(
    settings: Settings,
    secret_getter: SecretGetter,
    template_text: str | None = None,
) -> SlackNotifier:
    """Build and set up a SlackNotifier from settings.

    The template is read from ``spec.notification.template.uri`` unless
    *template_text* is given.
    """
    if template_text is None:
        template_text = read_template(settings.spec.notification.template.uri)

    notifier = SlackNotifier(timeout_secs=settings.delivery_timeout_secs)
    notifier.setup(
        settings,
        template_text,
        secret_getter,
        ConfigBindingResolver(settings.spec.notification.params),
    )
    return notifier
