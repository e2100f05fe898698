"""Exception hierarchy for the Slack notifier.

Every failure carries the pipeline ``stage`` it came from so the host can
tell a bad template apart from bad data or a dead webhook.
"""

from __future__ import annotations


class NotifierError(Exception):
    """Base exception for all notifier errors."""

    stage = "notify"


class SetupError(NotifierError):
    """Bad filter, missing secret or unparsable template. Notifier never activates."""

    stage = "setup"


class TemplateParseError(SetupError):
    """Template text failed to parse or references an unknown helper."""


class FilterError(NotifierError):
    """The event filter raised while being evaluated."""

    stage = "filter"


class ResolutionError(NotifierError):
    """The binding resolver failed for this event."""

    stage = "resolve"


class RenderError(NotifierError):
    """Template execution failed against a specific event."""

    stage = "render"


class DocumentParseError(NotifierError):
    """Rendered output is not a valid JSON array of Block Kit blocks."""

    stage = "parse"


class DeliveryError(NotifierError):
    """The webhook POST failed."""

    stage = "delivery"

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
