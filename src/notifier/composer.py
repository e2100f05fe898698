"""Turns a build event into a coloured Block Kit webhook message.

Pipeline per event: filter → resolve → render → parse → colourise.
Each stage fails with its own exception type; nothing is retried and no
partial message is ever returned.
"""

from __future__ import annotations

import structlog

from src.core.types import BuildEvent, BuildStatus
from src.notifier.bindings import BindingResolver
from src.notifier.blocks import Attachment, WebhookMessage, parse_blocks
from src.notifier.exceptions import FilterError, ResolutionError
from src.notifier.filters import EventFilter
from src.notifier.templating import BlockKitTemplate, TemplateView

logger = structlog.get_logger(__name__)

SUCCESS_COLOR = "#22bb33"
FAILURE_COLOR = "#bb2124"
NEUTRAL_COLOR = "#f0ad4e"

_STATUS_COLORS: dict[BuildStatus, str] = {
    BuildStatus.STATUS_UNKNOWN: NEUTRAL_COLOR,
    BuildStatus.PENDING: NEUTRAL_COLOR,
    BuildStatus.QUEUED: NEUTRAL_COLOR,
    BuildStatus.WORKING: NEUTRAL_COLOR,
    BuildStatus.SUCCESS: SUCCESS_COLOR,
    BuildStatus.FAILURE: FAILURE_COLOR,
    BuildStatus.INTERNAL_ERROR: FAILURE_COLOR,
    BuildStatus.TIMEOUT: FAILURE_COLOR,
    BuildStatus.CANCELLED: NEUTRAL_COLOR,
    BuildStatus.EXPIRED: NEUTRAL_COLOR,
}


def status_color(status: BuildStatus) -> str:
    """Attachment colour for a build status."""
    return _STATUS_COLORS.get(status, NEUTRAL_COLOR)


def compose(template: BlockKitTemplate, view: TemplateView) -> WebhookMessage:
    """Render *template* against *view* and wrap the blocks in one attachment.

    Raises:
        RenderError: template execution failed.
        DocumentParseError: the rendered text is not a JSON array of blocks.
    """
    rendered = template.render(view)
    blocks = parse_blocks(rendered)
    color = status_color(view.build.status)
    return WebhookMessage(attachments=(Attachment(color=color, blocks=blocks),))


class MessageComposer:
    """Runs the full pipeline for one event at a time.

    Holds only collaborators fixed at setup; the per-event view is passed
    down explicitly so one instance can serve concurrent events.
    """

    def __init__(
        self,
        event_filter: EventFilter,
        resolver: BindingResolver,
        template: BlockKitTemplate,
    ) -> None:
        self._filter = event_filter
        self._resolver = resolver
        self._template = template

    def run(self, event: BuildEvent) -> WebhookMessage | None:
        """Compose the message for *event*, or return None if it is filtered out."""
        if not self._apply_filter(event):
            logger.debug("notification_suppressed", build_id=event.id, status=event.status)
            return None

        try:
            params = self._resolver.resolve(event)
        except ResolutionError:
            raise
        except Exception as exc:
            raise ResolutionError(f"failed to resolve bindings: {exc}") from exc

        view = TemplateView(build=event, params=params)
        return compose(self._template, view)

    def _apply_filter(self, event: BuildEvent) -> bool:
        try:
            return bool(self._filter.apply(event))
        except FilterError:
            raise
        except Exception as exc:
            raise FilterError(f"failed to evaluate event filter: {exc}") from exc
