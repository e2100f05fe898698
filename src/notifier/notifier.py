"""Slack notifier — the plugin surface the host drives."""

from __future__ import annotations

import structlog

from src.core.config import NotifierConfig
from src.core.types import BuildEvent
from src.notifier.bindings import BindingResolver
from src.notifier.composer import MessageComposer
from src.notifier.delivery import WebhookSender
from src.notifier.exceptions import SetupError
from src.notifier.filters import ExpressionFilter
from src.notifier.secrets import SecretGetter, find_secret_resource_name, get_secret_ref
from src.notifier.templating import BlockKitTemplate

logger = structlog.get_logger(__name__)

WEBHOOK_URL_SECRET_NAME = "webhookUrl"


class SlackNotifier:
    """Posts a Block Kit message to a Slack webhook for each matching build.

    ``setup`` runs once; afterwards the instance only holds read-only state
    and ``notify`` may be awaited concurrently for independent events.
    """

    def __init__(self, timeout_secs: float = 10.0) -> None:
        self._timeout_secs = timeout_secs
        self._composer: MessageComposer | None = None
        self._sender: WebhookSender | None = None

    def setup(
        self,
        config: NotifierConfig,
        template_text: str,
        secret_getter: SecretGetter,
        binding_resolver: BindingResolver,
    ) -> None:
        """Build the filter, fetch the webhook URL and parse the template.

        Raises:
            SetupError: on any failure; the notifier stays inactive.
        """
        if self._composer is not None:
            raise SetupError("notifier is already set up")

        notification = config.spec.notification
        event_filter = ExpressionFilter(notification.filter)

        ref = get_secret_ref(notification.delivery, WEBHOOK_URL_SECRET_NAME)
        resource = find_secret_resource_name(config.spec.secrets, ref)
        try:
            webhook_url = secret_getter.get_secret(resource)
        except Exception as exc:
            raise SetupError(f"failed to get webhook URL secret for ref {ref!r}: {exc}") from exc

        template = BlockKitTemplate.parse(template_text)

        self._sender = WebhookSender(webhook_url, timeout_secs=self._timeout_secs)
        self._composer = MessageComposer(event_filter, binding_resolver, template)
        logger.info(
            "notifier_ready",
            name=config.metadata.name,
            filter=event_filter.expression or None,
        )

    async def notify(self, event: BuildEvent) -> bool:
        """Compose and deliver the message for *event*.

        Returns:
            True if a message was delivered, False if the filter suppressed it.

        Raises:
            NotifierError: tagged with the failing stage.
        """
        if self._composer is None or self._sender is None:
            raise SetupError("notifier is not set up")

        msg = self._composer.run(event)
        if msg is None:
            return False

        logger.info("sending_slack_webhook", build_id=event.id, status=event.status.value)
        await self._sender.send(msg)
        return True

    async def close(self) -> None:
        if self._sender is not None:
            await self._sender.close()
