"""Webhook delivery over aiohttp."""

from __future__ import annotations

import aiohttp
import structlog

from src.notifier.blocks import WebhookMessage
from src.notifier.exceptions import DeliveryError

logger = structlog.get_logger(__name__)


class WebhookSender:
    """POSTs webhook messages to one Slack incoming-webhook URL."""

    def __init__(self, webhook_url: str, timeout_secs: float = 10.0) -> None:
        self._webhook_url = webhook_url
        self._timeout = aiohttp.ClientTimeout(total=timeout_secs)
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def send(self, msg: WebhookMessage) -> None:
        """Deliver *msg*.

        Raises:
            DeliveryError: on a non-2xx response or a transport error.
        """
        payload = msg.to_payload()
        try:
            session = self._get_session()
            async with session.post(self._webhook_url, json=payload) as resp:
                if 200 <= resp.status < 300:
                    return
                body = await resp.text()
        except (aiohttp.ClientError, TimeoutError) as exc:
            logger.warning("slack_webhook_error", error=str(exc))
            raise DeliveryError(f"failed to post Slack webhook: {exc}") from exc

        logger.warning("slack_webhook_failed", status=resp.status, body=body[:200])
        raise DeliveryError(
            f"Slack webhook returned {resp.status}: {body[:200]}",
            status=resp.status,
        )

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
