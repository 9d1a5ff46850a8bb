"""HTTP mailbox poller adapter — implements MailboxPollerPort.

Delegates the actual mail transport to the ingestion service at
``settings.mail_poller_url``, which answers ``{"processed": <int>}``.
"""

from __future__ import annotations

import logging

import httpx

from supporthub.application.errors import MailboxPollingError
from supporthub.application.ports.mailbox_poller_port import MailboxPollerPort
from supporthub.config import settings

logger = logging.getLogger(__name__)


class HttpMailboxPollerAdapter(MailboxPollerPort):
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url if base_url is not None else settings.mail_poller_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.mail_poller_timeout_seconds
        self._transport = transport

    async def poll_mailbox(self, config_id: int) -> int:
        if not self._base_url:
            raise MailboxPollingError("MAIL_POLLER_URL is not configured")

        url = f"{self._base_url}/mailboxes/{config_id}/poll"
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
                response = await client.post(url)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            raise MailboxPollingError(
                f"Poller returned {e.response.status_code} for config {config_id}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise MailboxPollingError(f"Poller request failed for config {config_id}: {e}") from e

        processed = payload.get("processed") if isinstance(payload, dict) else None
        if not isinstance(processed, int):
            raise MailboxPollingError(f"Poller response for config {config_id} has no 'processed' count")

        logger.debug("Poller processed %d messages for config %s", processed, config_id)
        return processed
