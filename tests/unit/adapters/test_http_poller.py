"""Tests for HttpMailboxPollerAdapter using httpx.MockTransport."""

import httpx
import pytest

from supporthub.adapters.mailbox.http_poller_adapter import HttpMailboxPollerAdapter
from supporthub.application.errors import MailboxPollingError


def _adapter(handler, base_url="http://poller.local/") -> HttpMailboxPollerAdapter:
    return HttpMailboxPollerAdapter(
        base_url=base_url, timeout=1.0, transport=httpx.MockTransport(handler)
    )


@pytest.mark.asyncio
async def test_poll_returns_processed_count():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, str(request.url)))
        return httpx.Response(200, json={"processed": 4})

    assert await _adapter(handler).poll_mailbox(7) == 4
    assert seen == [("POST", "http://poller.local/mailboxes/7/poll")]


@pytest.mark.asyncio
async def test_http_error_status_raises():
    adapter = _adapter(lambda request: httpx.Response(502, text="bad gateway"))
    with pytest.raises(MailboxPollingError, match="502"):
        await adapter.poll_mailbox(1)


@pytest.mark.asyncio
async def test_transport_failure_raises():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(MailboxPollingError):
        await _adapter(handler).poll_mailbox(1)


@pytest.mark.asyncio
async def test_non_json_body_raises():
    adapter = _adapter(lambda request: httpx.Response(200, text="ok"))
    with pytest.raises(MailboxPollingError):
        await adapter.poll_mailbox(1)


@pytest.mark.asyncio
async def test_missing_count_raises():
    adapter = _adapter(lambda request: httpx.Response(200, json={"status": "done"}))
    with pytest.raises(MailboxPollingError):
        await adapter.poll_mailbox(1)


@pytest.mark.asyncio
async def test_unconfigured_url_raises():
    adapter = _adapter(lambda request: httpx.Response(200, json={"processed": 1}), base_url="")
    with pytest.raises(MailboxPollingError, match="not configured"):
        await adapter.poll_mailbox(1)
