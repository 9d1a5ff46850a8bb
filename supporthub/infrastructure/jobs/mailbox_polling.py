"""Background loop running one mailbox polling pass per tick."""

from __future__ import annotations

import asyncio
import logging

from supporthub.adapters.persistence.database import async_session_factory
from supporthub.infrastructure.api.dependencies import build_poll_mailboxes_uc

logger = logging.getLogger(__name__)


async def run_polling_pass() -> None:
    async with async_session_factory() as session:
        summary = await build_poll_mailboxes_uc(session).execute()
        await session.commit()
    if summary.failure_count:
        logger.warning(
            "Polling pass finished with %d failed configuration(s)", summary.failure_count
        )


async def polling_loop(tick_seconds: int) -> None:
    """Poll forever; a failed pass is logged and the next tick runs anyway."""
    logger.info("Mailbox polling job started (tick=%ds)", tick_seconds)
    while True:
        try:
            await run_polling_pass()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Mailbox polling pass failed")
        await asyncio.sleep(tick_seconds)
