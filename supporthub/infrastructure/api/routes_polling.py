"""Polling endpoint — run one mailbox polling pass on demand."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from supporthub.adapters.persistence.database import get_session
from supporthub.application.use_cases.poll_mailboxes import PollingSummary, PollMailboxesUseCase
from supporthub.infrastructure.api.dependencies import get_poll_mailboxes_uc

router = APIRouter(prefix="/polling", tags=["polling"])


@router.post("/run")
async def run_polling(
    uc: PollMailboxesUseCase = Depends(get_poll_mailboxes_uc),
    session: AsyncSession = Depends(get_session),
):
    """Poll every due mailbox configuration once."""
    summary = await uc.execute()
    await session.commit()
    return _summary_to_dict(summary)


def _summary_to_dict(s: PollingSummary) -> dict:
    return {
        "status": "ok" if s.failure_count == 0 else "partial",
        "configuration_count": s.configuration_count,
        "processed_total": s.processed_total,
        "failed": s.failure_count,
        "results": [
            {
                "configuration_id": o.configuration_id,
                "success": o.success,
                "processed": o.processed,
                "error": o.error,
            }
            for o in s.outcomes
        ],
    }
