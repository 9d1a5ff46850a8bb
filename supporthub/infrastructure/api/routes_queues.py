"""Queue endpoints — list, create and update the queues rules point at."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from supporthub.adapters.persistence.database import get_session
from supporthub.application.errors import EntityNotFoundError, RuleManagementError
from supporthub.application.use_cases.manage_queues import ManageQueuesUseCase
from supporthub.domain.entities.queue import Queue
from supporthub.infrastructure.api.dependencies import get_manage_queues_uc

router = APIRouter(prefix="/queues", tags=["queues"])


class QueueCreateIn(BaseModel):
    company_id: int
    name: str
    description: str | None = None
    is_default: bool = False


class QueueUpdateIn(BaseModel):
    name: str
    description: str | None = None
    is_default: bool = False
    is_active: bool = True


class QueueOut(BaseModel):
    id: int
    company_id: int
    name: str
    description: str | None
    is_default: bool
    is_active: bool
    created_at: datetime | None

    @classmethod
    def from_domain(cls, q: Queue) -> QueueOut:
        return cls(
            id=q.id,
            company_id=q.company_id,
            name=q.name,
            description=q.description,
            is_default=q.is_default,
            is_active=q.is_active,
            created_at=q.created_at,
        )


@router.get("", response_model=list[QueueOut])
async def list_queues(
    company_id: int = Query(...),
    uc: ManageQueuesUseCase = Depends(get_manage_queues_uc),
):
    return [QueueOut.from_domain(q) for q in await uc.list_queues(company_id)]


@router.post("", response_model=QueueOut, status_code=201)
async def create_queue(
    body: QueueCreateIn,
    uc: ManageQueuesUseCase = Depends(get_manage_queues_uc),
    session: AsyncSession = Depends(get_session),
):
    try:
        queue = await uc.create_queue(body.company_id, body.name, body.description, body.is_default)
    except RuleManagementError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await session.commit()
    return QueueOut.from_domain(queue)


@router.put("/{queue_id}", response_model=QueueOut)
async def update_queue(
    queue_id: int,
    body: QueueUpdateIn,
    uc: ManageQueuesUseCase = Depends(get_manage_queues_uc),
    session: AsyncSession = Depends(get_session),
):
    try:
        queue = await uc.update_queue(
            queue_id, body.name, body.description, body.is_default, body.is_active
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuleManagementError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await session.commit()
    return QueueOut.from_domain(queue)


@router.delete("/{queue_id}", status_code=204)
async def delete_queue(
    queue_id: int,
    uc: ManageQueuesUseCase = Depends(get_manage_queues_uc),
    session: AsyncSession = Depends(get_session),
):
    try:
        await uc.delete_queue(queue_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuleManagementError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await session.commit()
    return Response(status_code=204)
