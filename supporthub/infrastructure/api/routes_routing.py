"""Routing endpoints — evaluate a context, manage routing rules."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from supporthub.adapters.persistence.database import get_session
from supporthub.application.errors import (
    EntityNotFoundError,
    RoutingDataUnavailableError,
    RuleManagementError,
)
from supporthub.application.use_cases.evaluate_routing import EvaluateRoutingUseCase
from supporthub.application.use_cases.manage_routing_rules import (
    ManageRoutingRulesUseCase,
    RuleDefinition,
)
from supporthub.domain.entities.routing import RoutingContext, RoutingResult
from supporthub.domain.entities.routing_rule import RoutingRule
from supporthub.domain.value_objects.enums import (
    RuleMatchOperator,
    RuleMatchType,
    TicketPriority,
)
from supporthub.infrastructure.api.dependencies import (
    get_evaluate_routing_uc,
    get_manage_rules_uc,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["routing"])

# ── Request / Response schemas ──────────────────────────────────────


class RoutingContextIn(BaseModel):
    company_id: int
    subject: str = ""
    body: str = ""
    sender_domain: str | None = None
    issue_type: str | None = None
    system: str | None = None
    requester_email: str | None = None
    tags: list[str] = Field(default_factory=list)

    def to_domain(self) -> RoutingContext:
        return RoutingContext(
            company_id=self.company_id,
            subject=self.subject,
            body=self.body,
            sender_domain=self.sender_domain,
            issue_type=self.issue_type,
            system=self.system,
            requester_email=self.requester_email,
            tags=frozenset(self.tags),
        )


class RoutingResultOut(BaseModel):
    queue_id: int | None
    queue_name: str | None
    auto_assign_agent_id: int | None
    auto_set_priority: TicketPriority | None
    auto_add_tags: list[str]
    matched_rule_id: int | None
    matched_rule_name: str | None
    is_default_fallback: bool

    @classmethod
    def from_domain(cls, r: RoutingResult) -> RoutingResultOut:
        return cls(
            queue_id=r.queue_id,
            queue_name=r.queue_name,
            auto_assign_agent_id=r.auto_assign_agent_id,
            auto_set_priority=r.auto_set_priority,
            auto_add_tags=list(r.auto_add_tags),
            matched_rule_id=r.matched_rule_id,
            matched_rule_name=r.matched_rule_name,
            is_default_fallback=r.is_default_fallback,
        )


class RuleIn(BaseModel):
    queue_id: int
    name: str
    description: str | None = None
    match_type: RuleMatchType
    match_operator: RuleMatchOperator
    match_value: str
    is_active: bool = True
    auto_assign_agent_id: int | None = None
    auto_set_priority: TicketPriority | None = None
    auto_add_tags: str | None = None

    def to_definition(self) -> RuleDefinition:
        return RuleDefinition(**self.model_dump())


class RuleCreateIn(RuleIn):
    company_id: int


class RuleOut(BaseModel):
    id: int
    company_id: int
    queue_id: int
    queue_name: str | None
    name: str
    description: str | None
    match_type: RuleMatchType
    match_operator: RuleMatchOperator
    match_value: str
    sort_order: int
    is_active: bool
    auto_assign_agent_id: int | None
    auto_set_priority: TicketPriority | None
    auto_add_tags: str | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, r: RoutingRule) -> RuleOut:
        return cls(
            id=r.id,
            company_id=r.company_id,
            queue_id=r.queue_id,
            queue_name=r.queue_name,
            name=r.name,
            description=r.description,
            match_type=r.match_type,
            match_operator=r.match_operator,
            match_value=r.match_value,
            sort_order=r.sort_order,
            is_active=r.is_active,
            auto_assign_agent_id=r.auto_assign_agent_id,
            auto_set_priority=r.auto_set_priority,
            auto_add_tags=r.auto_add_tags,
            created_at=r.created_at,
            updated_at=r.updated_at,
        )


class ReorderIn(BaseModel):
    rule_ids_in_order: list[int]


# ── Evaluation ──────────────────────────────────────────────────────


@router.post("/routing/evaluate", response_model=RoutingResultOut)
async def evaluate_routing(
    body: RoutingContextIn,
    uc: EvaluateRoutingUseCase = Depends(get_evaluate_routing_uc),
):
    """Dry-run the routing engine for a ticket context."""
    try:
        result = await uc.execute(body.to_domain())
    except RoutingDataUnavailableError as e:
        logger.error("Routing evaluation failed for company %s: %s", body.company_id, e)
        raise HTTPException(status_code=503, detail="Routing data unavailable")
    return RoutingResultOut.from_domain(result)


# ── Rule management ─────────────────────────────────────────────────


@router.get("/routing-rules", response_model=list[RuleOut])
async def list_rules(
    company_id: int = Query(...),
    uc: ManageRoutingRulesUseCase = Depends(get_manage_rules_uc),
):
    return [RuleOut.from_domain(r) for r in await uc.list_rules(company_id)]


@router.get("/routing-rules/{rule_id}", response_model=RuleOut)
async def get_rule(rule_id: int, uc: ManageRoutingRulesUseCase = Depends(get_manage_rules_uc)):
    try:
        return RuleOut.from_domain(await uc.get_rule(rule_id))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/routing-rules", response_model=RuleOut, status_code=201)
async def create_rule(
    body: RuleCreateIn,
    uc: ManageRoutingRulesUseCase = Depends(get_manage_rules_uc),
    session: AsyncSession = Depends(get_session),
):
    definition = RuleDefinition(**body.model_dump(exclude={"company_id"}))
    try:
        rule = await uc.create_rule(body.company_id, definition)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuleManagementError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await session.commit()
    return RuleOut.from_domain(rule)


@router.put("/routing-rules/{rule_id}", response_model=RuleOut)
async def update_rule(
    rule_id: int,
    body: RuleIn,
    uc: ManageRoutingRulesUseCase = Depends(get_manage_rules_uc),
    session: AsyncSession = Depends(get_session),
):
    try:
        rule = await uc.update_rule(rule_id, body.to_definition())
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuleManagementError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await session.commit()
    return RuleOut.from_domain(rule)


@router.delete("/routing-rules/{rule_id}", status_code=204)
async def delete_rule(
    rule_id: int,
    uc: ManageRoutingRulesUseCase = Depends(get_manage_rules_uc),
    session: AsyncSession = Depends(get_session),
):
    try:
        await uc.delete_rule(rule_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await session.commit()
    return Response(status_code=204)


@router.post("/routing-rules/reorder", status_code=204)
async def reorder_rules(
    body: ReorderIn,
    company_id: int = Query(...),
    uc: ManageRoutingRulesUseCase = Depends(get_manage_rules_uc),
    session: AsyncSession = Depends(get_session),
):
    try:
        await uc.reorder_rules(company_id, body.rule_ids_in_order)
    except RuleManagementError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await session.commit()
    return Response(status_code=204)
