"""SQLAlchemy repository implementations."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from supporthub.adapters.persistence.models import (
    EmailConfigurationModel,
    QueueModel,
    RoutingRuleModel,
)
from supporthub.application.errors import RoutingDataUnavailableError
from supporthub.application.ports.email_configuration_repo import EmailConfigurationRepository
from supporthub.application.ports.queue_repo import QueueRepository
from supporthub.application.ports.routing_rule_repo import RoutingRuleRepository
from supporthub.domain.entities.email_configuration import EmailConfiguration
from supporthub.domain.entities.queue import Queue
from supporthub.domain.entities.routing_rule import RoutingRule
from supporthub.domain.value_objects.enums import (
    RuleMatchOperator,
    RuleMatchType,
    TicketPriority,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# ─── Mappers ─────────────────────────────────────────────────────────


def _parse_enum(enum_cls: type[E], raw: str | None) -> E | None:
    """Decode a stored enum value; unknown values come back as None."""
    if raw is None:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        return None


def _queue_to_domain(m: QueueModel) -> Queue:
    return Queue(
        id=m.id,
        company_id=m.company_id,
        name=m.name,
        description=m.description,
        is_default=m.is_default,
        is_active=m.is_active,
        is_deleted=m.is_deleted,
        created_at=m.created_at,
        updated_at=m.updated_at,
    )


def _rule_to_domain(m: RoutingRuleModel, queue_name: str | None = None) -> RoutingRule | None:
    match_type = _parse_enum(RuleMatchType, m.match_type)
    match_operator = _parse_enum(RuleMatchOperator, m.match_operator)
    if match_type is None or match_operator is None:
        # A rule we cannot interpret can never match
        logger.warning(
            "Routing rule %s has unsupported match type/operator %s/%s, skipping",
            m.id, m.match_type, m.match_operator,
        )
        return None
    return RoutingRule(
        id=m.id,
        company_id=m.company_id,
        queue_id=m.queue_id,
        name=m.name,
        description=m.description,
        match_type=match_type,
        match_operator=match_operator,
        match_value=m.match_value,
        sort_order=m.sort_order,
        is_active=m.is_active,
        is_deleted=m.is_deleted,
        auto_assign_agent_id=m.auto_assign_agent_id,
        auto_set_priority=_parse_enum(TicketPriority, m.auto_set_priority),
        auto_add_tags=m.auto_add_tags,
        queue_name=queue_name,
        created_at=m.created_at,
        updated_at=m.updated_at,
    )


def _rules_to_domain(models) -> list[RoutingRule]:
    rules = (_rule_to_domain(m, m.queue.name if m.queue else None) for m in models)
    return [r for r in rules if r is not None]


def _email_configuration_to_domain(m: EmailConfigurationModel) -> EmailConfiguration:
    return EmailConfiguration(
        id=m.id,
        company_id=m.company_id,
        shared_mailbox_address=m.shared_mailbox_address,
        display_name=m.display_name,
        is_active=m.is_active,
        is_deleted=m.is_deleted,
        polling_interval_minutes=m.polling_interval_minutes,
        last_polled_at=m.last_polled_at,
        auto_create_tickets=m.auto_create_tickets,
        default_priority=_parse_enum(TicketPriority, m.default_priority) or TicketPriority.MEDIUM,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlRoutingRuleRepository(RoutingRuleRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def list_active_for_company(self, company_id: int) -> list[RoutingRule]:
        try:
            result = await self._s.execute(
                select(RoutingRuleModel)
                .options(joinedload(RoutingRuleModel.queue))
                .where(
                    RoutingRuleModel.company_id == company_id,
                    RoutingRuleModel.is_active.is_(True),
                    RoutingRuleModel.is_deleted.is_(False),
                )
                .order_by(RoutingRuleModel.sort_order, RoutingRuleModel.id)
            )
        except (SQLAlchemyError, OSError) as e:
            raise RoutingDataUnavailableError(f"Routing rules unavailable: {e}") from e
        return _rules_to_domain(result.scalars())

    async def list_for_company(self, company_id: int) -> list[RoutingRule]:
        result = await self._s.execute(
            select(RoutingRuleModel)
            .options(joinedload(RoutingRuleModel.queue))
            .where(
                RoutingRuleModel.company_id == company_id,
                RoutingRuleModel.is_deleted.is_(False),
            )
            .order_by(RoutingRuleModel.sort_order, RoutingRuleModel.id)
        )
        return _rules_to_domain(result.scalars())

    async def get_by_id(self, rule_id: int) -> RoutingRule | None:
        m = await self._s.get(
            RoutingRuleModel, rule_id, options=[joinedload(RoutingRuleModel.queue)]
        )
        if m is None:
            return None
        return _rule_to_domain(m, m.queue.name if m.queue else None)

    async def max_sort_order(self, company_id: int) -> int | None:
        result = await self._s.execute(
            select(func.max(RoutingRuleModel.sort_order)).where(
                RoutingRuleModel.company_id == company_id,
                RoutingRuleModel.is_deleted.is_(False),
            )
        )
        return result.scalar_one_or_none()

    async def save(self, rule: RoutingRule) -> RoutingRule:
        m = RoutingRuleModel(
            company_id=rule.company_id,
            queue_id=rule.queue_id,
            name=rule.name,
            description=rule.description,
            match_type=rule.match_type.value,
            match_operator=rule.match_operator.value,
            match_value=rule.match_value,
            sort_order=rule.sort_order,
            is_active=rule.is_active,
            auto_assign_agent_id=rule.auto_assign_agent_id,
            auto_set_priority=rule.auto_set_priority.value if rule.auto_set_priority else None,
            auto_add_tags=rule.auto_add_tags,
        )
        self._s.add(m)
        await self._s.flush()
        await self._s.refresh(m, ["created_at"])
        rule.id = m.id
        rule.created_at = m.created_at
        return rule

    async def update(self, rule: RoutingRule) -> RoutingRule:
        await self._s.execute(
            update(RoutingRuleModel)
            .where(RoutingRuleModel.id == rule.id)
            .values(
                queue_id=rule.queue_id,
                name=rule.name,
                description=rule.description,
                match_type=rule.match_type.value,
                match_operator=rule.match_operator.value,
                match_value=rule.match_value,
                is_active=rule.is_active,
                auto_assign_agent_id=rule.auto_assign_agent_id,
                auto_set_priority=rule.auto_set_priority.value if rule.auto_set_priority else None,
                auto_add_tags=rule.auto_add_tags,
                updated_at=func.now(),
            )
        )
        await self._s.flush()
        return rule

    async def soft_delete(self, rule_id: int) -> None:
        await self._s.execute(
            update(RoutingRuleModel)
            .where(RoutingRuleModel.id == rule_id)
            .values(is_deleted=True, deleted_at=datetime.now(timezone.utc))
        )
        await self._s.flush()

    async def set_sort_orders(self, sort_orders: dict[int, int]) -> None:
        for rule_id, sort_order in sort_orders.items():
            await self._s.execute(
                update(RoutingRuleModel)
                .where(RoutingRuleModel.id == rule_id)
                .values(sort_order=sort_order, updated_at=func.now())
            )
        await self._s.flush()


class SqlQueueRepository(QueueRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def find_default(self, company_id: int) -> Queue | None:
        try:
            result = await self._s.execute(
                select(QueueModel)
                .where(
                    QueueModel.company_id == company_id,
                    QueueModel.is_default.is_(True),
                    QueueModel.is_active.is_(True),
                    QueueModel.is_deleted.is_(False),
                )
                .order_by(QueueModel.id)
                .limit(1)
            )
        except (SQLAlchemyError, OSError) as e:
            raise RoutingDataUnavailableError(f"Queues unavailable: {e}") from e
        m = result.scalar_one_or_none()
        return _queue_to_domain(m) if m else None

    async def get_by_id(self, queue_id: int) -> Queue | None:
        m = await self._s.get(QueueModel, queue_id)
        return _queue_to_domain(m) if m else None

    async def list_for_company(self, company_id: int) -> list[Queue]:
        result = await self._s.execute(
            select(QueueModel)
            .where(QueueModel.company_id == company_id, QueueModel.is_deleted.is_(False))
            .order_by(QueueModel.name)
        )
        return [_queue_to_domain(m) for m in result.scalars()]

    async def find_by_name(self, company_id: int, name: str) -> Queue | None:
        result = await self._s.execute(
            select(QueueModel).where(QueueModel.company_id == company_id, QueueModel.name == name)
        )
        m = result.scalar_one_or_none()
        return _queue_to_domain(m) if m else None

    async def save(self, queue: Queue) -> Queue:
        m = QueueModel(
            company_id=queue.company_id,
            name=queue.name,
            description=queue.description,
            is_default=queue.is_default,
            is_active=queue.is_active,
        )
        self._s.add(m)
        await self._s.flush()
        await self._s.refresh(m, ["created_at"])
        queue.id = m.id
        queue.created_at = m.created_at
        return queue

    async def update(self, queue: Queue) -> Queue:
        await self._s.execute(
            update(QueueModel)
            .where(QueueModel.id == queue.id)
            .values(
                name=queue.name,
                description=queue.description,
                is_default=queue.is_default,
                is_active=queue.is_active,
                updated_at=func.now(),
            )
        )
        await self._s.flush()
        return queue

    async def clear_default(self, company_id: int, except_queue_id: int | None = None) -> None:
        stmt = update(QueueModel).where(
            QueueModel.company_id == company_id,
            QueueModel.is_default.is_(True),
        )
        if except_queue_id is not None:
            stmt = stmt.where(QueueModel.id != except_queue_id)
        await self._s.execute(stmt.values(is_default=False))
        await self._s.flush()

    async def soft_delete(self, queue_id: int) -> None:
        await self._s.execute(
            update(QueueModel)
            .where(QueueModel.id == queue_id)
            .values(is_deleted=True, is_default=False, deleted_at=datetime.now(timezone.utc))
        )
        await self._s.flush()


class SqlEmailConfigurationRepository(EmailConfigurationRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def list_active(self) -> list[EmailConfiguration]:
        result = await self._s.execute(
            select(EmailConfigurationModel)
            .where(
                EmailConfigurationModel.is_active.is_(True),
                EmailConfigurationModel.is_deleted.is_(False),
            )
            .order_by(EmailConfigurationModel.id)
        )
        return [_email_configuration_to_domain(m) for m in result.scalars()]

    async def mark_polled(self, config_id: int, polled_at: datetime) -> None:
        # Savepoint per stamp: a failed UPDATE must not abort the stamps of the rest of the pass
        async with self._s.begin_nested():
            await self._s.execute(
                update(EmailConfigurationModel)
                .where(EmailConfigurationModel.id == config_id)
                .values(last_polled_at=polled_at)
            )
