"""ManageRoutingRulesUseCase — create, update, delete and reorder routing rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from supporthub.application.errors import EntityNotFoundError, RuleManagementError
from supporthub.application.ports.queue_repo import QueueRepository
from supporthub.application.ports.routing_rule_repo import RoutingRuleRepository
from supporthub.domain.entities.routing_rule import RoutingRule
from supporthub.domain.value_objects.enums import (
    RuleMatchOperator,
    RuleMatchType,
    TicketPriority,
)

logger = logging.getLogger(__name__)

# New rules are appended after the current last rule; reorder renumbers 10, 20, 30...
SORT_ORDER_STEP = 10


@dataclass
class RuleDefinition:
    """Editable fields of a routing rule."""

    queue_id: int
    name: str
    match_type: RuleMatchType
    match_operator: RuleMatchOperator
    match_value: str
    description: str | None = None
    is_active: bool = True
    auto_assign_agent_id: int | None = None
    auto_set_priority: TicketPriority | None = None
    auto_add_tags: str | None = None


class ManageRoutingRulesUseCase:
    def __init__(self, rule_repo: RoutingRuleRepository, queue_repo: QueueRepository):
        self._rules = rule_repo
        self._queues = queue_repo

    async def list_rules(self, company_id: int) -> list[RoutingRule]:
        return await self._rules.list_for_company(company_id)

    async def get_rule(self, rule_id: int) -> RoutingRule:
        rule = await self._rules.get_by_id(rule_id)
        if rule is None or rule.is_deleted:
            raise EntityNotFoundError("Routing rule not found")
        return rule

    async def create_rule(self, company_id: int, definition: RuleDefinition) -> RoutingRule:
        """Append a new rule at the end of the company's evaluation order."""
        self._require_name(definition.name)
        queue_name = await self._require_company_queue(definition.queue_id, company_id)

        max_sort_order = await self._rules.max_sort_order(company_id)
        rule = RoutingRule(
            id=None,
            company_id=company_id,
            queue_id=definition.queue_id,
            name=definition.name.strip(),
            description=definition.description,
            match_type=definition.match_type,
            match_operator=definition.match_operator,
            match_value=definition.match_value,
            sort_order=(max_sort_order or 0) + SORT_ORDER_STEP,
            is_active=definition.is_active,
            auto_assign_agent_id=definition.auto_assign_agent_id,
            auto_set_priority=definition.auto_set_priority,
            auto_add_tags=definition.auto_add_tags,
            queue_name=queue_name,
        )
        rule = await self._rules.save(rule)
        logger.info("Created routing rule %s for company %s", rule.name, company_id)
        return rule

    async def update_rule(self, rule_id: int, definition: RuleDefinition) -> RoutingRule:
        rule = await self.get_rule(rule_id)
        self._require_name(definition.name)
        queue_name = await self._require_company_queue(definition.queue_id, rule.company_id)

        rule.queue_id = definition.queue_id
        rule.queue_name = queue_name
        rule.name = definition.name.strip()
        rule.description = definition.description
        rule.match_type = definition.match_type
        rule.match_operator = definition.match_operator
        rule.match_value = definition.match_value
        rule.is_active = definition.is_active
        rule.auto_assign_agent_id = definition.auto_assign_agent_id
        rule.auto_set_priority = definition.auto_set_priority
        rule.auto_add_tags = definition.auto_add_tags

        rule = await self._rules.update(rule)
        logger.info("Updated routing rule %s (%s)", rule.id, rule.name)
        return rule

    async def delete_rule(self, rule_id: int) -> None:
        """Soft delete: the rule stops taking part in routing but stays stored."""
        rule = await self.get_rule(rule_id)
        await self._rules.soft_delete(rule_id)
        logger.info("Deleted routing rule %s (%s)", rule.id, rule.name)

    async def reorder_rules(self, company_id: int, rule_ids_in_order: list[int]) -> None:
        """Renumber the given rules 10, 20, 30... in the order supplied.

        Raises:
            RuleManagementError: if any id is unknown, repeated, or belongs to another company.
        """
        if len(set(rule_ids_in_order)) != len(rule_ids_in_order):
            raise RuleManagementError("Rule ids must not repeat")

        company_rule_ids = {r.id for r in await self._rules.list_for_company(company_id)}
        if not set(rule_ids_in_order).issubset(company_rule_ids):
            raise RuleManagementError(
                "One or more rule ids are invalid or do not belong to this company"
            )

        sort_orders = {
            rule_id: (index + 1) * SORT_ORDER_STEP
            for index, rule_id in enumerate(rule_ids_in_order)
        }
        await self._rules.set_sort_orders(sort_orders)
        logger.info("Reordered %d routing rules for company %s", len(sort_orders), company_id)

    # ─── Checks ──────────────────────────────────────────────────────

    @staticmethod
    def _require_name(name: str) -> None:
        if not name or not name.strip():
            raise RuleManagementError("Routing rule name is required")

    async def _require_company_queue(self, queue_id: int, company_id: int) -> str:
        queue = await self._queues.get_by_id(queue_id)
        if queue is None or queue.is_deleted:
            raise EntityNotFoundError("Queue not found")
        if queue.company_id != company_id:
            raise RuleManagementError("Queue does not belong to this company")
        return queue.name
