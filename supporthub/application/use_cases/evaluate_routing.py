"""EvaluateRoutingUseCase — pick queue, agent, priority and tags for a ticket."""

from __future__ import annotations

import logging

from supporthub.application.ports.queue_repo import QueueRepository
from supporthub.application.ports.routing_rule_repo import RoutingRuleRepository
from supporthub.domain.entities.routing import RoutingContext, RoutingResult
from supporthub.domain.entities.routing_rule import RoutingRule
from supporthub.domain.policies.match_predicate import DEFAULT_REGEX_TIMEOUT_SECONDS
from supporthub.domain.policies.rule_evaluation import parse_tag_additions, rule_matches

logger = logging.getLogger(__name__)


class EvaluateRoutingUseCase:
    """Ordered first-match-wins evaluation over a company's routing rules.

    Each call reads a fresh snapshot of rules and queues and writes nothing,
    so concurrent evaluations need no coordination.
    """

    def __init__(
        self,
        rule_repo: RoutingRuleRepository,
        queue_repo: QueueRepository,
        regex_timeout: float | None = DEFAULT_REGEX_TIMEOUT_SECONDS,
    ):
        self._rules = rule_repo
        self._queues = queue_repo
        self._regex_timeout = regex_timeout

    async def execute(self, context: RoutingContext) -> RoutingResult:
        """Route a ticket.

        Pipeline:
        1. Load active, non-deleted rules of the context's company by sort order
        2. First rule whose predicate holds decides the result
        3. Otherwise fall back to the company's default queue
        4. Otherwise return an empty result

        Raises:
            RoutingDataUnavailableError: if rules or queues cannot be loaded.
        """
        rules = await self._rules.list_active_for_company(context.company_id)

        # Stable sort: ties keep the repository's order
        for rule in sorted(rules, key=lambda r: r.sort_order):
            # Repository filters already; re-check to keep tenants apart regardless
            if not rule.is_eligible_for(context.company_id):
                continue
            if rule_matches(rule, context, self._regex_timeout):
                logger.info(
                    "Routing rule %s (%s) matched for company %s",
                    rule.id, rule.name, context.company_id,
                )
                return self._result_from_rule(rule)

        logger.info(
            "No routing rules matched for company %s, falling back to default queue",
            context.company_id,
        )
        default_queue = await self._queues.find_default(context.company_id)
        if default_queue is not None:
            return RoutingResult(
                queue_id=default_queue.id,
                queue_name=default_queue.name,
                is_default_fallback=True,
            )

        logger.warning("Company %s has no default queue, ticket stays unrouted", context.company_id)
        return RoutingResult()

    @staticmethod
    def _result_from_rule(rule: RoutingRule) -> RoutingResult:
        return RoutingResult(
            queue_id=rule.queue_id,
            queue_name=rule.queue_name,
            auto_assign_agent_id=rule.auto_assign_agent_id,
            auto_set_priority=rule.auto_set_priority,
            auto_add_tags=parse_tag_additions(rule.auto_add_tags),
            matched_rule_id=rule.id,
            matched_rule_name=rule.name,
            is_default_fallback=False,
        )
