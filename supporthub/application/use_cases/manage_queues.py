"""ManageQueuesUseCase — the minimal queue administration routing depends on."""

from __future__ import annotations

import logging

from supporthub.application.errors import EntityNotFoundError, RuleManagementError
from supporthub.application.ports.queue_repo import QueueRepository
from supporthub.application.ports.routing_rule_repo import RoutingRuleRepository
from supporthub.domain.entities.queue import Queue

logger = logging.getLogger(__name__)


class ManageQueuesUseCase:
    """Keeps at most one default queue and unique queue names per company."""

    def __init__(self, queue_repo: QueueRepository, rule_repo: RoutingRuleRepository):
        self._queues = queue_repo
        self._rules = rule_repo

    async def list_queues(self, company_id: int) -> list[Queue]:
        return await self._queues.list_for_company(company_id)

    async def create_queue(
        self,
        company_id: int,
        name: str,
        description: str | None = None,
        is_default: bool = False,
    ) -> Queue:
        name = self._require_name(name)
        await self._require_unique_name(company_id, name)

        if is_default:
            await self._queues.clear_default(company_id)

        queue = await self._queues.save(
            Queue(
                id=None,
                company_id=company_id,
                name=name,
                description=description,
                is_default=is_default,
            )
        )
        logger.info("Created queue %s for company %s (default=%s)", queue.name, company_id, is_default)
        return queue

    async def update_queue(
        self,
        queue_id: int,
        name: str,
        description: str | None,
        is_default: bool,
        is_active: bool,
    ) -> Queue:
        queue = await self._get_live_queue(queue_id)
        name = self._require_name(name)
        await self._require_unique_name(queue.company_id, name, except_queue_id=queue.id)

        if is_default and not queue.is_default:
            await self._queues.clear_default(queue.company_id, except_queue_id=queue.id)

        queue.name = name
        queue.description = description
        queue.is_default = is_default
        queue.is_active = is_active
        queue = await self._queues.update(queue)
        logger.info("Updated queue %s (%s)", queue.id, queue.name)
        return queue

    async def delete_queue(self, queue_id: int) -> None:
        """Soft delete; refused while routing rules still send tickets to the queue."""
        queue = await self._get_live_queue(queue_id)

        rules = await self._rules.list_for_company(queue.company_id)
        if any(r.queue_id == queue.id for r in rules):
            raise RuleManagementError(
                "Cannot delete a queue that routing rules point to. Reassign or delete the rules first."
            )

        await self._queues.soft_delete(queue.id)
        logger.info("Deleted queue %s (%s)", queue.id, queue.name)

    # ─── Checks ──────────────────────────────────────────────────────

    async def _get_live_queue(self, queue_id: int) -> Queue:
        queue = await self._queues.get_by_id(queue_id)
        if queue is None or queue.is_deleted:
            raise EntityNotFoundError("Queue not found")
        return queue

    @staticmethod
    def _require_name(name: str) -> str:
        if not name or not name.strip():
            raise RuleManagementError("Queue name is required")
        return name.strip()

    async def _require_unique_name(
        self, company_id: int, name: str, except_queue_id: int | None = None
    ) -> None:
        existing = await self._queues.find_by_name(company_id, name)
        if existing is not None and existing.id != except_queue_id:
            raise RuleManagementError(f"A queue named '{name}' already exists for this company")
