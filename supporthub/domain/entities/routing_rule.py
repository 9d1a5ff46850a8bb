"""RoutingRule entity — a company-scoped, ordered predicate-and-action pair."""

from dataclasses import dataclass
from datetime import datetime

from supporthub.domain.value_objects.enums import (
    RuleMatchOperator,
    RuleMatchType,
    TicketPriority,
)


@dataclass
class RoutingRule:
    id: int | None
    company_id: int
    queue_id: int
    name: str
    match_type: RuleMatchType
    match_operator: RuleMatchOperator
    match_value: str
    sort_order: int = 0
    description: str | None = None
    is_active: bool = True
    is_deleted: bool = False
    auto_assign_agent_id: int | None = None
    auto_set_priority: TicketPriority | None = None
    auto_add_tags: str | None = None
    queue_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_eligible_for(self, company_id: int) -> bool:
        """Only active, non-deleted rules of the same company take part in routing."""
        return self.is_active and not self.is_deleted and self.company_id == company_id
