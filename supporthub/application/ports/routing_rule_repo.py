"""Port interface for routing rule persistence."""

from abc import ABC, abstractmethod

from supporthub.domain.entities.routing_rule import RoutingRule


class RoutingRuleRepository(ABC):
    @abstractmethod
    async def list_active_for_company(self, company_id: int) -> list[RoutingRule]:
        """Return active, non-deleted rules of the company ordered by (sort_order, id).

        Raises RoutingDataUnavailableError if the store cannot be reached.
        """
        ...

    @abstractmethod
    async def list_for_company(self, company_id: int) -> list[RoutingRule]:
        """All non-deleted rules of the company (active or not), in evaluation order."""
        ...

    @abstractmethod
    async def get_by_id(self, rule_id: int) -> RoutingRule | None:
        ...

    @abstractmethod
    async def max_sort_order(self, company_id: int) -> int | None:
        ...

    @abstractmethod
    async def save(self, rule: RoutingRule) -> RoutingRule:
        ...

    @abstractmethod
    async def update(self, rule: RoutingRule) -> RoutingRule:
        ...

    @abstractmethod
    async def soft_delete(self, rule_id: int) -> None:
        ...

    @abstractmethod
    async def set_sort_orders(self, sort_orders: dict[int, int]) -> None:
        """Persist new sort orders keyed by rule id."""
        ...
