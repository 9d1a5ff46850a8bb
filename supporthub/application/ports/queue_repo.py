"""Port interface for queue persistence."""

from abc import ABC, abstractmethod

from supporthub.domain.entities.queue import Queue


class QueueRepository(ABC):
    @abstractmethod
    async def find_default(self, company_id: int) -> Queue | None:
        """Return the company's active, non-deleted default queue.

        If more than one qualifies, the lowest id wins.
        Raises RoutingDataUnavailableError if the store cannot be reached.
        """
        ...

    @abstractmethod
    async def get_by_id(self, queue_id: int) -> Queue | None:
        ...

    @abstractmethod
    async def list_for_company(self, company_id: int) -> list[Queue]:
        ...

    @abstractmethod
    async def find_by_name(self, company_id: int, name: str) -> Queue | None:
        """Exact-name lookup within a company, soft-deleted queues included."""
        ...

    @abstractmethod
    async def save(self, queue: Queue) -> Queue:
        ...

    @abstractmethod
    async def update(self, queue: Queue) -> Queue:
        ...

    @abstractmethod
    async def clear_default(self, company_id: int, except_queue_id: int | None = None) -> None:
        """Unset is_default on every queue of the company except ``except_queue_id``."""
        ...

    @abstractmethod
    async def soft_delete(self, queue_id: int) -> None:
        ...
