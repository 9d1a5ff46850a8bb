"""Port interface for mailbox configuration persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from supporthub.domain.entities.email_configuration import EmailConfiguration


class EmailConfigurationRepository(ABC):
    @abstractmethod
    async def list_active(self) -> list[EmailConfiguration]:
        """Return active, non-deleted configurations ordered by id."""
        ...

    @abstractmethod
    async def mark_polled(self, config_id: int, polled_at: datetime) -> None:
        ...
