"""Queue entity — a destination bucket for tickets within a company."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Queue:
    id: int | None
    company_id: int
    name: str
    description: str | None = None
    is_default: bool = False
    is_active: bool = True
    is_deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def can_serve_as_default(self) -> bool:
        return self.is_default and self.is_active and not self.is_deleted
