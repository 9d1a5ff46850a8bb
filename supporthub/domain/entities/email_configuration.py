"""EmailConfiguration entity — a shared mailbox polled for inbound tickets."""

from dataclasses import dataclass
from datetime import datetime

from supporthub.domain.value_objects.enums import TicketPriority


@dataclass
class EmailConfiguration:
    id: int | None
    company_id: int
    shared_mailbox_address: str
    display_name: str
    is_active: bool = True
    is_deleted: bool = False
    polling_interval_minutes: int = 2
    last_polled_at: datetime | None = None
    auto_create_tickets: bool = True
    default_priority: TicketPriority = TicketPriority.MEDIUM
