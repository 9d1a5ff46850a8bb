"""Routing context and result — the ephemeral input and output of one evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field

from supporthub.domain.value_objects.enums import TicketPriority


@dataclass(frozen=True)
class RoutingContext:
    """Snapshot of ticket attributes presented for a routing decision."""

    company_id: int
    subject: str = ""
    body: str = ""
    sender_domain: str | None = None
    issue_type: str | None = None
    system: str | None = None
    requester_email: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class RoutingResult:
    """Decision produced by the routing engine.

    ``is_default_fallback`` is only True when no rule matched AND a default queue
    was found. When neither happened the flag is False as well, so callers must
    look at ``has_queue`` to tell "rule matched" from "nothing to route to".
    """

    queue_id: int | None = None
    queue_name: str | None = None
    auto_assign_agent_id: int | None = None
    auto_set_priority: TicketPriority | None = None
    auto_add_tags: tuple[str, ...] = ()
    matched_rule_id: int | None = None
    matched_rule_name: str | None = None
    is_default_fallback: bool = False

    @property
    def has_queue(self) -> bool:
        return self.queue_id is not None
