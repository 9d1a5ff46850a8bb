"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from supporthub.adapters.mailbox.http_poller_adapter import HttpMailboxPollerAdapter
from supporthub.adapters.persistence.database import get_session
from supporthub.adapters.persistence.repositories import (
    SqlEmailConfigurationRepository,
    SqlQueueRepository,
    SqlRoutingRuleRepository,
)
from supporthub.application.use_cases.evaluate_routing import EvaluateRoutingUseCase
from supporthub.application.use_cases.manage_queues import ManageQueuesUseCase
from supporthub.application.use_cases.manage_routing_rules import ManageRoutingRulesUseCase
from supporthub.application.use_cases.poll_mailboxes import PollMailboxesUseCase
from supporthub.config import settings


# Stateless, safe to share across requests
_mailbox_poller = HttpMailboxPollerAdapter()


def build_poll_mailboxes_uc(session: AsyncSession) -> PollMailboxesUseCase:
    return PollMailboxesUseCase(
        config_repo=SqlEmailConfigurationRepository(session),
        poller=_mailbox_poller,
    )


def get_evaluate_routing_uc(
    session: AsyncSession = Depends(get_session),
) -> EvaluateRoutingUseCase:
    return EvaluateRoutingUseCase(
        rule_repo=SqlRoutingRuleRepository(session),
        queue_repo=SqlQueueRepository(session),
        regex_timeout=settings.regex_timeout_seconds,
    )


def get_manage_rules_uc(
    session: AsyncSession = Depends(get_session),
) -> ManageRoutingRulesUseCase:
    return ManageRoutingRulesUseCase(
        rule_repo=SqlRoutingRuleRepository(session),
        queue_repo=SqlQueueRepository(session),
    )


def get_manage_queues_uc(
    session: AsyncSession = Depends(get_session),
) -> ManageQueuesUseCase:
    return ManageQueuesUseCase(
        queue_repo=SqlQueueRepository(session),
        rule_repo=SqlRoutingRuleRepository(session),
    )


def get_poll_mailboxes_uc(
    session: AsyncSession = Depends(get_session),
) -> PollMailboxesUseCase:
    return build_poll_mailboxes_uc(session)
