"""PollMailboxesUseCase — poll every mailbox configuration that is due."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from supporthub.application.ports.email_configuration_repo import EmailConfigurationRepository
from supporthub.application.ports.mailbox_poller_port import MailboxPollerPort
from supporthub.domain.policies.polling_schedule import select_due_configurations

logger = logging.getLogger(__name__)


@dataclass
class PollOutcome:
    """Outcome of polling one configuration."""

    configuration_id: int
    success: bool
    processed: int = 0
    error: str | None = None


@dataclass
class PollingSummary:
    configuration_count: int
    outcomes: list[PollOutcome] = field(default_factory=list)

    @property
    def processed_total(self) -> int:
        return sum(o.processed for o in self.outcomes if o.success)

    @property
    def failure_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)

    @property
    def errors(self) -> list[str]:
        return [o.error for o in self.outcomes if o.error]


class PollMailboxesUseCase:
    """One polling pass; a failing configuration never stops the others."""

    def __init__(
        self,
        config_repo: EmailConfigurationRepository,
        poller: MailboxPollerPort,
    ):
        self._configs = config_repo
        self._poller = poller

    async def execute(self, now: datetime | None = None) -> PollingSummary:
        now = now or datetime.now(timezone.utc)
        configs = await self._configs.list_active()
        summary = PollingSummary(configuration_count=len(configs))

        for config in select_due_configurations(configs, now):
            try:
                count = await self._poller.poll_mailbox(config.id)
                await self._configs.mark_polled(config.id, now)
            except Exception as e:
                logger.exception("Polling failed for config %s", config.id)
                summary.outcomes.append(
                    PollOutcome(configuration_id=config.id, success=False, error=str(e))
                )
                continue

            logger.info("Polled %d messages for config %s", count, config.id)
            summary.outcomes.append(
                PollOutcome(configuration_id=config.id, success=True, processed=count)
            )

        logger.info(
            "Email polling completed. Processed %d messages across %d configurations",
            summary.processed_total, summary.configuration_count,
        )
        return summary
