"""PollingSchedulePolicy — decide which mailbox configurations are due for a poll."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from supporthub.domain.entities.email_configuration import EmailConfiguration


def _as_utc(moment: datetime) -> datetime:
    # Naive timestamps are stored as UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def is_due_for_poll(config: EmailConfiguration, now: datetime) -> bool:
    """Due iff never polled, or the polling interval has fully elapsed.

    An elapsed time exactly equal to the interval counts as due.
    """
    if config.last_polled_at is None:
        return True
    elapsed = _as_utc(now) - _as_utc(config.last_polled_at)
    return elapsed >= timedelta(minutes=config.polling_interval_minutes)


def select_due_configurations(
    configs: list[EmailConfiguration],
    now: datetime,
) -> list[EmailConfiguration]:
    """Keep active, non-deleted configurations that are due, preserving input order."""
    return [
        c for c in configs
        if c.is_active and not c.is_deleted and is_due_for_poll(c, now)
    ]
