"""Tests for PollingSchedulePolicy."""

from datetime import datetime, timedelta

from supporthub.domain.entities.email_configuration import EmailConfiguration
from supporthub.domain.policies.polling_schedule import is_due_for_poll, select_due_configurations


def _config(config_id=1, interval=5, last_polled_at=None, **kwargs) -> EmailConfiguration:
    return EmailConfiguration(
        id=config_id,
        company_id=1,
        shared_mailbox_address=f"support{config_id}@acme.com",
        display_name="Support",
        polling_interval_minutes=interval,
        last_polled_at=last_polled_at,
        **kwargs,
    )


def test_never_polled_is_due(fixed_now):
    assert is_due_for_poll(_config(), fixed_now) is True


def test_recently_polled_is_not_due(fixed_now):
    cfg = _config(interval=5, last_polled_at=fixed_now - timedelta(minutes=3))
    assert is_due_for_poll(cfg, fixed_now) is False


def test_elapsed_equal_to_interval_is_due(fixed_now):
    cfg = _config(interval=5, last_polled_at=fixed_now - timedelta(minutes=5))
    assert is_due_for_poll(cfg, fixed_now) is True


def test_naive_timestamp_treated_as_utc(fixed_now):
    naive = (fixed_now - timedelta(minutes=10)).replace(tzinfo=None)
    assert is_due_for_poll(_config(interval=5, last_polled_at=naive), fixed_now) is True


def test_zero_interval_always_due(fixed_now):
    assert is_due_for_poll(_config(interval=0, last_polled_at=fixed_now), fixed_now) is True


def test_select_due_keeps_order_and_skips_inactive(fixed_now):
    configs = [
        _config(3),
        _config(1, last_polled_at=fixed_now - timedelta(minutes=1)),
        _config(2, is_active=False),
        _config(4, is_deleted=True),
        _config(5, last_polled_at=fixed_now - timedelta(hours=1)),
    ]
    due = select_due_configurations(configs, fixed_now)
    assert [c.id for c in due] == [3, 5]


def test_select_due_empty():
    assert select_due_configurations([], datetime(2026, 1, 1)) == []
