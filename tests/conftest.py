"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from supporthub.domain.entities.routing import RoutingContext


@pytest.fixture
def billing_context():
    return RoutingContext(
        company_id=1,
        subject="Invoice overdue for March",
        body="Hello, our invoice INV-2041 is still unpaid. Please advise.",
        sender_domain="acme.com",
        issue_type="Billing",
        system="ERP",
        requester_email="jane.doe@acme.com",
        tags=frozenset({"Finance", "EMEA"}),
    )


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc)
