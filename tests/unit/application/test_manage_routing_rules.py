"""Tests for ManageRoutingRulesUseCase with in-memory fakes."""

from __future__ import annotations

import pytest

from supporthub.application.errors import EntityNotFoundError, RuleManagementError
from supporthub.application.ports.queue_repo import QueueRepository
from supporthub.application.ports.routing_rule_repo import RoutingRuleRepository
from supporthub.application.use_cases.manage_routing_rules import (
    ManageRoutingRulesUseCase,
    RuleDefinition,
)
from supporthub.domain.entities.queue import Queue
from supporthub.domain.entities.routing_rule import RoutingRule
from supporthub.domain.value_objects.enums import (
    RuleMatchOperator,
    RuleMatchType,
    TicketPriority,
)

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeRuleRepo(RoutingRuleRepository):
    def __init__(self):
        self.rules: dict[int, RoutingRule] = {}

    async def list_active_for_company(self, company_id):
        return [r for r in await self.list_for_company(company_id) if r.is_active]

    async def list_for_company(self, company_id):
        rules = [r for r in self.rules.values() if r.company_id == company_id and not r.is_deleted]
        return sorted(rules, key=lambda r: (r.sort_order, r.id))

    async def get_by_id(self, rule_id):
        return self.rules.get(rule_id)

    async def max_sort_order(self, company_id):
        orders = [r.sort_order for r in self.rules.values() if r.company_id == company_id]
        return max(orders, default=None)

    async def save(self, rule):
        rule.id = len(self.rules) + 1
        self.rules[rule.id] = rule
        return rule

    async def update(self, rule):
        self.rules[rule.id] = rule
        return rule

    async def soft_delete(self, rule_id):
        self.rules[rule_id].is_deleted = True

    async def set_sort_orders(self, sort_orders):
        for rule_id, sort_order in sort_orders.items():
            self.rules[rule_id].sort_order = sort_order


class FakeQueueRepo(QueueRepository):
    def __init__(self, queues: list[Queue]):
        self.queues = {q.id: q for q in queues}

    async def find_default(self, company_id):
        return None

    async def get_by_id(self, queue_id):
        return self.queues.get(queue_id)

    async def list_for_company(self, company_id):
        return [q for q in self.queues.values() if q.company_id == company_id]

    async def save(self, queue):
        return queue

    async def update(self, queue):
        return queue

    async def clear_default(self, company_id, except_queue_id=None):
        pass

    async def find_by_name(self, company_id, name):
        return next(
            (q for q in self.queues.values() if q.company_id == company_id and q.name == name), None
        )

    async def soft_delete(self, queue_id):
        pass


# ─── Helpers ─────────────────────────────────────────────────────────


def _definition(queue_id=10, name="Billing to finance", **kwargs) -> RuleDefinition:
    defaults = dict(
        queue_id=queue_id,
        name=name,
        match_type=RuleMatchType.ISSUE_TYPE,
        match_operator=RuleMatchOperator.EQUALS,
        match_value="Billing",
    )
    defaults.update(kwargs)
    return RuleDefinition(**defaults)


def _use_case() -> tuple[ManageRoutingRulesUseCase, FakeRuleRepo]:
    queues = FakeQueueRepo([
        Queue(id=10, company_id=1, name="Finance"),
        Queue(id=11, company_id=1, name="Service Desk"),
        Queue(id=20, company_id=2, name="Other tenant"),
        Queue(id=30, company_id=1, name="Retired", is_deleted=True),
    ])
    rules = FakeRuleRepo()
    return ManageRoutingRulesUseCase(rules, queues), rules


# ─── create ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_appends_after_last_rule():
    uc, _ = _use_case()
    first = await uc.create_rule(1, _definition())
    second = await uc.create_rule(1, _definition(name="Second"))
    assert first.sort_order == 10
    assert second.sort_order == 20
    assert second.queue_name == "Finance"


@pytest.mark.asyncio
async def test_create_sort_order_is_per_company():
    uc, _ = _use_case()
    await uc.create_rule(1, _definition())
    other = await uc.create_rule(2, _definition(queue_id=20))
    assert other.sort_order == 10


@pytest.mark.asyncio
async def test_create_copies_actions():
    uc, _ = _use_case()
    rule = await uc.create_rule(1, _definition(
        auto_assign_agent_id=7,
        auto_set_priority=TicketPriority.HIGH,
        auto_add_tags="billing,finance",
    ))
    assert rule.auto_assign_agent_id == 7
    assert rule.auto_set_priority == TicketPriority.HIGH
    assert rule.auto_add_tags == "billing,finance"
    assert rule.is_active is True


@pytest.mark.asyncio
async def test_create_rejects_queue_of_other_company():
    uc, _ = _use_case()
    with pytest.raises(RuleManagementError):
        await uc.create_rule(1, _definition(queue_id=20))


@pytest.mark.asyncio
async def test_create_rejects_missing_or_deleted_queue():
    uc, _ = _use_case()
    with pytest.raises(EntityNotFoundError):
        await uc.create_rule(1, _definition(queue_id=404))
    with pytest.raises(EntityNotFoundError):
        await uc.create_rule(1, _definition(queue_id=30))


@pytest.mark.asyncio
async def test_create_rejects_blank_name():
    uc, _ = _use_case()
    with pytest.raises(RuleManagementError):
        await uc.create_rule(1, _definition(name="   "))


@pytest.mark.asyncio
async def test_create_accepts_regex_that_does_not_compile():
    """Broken patterns are stored; they simply never match at evaluation time."""
    uc, _ = _use_case()
    rule = await uc.create_rule(1, _definition(
        match_type=RuleMatchType.SUBJECT_KEYWORD,
        match_operator=RuleMatchOperator.REGEX,
        match_value="([",
    ))
    assert rule.id is not None


# ─── get / update / delete ───────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_unknown_rule_raises():
    uc, _ = _use_case()
    with pytest.raises(EntityNotFoundError):
        await uc.get_rule(123)


@pytest.mark.asyncio
async def test_update_changes_fields_and_queue():
    uc, _ = _use_case()
    rule = await uc.create_rule(1, _definition())
    updated = await uc.update_rule(rule.id, _definition(
        queue_id=11,
        name="  Printers  ",
        match_type=RuleMatchType.SUBJECT_KEYWORD,
        match_operator=RuleMatchOperator.CONTAINS,
        match_value="printer",
        is_active=False,
    ))
    assert updated.queue_id == 11
    assert updated.queue_name == "Service Desk"
    assert updated.name == "Printers"
    assert updated.match_type == RuleMatchType.SUBJECT_KEYWORD
    assert updated.is_active is False
    assert updated.sort_order == 10


@pytest.mark.asyncio
async def test_update_rejects_queue_of_other_company():
    uc, _ = _use_case()
    rule = await uc.create_rule(1, _definition())
    with pytest.raises(RuleManagementError):
        await uc.update_rule(rule.id, _definition(queue_id=20))


@pytest.mark.asyncio
async def test_delete_is_soft_and_hides_rule():
    uc, repo = _use_case()
    rule = await uc.create_rule(1, _definition())
    await uc.delete_rule(rule.id)
    assert repo.rules[rule.id].is_deleted is True
    assert await uc.list_rules(1) == []
    with pytest.raises(EntityNotFoundError):
        await uc.get_rule(rule.id)


@pytest.mark.asyncio
async def test_delete_twice_raises():
    uc, _ = _use_case()
    rule = await uc.create_rule(1, _definition())
    await uc.delete_rule(rule.id)
    with pytest.raises(EntityNotFoundError):
        await uc.delete_rule(rule.id)


# ─── reorder ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_reorder_renumbers_in_given_order():
    uc, _ = _use_case()
    a = await uc.create_rule(1, _definition(name="a"))
    b = await uc.create_rule(1, _definition(name="b"))
    c = await uc.create_rule(1, _definition(name="c"))

    await uc.reorder_rules(1, [c.id, a.id, b.id])

    listed = await uc.list_rules(1)
    assert [r.name for r in listed] == ["c", "a", "b"]
    assert [r.sort_order for r in listed] == [10, 20, 30]


@pytest.mark.asyncio
async def test_reorder_rejects_rule_of_other_company():
    uc, _ = _use_case()
    mine = await uc.create_rule(1, _definition())
    theirs = await uc.create_rule(2, _definition(queue_id=20))
    with pytest.raises(RuleManagementError):
        await uc.reorder_rules(1, [theirs.id, mine.id])


@pytest.mark.asyncio
async def test_reorder_rejects_duplicates():
    uc, _ = _use_case()
    rule = await uc.create_rule(1, _definition())
    with pytest.raises(RuleManagementError):
        await uc.reorder_rules(1, [rule.id, rule.id])
