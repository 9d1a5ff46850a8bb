"""Tests for RuleEvaluationPolicy."""

import pytest

from supporthub.domain.entities.routing import RoutingContext
from supporthub.domain.entities.routing_rule import RoutingRule
from supporthub.domain.policies.rule_evaluation import (
    FIELD_SELECTORS,
    NEVER_MATCHING_TYPES,
    evaluate_tag_rule,
    parse_tag_additions,
    rule_matches,
)
from supporthub.domain.value_objects.enums import RuleMatchOperator, RuleMatchType


def _rule(match_type, operator, value, company_id=1) -> RoutingRule:
    return RoutingRule(
        id=1,
        company_id=company_id,
        queue_id=10,
        name="r",
        match_type=match_type,
        match_operator=operator,
        match_value=value,
    )


# ─── field dispatch ──────────────────────────────────────────────────


def test_every_match_type_is_handled():
    handled = set(FIELD_SELECTORS) | set(NEVER_MATCHING_TYPES) | {RuleMatchType.TAG}
    assert handled == set(RuleMatchType)


@pytest.mark.parametrize(
    "match_type, value",
    [
        (RuleMatchType.SENDER_DOMAIN, "ACME.COM"),
        (RuleMatchType.SUBJECT_KEYWORD, "invoice"),
        (RuleMatchType.BODY_KEYWORD, "inv-2041"),
        (RuleMatchType.ISSUE_TYPE, "billing"),
        (RuleMatchType.SYSTEM, "erp"),
        (RuleMatchType.REQUESTER_EMAIL, "@acme.com"),
    ],
)
def test_field_types_read_their_field(billing_context, match_type, value):
    assert rule_matches(_rule(match_type, RuleMatchOperator.CONTAINS, value), billing_context)


def test_subject_rule_does_not_look_at_body(billing_context):
    rule = _rule(RuleMatchType.SUBJECT_KEYWORD, RuleMatchOperator.CONTAINS, "unpaid")
    assert rule_matches(rule, billing_context) is False


def test_absent_field_compares_as_empty_string():
    ctx = RoutingContext(company_id=1)
    assert rule_matches(_rule(RuleMatchType.SYSTEM, RuleMatchOperator.EQUALS, ""), ctx) is True
    assert rule_matches(_rule(RuleMatchType.SYSTEM, RuleMatchOperator.CONTAINS, "erp"), ctx) is False


def test_company_code_never_matches(billing_context):
    for value in ("1", "", "acme"):
        rule = _rule(RuleMatchType.COMPANY_CODE, RuleMatchOperator.CONTAINS, value)
        assert rule_matches(rule, billing_context) is False


def test_unknown_match_type_is_false(billing_context):
    rule = _rule("Priority", RuleMatchOperator.CONTAINS, "")
    assert rule_matches(rule, billing_context) is False


def test_invalid_regex_rule_is_false(billing_context):
    rule = _rule(RuleMatchType.SUBJECT_KEYWORD, RuleMatchOperator.REGEX, "(invoice")
    assert rule_matches(rule, billing_context) is False


# ─── tag rules ───────────────────────────────────────────────────────


def test_tag_in_matches_any_listed_tag(billing_context):
    rule = _rule(RuleMatchType.TAG, RuleMatchOperator.IN, "hr, finance")
    assert rule_matches(rule, billing_context) is True


def test_tag_equals_is_case_insensitive():
    assert evaluate_tag_rule({"VIP"}, "vip", RuleMatchOperator.EQUALS) is True


def test_tag_contains_checks_substring_of_each_tag():
    assert evaluate_tag_rule({"network-outage"}, "OUTAGE", RuleMatchOperator.CONTAINS) is True
    assert evaluate_tag_rule({"network"}, "outage", RuleMatchOperator.CONTAINS) is False


def test_tag_other_operators_apply_per_tag():
    tags = {"eu-west", "priority"}
    assert evaluate_tag_rule(tags, "EU-", RuleMatchOperator.STARTS_WITH) is True
    assert evaluate_tag_rule(tags, "west", RuleMatchOperator.ENDS_WITH) is True
    assert evaluate_tag_rule(tags, r"^prio", RuleMatchOperator.REGEX) is True
    assert evaluate_tag_rule(tags, "us-", RuleMatchOperator.STARTS_WITH) is False


def test_empty_tag_set_never_matches():
    for operator in RuleMatchOperator:
        assert evaluate_tag_rule(frozenset(), "", operator) is False


# ─── parse_tag_additions ─────────────────────────────────────────────


def test_parse_tag_additions():
    assert parse_tag_additions("vip, escalated,, ") == ("vip", "escalated")


@pytest.mark.parametrize("raw", [None, "", "  "])
def test_parse_tag_additions_blank(raw):
    assert parse_tag_additions(raw) == ()
