"""Tests for MatchPredicatePolicy."""

import pytest
import regex

from supporthub.domain.policies.match_predicate import (
    apply_operator,
    search_regex,
    split_alternatives,
)
from supporthub.domain.value_objects.enums import RuleMatchOperator

# ─── split_alternatives ──────────────────────────────────────────────


def test_split_trims_and_drops_empty_tokens():
    assert split_alternatives(" a, b ,,c , ") == ["a", "b", "c"]


@pytest.mark.parametrize("raw", [None, "", "   ", ",, ,"])
def test_split_blank_input(raw):
    assert split_alternatives(raw) == []


# ─── apply_operator ──────────────────────────────────────────────────


@pytest.mark.parametrize(
    "value, match_value, operator, expected",
    [
        ("ACME.com", "acme.com", RuleMatchOperator.EQUALS, True),
        ("acme.com", "acme.co", RuleMatchOperator.EQUALS, False),
        ("Server DOWN now", "down", RuleMatchOperator.CONTAINS, True),
        ("Server up", "down", RuleMatchOperator.CONTAINS, False),
        ("Urgent: printer", "URGENT", RuleMatchOperator.STARTS_WITH, True),
        ("Re: Urgent", "urgent", RuleMatchOperator.STARTS_WITH, False),
        ("ops@Example.ORG", "example.org", RuleMatchOperator.ENDS_WITH, True),
        ("ops@example.org.uk", "example.org", RuleMatchOperator.ENDS_WITH, False),
        ("Billing", "sales, BILLING ,support", RuleMatchOperator.IN, True),
        ("Bill", "sales,billing", RuleMatchOperator.IN, False),
    ],
)
def test_operators_are_case_insensitive(value, match_value, operator, expected):
    assert apply_operator(value, match_value, operator) is expected


def test_in_with_blank_list_never_matches():
    assert apply_operator("", " , ", RuleMatchOperator.IN) is False


def test_empty_value_equals_empty_match_value():
    assert apply_operator("", "", RuleMatchOperator.EQUALS) is True


def test_unknown_operator_is_false():
    assert apply_operator("abc", "abc", "Fuzzy") is False


# ─── search_regex ────────────────────────────────────────────────────


def test_regex_search_is_unanchored_and_case_insensitive():
    assert apply_operator("Order #4411 failed", r"ORDER #\d+", RuleMatchOperator.REGEX) is True


def test_regex_no_match():
    assert search_regex("no digits here", r"\d{3}") is False


def test_malformed_regex_is_false():
    assert search_regex("anything", "([unclosed") is False


def test_backtracking_regex_is_no_match_under_tight_timeout():
    assert search_regex("a" * 30 + "!", r"(a|aa)+$", timeout=0.001) is False


def test_timeout_is_forwarded_to_regex_engine(monkeypatch):
    seen = {}

    def fake_search(pattern, value, flags=0, timeout=None):
        seen["timeout"] = timeout
        return None

    monkeypatch.setattr(regex, "search", fake_search)
    search_regex("value", "pattern", timeout=0.05)
    assert seen["timeout"] == 0.05


def test_timed_out_search_fails_closed(monkeypatch):
    def timing_out_search(*args, **kwargs):
        raise TimeoutError("regex timed out")

    monkeypatch.setattr(regex, "search", timing_out_search)
    assert search_regex("Order #4411", r"\d+") is False
    assert apply_operator("Order #4411", r"\d+", RuleMatchOperator.REGEX) is False
