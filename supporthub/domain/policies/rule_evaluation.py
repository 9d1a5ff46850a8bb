"""RuleEvaluationPolicy — decide whether one routing rule matches a routing context."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from supporthub.domain.entities.routing import RoutingContext
from supporthub.domain.entities.routing_rule import RoutingRule
from supporthub.domain.policies.match_predicate import (
    DEFAULT_REGEX_TIMEOUT_SECONDS,
    apply_operator,
    contains_ignore_case,
    equals_ignore_case,
    split_alternatives,
)
from supporthub.domain.value_objects.enums import RuleMatchOperator, RuleMatchType

# Match types that test a single text field of the context.
# Absent optional fields are compared as the empty string.
FIELD_SELECTORS: dict[RuleMatchType, Callable[[RoutingContext], str]] = {
    RuleMatchType.SENDER_DOMAIN: lambda ctx: ctx.sender_domain or "",
    RuleMatchType.SUBJECT_KEYWORD: lambda ctx: ctx.subject or "",
    RuleMatchType.BODY_KEYWORD: lambda ctx: ctx.body or "",
    RuleMatchType.ISSUE_TYPE: lambda ctx: ctx.issue_type or "",
    RuleMatchType.SYSTEM: lambda ctx: ctx.system or "",
    RuleMatchType.REQUESTER_EMAIL: lambda ctx: ctx.requester_email or "",
}

# Recognized, but the context carries no company code: never matches.
NEVER_MATCHING_TYPES: frozenset[RuleMatchType] = frozenset({RuleMatchType.COMPANY_CODE})


def rule_matches(
    rule: RoutingRule,
    context: RoutingContext,
    regex_timeout: float | None = DEFAULT_REGEX_TIMEOUT_SECONDS,
) -> bool:
    """Dispatch on the rule's match type and test the selected context field(s).

    Unknown match types and ``CompanyCode`` evaluate to False, never raise.
    """
    if rule.match_type == RuleMatchType.TAG:
        return evaluate_tag_rule(
            context.tags, rule.match_value, rule.match_operator, regex_timeout
        )

    if rule.match_type in NEVER_MATCHING_TYPES:
        return False

    selector = FIELD_SELECTORS.get(rule.match_type)
    if selector is None:
        return False

    return apply_operator(
        selector(context), rule.match_value, rule.match_operator, regex_timeout
    )


def evaluate_tag_rule(
    tags: Iterable[str],
    match_value: str,
    operator: RuleMatchOperator,
    regex_timeout: float | None = DEFAULT_REGEX_TIMEOUT_SECONDS,
) -> bool:
    """Multi-valued match: the rule matches if ANY context tag satisfies it.

    ``In``, ``Contains`` and ``Equals`` are phrased over the tag set directly;
    the remaining operators run the generic predicate on each tag.
    """
    tags = list(tags)
    if not tags:
        return False

    if operator == RuleMatchOperator.IN:
        allowed = split_alternatives(match_value)
        return any(equals_ignore_case(tag, alt) for tag in tags for alt in allowed)

    if operator == RuleMatchOperator.CONTAINS:
        return any(contains_ignore_case(tag, match_value) for tag in tags)

    if operator == RuleMatchOperator.EQUALS:
        return any(equals_ignore_case(tag, match_value) for tag in tags)

    return any(apply_operator(tag, match_value, operator, regex_timeout) for tag in tags)


def parse_tag_additions(auto_add_tags: str | None) -> tuple[str, ...]:
    """Parse a rule's comma-separated tag-addition list (empty when blank)."""
    return tuple(split_alternatives(auto_add_tags))
