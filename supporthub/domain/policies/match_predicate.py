"""MatchPredicatePolicy — compare a single field value against a rule's match value."""

from __future__ import annotations

import logging

import regex

from supporthub.domain.value_objects.enums import RuleMatchOperator

logger = logging.getLogger(__name__)

# Upper bound for a single regex search; a timeout counts as "no match".
DEFAULT_REGEX_TIMEOUT_SECONDS = 0.25


def split_alternatives(raw: str | None) -> list[str]:
    """Split a comma-separated list, trimming whitespace and dropping empty tokens.

    Shared by the ``In`` operator and by the auto-add tag list of a rule.
    """
    if not raw or not raw.strip():
        return []
    return [token.strip() for token in raw.split(",") if token.strip()]


def equals_ignore_case(left: str, right: str) -> bool:
    return left.casefold() == right.casefold()


def contains_ignore_case(value: str, fragment: str) -> bool:
    return fragment.casefold() in value.casefold()


def search_regex(
    value: str,
    pattern: str,
    timeout: float | None = DEFAULT_REGEX_TIMEOUT_SECONDS,
) -> bool:
    """Case-insensitive regex search that always yields a bool.

    Malformed patterns and searches exceeding ``timeout`` seconds evaluate to False.
    """
    try:
        return regex.search(pattern, value, flags=regex.IGNORECASE, timeout=timeout) is not None
    except (regex.error, TimeoutError, ValueError) as e:
        logger.debug("Regex %r did not evaluate (%s), treating as no match", pattern, e)
        return False


def apply_operator(
    value: str,
    match_value: str,
    operator: RuleMatchOperator,
    regex_timeout: float | None = DEFAULT_REGEX_TIMEOUT_SECONDS,
) -> bool:
    """Pure function: does ``value`` satisfy ``operator`` against ``match_value``?

    Every comparison is case-insensitive:
      - Equals      →  exact equality.
      - Contains    →  substring test.
      - StartsWith  →  prefix test.
      - EndsWith    →  suffix test.
      - Regex       →  search for ``match_value`` as a pattern (fails closed).
      - In          →  equality against any comma-separated alternative.
    """
    if operator == RuleMatchOperator.EQUALS:
        return equals_ignore_case(value, match_value)

    if operator == RuleMatchOperator.CONTAINS:
        return contains_ignore_case(value, match_value)

    if operator == RuleMatchOperator.STARTS_WITH:
        return value.casefold().startswith(match_value.casefold())

    if operator == RuleMatchOperator.ENDS_WITH:
        return value.casefold().endswith(match_value.casefold())

    if operator == RuleMatchOperator.REGEX:
        return search_regex(value, match_value, regex_timeout)

    if operator == RuleMatchOperator.IN:
        return any(equals_ignore_case(value, alt) for alt in split_alternatives(match_value))

    # Operator outside the known set
    return False
