"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class RuleMatchType(str, Enum):
    """Which field of a routing context a rule inspects."""

    SENDER_DOMAIN = "SenderDomain"
    SUBJECT_KEYWORD = "SubjectKeyword"
    BODY_KEYWORD = "BodyKeyword"
    ISSUE_TYPE = "IssueType"
    SYSTEM = "System"
    TAG = "Tag"
    COMPANY_CODE = "CompanyCode"
    REQUESTER_EMAIL = "RequesterEmail"


class RuleMatchOperator(str, Enum):
    """How a rule's stored value is compared against the field value."""

    EQUALS = "Equals"
    CONTAINS = "Contains"
    STARTS_WITH = "StartsWith"
    ENDS_WITH = "EndsWith"
    REGEX = "Regex"
    IN = "In"  # comma-separated list


class TicketPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"
