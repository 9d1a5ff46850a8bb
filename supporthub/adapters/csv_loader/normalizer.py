"""CSV column normalization — handles BOM, trailing spaces, encoding quirks."""

from __future__ import annotations

import re
from enum import Enum
from typing import TypeVar

E = TypeVar("E", bound=Enum)

_TRUE_VALUES = {"1", "true", "yes", "y"}
_FALSE_VALUES = {"0", "false", "no", "n"}


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Strips leading/trailing whitespace
    - Removes BOM characters (\\ufeff)
    - Replaces multiple spaces / non-breaking spaces with single underscore
    - Lowercases
    - Strips non-alphanumeric characters (except underscore)
    """
    name = name.replace("\ufeff", "")
    name = name.strip()
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    name = re.sub(r"[^\w]", "", name, flags=re.UNICODE)
    return name


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def _enum_key(raw: str) -> str:
    return re.sub(r"[\s_\-]+", "", raw).lower()


def parse_enum(enum_cls: type[E], raw: str | None) -> E | None:
    """Match a CSV cell against an enum's values or member names.

    Spacing, underscores, dashes and case are ignored, so "SubjectKeyword",
    "subject_keyword" and "SUBJECT KEYWORD" all resolve to the same member.
    """
    if not raw:
        return None
    key = _enum_key(raw)
    for member in enum_cls:
        if key in (_enum_key(str(member.value)), _enum_key(member.name)):
            return member
    return None


def parse_bool(raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default
