"""
Predicates used by the assertions to search captured emails.

Everything here is pure: records and criteria are only read.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mailcollector.types import CapturedRecords, Criteria, MessageRecord


def _searchable(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "\n".join(str(part) for part in value)
    return str(value)


def record_matches(record: MessageRecord, criteria: Criteria) -> bool:
    """
    Whether every criterion is a substring of the record's field of the
    same name.

    The comparison is case-sensitive and criteria are compared as text.
    A field missing from the record (or set to `None`) fails its criterion
    instead of raising.

    Args:
        record: A captured message record.
        criteria: Mapping of field name to the substring to look for.

    Returns:
        `True` when all criteria matched. An empty mapping matches any record.
    """
    matched = 0
    for key, search in criteria.items():
        haystack = _searchable(record.get(key))
        if haystack is not None and str(search) in haystack:
            matched += 1
    return matched == len(criteria)


def matches_any(records: CapturedRecords, criteria: Criteria) -> bool:
    """
    Whether at least one record satisfies all the criteria.

    Records are tested in order and the search stops at the first full match.
    """
    for record in records:
        if record_matches(record, criteria):
            return True
    return False


def count_equals(records: Sequence[Any], expected: int) -> bool:
    return len(records) == expected
