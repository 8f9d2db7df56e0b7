"""
Utility functions for z/OS data set search
"""
import re
from typing import Any, Dict, List, Optional


SEQUENTIAL_ORGANIZATIONS = ("PS",)
PARTITIONED_ORGANIZATIONS = ("PO", "PO-E")


def format_target(dsn: str, member: Optional[str] = None) -> str:
    """
    Build the z/OSMF name of a data set or member

    Args:
        dsn: Data set name
        member: Member name, if any

    Returns:
        ``DSN`` or ``DSN(MEMBER)``
    """
    if member:
        return f"{dsn}({member})"
    return dsn


def is_migrated(entry: Dict[str, Any]) -> bool:
    """Check if a data set list entry has been migrated by HSM"""
    migrated = entry.get("migr")
    return isinstance(migrated, str) and migrated.lower() == "yes"


def is_sequential(entry: Dict[str, Any]) -> bool:
    return entry.get("dsorg") in SEQUENTIAL_ORGANIZATIONS


def is_partitioned(entry: Dict[str, Any]) -> bool:
    return entry.get("dsorg") in PARTITIONED_ORGANIZATIONS


def matches_dataset_pattern(dsn: str, pattern: str) -> bool:
    """
    Match a data set name against a z/OS style pattern

    ``*`` matches within a qualifier, ``**`` across qualifiers and ``%``
    matches a single character.

    Args:
        dsn: Data set name
        pattern: Pattern such as ``IBMUSER.**.COBOL``

    Returns:
        True if the name matches, False otherwise
    """
    dsn = dsn.upper()
    pattern = pattern.upper()

    regex_parts = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**", i):
            regex_parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            regex_parts.append("[^.]*")
            i += 1
        elif pattern[i] == "%":
            regex_parts.append("[^.]")
            i += 1
        else:
            regex_parts.append(re.escape(pattern[i]))
            i += 1

    return re.fullmatch("".join(regex_parts), dsn) is not None


def exclude_datasets(entries: List[Dict[str, Any]], exclude_patterns: List[str]) -> List[Dict[str, Any]]:
    """
    Drop data set list entries whose name matches any exclude pattern

    Args:
        entries: Data set list entries
        exclude_patterns: Patterns to exclude

    Returns:
        Filtered list of entries
    """
    if not exclude_patterns:
        return entries

    return [
        entry for entry in entries
        if not any(matches_dataset_pattern(entry.get("dsname", ""), pattern) for pattern in exclude_patterns)
    ]
