"""Membership lookups over roster, match player and team member lists.

All lookups are linear scans over the entry list, which is fine for the
roster sizes a single game sees.
"""
from typing import Iterable, Optional, TypeVar

T = TypeVar('T')


def find_entry(entries: Iterable[T], user_id: int) -> Optional[T]:
    """Return the first entry whose ``user_id`` equals ``user_id``, else None."""
    for entry in entries:
        if entry.user_id == user_id:
            return entry
    return None


def is_member(entries: Iterable[T], user_id: int) -> bool:
    return find_entry(entries, user_id) is not None
