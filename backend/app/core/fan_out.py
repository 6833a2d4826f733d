"""Fan-out Selection — pure projection of subscribers onto channel contacts.

Invariants:
    - Contacts keep subscriber order; empty/None contacts are dropped
    - Duplicate contacts collapse to one (two users sharing a phone get one message)

Design Decisions:
    - Kept pure so the notifier shell only does IO: query, project, dispatch
"""

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")


def collect_contacts(
    subscribers: Iterable[T], contact_of: Callable[[T], str | None],
) -> list[str]:
    """Project subscribers to contact values, dropping missing ones."""
    seen: set[str] = set()
    contacts: list[str] = []
    for subscriber in subscribers:
        value = contact_of(subscriber)
        if not value:
            continue
        value = value.strip()
        if value and value not in seen:
            seen.add(value)
            contacts.append(value)
    return contacts
