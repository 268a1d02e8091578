"""Who may see and who may change an entry.

Viewing and mutating are answered by separate predicates. A shared collection
grants read access to the entries placed in it, never write access.
"""

from collections.abc import Container

from interne.models.collection import Collection
from interne.models.entry import Entry
from interne.models.user import User


def can_view(entry: Entry, user: User, memberships: Container[int]) -> bool:
    """Check whether ``user`` may see ``entry``.

    ``memberships`` holds the ids of every collection the user belongs to,
    including the ones they own.
    """
    if entry.owner_id == user.id:
        return True
    return entry.collection_id is not None and entry.collection_id in memberships


def can_mutate(entry: Entry, user: User) -> bool:
    """Check whether ``user`` may edit or delete ``entry`` (owner only)."""
    return entry.owner_id == user.id


def can_manage_collection(collection: Collection, user: User) -> bool:
    """Check whether ``user`` may rename, delete or administer ``collection``."""
    return collection.owner_id == user.id
