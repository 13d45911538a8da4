"""
Ownership checks for provider‑owned resources.

Every bookable resource belongs to exactly one provider account through
a fixed chain of references:

* service → provider → user
* hotel / restaurant / coffee → service → provider → user
* room → hotel → service → provider → user
* table → restaurant → service → provider → user

``owner_user_id`` walks the chain for one record and returns the id of
the user behind the owning provider.  ``ensure_owner`` compares it with
the caller; administrators bypass the comparison.
"""

import sqlite3
from typing import Any, Dict, Optional, Type

from .errors import NotFoundError, PermissionDeniedError
from .security import is_admin


_PROVIDER_JOIN = "JOIN providers p ON p.id = s.provider_id"

OWNER_QUERIES: Dict[str, str] = {
    "provider": "SELECT p.user_id FROM providers p WHERE p.id = ?",
    "service": f"SELECT p.user_id FROM services s {_PROVIDER_JOIN} WHERE s.id = ?",
    "hotel": (
        "SELECT p.user_id FROM hotels h "
        f"JOIN services s ON s.id = h.service_id {_PROVIDER_JOIN} WHERE h.id = ?"
    ),
    "restaurant": (
        "SELECT p.user_id FROM restaurants r "
        f"JOIN services s ON s.id = r.service_id {_PROVIDER_JOIN} WHERE r.id = ?"
    ),
    "coffee": (
        "SELECT p.user_id FROM coffees c "
        f"JOIN services s ON s.id = c.service_id {_PROVIDER_JOIN} WHERE c.id = ?"
    ),
    "room": (
        "SELECT p.user_id FROM rooms rm "
        "JOIN hotels h ON h.id = rm.hotel_id "
        f"JOIN services s ON s.id = h.service_id {_PROVIDER_JOIN} WHERE rm.id = ?"
    ),
    "table": (
        "SELECT p.user_id FROM dining_tables t "
        "JOIN restaurants r ON r.id = t.restaurant_id "
        f"JOIN services s ON s.id = r.service_id {_PROVIDER_JOIN} WHERE t.id = ?"
    ),
}


def owner_user_id(cursor: sqlite3.Cursor, kind: str, record_id: int) -> Optional[int]:
    """Return the user id owning ``record_id`` of type ``kind``.

    Returns ``None`` when the record (or a link of its chain) does not
    exist.
    """
    row = cursor.execute(OWNER_QUERIES[kind], (record_id,)).fetchone()
    return row["user_id"] if row else None


def ensure_owner(
    cursor: sqlite3.Cursor,
    kind: str,
    record_id: int,
    current_user: Dict[str, Any],
    missing: Type[ValueError] = NotFoundError,
) -> None:
    """Raise unless the caller owns the record or is an administrator.

    ``missing`` selects the exception raised when the record does not
    exist: endpoints acting on the record itself report 404, while
    creating a child under a missing parent is a bad request.
    """
    user_id = owner_user_id(cursor, kind, record_id)
    if user_id is None:
        raise missing(f"{kind.capitalize()} {record_id} not found")
    if is_admin(current_user):
        return
    if user_id != current_user.get("user_id"):
        raise PermissionDeniedError(f"You do not own this {kind}")
