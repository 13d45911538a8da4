"""
Row level helpers shared by the service classes.

Reference lists (a service's facility types, a room's facilities, ...)
live in two column link tables and picture lists are stored as JSON
text.  The helpers below read and rewrite those, check that referenced
ids exist and translate SQLite constraint errors into service errors.
Table and column names passed in are module constants of the callers,
never user input.
"""

import json
import sqlite3
from typing import Iterable, List, Optional

from .errors import ConflictError, NotFoundError


def load_json_list(value: Optional[str]) -> List[str]:
    """Decode a JSON list column; missing or malformed values give ``[]``."""
    if not value:
        return []
    try:
        data = json.loads(value)
    except (TypeError, json.JSONDecodeError):
        return []
    return data if isinstance(data, list) else []


def fetch_link_ids(
    cursor: sqlite3.Cursor, table: str, key_column: str, key: int, value_column: str
) -> List[int]:
    rows = cursor.execute(
        f"SELECT {value_column} FROM {table} WHERE {key_column} = ? ORDER BY rowid",
        (key,),
    ).fetchall()
    return [row[0] for row in rows]


def replace_links(
    cursor: sqlite3.Cursor,
    table: str,
    key_column: str,
    key: int,
    value_column: str,
    ids: Iterable[int],
) -> None:
    """Replace the link rows of ``key`` with ``ids`` (duplicates collapse)."""
    cursor.execute(f"DELETE FROM {table} WHERE {key_column} = ?", (key,))
    seen = set()
    for value in ids:
        if value in seen:
            continue
        seen.add(value)
        cursor.execute(
            f"INSERT INTO {table} ({key_column}, {value_column}) VALUES (?, ?)",
            (key, value),
        )


def check_ids_exist(cursor: sqlite3.Cursor, table: str, ids: Iterable[int], label: str) -> None:
    """Raise ``ValueError`` naming the first id missing from ``table``."""
    for value in ids:
        if cursor.execute(f"SELECT 1 FROM {table} WHERE id = ?", (value,)).fetchone() is None:
            raise ValueError(f"{label} {value} not found")


def require_row(cursor: sqlite3.Cursor, table: str, record_id: int, label: str) -> sqlite3.Row:
    """Return the row with ``record_id`` or raise ``NotFoundError``."""
    row = cursor.execute(f"SELECT * FROM {table} WHERE id = ?", (record_id,)).fetchone()
    if row is None:
        raise NotFoundError(f"{label} not found")
    return row


def constraint_error(exc: sqlite3.IntegrityError, label: str) -> ValueError:
    """Translate an ``IntegrityError`` into a service error."""
    message = str(exc)
    if "UNIQUE" in message:
        column = message.rsplit(".", 1)[-1]
        return ConflictError(f"{label} with this {column} already exists")
    return ValueError(f"Invalid {label.lower()} data: {message}")
