"""
Audit service for recording and querying system actions.

Every create, update and delete performed by the service layer is
written to the ``audit_logs`` table together with the acting user, the
affected object and a small JSON payload.  Only administrators can read
the audit trail.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from booking_platform_api.app.core.db import get_connection


class AuditService:
    """Service class for writing and retrieving audit logs."""

    @classmethod
    async def log(
        cls,
        user_id: Optional[int],
        action: str,
        object_type: str,
        object_id: Optional[int] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Insert a new audit record.

        Parameters
        ----------
        user_id : Optional[int]
            ID of the user performing the action.  ``None`` for
            system‑initiated actions and self‑registration.
        action : str
            Short description of the action ("create", "update", "delete").
        object_type : str
            Type of object affected (e.g. "hotel", "invoice", "review").
        object_id : Optional[int]
            Primary key of the affected object, if applicable.
        details : Optional[dict]
            Additional structured data about the action, stored as JSON.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            details_json = json.dumps(details, default=str) if details else None
            cursor.execute(
                """
                INSERT INTO audit_logs (user_id, action, object_type, object_id, details)
                VALUES (?, ?, ?, ?, ?)
                """,
                (user_id, action, object_type, object_id, details_json),
            )
            conn.commit()
        finally:
            conn.close()

    @classmethod
    async def record(
        cls,
        user_id: Optional[int],
        action: str,
        object_type: str,
        object_id: Optional[int] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Write an audit record without letting a failure reach the caller.

        The audited operation has already been committed when this is
        called, so an audit error is only logged.
        """
        try:
            await cls.log(user_id, action, object_type, object_id, details)
        except Exception:
            logging.getLogger(__name__).warning(
                "Failed to write audit record for %s %s %s",
                action,
                object_type,
                object_id,
                exc_info=True,
            )

    @classmethod
    async def list_logs(
        cls,
        user_id: Optional[int] = None,
        object_type: Optional[str] = None,
        action: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """Retrieve audit records with optional filters and pagination.

        Date filters accept ISO date strings ("YYYY-MM-DD") and apply to
        the ``timestamp`` column; ``end_date`` is inclusive of the whole
        day.  Newest entries come first.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            where_clauses: List[str] = []
            params: List[Any] = []
            if user_id is not None:
                where_clauses.append("user_id = ?")
                params.append(user_id)
            if object_type:
                where_clauses.append("object_type = ?")
                params.append(object_type)
            if action:
                where_clauses.append("action = ?")
                params.append(action)
            if start_date:
                where_clauses.append("date(timestamp) >= date(?)")
                params.append(start_date)
            if end_date:
                where_clauses.append("date(timestamp) <= date(?)")
                params.append(end_date)
            query = "SELECT id, user_id, action, object_type, object_id, timestamp, details FROM audit_logs"
            if where_clauses:
                query += " WHERE " + " AND ".join(where_clauses)
            query += " ORDER BY timestamp DESC, id DESC LIMIT ? OFFSET ?"
            params.extend([limit, offset])
            rows = cursor.execute(query, tuple(params)).fetchall()
            logs = []
            for row in rows:
                details_data = None
                if row["details"]:
                    try:
                        details_data = json.loads(row["details"])
                    except json.JSONDecodeError:
                        details_data = row["details"]
                logs.append(
                    {
                        "id": row["id"],
                        "user_id": row["user_id"],
                        "action": row["action"],
                        "object_type": row["object_type"],
                        "object_id": row["object_id"],
                        "timestamp": str(row["timestamp"]),
                        "details": details_data,
                    }
                )
            return logs
        finally:
            conn.close()
