"""Service layer for administrator profiles."""

import logging
import sqlite3
from typing import Any, Dict, List

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.errors import NotFoundError
from booking_platform_api.app.core.records import constraint_error
from booking_platform_api.app.core.security import ADMIN
from booking_platform_api.app.schemas.provider import AdminCreate, AdminRead, AdminUpdate
from booking_platform_api.app.services.audit_service import AuditService


_SELECT = """
    SELECT a.*, u.full_name AS user_full_name, u.email AS user_email
    FROM admins a JOIN users u ON u.id = a.user_id
"""


class AdminService:
    @classmethod
    async def create_admin(cls, data: AdminCreate, current_user: Dict[str, Any]) -> AdminRead:
        """Attach an administrator profile to a user with the Admin role."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            user = cursor.execute("SELECT role FROM users WHERE id = ?", (data.user_id,)).fetchone()
            if not user:
                raise ValueError(f"User {data.user_id} not found")
            if user["role"] != ADMIN:
                raise ValueError("The user must have the Admin role")
            try:
                cursor.execute(
                    "INSERT INTO admins (admin_code, user_id, access_level) VALUES (?, ?, ?)",
                    (data.admin_code, data.user_id, data.access_level),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, "Admin") from exc
            admin_id = cursor.lastrowid
            conn.commit()
            logger.info("Created admin profile %s", admin_id)
            row = cursor.execute(f"{_SELECT} WHERE a.id = ?", (admin_id,)).fetchone()
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="create",
            object_type="admin",
            object_id=admin_id,
            details={"admin_code": data.admin_code},
        )
        return cls._row_to_read(row)

    @classmethod
    async def list_admins(cls) -> List[AdminRead]:
        conn = get_connection()
        try:
            rows = conn.execute(f"{_SELECT} ORDER BY a.id").fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_admin(cls, admin_id: int) -> AdminRead:
        conn = get_connection()
        try:
            row = conn.execute(f"{_SELECT} WHERE a.id = ?", (admin_id,)).fetchone()
            if not row:
                raise NotFoundError("Admin not found")
            return cls._row_to_read(row)
        finally:
            conn.close()

    @classmethod
    async def update_admin(
        cls, admin_id: int, data: AdminUpdate, current_user: Dict[str, Any]
    ) -> AdminRead:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE admins SET access_level = ? WHERE id = ?", (data.access_level, admin_id)
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Admin not found")
            conn.commit()
            row = cursor.execute(f"{_SELECT} WHERE a.id = ?", (admin_id,)).fetchone()
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type="admin",
            object_id=admin_id,
            details={"access_level": data.access_level},
        )
        return cls._row_to_read(row)

    @classmethod
    async def delete_admin(cls, admin_id: int, current_user: Dict[str, Any]) -> None:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM admins WHERE id = ?", (admin_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("Admin not found")
            conn.commit()
        finally:
            conn.close()
        logging.getLogger(__name__).info("Deleted admin profile %s", admin_id)
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type="admin",
            object_id=admin_id,
        )

    @staticmethod
    def _row_to_read(row: sqlite3.Row) -> AdminRead:
        return AdminRead(
            id=row["id"],
            admin_code=row["admin_code"],
            user_id=row["user_id"],
            access_level=row["access_level"],
            user_full_name=row["user_full_name"],
            user_email=row["user_email"],
        )
