"""Service layer for café offerings (coffees)."""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from fastapi import UploadFile

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.ownership import ensure_owner
from booking_platform_api.app.core.records import constraint_error, require_row
from booking_platform_api.app.core.storage import save_upload
from booking_platform_api.app.schemas.coffee import CoffeeCreate, CoffeeRead, CoffeeUpdate
from booking_platform_api.app.services.audit_service import AuditService


class CoffeeService:
    @classmethod
    async def create_coffee(cls, data: CoffeeCreate, current_user: Dict[str, Any]) -> CoffeeRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "service", data.service_id, current_user, missing=ValueError)
            try:
                cursor.execute(
                    "INSERT INTO coffees (coffee_code, service_id, coffee_type, average_price) VALUES (?, ?, ?, ?)",
                    (data.coffee_code, data.service_id, data.coffee_type, data.average_price),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, "Coffee") from exc
            coffee_id = cursor.lastrowid
            conn.commit()
            logger.info("Created coffee %s for service %s", coffee_id, data.service_id)
            row = require_row(cursor, "coffees", coffee_id, "Coffee")
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="create",
            object_type="coffee",
            object_id=coffee_id,
            details={"coffee_code": data.coffee_code, "service_id": data.service_id},
        )
        return cls._row_to_read(row)

    @classmethod
    async def list_coffees(
        cls, service_id: Optional[int] = None, limit: int = 100, offset: int = 0
    ) -> List[CoffeeRead]:
        conn = get_connection()
        try:
            if service_id is not None:
                rows = conn.execute(
                    "SELECT * FROM coffees WHERE service_id = ? ORDER BY id LIMIT ? OFFSET ?",
                    (service_id, limit, offset),
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM coffees ORDER BY id LIMIT ? OFFSET ?", (limit, offset)
                ).fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_coffee(cls, coffee_id: int) -> CoffeeRead:
        conn = get_connection()
        try:
            return cls._row_to_read(require_row(conn.cursor(), "coffees", coffee_id, "Coffee"))
        finally:
            conn.close()

    @classmethod
    async def update_coffee(cls, coffee_id: int, data: CoffeeUpdate, current_user: Dict[str, Any]) -> CoffeeRead:
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "coffee", coffee_id, current_user)
            if updates:
                assignments = ", ".join(f"{key} = ?" for key in updates)
                cursor.execute(
                    f"UPDATE coffees SET {assignments} WHERE id = ?", (*updates.values(), coffee_id)
                )
                conn.commit()
            row = require_row(cursor, "coffees", coffee_id, "Coffee")
        finally:
            conn.close()
        logging.getLogger(__name__).info("Updated coffee %s", coffee_id)
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type="coffee",
            object_id=coffee_id,
            details=updates,
        )
        return cls._row_to_read(row)

    @classmethod
    async def delete_coffee(cls, coffee_id: int, current_user: Dict[str, Any]) -> None:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "coffee", coffee_id, current_user)
            cursor.execute("DELETE FROM coffees WHERE id = ?", (coffee_id,))
            conn.commit()
        finally:
            conn.close()
        logging.getLogger(__name__).info("Deleted coffee %s", coffee_id)
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type="coffee",
            object_id=coffee_id,
        )

    @classmethod
    async def set_picture(cls, coffee_id: int, file: UploadFile, current_user: Dict[str, Any]) -> CoffeeRead:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "coffee", coffee_id, current_user)
            path = await save_upload(file)
            cursor.execute("UPDATE coffees SET picture = ? WHERE id = ?", (path, coffee_id))
            conn.commit()
            row = require_row(cursor, "coffees", coffee_id, "Coffee")
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="upload",
            object_type="coffee",
            object_id=coffee_id,
            details={"picture": path},
        )
        return cls._row_to_read(row)

    @classmethod
    def coffees_for_service(cls, cursor: sqlite3.Cursor, service_id: int) -> List[CoffeeRead]:
        rows = cursor.execute(
            "SELECT * FROM coffees WHERE service_id = ? ORDER BY id", (service_id,)
        ).fetchall()
        return [cls._row_to_read(row) for row in rows]

    @staticmethod
    def _row_to_read(row: sqlite3.Row) -> CoffeeRead:
        return CoffeeRead(
            id=row["id"],
            coffee_code=row["coffee_code"],
            service_id=row["service_id"],
            coffee_type=row["coffee_type"],
            average_price=row["average_price"],
            picture=row["picture"],
        )
