"""Service layer for restaurant tables.

Tables belong to a restaurant; ownership is checked through the
restaurant, its service and the service's provider.  A table has a
single picture, replaced by each upload.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from fastapi import UploadFile

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.ownership import ensure_owner
from booking_platform_api.app.core.records import constraint_error, require_row
from booking_platform_api.app.core.storage import save_upload
from booking_platform_api.app.schemas.common import check_discount
from booking_platform_api.app.schemas.table import TableCreate, TableRead, TableUpdate
from booking_platform_api.app.services.audit_service import AuditService


class TableService:
    @classmethod
    async def create_table(cls, data: TableCreate, current_user: Dict[str, Any]) -> TableRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "restaurant", data.restaurant_id, current_user, missing=ValueError)
            try:
                cursor.execute(
                    """
                    INSERT INTO dining_tables (table_code, restaurant_id, table_type, available_date,
                                               active, price, discount_price)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        data.table_code,
                        data.restaurant_id,
                        data.table_type,
                        data.available_date.isoformat(),
                        int(data.active),
                        data.price,
                        data.discount_price,
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, "Table") from exc
            table_id = cursor.lastrowid
            conn.commit()
            logger.info("Created table %s in restaurant %s", table_id, data.restaurant_id)
            row = require_row(cursor, "dining_tables", table_id, "Table")
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="create",
            object_type="table",
            object_id=table_id,
            details={"table_code": data.table_code, "restaurant_id": data.restaurant_id},
        )
        return cls._row_to_read(row)

    @classmethod
    async def list_tables(
        cls,
        restaurant_id: Optional[int] = None,
        active: Optional[bool] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[TableRead]:
        where: List[str] = []
        params: List[Any] = []
        if restaurant_id is not None:
            where.append("restaurant_id = ?")
            params.append(restaurant_id)
        if active is not None:
            where.append("active = ?")
            params.append(int(active))
        query = "SELECT * FROM dining_tables"
        if where:
            query += " WHERE " + " AND ".join(where)
        query += " ORDER BY id LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        conn = get_connection()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_table(cls, table_id: int) -> TableRead:
        conn = get_connection()
        try:
            return cls._row_to_read(require_row(conn.cursor(), "dining_tables", table_id, "Table"))
        finally:
            conn.close()

    @classmethod
    async def update_table(cls, table_id: int, data: TableUpdate, current_user: Dict[str, Any]) -> TableRead:
        logger = logging.getLogger(__name__)
        updates = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k == "discount_price"
        }
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "table", table_id, current_user)
            current = require_row(cursor, "dining_tables", table_id, "Table")
            check_discount(
                updates.get("price", current["price"]),
                updates.get("discount_price", current["discount_price"]),
            )
            columns = dict(updates)
            if "available_date" in columns:
                columns["available_date"] = columns["available_date"].isoformat()
            if "active" in columns:
                columns["active"] = int(columns["active"])
            if columns:
                assignments = ", ".join(f"{key} = ?" for key in columns)
                cursor.execute(
                    f"UPDATE dining_tables SET {assignments} WHERE id = ?", (*columns.values(), table_id)
                )
                conn.commit()
                logger.info("Updated table %s", table_id)
            row = require_row(cursor, "dining_tables", table_id, "Table")
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type="table",
            object_id=table_id,
            details=updates,
        )
        return cls._row_to_read(row)

    @classmethod
    async def delete_table(cls, table_id: int, current_user: Dict[str, Any]) -> None:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "table", table_id, current_user)
            cursor.execute("DELETE FROM dining_tables WHERE id = ?", (table_id,))
            conn.commit()
            logger.info("Deleted table %s", table_id)
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type="table",
            object_id=table_id,
        )

    @classmethod
    async def set_picture(cls, table_id: int, file: UploadFile, current_user: Dict[str, Any]) -> TableRead:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "table", table_id, current_user)
            path = await save_upload(file)
            cursor.execute("UPDATE dining_tables SET picture = ? WHERE id = ?", (path, table_id))
            conn.commit()
            row = require_row(cursor, "dining_tables", table_id, "Table")
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="upload",
            object_type="table",
            object_id=table_id,
            details={"picture": path},
        )
        return cls._row_to_read(row)

    @staticmethod
    def _row_to_read(row: sqlite3.Row) -> TableRead:
        return TableRead(
            id=row["id"],
            table_code=row["table_code"],
            restaurant_id=row["restaurant_id"],
            table_type=row["table_type"],
            available_date=row["available_date"],
            picture=row["picture"],
            active=bool(row["active"]),
            price=row["price"],
            discount_price=row["discount_price"],
        )
