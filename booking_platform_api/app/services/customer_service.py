"""
Service layer for customer profiles.

Customer profiles track loyalty points for guest accounts.  They are
managed by administrators.
"""

import logging
import sqlite3
from typing import Any, Dict, List

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.errors import NotFoundError
from booking_platform_api.app.core.records import constraint_error
from booking_platform_api.app.schemas.provider import CustomerCreate, CustomerRead, CustomerUpdate
from booking_platform_api.app.services.audit_service import AuditService


_SELECT = """
    SELECT c.*, u.full_name AS user_full_name, u.email AS user_email
    FROM customers c JOIN users u ON u.id = c.user_id
"""


class CustomerService:
    @classmethod
    async def create_customer(cls, data: CustomerCreate, current_user: Dict[str, Any]) -> CustomerRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not cursor.execute("SELECT 1 FROM users WHERE id = ?", (data.user_id,)).fetchone():
                raise ValueError(f"User {data.user_id} not found")
            try:
                cursor.execute(
                    """
                    INSERT INTO customers (customer_code, user_id, loyalty_points, active)
                    VALUES (?, ?, ?, ?)
                    """,
                    (data.customer_code, data.user_id, data.loyalty_points, int(data.active)),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, "Customer") from exc
            customer_id = cursor.lastrowid
            conn.commit()
            logger.info("Created customer profile %s", customer_id)
            row = cursor.execute(f"{_SELECT} WHERE c.id = ?", (customer_id,)).fetchone()
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="create",
            object_type="customer",
            object_id=customer_id,
            details={"customer_code": data.customer_code},
        )
        return cls._row_to_read(row)

    @classmethod
    async def list_customers(cls, limit: int = 100, offset: int = 0) -> List[CustomerRead]:
        conn = get_connection()
        try:
            rows = conn.execute(
                f"{_SELECT} ORDER BY c.id LIMIT ? OFFSET ?", (limit, offset)
            ).fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_customer(cls, customer_id: int) -> CustomerRead:
        conn = get_connection()
        try:
            row = conn.execute(f"{_SELECT} WHERE c.id = ?", (customer_id,)).fetchone()
            if not row:
                raise NotFoundError("Customer not found")
            return cls._row_to_read(row)
        finally:
            conn.close()

    @classmethod
    async def update_customer(
        cls, customer_id: int, data: CustomerUpdate, current_user: Dict[str, Any]
    ) -> CustomerRead:
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not cursor.execute("SELECT 1 FROM customers WHERE id = ?", (customer_id,)).fetchone():
                raise NotFoundError("Customer not found")
            if updates:
                values = [int(v) for v in updates.values()]
                assignments = ", ".join(f"{key} = ?" for key in updates)
                cursor.execute(
                    f"UPDATE customers SET {assignments} WHERE id = ?", (*values, customer_id)
                )
                conn.commit()
            row = cursor.execute(f"{_SELECT} WHERE c.id = ?", (customer_id,)).fetchone()
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type="customer",
            object_id=customer_id,
            details=updates,
        )
        return cls._row_to_read(row)

    @classmethod
    async def delete_customer(cls, customer_id: int, current_user: Dict[str, Any]) -> None:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM customers WHERE id = ?", (customer_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("Customer not found")
            conn.commit()
        finally:
            conn.close()
        logging.getLogger(__name__).info("Deleted customer profile %s", customer_id)
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type="customer",
            object_id=customer_id,
        )

    @staticmethod
    def _row_to_read(row: sqlite3.Row) -> CustomerRead:
        return CustomerRead(
            id=row["id"],
            customer_code=row["customer_code"],
            user_id=row["user_id"],
            loyalty_points=row["loyalty_points"],
            active=bool(row["active"]),
            user_full_name=row["user_full_name"],
            user_email=row["user_email"],
        )
