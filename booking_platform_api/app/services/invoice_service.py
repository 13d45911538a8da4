"""
Service layer for invoices.

An invoice is issued for a user and references the booked service and,
for hotel stays, the booked room.  ``status`` has no transition rules:
any authenticated caller may set any of the allowed values.  Reads are
limited to the invoice's user, the provider owning the booked service
and administrators.

The listing helpers resolve references for client screens: a user's
own invoices, the invoices received by a provider, and the full order
list for administrators.
"""

import json
import logging
import sqlite3
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import UploadFile

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.errors import PermissionDeniedError
from booking_platform_api.app.core.records import (
    check_ids_exist,
    constraint_error,
    load_json_list,
    require_row,
)
from booking_platform_api.app.core.security import is_admin
from booking_platform_api.app.core.storage import save_uploads
from booking_platform_api.app.schemas.invoice import (
    InvoiceCreate,
    InvoiceDetail,
    InvoiceRead,
    InvoiceUpdate,
    ProviderBrief,
)
from booking_platform_api.app.schemas.location import LocationRead
from booking_platform_api.app.schemas.room import RoomBrief
from booking_platform_api.app.schemas.service import ServiceBrief
from booking_platform_api.app.schemas.user import UserBrief
from booking_platform_api.app.services.audit_service import AuditService


def to_utc_naive(value: datetime) -> datetime:
    """Normalise a datetime to naive UTC, the form stored in ``issue_date``."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class InvoiceService:
    """Service class for invoices."""

    @classmethod
    async def create_invoice(cls, data: InvoiceCreate, current_user: Dict[str, Any]) -> InvoiceRead:
        logger = logging.getLogger(__name__)
        user_id = data.user_id if data.user_id is not None else current_user.get("user_id")
        if user_id != current_user.get("user_id") and not is_admin(current_user):
            raise PermissionDeniedError("Only administrators can issue invoices for other users")
        issue_date = to_utc_naive(data.issue_date or datetime.now(timezone.utc))
        conn = get_connection()
        try:
            cursor = conn.cursor()
            check_ids_exist(cursor, "users", [user_id], "User")
            cls._check_booking_refs(cursor, data.service_id, data.room_id)
            try:
                cursor.execute(
                    """
                    INSERT INTO invoices (invoice_code, user_id, service_id, room_id, quantity, total_amount,
                                          issue_date, payment_status, check_in_date, check_out_date, status,
                                          pictures)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        data.invoice_code,
                        user_id,
                        data.service_id,
                        data.room_id,
                        data.quantity,
                        data.total_amount,
                        issue_date.isoformat(),
                        data.payment_status,
                        data.check_in_date.isoformat(),
                        data.check_out_date.isoformat(),
                        data.status,
                        json.dumps([]),
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, "Invoice") from exc
            invoice_id = cursor.lastrowid
            conn.commit()
            logger.info("Created invoice %s for user %s", invoice_id, user_id)
            row = require_row(cursor, "invoices", invoice_id, "Invoice")
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="create",
            object_type="invoice",
            object_id=invoice_id,
            details={"invoice_code": data.invoice_code, "total_amount": data.total_amount},
        )
        return cls._row_to_read(row)

    @classmethod
    async def list_invoices(
        cls, current_user: Dict[str, Any], limit: int = 100, offset: int = 0
    ) -> List[InvoiceRead]:
        """All invoices for administrators, the caller's own otherwise."""
        conn = get_connection()
        try:
            if is_admin(current_user):
                rows = conn.execute(
                    "SELECT * FROM invoices ORDER BY id LIMIT ? OFFSET ?", (limit, offset)
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM invoices WHERE user_id = ? ORDER BY id LIMIT ? OFFSET ?",
                    (current_user.get("user_id"), limit, offset),
                ).fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_invoice(cls, invoice_id: int, current_user: Dict[str, Any]) -> InvoiceRead:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = require_row(cursor, "invoices", invoice_id, "Invoice")
            cls._ensure_can_read(cursor, row, current_user)
            return cls._row_to_read(row)
        finally:
            conn.close()

    @classmethod
    async def update_invoice(
        cls, invoice_id: int, data: InvoiceUpdate, current_user: Dict[str, Any]
    ) -> InvoiceRead:
        logger = logging.getLogger(__name__)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            current = require_row(cursor, "invoices", invoice_id, "Invoice")
            check_in = updates.get("check_in_date") or date.fromisoformat(current["check_in_date"])
            check_out = updates.get("check_out_date") or date.fromisoformat(current["check_out_date"])
            if check_out <= check_in:
                raise ValueError("Check-out date must be after the check-in date")
            if "service_id" in updates or "room_id" in updates:
                cls._check_booking_refs(
                    cursor,
                    updates.get("service_id", current["service_id"]),
                    updates.get("room_id", current["room_id"]),
                )
            columns = {
                key: value.isoformat() if key.endswith("_date") else value
                for key, value in updates.items()
            }
            if columns:
                assignments = ", ".join(f"{key} = ?" for key in columns)
                cursor.execute(
                    f"UPDATE invoices SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (*columns.values(), invoice_id),
                )
                conn.commit()
                logger.info("Updated invoice %s", invoice_id)
            row = require_row(cursor, "invoices", invoice_id, "Invoice")
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type="invoice",
            object_id=invoice_id,
            details=updates,
        )
        return cls._row_to_read(row)

    @classmethod
    async def update_status(cls, invoice_id: int, status: str, current_user: Dict[str, Any]) -> InvoiceRead:
        return await cls.update_invoice(invoice_id, InvoiceUpdate(status=status), current_user)

    @classmethod
    async def delete_invoice(cls, invoice_id: int, current_user: Dict[str, Any]) -> None:
        """Delete an invoice (its user or an administrator)."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = require_row(cursor, "invoices", invoice_id, "Invoice")
            if row["user_id"] != current_user.get("user_id") and not is_admin(current_user):
                raise PermissionDeniedError("You cannot delete this invoice")
            cursor.execute("DELETE FROM invoices WHERE id = ?", (invoice_id,))
            conn.commit()
            logger.info("Deleted invoice %s", invoice_id)
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type="invoice",
            object_id=invoice_id,
        )

    @classmethod
    async def add_pictures(
        cls, invoice_id: int, files: List[UploadFile], current_user: Dict[str, Any]
    ) -> InvoiceRead:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = require_row(cursor, "invoices", invoice_id, "Invoice")
            cls._ensure_can_read(cursor, row, current_user)
            paths = await save_uploads(files)
            pictures = load_json_list(row["pictures"]) + paths
            cursor.execute(
                "UPDATE invoices SET pictures = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (json.dumps(pictures), invoice_id),
            )
            conn.commit()
            row = require_row(cursor, "invoices", invoice_id, "Invoice")
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="upload",
            object_type="invoice",
            object_id=invoice_id,
            details={"pictures": paths},
        )
        return cls._row_to_read(row)

    @classmethod
    async def list_for_user(cls, user_id: int, current_user: Dict[str, Any]) -> List[InvoiceDetail]:
        """A user's invoices with service, location and room resolved."""
        if user_id != current_user.get("user_id") and not is_admin(current_user):
            raise PermissionDeniedError("You can only view your own invoices")
        conn = get_connection()
        try:
            cursor = conn.cursor()
            rows = cursor.execute(
                "SELECT * FROM invoices WHERE user_id = ? ORDER BY issue_date DESC, id DESC", (user_id,)
            ).fetchall()
            return [cls._row_to_detail(cursor, row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_for_provider(cls, user_id: int, current_user: Dict[str, Any]) -> List[InvoiceDetail]:
        """Invoices booked against services of the provider behind ``user_id``."""
        if user_id != current_user.get("user_id") and not is_admin(current_user):
            raise PermissionDeniedError("You can only view invoices for your own services")
        conn = get_connection()
        try:
            cursor = conn.cursor()
            check_ids_exist(cursor, "users", [user_id], "User")
            rows = cursor.execute(
                """
                SELECT i.* FROM invoices i
                JOIN services s ON s.id = i.service_id
                JOIN providers p ON p.id = s.provider_id
                WHERE p.user_id = ?
                ORDER BY i.issue_date DESC, i.id DESC
                """,
                (user_id,),
            ).fetchall()
            return [cls._row_to_detail(cursor, row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_orders(cls, limit: int = 100, offset: int = 0) -> List[InvoiceDetail]:
        """Every invoice with user, service, provider and room resolved."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            rows = cursor.execute(
                "SELECT * FROM invoices ORDER BY issue_date DESC, id DESC LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
            return [cls._row_to_detail(cursor, row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def _check_booking_refs(cursor: sqlite3.Cursor, service_id: int, room_id: Optional[int]) -> None:
        """The service must exist and a booked room must belong to one of its hotels."""
        check_ids_exist(cursor, "services", [service_id], "Service")
        if room_id is None:
            return
        room = cursor.execute(
            """
            SELECT h.service_id FROM rooms r
            JOIN hotels h ON h.id = r.hotel_id
            WHERE r.id = ?
            """,
            (room_id,),
        ).fetchone()
        if room is None:
            raise ValueError(f"Room {room_id} not found")
        if room["service_id"] != service_id:
            raise ValueError(f"Room {room_id} does not belong to service {service_id}")

    @staticmethod
    def _ensure_can_read(cursor: sqlite3.Cursor, row: sqlite3.Row, current_user: Dict[str, Any]) -> None:
        if is_admin(current_user) or row["user_id"] == current_user.get("user_id"):
            return
        if row["service_id"] is not None:
            owner = cursor.execute(
                """
                SELECT p.user_id FROM services s JOIN providers p ON p.id = s.provider_id
                WHERE s.id = ?
                """,
                (row["service_id"],),
            ).fetchone()
            if owner and owner["user_id"] == current_user.get("user_id"):
                return
        raise PermissionDeniedError("You do not have access to this invoice")

    @classmethod
    def _row_to_detail(cls, cursor: sqlite3.Cursor, row: sqlite3.Row) -> InvoiceDetail:
        user = cursor.execute(
            "SELECT id, full_name, email FROM users WHERE id = ?", (row["user_id"],)
        ).fetchone()
        service = provider = room = None
        if row["service_id"] is not None:
            service_row = cursor.execute(
                "SELECT * FROM services WHERE id = ?", (row["service_id"],)
            ).fetchone()
            if service_row:
                location = None
                if service_row["location_id"] is not None:
                    location_row = cursor.execute(
                        "SELECT * FROM locations WHERE id = ?", (service_row["location_id"],)
                    ).fetchone()
                    location = LocationRead(**dict(location_row)) if location_row else None
                service = ServiceBrief(
                    id=service_row["id"],
                    service_code=service_row["service_code"],
                    service_name=service_row["service_name"],
                    provider_id=service_row["provider_id"],
                    location=location,
                )
                provider_row = cursor.execute(
                    "SELECT id, provider_code, provider_name FROM providers WHERE id = ?",
                    (service_row["provider_id"],),
                ).fetchone()
                provider = ProviderBrief(**dict(provider_row)) if provider_row else None
        if row["room_id"] is not None:
            room_row = cursor.execute(
                "SELECT id, room_code, room_type, price FROM rooms WHERE id = ?", (row["room_id"],)
            ).fetchone()
            room = RoomBrief(**dict(room_row)) if room_row else None
        return InvoiceDetail(
            **cls._row_to_read(row).model_dump(),
            user=UserBrief(**dict(user)) if user else None,
            service=service,
            provider=provider,
            room=room,
        )

    @staticmethod
    def _row_to_read(row: sqlite3.Row) -> InvoiceRead:
        return InvoiceRead(
            id=row["id"],
            invoice_code=row["invoice_code"],
            user_id=row["user_id"],
            service_id=row["service_id"],
            room_id=row["room_id"],
            quantity=row["quantity"],
            total_amount=row["total_amount"],
            issue_date=row["issue_date"],
            payment_status=row["payment_status"],
            check_in_date=row["check_in_date"],
            check_out_date=row["check_out_date"],
            status=row["status"],
            pictures=load_json_list(row["pictures"]),
            created_at=str(row["created_at"]),
            updated_at=str(row["updated_at"]),
        )
