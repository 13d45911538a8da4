"""
Service layer for provider profiles.

A provider is the business behind one user account with the
``Provider`` role.  Each user has at most one provider record and
services are owned by providers.  Provider users may edit their own
profile; everything else is restricted to administrators.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.errors import NotFoundError
from booking_platform_api.app.core.ownership import ensure_owner
from booking_platform_api.app.core.records import constraint_error
from booking_platform_api.app.core.security import PROVIDER
from booking_platform_api.app.schemas.provider import ProviderCreate, ProviderRead, ProviderUpdate
from booking_platform_api.app.services.audit_service import AuditService


_SELECT = """
    SELECT p.*, u.full_name AS user_full_name, u.email AS user_email
    FROM providers p JOIN users u ON u.id = p.user_id
"""


class ProviderService:
    """Service class for provider profiles."""

    @classmethod
    async def create_provider(cls, data: ProviderCreate, current_user: Dict[str, Any]) -> ProviderRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            user = cursor.execute("SELECT role FROM users WHERE id = ?", (data.user_id,)).fetchone()
            if not user:
                raise ValueError(f"User {data.user_id} not found")
            if user["role"] != PROVIDER:
                raise ValueError("The user must have the Provider role")
            try:
                cursor.execute(
                    """
                    INSERT INTO providers (provider_code, user_id, provider_name, address, service_description)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        data.provider_code,
                        data.user_id,
                        data.provider_name,
                        data.address,
                        data.service_description,
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, "Provider") from exc
            provider_id = cursor.lastrowid
            conn.commit()
            logger.info("Created provider %s for user %s", provider_id, data.user_id)
            row = cursor.execute(f"{_SELECT} WHERE p.id = ?", (provider_id,)).fetchone()
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="create",
            object_type="provider",
            object_id=provider_id,
            details={"provider_code": data.provider_code},
        )
        return cls._row_to_read(row)

    @classmethod
    async def list_providers(cls, limit: int = 100, offset: int = 0) -> List[ProviderRead]:
        conn = get_connection()
        try:
            rows = conn.execute(
                f"{_SELECT} ORDER BY p.id LIMIT ? OFFSET ?", (limit, offset)
            ).fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_provider(cls, provider_id: int) -> ProviderRead:
        conn = get_connection()
        try:
            row = conn.execute(f"{_SELECT} WHERE p.id = ?", (provider_id,)).fetchone()
            if not row:
                raise NotFoundError("Provider not found")
            return cls._row_to_read(row)
        finally:
            conn.close()

    @classmethod
    async def get_provider_for_user(cls, user_id: int) -> Optional[ProviderRead]:
        conn = get_connection()
        try:
            row = conn.execute(f"{_SELECT} WHERE p.user_id = ?", (user_id,)).fetchone()
            return cls._row_to_read(row) if row else None
        finally:
            conn.close()

    @classmethod
    async def update_provider(
        cls, provider_id: int, data: ProviderUpdate, current_user: Dict[str, Any]
    ) -> ProviderRead:
        logger = logging.getLogger(__name__)
        updates = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k == "service_description"
        }
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "provider", provider_id, current_user)
            if updates:
                values = [int(v) if k == "active" else v for k, v in updates.items()]
                assignments = ", ".join(f"{key} = ?" for key in updates)
                cursor.execute(
                    f"UPDATE providers SET {assignments} WHERE id = ?", (*values, provider_id)
                )
                conn.commit()
                logger.info("Updated provider %s", provider_id)
            row = cursor.execute(f"{_SELECT} WHERE p.id = ?", (provider_id,)).fetchone()
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type="provider",
            object_id=provider_id,
            details=updates,
        )
        return cls._row_to_read(row)

    @classmethod
    async def delete_provider(cls, provider_id: int, current_user: Dict[str, Any]) -> None:
        """Delete a provider together with the services it owns."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM providers WHERE id = ?", (provider_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("Provider not found")
            conn.commit()
            logger.info("Deleted provider %s", provider_id)
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type="provider",
            object_id=provider_id,
        )

    @staticmethod
    def _row_to_read(row: sqlite3.Row) -> ProviderRead:
        return ProviderRead(
            id=row["id"],
            provider_code=row["provider_code"],
            user_id=row["user_id"],
            provider_name=row["provider_name"],
            address=row["address"],
            service_description=row["service_description"],
            active=bool(row["active"]),
            user_full_name=row["user_full_name"],
            user_email=row["user_email"],
        )
