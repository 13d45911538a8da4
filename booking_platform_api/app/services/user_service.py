"""
Business logic for user accounts.

Users are stored in the ``users`` table with a PBKDF2 password hash
and a role string.  The very first account registered becomes the
administrator; later self‑registrations may only pick the customer or
provider role.  Promoting a user to ``Provider`` creates a default
provider record for them so they can start adding services straight
away.
"""

import logging
import sqlite3
import time
from typing import Any, Dict, List, Optional, Union

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.errors import NotFoundError
from booking_platform_api.app.core.records import constraint_error, require_row
from booking_platform_api.app.core.security import ADMIN, PROVIDER, hash_password, verify_password
from booking_platform_api.app.schemas.user import (
    ServiceTree,
    UserCreate,
    UserProfile,
    UserRead,
    UserRegister,
    UserUpdate,
)
from booking_platform_api.app.services.audit_service import AuditService


class UserService:
    """Service class for user accounts."""

    @classmethod
    async def register(cls, data: UserRegister) -> UserRead:
        """Self‑registration.  The first account ever created is an Admin."""
        return await cls._insert(data, actor_id=None, promote_first=True)

    @classmethod
    async def create_user(cls, data: UserCreate, current_user: Dict[str, Any]) -> UserRead:
        """Create an account with any role (administrators only)."""
        return await cls._insert(data, actor_id=current_user.get("user_id"), promote_first=False)

    @classmethod
    async def _insert(
        cls,
        data: Union[UserCreate, UserRegister],
        actor_id: Optional[int],
        promote_first: bool,
    ) -> UserRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            role = data.role
            if promote_first:
                count = cursor.execute("SELECT COUNT(*) AS count FROM users").fetchone()["count"]
                if count == 0:
                    role = ADMIN
            try:
                cursor.execute(
                    """
                    INSERT INTO users (user_code, full_name, phone_number, email, user_name,
                                       birth_date, password, role)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        data.user_code,
                        data.full_name,
                        data.phone_number,
                        data.email.lower(),
                        data.user_name,
                        data.birth_date.isoformat(),
                        hash_password(data.password),
                        role,
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, "User") from exc
            user_id = cursor.lastrowid
            if role == PROVIDER:
                cls._ensure_provider(cursor, user_id, data.full_name)
            conn.commit()
            logger.info("Created user %s (%s) with role %s", user_id, data.email, role)
            row = cursor.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        finally:
            conn.close()
        await AuditService.record(
            user_id=actor_id,
            action="create",
            object_type="user",
            object_id=user_id,
            details={"email": data.email, "role": role},
        )
        return cls._row_to_read(row)

    @classmethod
    async def authenticate(cls, email: str, password: str) -> Optional[UserRead]:
        """Return the user when the credentials match, otherwise ``None``."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT * FROM users WHERE email = ?", (email.lower(),)
            ).fetchone()
        finally:
            conn.close()
        if not row or not verify_password(password, row["password"]):
            return None
        return cls._row_to_read(row)

    @classmethod
    async def list_users(
        cls, role: Optional[str] = None, limit: int = 100, offset: int = 0
    ) -> List[UserRead]:
        conn = get_connection()
        try:
            if role:
                rows = conn.execute(
                    "SELECT * FROM users WHERE role = ? ORDER BY id LIMIT ? OFFSET ?",
                    (role, limit, offset),
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM users ORDER BY id LIMIT ? OFFSET ?", (limit, offset)
                ).fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_user(cls, user_id: int) -> UserRead:
        conn = get_connection()
        try:
            return cls._row_to_read(require_row(conn.cursor(), "users", user_id, "User"))
        finally:
            conn.close()

    @classmethod
    async def get_profile_by_code(cls, user_code: str) -> UserProfile:
        """Return a user with the tree of services they provide.

        Each service carries its hotels (with their rooms), its
        restaurants and its coffee offerings.  Non‑provider accounts get
        an empty ``services`` list.
        """
        from booking_platform_api.app.services.coffee_service import CoffeeService
        from booking_platform_api.app.services.hotel_service import HotelService
        from booking_platform_api.app.services.restaurant_service import RestaurantService
        from booking_platform_api.app.services.service_service import ServiceService

        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute("SELECT * FROM users WHERE user_code = ?", (user_code,)).fetchone()
            if not row:
                raise NotFoundError("User not found")
            services: List[ServiceTree] = []
            service_rows = cursor.execute(
                """
                SELECT s.* FROM services s
                JOIN providers p ON p.id = s.provider_id
                WHERE p.user_id = ?
                ORDER BY s.id
                """,
                (row["id"],),
            ).fetchall()
            for service_row in service_rows:
                service = ServiceService.row_to_read(cursor, service_row)
                services.append(
                    ServiceTree(
                        **service.model_dump(),
                        hotels=HotelService.hotels_with_rooms(cursor, service.id),
                        restaurants=RestaurantService.restaurants_for_service(cursor, service.id),
                        coffees=CoffeeService.coffees_for_service(cursor, service.id),
                    )
                )
            return UserProfile(**cls._row_to_read(row).model_dump(), services=services)
        finally:
            conn.close()

    @classmethod
    async def update_user(
        cls, user_id: int, data: UserUpdate, current_user: Dict[str, Any]
    ) -> UserRead:
        """Update a user; only provided fields change.

        Switching the role to ``Provider`` creates a provider record for
        the user when they do not have one yet.
        """
        logger = logging.getLogger(__name__)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            current = require_row(cursor, "users", user_id, "User")
            fields: List[str] = []
            params: List[Any] = []
            for key, value in updates.items():
                if key == "password":
                    value = hash_password(value)
                elif key == "birth_date":
                    value = value.isoformat()
                elif key == "email":
                    value = value.lower()
                elif key == "active":
                    value = int(value)
                fields.append(f"{key} = ?")
                params.append(value)
            if fields:
                fields.append("updated_at = CURRENT_TIMESTAMP")
                params.append(user_id)
                try:
                    cursor.execute(
                        f"UPDATE users SET {', '.join(fields)} WHERE id = ?", tuple(params)
                    )
                except sqlite3.IntegrityError as exc:
                    raise constraint_error(exc, "User") from exc
            if updates.get("role") == PROVIDER:
                cls._ensure_provider(cursor, user_id, updates.get("full_name", current["full_name"]))
            conn.commit()
            logger.info("Updated user %s", user_id)
            row = cursor.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        finally:
            conn.close()
        updates.pop("password", None)
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type="user",
            object_id=user_id,
            details=updates,
        )
        return cls._row_to_read(row)

    @classmethod
    async def delete_user(cls, user_id: int, current_user: Dict[str, Any]) -> None:
        """Delete a user.  Their provider record and services go with them."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("User not found")
            conn.commit()
            logger.info("Deleted user %s", user_id)
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type="user",
            object_id=user_id,
        )

    @staticmethod
    def _ensure_provider(cursor: sqlite3.Cursor, user_id: int, full_name: str) -> None:
        """Create a default provider record for ``user_id`` unless one exists."""
        existing = cursor.execute(
            "SELECT id FROM providers WHERE user_id = ?", (user_id,)
        ).fetchone()
        if existing:
            return
        cursor.execute(
            """
            INSERT INTO providers (provider_code, user_id, provider_name, address, service_description)
            VALUES (?, ?, ?, ?, ?)
            """,
            (f"PROV-{int(time.time() * 1000)}", user_id, full_name, "", None),
        )
        logging.getLogger(__name__).info("Created default provider for user %s", user_id)

    @staticmethod
    def _row_to_read(row: sqlite3.Row) -> UserRead:
        return UserRead(
            id=row["id"],
            user_code=row["user_code"],
            full_name=row["full_name"],
            phone_number=row["phone_number"],
            email=row["email"],
            user_name=row["user_name"],
            birth_date=row["birth_date"],
            role=row["role"],
            active=bool(row["active"]),
        )
