"""
Service layer for restaurants.

A restaurant hangs off a service and references at least one cuisine
type, any number of dish types and an optional restaurant type.
Cuisine and dish references are stored in link tables.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.ownership import ensure_owner
from booking_platform_api.app.core.records import (
    check_ids_exist,
    constraint_error,
    fetch_link_ids,
    replace_links,
    require_row,
)
from booking_platform_api.app.schemas.restaurant import RestaurantCreate, RestaurantRead, RestaurantUpdate
from booking_platform_api.app.services.audit_service import AuditService


class RestaurantService:
    """Service class for restaurants."""

    @classmethod
    async def create_restaurant(cls, data: RestaurantCreate, current_user: Dict[str, Any]) -> RestaurantRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "service", data.service_id, current_user, missing=ValueError)
            cls._check_references(cursor, data.model_dump())
            try:
                cursor.execute(
                    """
                    INSERT INTO restaurants (restaurant_code, service_id, seating_capacity, restaurant_type_id)
                    VALUES (?, ?, ?, ?)
                    """,
                    (data.restaurant_code, data.service_id, data.seating_capacity, data.restaurant_type_id),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, "Restaurant") from exc
            restaurant_id = cursor.lastrowid
            replace_links(
                cursor, "restaurant_cuisine_types", "restaurant_id", restaurant_id,
                "cuisine_type_id", data.cuisine_type_ids,
            )
            replace_links(
                cursor, "restaurant_dish_types", "restaurant_id", restaurant_id,
                "dish_type_id", data.dish_type_ids,
            )
            conn.commit()
            logger.info("Created restaurant %s for service %s", restaurant_id, data.service_id)
            restaurant = cls.row_to_read(cursor, require_row(cursor, "restaurants", restaurant_id, "Restaurant"))
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="create",
            object_type="restaurant",
            object_id=restaurant_id,
            details={"restaurant_code": data.restaurant_code, "service_id": data.service_id},
        )
        return restaurant

    @classmethod
    async def list_restaurants(
        cls, service_id: Optional[int] = None, limit: int = 100, offset: int = 0
    ) -> List[RestaurantRead]:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if service_id is not None:
                rows = cursor.execute(
                    "SELECT * FROM restaurants WHERE service_id = ? ORDER BY id LIMIT ? OFFSET ?",
                    (service_id, limit, offset),
                ).fetchall()
            else:
                rows = cursor.execute(
                    "SELECT * FROM restaurants ORDER BY id LIMIT ? OFFSET ?", (limit, offset)
                ).fetchall()
            return [cls.row_to_read(cursor, row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_restaurant(cls, restaurant_id: int) -> RestaurantRead:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            return cls.row_to_read(cursor, require_row(cursor, "restaurants", restaurant_id, "Restaurant"))
        finally:
            conn.close()

    @classmethod
    async def update_restaurant(
        cls, restaurant_id: int, data: RestaurantUpdate, current_user: Dict[str, Any]
    ) -> RestaurantRead:
        logger = logging.getLogger(__name__)
        updates = data.model_dump(exclude_unset=True)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "restaurant", restaurant_id, current_user)
            cls._check_references(cursor, updates)
            columns = {
                k: v
                for k, v in updates.items()
                if k in {"seating_capacity", "restaurant_type_id"}
                and (v is not None or k == "restaurant_type_id")
            }
            if columns:
                assignments = ", ".join(f"{key} = ?" for key in columns)
                cursor.execute(
                    f"UPDATE restaurants SET {assignments} WHERE id = ?",
                    (*columns.values(), restaurant_id),
                )
            if updates.get("cuisine_type_ids") is not None:
                replace_links(
                    cursor, "restaurant_cuisine_types", "restaurant_id", restaurant_id,
                    "cuisine_type_id", updates["cuisine_type_ids"],
                )
            if updates.get("dish_type_ids") is not None:
                replace_links(
                    cursor, "restaurant_dish_types", "restaurant_id", restaurant_id,
                    "dish_type_id", updates["dish_type_ids"],
                )
            conn.commit()
            logger.info("Updated restaurant %s", restaurant_id)
            restaurant = cls.row_to_read(cursor, require_row(cursor, "restaurants", restaurant_id, "Restaurant"))
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type="restaurant",
            object_id=restaurant_id,
            details=updates,
        )
        return restaurant

    @classmethod
    async def delete_restaurant(cls, restaurant_id: int, current_user: Dict[str, Any]) -> None:
        """Delete a restaurant and its tables."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "restaurant", restaurant_id, current_user)
            cursor.execute("DELETE FROM restaurants WHERE id = ?", (restaurant_id,))
            conn.commit()
            logger.info("Deleted restaurant %s", restaurant_id)
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type="restaurant",
            object_id=restaurant_id,
        )

    @classmethod
    def restaurants_for_service(cls, cursor: sqlite3.Cursor, service_id: int) -> List[RestaurantRead]:
        rows = cursor.execute(
            "SELECT * FROM restaurants WHERE service_id = ? ORDER BY id", (service_id,)
        ).fetchall()
        return [cls.row_to_read(cursor, row) for row in rows]

    @staticmethod
    def _check_references(cursor: sqlite3.Cursor, values: Dict[str, Any]) -> None:
        if values.get("cuisine_type_ids"):
            check_ids_exist(cursor, "cuisine_types", values["cuisine_type_ids"], "Cuisine type")
        if values.get("dish_type_ids"):
            check_ids_exist(cursor, "dish_types", values["dish_type_ids"], "Dish type")
        if values.get("restaurant_type_id") is not None:
            check_ids_exist(cursor, "restaurant_types", [values["restaurant_type_id"]], "Restaurant type")

    @staticmethod
    def row_to_read(cursor: sqlite3.Cursor, row: sqlite3.Row) -> RestaurantRead:
        restaurant_id = row["id"]
        return RestaurantRead(
            id=restaurant_id,
            restaurant_code=row["restaurant_code"],
            service_id=row["service_id"],
            cuisine_type_ids=fetch_link_ids(
                cursor, "restaurant_cuisine_types", "restaurant_id", restaurant_id, "cuisine_type_id"
            ),
            dish_type_ids=fetch_link_ids(
                cursor, "restaurant_dish_types", "restaurant_id", restaurant_id, "dish_type_id"
            ),
            seating_capacity=row["seating_capacity"],
            restaurant_type_id=row["restaurant_type_id"],
        )
