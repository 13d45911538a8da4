"""
Service layer for lookup tables.

Lookup tables are flat reference collections (facility types, price
categories, cuisines, ...).  They all behave the same way, so one
``LookupService`` base implements create/list/get/update/delete over a
table named by the subclass; subclasses only declare the table, the
read schema and a label used in messages and audit records.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.errors import NotFoundError
from booking_platform_api.app.core.records import constraint_error
from booking_platform_api.app.schemas.lookup import (
    CoffeeTypeRead,
    CuisineTypeRead,
    DishTypeRead,
    FacilityRead,
    FacilityTypeRead,
    HotelTypeRead,
    PriceCategoryRead,
    RestaurantFilterOptions,
    RestaurantTypeRead,
    SuitabilityRead,
)
from booking_platform_api.app.services.audit_service import AuditService


class LookupService:
    """Generic CRUD over one lookup table."""

    table: str = ""
    label: str = ""
    object_type: str = ""
    read_model: Type[BaseModel] = BaseModel
    order_by: str = "id"

    @classmethod
    async def create(cls, data: BaseModel, current_user: Dict[str, Any]) -> BaseModel:
        logger = logging.getLogger(__name__)
        values = data.model_dump()
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    f"INSERT INTO {cls.table} ({columns}) VALUES ({placeholders})",
                    tuple(values.values()),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, cls.label) from exc
            record_id = cursor.lastrowid
            conn.commit()
            logger.info("Created %s %s", cls.object_type, record_id)
            row = cursor.execute(f"SELECT * FROM {cls.table} WHERE id = ?", (record_id,)).fetchone()
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="create",
            object_type=cls.object_type,
            object_id=record_id,
            details=values,
        )
        return cls._row_to_read(row)

    @classmethod
    async def list(
        cls,
        limit: Optional[int] = None,
        offset: int = 0,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[BaseModel]:
        """Return rows ordered by ``order_by``; ``filters`` are equality matches."""
        where = ""
        params: List[Any] = []
        if filters:
            where = " WHERE " + " AND ".join(f"{key} = ?" for key in filters)
            params.extend(filters.values())
        query = f"SELECT * FROM {cls.table}{where} ORDER BY {cls.order_by}"
        if limit is not None:
            query += " LIMIT ? OFFSET ?"
            params.extend([limit, offset])
        conn = get_connection()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get(cls, record_id: int) -> BaseModel:
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT * FROM {cls.table} WHERE id = ?", (record_id,)).fetchone()
            if not row:
                raise NotFoundError(f"{cls.label} not found")
            return cls._row_to_read(row)
        finally:
            conn.close()

    @classmethod
    async def update(cls, record_id: int, data: BaseModel, current_user: Dict[str, Any]) -> BaseModel:
        logger = logging.getLogger(__name__)
        updates = data.model_dump(exclude_unset=True)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not cursor.execute(f"SELECT 1 FROM {cls.table} WHERE id = ?", (record_id,)).fetchone():
                raise NotFoundError(f"{cls.label} not found")
            if updates:
                assignments = ", ".join(f"{key} = ?" for key in updates)
                try:
                    cursor.execute(
                        f"UPDATE {cls.table} SET {assignments} WHERE id = ?",
                        (*updates.values(), record_id),
                    )
                except sqlite3.IntegrityError as exc:
                    raise constraint_error(exc, cls.label) from exc
                conn.commit()
                logger.info("Updated %s %s", cls.object_type, record_id)
            row = cursor.execute(f"SELECT * FROM {cls.table} WHERE id = ?", (record_id,)).fetchone()
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type=cls.object_type,
            object_id=record_id,
            details=updates,
        )
        return cls._row_to_read(row)

    @classmethod
    async def delete(cls, record_id: int, current_user: Dict[str, Any]) -> None:
        """Delete a row.  Link rows pointing at it are removed by the database."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(f"DELETE FROM {cls.table} WHERE id = ?", (record_id,))
            if cursor.rowcount == 0:
                raise NotFoundError(f"{cls.label} not found")
            conn.commit()
            logger.info("Deleted %s %s", cls.object_type, record_id)
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type=cls.object_type,
            object_id=record_id,
        )

    @classmethod
    def _row_to_read(cls, row: sqlite3.Row) -> BaseModel:
        return cls.read_model(**dict(row))


class FacilityTypeService(LookupService):
    table = "facility_types"
    label = "Facility type"
    object_type = "facility_type"
    read_model = FacilityTypeRead


class FacilityService(LookupService):
    table = "facilities"
    label = "Facility"
    object_type = "facility"
    read_model = FacilityRead

    @classmethod
    async def list_by_service_type(cls, service_type: str) -> List[BaseModel]:
        return await cls.list(filters={"service_type": service_type})


class PriceCategoryService(LookupService):
    table = "price_categories"
    label = "Price category"
    object_type = "price_category"
    read_model = PriceCategoryRead


class SuitabilityService(LookupService):
    table = "suitabilities"
    label = "Suitability"
    object_type = "suitability"
    read_model = SuitabilityRead


class CuisineTypeService(LookupService):
    table = "cuisine_types"
    label = "Cuisine type"
    object_type = "cuisine_type"
    read_model = CuisineTypeRead
    order_by = "type"


class DishTypeService(LookupService):
    table = "dish_types"
    label = "Dish type"
    object_type = "dish_type"
    read_model = DishTypeRead
    order_by = "name"


class HotelTypeService(LookupService):
    table = "hotel_types"
    label = "Hotel type"
    object_type = "hotel_type"
    read_model = HotelTypeRead


class RestaurantTypeService(LookupService):
    table = "restaurant_types"
    label = "Restaurant type"
    object_type = "restaurant_type"
    read_model = RestaurantTypeRead
    order_by = "type"


class CoffeeTypeService(LookupService):
    table = "coffee_types"
    label = "Coffee type"
    object_type = "coffee_type"
    read_model = CoffeeTypeRead
    order_by = "name"


class RestaurantFilterService:
    """Option lists for the restaurant and café search screens."""

    @classmethod
    async def filter_options(cls) -> RestaurantFilterOptions:
        return RestaurantFilterOptions(
            cuisine_types=await CuisineTypeService.list(),
            dish_types=await DishTypeService.list(),
            restaurant_types=await RestaurantTypeService.list(),
        )

    @classmethod
    async def coffee_types(cls) -> List[BaseModel]:
        return await CoffeeTypeService.list()
