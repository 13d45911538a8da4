"""
Service layer for hotels.

Hotels hang off a service; creating one requires owning that service.
Besides plain CRUD the module builds the read models used by the
details and search screens: a hotel joined with its service, the
service location and the hotel type name, and the hotel filter, which
narrows hotels by type, their service by price category and
suitability, and their rooms by facility.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional, Sequence

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.errors import NotFoundError
from booking_platform_api.app.core.ownership import ensure_owner
from booking_platform_api.app.core.records import check_ids_exist, constraint_error, require_row
from booking_platform_api.app.schemas.hotel import (
    HotelCreate,
    HotelDetail,
    HotelFilterResult,
    HotelRead,
    HotelUpdate,
    HotelWithRooms,
)
from booking_platform_api.app.schemas.location import LocationRead
from booking_platform_api.app.services.audit_service import AuditService
from booking_platform_api.app.services.room_service import RoomService
from booking_platform_api.app.services.service_service import ServiceService


class HotelService:
    """Service class for hotels."""

    @classmethod
    async def create_hotel(cls, data: HotelCreate, current_user: Dict[str, Any]) -> HotelRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "service", data.service_id, current_user, missing=ValueError)
            if data.hotel_type_id is not None:
                check_ids_exist(cursor, "hotel_types", [data.hotel_type_id], "Hotel type")
            try:
                cursor.execute(
                    """
                    INSERT INTO hotels (hotel_code, service_id, hotel_type_id, star_rating, room_capacity)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        data.hotel_code,
                        data.service_id,
                        data.hotel_type_id,
                        data.star_rating,
                        data.room_capacity,
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, "Hotel") from exc
            hotel_id = cursor.lastrowid
            conn.commit()
            logger.info("Created hotel %s for service %s", hotel_id, data.service_id)
            row = require_row(cursor, "hotels", hotel_id, "Hotel")
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="create",
            object_type="hotel",
            object_id=hotel_id,
            details={"hotel_code": data.hotel_code, "service_id": data.service_id},
        )
        return cls._row_to_read(row)

    @classmethod
    async def list_hotels(
        cls, service_id: Optional[int] = None, limit: int = 100, offset: int = 0
    ) -> List[HotelRead]:
        conn = get_connection()
        try:
            if service_id is not None:
                rows = conn.execute(
                    "SELECT * FROM hotels WHERE service_id = ? ORDER BY id LIMIT ? OFFSET ?",
                    (service_id, limit, offset),
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM hotels ORDER BY id LIMIT ? OFFSET ?", (limit, offset)
                ).fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_hotel(cls, hotel_id: int) -> HotelRead:
        conn = get_connection()
        try:
            return cls._row_to_read(require_row(conn.cursor(), "hotels", hotel_id, "Hotel"))
        finally:
            conn.close()

    @classmethod
    async def update_hotel(cls, hotel_id: int, data: HotelUpdate, current_user: Dict[str, Any]) -> HotelRead:
        logger = logging.getLogger(__name__)
        updates = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k in {"hotel_type_id", "room_capacity"}
        }
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "hotel", hotel_id, current_user)
            if updates.get("hotel_type_id") is not None:
                check_ids_exist(cursor, "hotel_types", [updates["hotel_type_id"]], "Hotel type")
            if updates:
                assignments = ", ".join(f"{key} = ?" for key in updates)
                cursor.execute(
                    f"UPDATE hotels SET {assignments} WHERE id = ?", (*updates.values(), hotel_id)
                )
                conn.commit()
                logger.info("Updated hotel %s", hotel_id)
            row = require_row(cursor, "hotels", hotel_id, "Hotel")
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type="hotel",
            object_id=hotel_id,
            details=updates,
        )
        return cls._row_to_read(row)

    @classmethod
    async def delete_hotel(cls, hotel_id: int, current_user: Dict[str, Any]) -> None:
        """Delete a hotel and its rooms."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "hotel", hotel_id, current_user)
            cursor.execute("DELETE FROM hotels WHERE id = ?", (hotel_id,))
            conn.commit()
            logger.info("Deleted hotel %s", hotel_id)
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type="hotel",
            object_id=hotel_id,
        )

    @classmethod
    async def list_details(cls) -> List[HotelDetail]:
        """Every hotel with its service, location and type name."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            rows = cursor.execute("SELECT * FROM hotels ORDER BY id").fetchall()
            return [cls._row_to_detail(cursor, row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_details_by_code(cls, hotel_code: str) -> HotelDetail:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute("SELECT * FROM hotels WHERE hotel_code = ?", (hotel_code,)).fetchone()
            if not row:
                raise NotFoundError("Hotel not found")
            return cls._row_to_detail(cursor, row)
        finally:
            conn.close()

    @classmethod
    async def filter_hotels(
        cls,
        price_category_ids: Sequence[int] = (),
        suitability_ids: Sequence[int] = (),
        facility_ids: Sequence[int] = (),
        hotel_type_ids: Sequence[int] = (),
    ) -> List[HotelFilterResult]:
        """Search hotels.

        An empty filter list matches everything.  Within one list any id
        matches; the lists are combined with AND.  A hotel is returned
        only when its service passes the price category and suitability
        filters and at least one of its rooms passes the facility filter.
        """
        where: List[str] = []
        params: List[Any] = []
        if hotel_type_ids:
            where.append(f"h.hotel_type_id IN ({', '.join('?' for _ in hotel_type_ids)})")
            params.extend(hotel_type_ids)
        if price_category_ids:
            where.append(
                "EXISTS (SELECT 1 FROM service_price_categories x WHERE x.service_id = h.service_id "
                f"AND x.price_category_id IN ({', '.join('?' for _ in price_category_ids)}))"
            )
            params.extend(price_category_ids)
        if suitability_ids:
            where.append(
                "EXISTS (SELECT 1 FROM service_suitabilities x WHERE x.service_id = h.service_id "
                f"AND x.suitability_id IN ({', '.join('?' for _ in suitability_ids)}))"
            )
            params.extend(suitability_ids)
        query = "SELECT h.* FROM hotels h"
        if where:
            query += " WHERE " + " AND ".join(where)
        query += " ORDER BY h.id"
        conn = get_connection()
        try:
            cursor = conn.cursor()
            results: List[HotelFilterResult] = []
            for row in cursor.execute(query, tuple(params)).fetchall():
                rooms = RoomService.rooms_for_hotel(cursor, row["id"], facility_ids)
                if not rooms:
                    continue
                detail = cls._row_to_detail(cursor, row)
                results.append(HotelFilterResult(**detail.model_dump(), rooms=rooms))
            return results
        finally:
            conn.close()

    @classmethod
    def hotels_with_rooms(cls, cursor: sqlite3.Cursor, service_id: int) -> List[HotelWithRooms]:
        rows = cursor.execute(
            "SELECT * FROM hotels WHERE service_id = ? ORDER BY id", (service_id,)
        ).fetchall()
        return [
            HotelWithRooms(
                **cls._row_to_read(row).model_dump(),
                rooms=RoomService.rooms_for_hotel(cursor, row["id"]),
            )
            for row in rows
        ]

    @classmethod
    def _row_to_detail(cls, cursor: sqlite3.Cursor, row: sqlite3.Row) -> HotelDetail:
        service_row = cursor.execute(
            "SELECT * FROM services WHERE id = ?", (row["service_id"],)
        ).fetchone()
        location = None
        if service_row and service_row["location_id"] is not None:
            location_row = cursor.execute(
                "SELECT * FROM locations WHERE id = ?", (service_row["location_id"],)
            ).fetchone()
            if location_row:
                location = LocationRead(**dict(location_row))
        hotel_type = None
        if row["hotel_type_id"] is not None:
            type_row = cursor.execute(
                "SELECT type FROM hotel_types WHERE id = ?", (row["hotel_type_id"],)
            ).fetchone()
            hotel_type = type_row["type"] if type_row else None
        return HotelDetail(
            **cls._row_to_read(row).model_dump(),
            hotel_type=hotel_type,
            service=ServiceService.row_to_read(cursor, service_row) if service_row else None,
            location=location,
        )

    @staticmethod
    def _row_to_read(row: sqlite3.Row) -> HotelRead:
        return HotelRead(
            id=row["id"],
            hotel_code=row["hotel_code"],
            service_id=row["service_id"],
            hotel_type_id=row["hotel_type_id"],
            star_rating=row["star_rating"],
            room_capacity=row["room_capacity"],
        )
