"""
Service layer for hotel rooms.

Rooms belong to a hotel; creating one requires owning that hotel and
updating or deleting one requires owning the room (through its hotel,
service and provider).  Facilities are kept in the ``room_facilities``
link table and pictures as a JSON list of public upload paths.
"""

import json
import logging
import sqlite3
from typing import Any, Dict, List, Optional, Sequence

from fastapi import UploadFile

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.ownership import ensure_owner
from booking_platform_api.app.core.records import (
    check_ids_exist,
    constraint_error,
    fetch_link_ids,
    load_json_list,
    replace_links,
    require_row,
)
from booking_platform_api.app.core.storage import save_uploads
from booking_platform_api.app.schemas.common import check_discount
from booking_platform_api.app.schemas.room import Capacity, RoomCreate, RoomRead, RoomUpdate
from booking_platform_api.app.services.audit_service import AuditService


class RoomService:
    """Service class for rooms."""

    @classmethod
    async def create_room(cls, data: RoomCreate, current_user: Dict[str, Any]) -> RoomRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "hotel", data.hotel_id, current_user, missing=ValueError)
            check_ids_exist(cursor, "facilities", data.facility_ids, "Facility")
            try:
                cursor.execute(
                    """
                    INSERT INTO rooms (room_code, hotel_id, room_type, available_rooms, available_date,
                                       price, discount_price, pictures, active, adults, children)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        data.room_code,
                        data.hotel_id,
                        data.room_type,
                        data.available_rooms,
                        data.available_date.isoformat(),
                        data.price,
                        data.discount_price,
                        json.dumps([]),
                        int(data.active),
                        data.capacity.adults,
                        data.capacity.children,
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, "Room") from exc
            room_id = cursor.lastrowid
            replace_links(cursor, "room_facilities", "room_id", room_id, "facility_id", data.facility_ids)
            conn.commit()
            logger.info("Created room %s in hotel %s", room_id, data.hotel_id)
            room = cls.row_to_read(cursor, require_row(cursor, "rooms", room_id, "Room"))
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="create",
            object_type="room",
            object_id=room_id,
            details={"room_code": data.room_code, "hotel_id": data.hotel_id},
        )
        return room

    @classmethod
    async def list_rooms(
        cls,
        hotel_id: Optional[int] = None,
        active: Optional[bool] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[RoomRead]:
        where: List[str] = []
        params: List[Any] = []
        if hotel_id is not None:
            where.append("hotel_id = ?")
            params.append(hotel_id)
        if active is not None:
            where.append("active = ?")
            params.append(int(active))
        query = "SELECT * FROM rooms"
        if where:
            query += " WHERE " + " AND ".join(where)
        query += " ORDER BY id LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        conn = get_connection()
        try:
            cursor = conn.cursor()
            rows = cursor.execute(query, tuple(params)).fetchall()
            return [cls.row_to_read(cursor, row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_room(cls, room_id: int) -> RoomRead:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            return cls.row_to_read(cursor, require_row(cursor, "rooms", room_id, "Room"))
        finally:
            conn.close()

    @classmethod
    async def update_room(cls, room_id: int, data: RoomUpdate, current_user: Dict[str, Any]) -> RoomRead:
        logger = logging.getLogger(__name__)
        updates = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k == "discount_price"
        }
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "room", room_id, current_user)
            current = require_row(cursor, "rooms", room_id, "Room")
            check_discount(
                updates.get("price", current["price"]),
                updates.get("discount_price", current["discount_price"]),
            )
            columns: Dict[str, Any] = {}
            for key, value in updates.items():
                if key == "facility_ids":
                    continue
                if key == "capacity":
                    columns["adults"] = value["adults"]
                    columns["children"] = value["children"]
                elif key == "available_date":
                    columns[key] = value.isoformat()
                elif key == "active":
                    columns[key] = int(value)
                else:
                    columns[key] = value
            if columns:
                assignments = ", ".join(f"{key} = ?" for key in columns)
                cursor.execute(
                    f"UPDATE rooms SET {assignments} WHERE id = ?", (*columns.values(), room_id)
                )
            if updates.get("facility_ids") is not None:
                check_ids_exist(cursor, "facilities", updates["facility_ids"], "Facility")
                replace_links(
                    cursor, "room_facilities", "room_id", room_id, "facility_id", updates["facility_ids"]
                )
            conn.commit()
            logger.info("Updated room %s", room_id)
            room = cls.row_to_read(cursor, require_row(cursor, "rooms", room_id, "Room"))
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type="room",
            object_id=room_id,
            details=updates,
        )
        return room

    @classmethod
    async def delete_room(cls, room_id: int, current_user: Dict[str, Any]) -> None:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "room", room_id, current_user)
            cursor.execute("DELETE FROM rooms WHERE id = ?", (room_id,))
            conn.commit()
            logger.info("Deleted room %s", room_id)
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type="room",
            object_id=room_id,
        )

    @classmethod
    async def add_pictures(
        cls, room_id: int, files: List[UploadFile], current_user: Dict[str, Any]
    ) -> RoomRead:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "room", room_id, current_user)
            paths = await save_uploads(files)
            row = require_row(cursor, "rooms", room_id, "Room")
            pictures = load_json_list(row["pictures"]) + paths
            cursor.execute(
                "UPDATE rooms SET pictures = ? WHERE id = ?", (json.dumps(pictures), room_id)
            )
            conn.commit()
            room = cls.row_to_read(cursor, require_row(cursor, "rooms", room_id, "Room"))
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="upload",
            object_type="room",
            object_id=room_id,
            details={"pictures": paths},
        )
        return room

    @classmethod
    def rooms_for_hotel(
        cls,
        cursor: sqlite3.Cursor,
        hotel_id: int,
        facility_ids: Optional[Sequence[int]] = None,
    ) -> List[RoomRead]:
        """Rooms of a hotel, optionally only those offering any of ``facility_ids``."""
        if facility_ids:
            placeholders = ", ".join("?" for _ in facility_ids)
            rows = cursor.execute(
                f"""
                SELECT DISTINCT r.* FROM rooms r
                JOIN room_facilities rf ON rf.room_id = r.id
                WHERE r.hotel_id = ? AND rf.facility_id IN ({placeholders})
                ORDER BY r.id
                """,
                (hotel_id, *facility_ids),
            ).fetchall()
        else:
            rows = cursor.execute(
                "SELECT * FROM rooms WHERE hotel_id = ? ORDER BY id", (hotel_id,)
            ).fetchall()
        return [cls.row_to_read(cursor, row) for row in rows]

    @staticmethod
    def row_to_read(cursor: sqlite3.Cursor, row: sqlite3.Row) -> RoomRead:
        return RoomRead(
            id=row["id"],
            room_code=row["room_code"],
            hotel_id=row["hotel_id"],
            room_type=row["room_type"],
            available_rooms=row["available_rooms"],
            available_date=row["available_date"],
            price=row["price"],
            discount_price=row["discount_price"],
            pictures=load_json_list(row["pictures"]),
            active=bool(row["active"]),
            capacity=Capacity(adults=row["adults"], children=row["children"]),
            facility_ids=fetch_link_ids(cursor, "room_facilities", "room_id", row["id"], "facility_id"),
        )
