"""
Service layer for reviews.

Reviews target a room or a restaurant table (``target_model`` names
which) and the target must exist.  When a review is created with a
``service_id`` it is appended to that service's review list; deleting
a review removes it from every service review list.  Only the author
or an administrator may edit or delete a review.

Comments are stored as submitted and HTML escaped on the way out so
clients can render them safely.
"""

import html
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.errors import PermissionDeniedError
from booking_platform_api.app.core.records import check_ids_exist, constraint_error, require_row
from booking_platform_api.app.core.security import is_admin
from booking_platform_api.app.schemas.review import ReviewCreate, ReviewRead, ReviewUpdate
from booking_platform_api.app.services.audit_service import AuditService


TARGET_TABLES = {"Room": "rooms", "Table": "dining_tables"}


class ReviewService:
    """Service class for reviews."""

    @classmethod
    async def create_review(cls, data: ReviewCreate, current_user: Dict[str, Any]) -> ReviewRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            check_ids_exist(cursor, TARGET_TABLES[data.target_model], [data.target_id], data.target_model)
            if data.service_id is not None:
                check_ids_exist(cursor, "services", [data.service_id], "Service")
            try:
                cursor.execute(
                    """
                    INSERT INTO reviews (review_code, user_id, positive_comment, negative_comment, stars,
                                         date, target_id, target_model)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        data.review_code,
                        current_user.get("user_id"),
                        data.positive_comment,
                        data.negative_comment,
                        data.stars,
                        datetime.now(timezone.utc).replace(tzinfo=None).isoformat(),
                        data.target_id,
                        data.target_model,
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, "Review") from exc
            review_id = cursor.lastrowid
            if data.service_id is not None:
                cursor.execute(
                    "INSERT INTO service_reviews (service_id, review_id) VALUES (?, ?)",
                    (data.service_id, review_id),
                )
            conn.commit()
            logger.info(
                "User %s reviewed %s %s (review %s)",
                current_user.get("user_id"),
                data.target_model,
                data.target_id,
                review_id,
            )
            row = require_row(cursor, "reviews", review_id, "Review")
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="create",
            object_type="review",
            object_id=review_id,
            details={"stars": data.stars, "service_id": data.service_id},
        )
        return cls._row_to_read(row)

    @classmethod
    async def list_reviews(
        cls,
        target_model: Optional[str] = None,
        target_id: Optional[int] = None,
        user_id: Optional[int] = None,
        service_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[ReviewRead]:
        where: List[str] = []
        params: List[Any] = []
        if target_model:
            where.append("r.target_model = ?")
            params.append(target_model)
        if target_id is not None:
            where.append("r.target_id = ?")
            params.append(target_id)
        if user_id is not None:
            where.append("r.user_id = ?")
            params.append(user_id)
        if service_id is not None:
            where.append("r.id IN (SELECT review_id FROM service_reviews WHERE service_id = ?)")
            params.append(service_id)
        query = "SELECT r.* FROM reviews r"
        if where:
            query += " WHERE " + " AND ".join(where)
        query += " ORDER BY r.date DESC, r.id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        conn = get_connection()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_review(cls, review_id: int) -> ReviewRead:
        conn = get_connection()
        try:
            return cls._row_to_read(require_row(conn.cursor(), "reviews", review_id, "Review"))
        finally:
            conn.close()

    @classmethod
    async def update_review(
        cls, review_id: int, data: ReviewUpdate, current_user: Dict[str, Any]
    ) -> ReviewRead:
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = require_row(cursor, "reviews", review_id, "Review")
            cls._ensure_author(row, current_user)
            if updates:
                assignments = ", ".join(f"{key} = ?" for key in updates)
                cursor.execute(
                    f"UPDATE reviews SET {assignments} WHERE id = ?", (*updates.values(), review_id)
                )
                conn.commit()
            row = require_row(cursor, "reviews", review_id, "Review")
        finally:
            conn.close()
        logging.getLogger(__name__).info("Updated review %s", review_id)
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type="review",
            object_id=review_id,
            details=updates,
        )
        return cls._row_to_read(row)

    @classmethod
    async def delete_review(cls, review_id: int, current_user: Dict[str, Any]) -> None:
        """Delete a review and detach it from every service review list."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = require_row(cursor, "reviews", review_id, "Review")
            cls._ensure_author(row, current_user)
            cursor.execute("DELETE FROM service_reviews WHERE review_id = ?", (review_id,))
            detached = cursor.rowcount
            cursor.execute("DELETE FROM reviews WHERE id = ?", (review_id,))
            conn.commit()
            logger.info("Deleted review %s (detached from %d services)", review_id, detached)
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type="review",
            object_id=review_id,
        )

    @staticmethod
    def _ensure_author(row: sqlite3.Row, current_user: Dict[str, Any]) -> None:
        if row["user_id"] != current_user.get("user_id") and not is_admin(current_user):
            raise PermissionDeniedError("Only the author can change this review")

    @staticmethod
    def _row_to_read(row: sqlite3.Row) -> ReviewRead:
        """Convert a database row to a ``ReviewRead``, escaping the comments."""
        return ReviewRead(
            id=row["id"],
            review_code=row["review_code"],
            user_id=row["user_id"],
            positive_comment=html.escape(row["positive_comment"] or ""),
            negative_comment=html.escape(row["negative_comment"] or ""),
            stars=row["stars"],
            date=row["date"],
            target_id=row["target_id"],
            target_model=row["target_model"],
        )
