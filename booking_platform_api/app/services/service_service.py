"""
Service layer for services (bookable offerings).

A service belongs to a provider and references a location plus lists
of facility types, price categories and suitabilities.  The lists are
kept in link tables and rewritten as a whole when an update supplies
them.  Every referenced id must exist.  The list of reviews attached
to a service is maintained by ``ReviewService``.

Provider accounts create services for their own provider record;
administrators must name the provider explicitly.  Updates and
deletions are restricted to the owning provider and administrators.
"""

import json
import logging
import sqlite3
from typing import Any, Dict, List, Optional

from fastapi import UploadFile

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.core.errors import PermissionDeniedError
from booking_platform_api.app.core.ownership import ensure_owner
from booking_platform_api.app.core.records import (
    check_ids_exist,
    constraint_error,
    fetch_link_ids,
    load_json_list,
    replace_links,
    require_row,
)
from booking_platform_api.app.core.security import is_admin
from booking_platform_api.app.core.storage import save_uploads
from booking_platform_api.app.schemas.common import check_discount
from booking_platform_api.app.schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from booking_platform_api.app.services.audit_service import AuditService


# (link table, value column, referenced table, schema field, label)
LINKS = (
    ("service_facility_types", "facility_type_id", "facility_types", "facility_type_ids", "Facility type"),
    ("service_price_categories", "price_category_id", "price_categories", "price_category_ids", "Price category"),
    ("service_suitabilities", "suitability_id", "suitabilities", "suitability_ids", "Suitability"),
)

NULLABLE = {"location_id", "discount_price", "description"}


class ServiceService:
    """Service class for bookable services."""

    @classmethod
    async def create_service(cls, data: ServiceCreate, current_user: Dict[str, Any]) -> ServiceRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            provider_id = cls._resolve_provider(cursor, data.provider_id, current_user)
            cls._check_references(cursor, data.location_id, data.model_dump())
            try:
                cursor.execute(
                    """
                    INSERT INTO services (service_code, provider_id, location_id, service_name, price,
                                          discount_price, description, status, images)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        data.service_code,
                        provider_id,
                        data.location_id,
                        data.service_name,
                        data.price,
                        data.discount_price,
                        data.description,
                        data.status,
                        json.dumps([]),
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise constraint_error(exc, "Service") from exc
            service_id = cursor.lastrowid
            for table, column, _, field, _ in LINKS:
                replace_links(cursor, table, "service_id", service_id, column, getattr(data, field))
            conn.commit()
            logger.info("Created service %s for provider %s", service_id, provider_id)
            service = cls.row_to_read(cursor, require_row(cursor, "services", service_id, "Service"))
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="create",
            object_type="service",
            object_id=service_id,
            details={"service_code": data.service_code, "provider_id": provider_id},
        )
        return service

    @classmethod
    async def list_services(
        cls,
        provider_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[ServiceRead]:
        where: List[str] = []
        params: List[Any] = []
        if provider_id is not None:
            where.append("provider_id = ?")
            params.append(provider_id)
        if status:
            where.append("status = ?")
            params.append(status)
        query = "SELECT * FROM services"
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
    async def get_service(cls, service_id: int) -> ServiceRead:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            return cls.row_to_read(cursor, require_row(cursor, "services", service_id, "Service"))
        finally:
            conn.close()

    @classmethod
    async def update_service(
        cls, service_id: int, data: ServiceUpdate, current_user: Dict[str, Any]
    ) -> ServiceRead:
        logger = logging.getLogger(__name__)
        updates = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k in NULLABLE
        }
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "service", service_id, current_user)
            current = require_row(cursor, "services", service_id, "Service")
            check_discount(
                updates.get("price", current["price"]),
                updates.get("discount_price", current["discount_price"]),
            )
            cls._check_references(cursor, updates.get("location_id"), updates)
            columns = {k: v for k, v in updates.items() if not k.endswith("_ids")}
            if columns:
                assignments = ", ".join(f"{key} = ?" for key in columns)
                cursor.execute(
                    f"UPDATE services SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (*columns.values(), service_id),
                )
            for table, column, _, field, _ in LINKS:
                if updates.get(field) is not None:
                    replace_links(cursor, table, "service_id", service_id, column, updates[field])
            conn.commit()
            logger.info("Updated service %s", service_id)
            service = cls.row_to_read(cursor, require_row(cursor, "services", service_id, "Service"))
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="update",
            object_type="service",
            object_id=service_id,
            details=updates,
        )
        return service

    @classmethod
    async def delete_service(cls, service_id: int, current_user: Dict[str, Any]) -> None:
        """Delete a service with its hotels, restaurants and coffees."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "service", service_id, current_user)
            cursor.execute("DELETE FROM services WHERE id = ?", (service_id,))
            conn.commit()
            logger.info("Deleted service %s", service_id)
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="delete",
            object_type="service",
            object_id=service_id,
        )

    @classmethod
    async def add_images(
        cls, service_id: int, files: List[UploadFile], current_user: Dict[str, Any]
    ) -> ServiceRead:
        """Store uploaded images and append their paths to the service."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            ensure_owner(cursor, "service", service_id, current_user)
            paths = await save_uploads(files)
            row = require_row(cursor, "services", service_id, "Service")
            images = load_json_list(row["images"]) + paths
            cursor.execute(
                "UPDATE services SET images = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (json.dumps(images), service_id),
            )
            conn.commit()
            service = cls.row_to_read(cursor, require_row(cursor, "services", service_id, "Service"))
        finally:
            conn.close()
        await AuditService.record(
            user_id=current_user.get("user_id"),
            action="upload",
            object_type="service",
            object_id=service_id,
            details={"images": paths},
        )
        return service

    @staticmethod
    def _resolve_provider(
        cursor: sqlite3.Cursor, provider_id: Optional[int], current_user: Dict[str, Any]
    ) -> int:
        """Return the provider id a new service is created for."""
        if is_admin(current_user):
            if provider_id is None:
                raise ValueError("provider_id is required")
            if not cursor.execute("SELECT 1 FROM providers WHERE id = ?", (provider_id,)).fetchone():
                raise ValueError(f"Provider {provider_id} not found")
            return provider_id
        own = cursor.execute(
            "SELECT id FROM providers WHERE user_id = ?", (current_user.get("user_id"),)
        ).fetchone()
        if not own:
            raise ValueError("No provider profile exists for this account")
        if provider_id is not None and provider_id != own["id"]:
            raise PermissionDeniedError("You do not own this provider")
        return own["id"]

    @staticmethod
    def _check_references(cursor: sqlite3.Cursor, location_id: Optional[int], values: Dict[str, Any]) -> None:
        if location_id is not None:
            check_ids_exist(cursor, "locations", [location_id], "Location")
        for _, _, ref_table, field, label in LINKS:
            if values.get(field):
                check_ids_exist(cursor, ref_table, values[field], label)

    @staticmethod
    def row_to_read(cursor: sqlite3.Cursor, row: sqlite3.Row) -> ServiceRead:
        """Build a ``ServiceRead`` from a services row and its link tables."""
        service_id = row["id"]
        links = {
            field: fetch_link_ids(cursor, table, "service_id", service_id, column)
            for table, column, _, field, _ in LINKS
        }
        return ServiceRead(
            id=service_id,
            service_code=row["service_code"],
            provider_id=row["provider_id"],
            location_id=row["location_id"],
            service_name=row["service_name"],
            price=row["price"],
            discount_price=row["discount_price"],
            description=row["description"],
            status=row["status"],
            review_ids=fetch_link_ids(cursor, "service_reviews", "service_id", service_id, "review_id"),
            images=load_json_list(row["images"]),
            created_at=str(row["created_at"]),
            updated_at=str(row["updated_at"]),
            **links,
        )

