"""
Revenue reports for providers.

Revenue is the sum of ``total_amount`` over paid invoices, grouped by
the type of the booked room.  The report for a provider user covers
every room of every hotel of every service the provider owns; room
types that earned nothing in the window are reported with revenue 0.
Invoices are matched on ``issue_date``, stored as naive UTC ISO text,
so the window bounds compare as strings.
"""

import logging
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Optional

from booking_platform_api.app.core.db import get_connection
from booking_platform_api.app.schemas.invoice import RevenueItem, RevenueReport


class RevenueService:
    """Monthly and yearly revenue per room type."""

    @classmethod
    async def monthly(cls, user_id: int, month: int, year: Optional[int] = None) -> RevenueReport:
        if not 1 <= month <= 12:
            raise ValueError("Month must be between 1 and 12")
        if year is None:
            year = datetime.now(timezone.utc).year
        start = datetime(year, month, 1)
        end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
        return cls._report(user_id, start, end)

    @classmethod
    async def yearly(cls, user_id: int, year: Optional[int] = None) -> RevenueReport:
        if year is None:
            year = datetime.now(timezone.utc).year
        return cls._report(user_id, datetime(year, 1, 1), datetime(year + 1, 1, 1))

    @staticmethod
    def _report(user_id: int, start: datetime, end: datetime) -> RevenueReport:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not cursor.execute("SELECT 1 FROM users WHERE id = ?", (user_id,)).fetchone():
                raise ValueError(f"User {user_id} not found")
            rooms = cursor.execute(
                """
                SELECT r.id, r.room_type FROM rooms r
                JOIN hotels h ON h.id = r.hotel_id
                JOIN services s ON s.id = h.service_id
                JOIN providers p ON p.id = s.provider_id
                WHERE p.user_id = ?
                ORDER BY r.id
                """,
                (user_id,),
            ).fetchall()
            room_types = {row["id"]: row["room_type"] for row in rooms}
            totals: "OrderedDict[str, float]" = OrderedDict()
            for room_type in room_types.values():
                totals.setdefault(room_type, 0.0)
            if room_types:
                placeholders = ", ".join("?" for _ in room_types)
                invoices = cursor.execute(
                    f"""
                    SELECT room_id, total_amount FROM invoices
                    WHERE payment_status = 'paid'
                      AND room_id IN ({placeholders})
                      AND issue_date >= ? AND issue_date < ?
                    """,
                    (*room_types.keys(), start.isoformat(), end.isoformat()),
                ).fetchall()
                for invoice in invoices:
                    totals[room_types[invoice["room_id"]]] += invoice["total_amount"]
        finally:
            conn.close()
        logger.info(
            "Revenue for user %s between %s and %s over %d room types",
            user_id,
            start.date(),
            end.date(),
            len(totals),
        )
        return RevenueReport(
            data=[RevenueItem(room_type=room_type, revenue=revenue) for room_type, revenue in totals.items()]
        )
