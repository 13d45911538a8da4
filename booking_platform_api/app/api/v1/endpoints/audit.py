"""
Audit log endpoints for API v1.

The audit trail records every create, update, delete and upload done
through the service layer.  Only administrators may read it; entries
can be filtered by acting user, object type, action and date range.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from booking_platform_api.app.core.security import ADMIN, require_roles
from booking_platform_api.app.schemas.audit import AuditLogRead
from booking_platform_api.app.services.audit_service import AuditService

router = APIRouter()


@router.get("/", response_model=List[AuditLogRead])
async def list_audit_logs(
    user_id: Optional[int] = Query(None, description="Filter by acting user ID"),
    object_type: Optional[str] = Query(None, description="Filter by object type (service, room, invoice, etc.)"),
    action: Optional[str] = Query(None, description="Filter by action (create, update, delete, upload)"),
    start_date: Optional[str] = Query(None, description="Start date (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="End date (YYYY-MM-DD), inclusive"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    current_user: dict = Depends(require_roles(ADMIN)),
) -> List[AuditLogRead]:
    """Newest audit records first."""
    return await AuditService.list_logs(
        user_id=user_id,
        object_type=object_type,
        action=action,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset,
    )
