"""Restaurant table endpoints for API v1.

A table carries a single picture; uploading a new one replaces it.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import ADMIN, PROVIDER, require_roles
from booking_platform_api.app.schemas.table import TableCreate, TableRead, TableUpdate
from booking_platform_api.app.services.table_service import TableService


router = APIRouter()


@router.get("/", response_model=List[TableRead])
async def list_tables(
    restaurant_id: Optional[int] = Query(None),
    active: Optional[bool] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[TableRead]:
    return await TableService.list_tables(restaurant_id=restaurant_id, active=active, limit=limit, offset=offset)


@router.post("/", response_model=TableRead, status_code=status.HTTP_201_CREATED)
async def create_table(
    table: TableCreate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> TableRead:
    try:
        return await TableService.create_table(table, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/{table_id}", response_model=TableRead)
async def get_table(table_id: int) -> TableRead:
    try:
        return await TableService.get_table(table_id)
    except ValueError as e:
        raise http_error(e)


@router.put("/{table_id}", response_model=TableRead)
async def update_table(
    table_id: int,
    table: TableUpdate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> TableRead:
    try:
        return await TableService.update_table(table_id, table, current_user)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_table(
    table_id: int,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> None:
    try:
        await TableService.delete_table(table_id, current_user)
    except ValueError as e:
        raise http_error(e)
    return None


@router.post("/{table_id}/picture", response_model=TableRead)
async def upload_table_picture(
    table_id: int,
    file: UploadFile = File(...),
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> TableRead:
    try:
        return await TableService.set_picture(table_id, file, current_user)
    except ValueError as e:
        raise http_error(e)
