"""
Authentication endpoints for API v1.

Public self‑registration, email/password login returning a bearer JWT,
and ``/me`` returning the caller's own account.  The very first
account registered becomes the administrator.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import create_access_token, get_current_user
from booking_platform_api.app.schemas.user import Token, UserLogin, UserRead, UserRegister
from booking_platform_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(user: UserRegister) -> UserRead:
    """Register a customer or provider account.

    Provider accounts get a default provider profile so they can start
    creating services right away.
    """
    try:
        return await UserService.register(user)
    except ValueError as e:
        raise http_error(e)


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin) -> Token:
    user = await UserService.authenticate(credentials.email, credentials.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")
    if not user.active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User account disabled")
    return Token(access_token=create_access_token({"sub": user.email}))


@router.get("/me", response_model=UserRead)
async def read_me(current_user: dict = Depends(get_current_user)) -> UserRead:
    if current_user.get("user_id") is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No account behind this token")
    try:
        return await UserService.get_user(current_user["user_id"])
    except ValueError as e:
        raise http_error(e)
