from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.api.dependencies import require_admin
from travelflow.core.database import get_async_session
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import UserRole
from travelflow.schemas.auth.user import UserCreate, UserResponse, UserUpdate
from travelflow.schemas.common.message import MessageResponse
from travelflow.services.auth.user_service import UserService

router = APIRouter()

@router.get("", response_model=List[UserResponse])
async def list_users(
    role: Optional[UserRole] = Query(None),
    search: Optional[str] = Query(None, description="Match name, email or department"),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    return await UserService(session).get_users(role=role, search=search)

@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    return await UserService(session).create_user(data, created_by=current_user.id)

@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    data: UserUpdate,
    user_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    return await UserService(session).update_user(user_id, data, updated_by=current_user.id)

@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    """Delete a user; users who own requests must be deactivated instead"""
    await UserService(session).delete_user(user_id, deleted_by=current_user.id)
    return MessageResponse(message="User deleted successfully")
