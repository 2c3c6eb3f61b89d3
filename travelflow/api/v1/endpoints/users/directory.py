from typing import List
from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.api.dependencies import get_current_user
from travelflow.core.database import get_async_session
from travelflow.core.exceptions import PermissionDeniedError
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import UserRole
from travelflow.schemas.auth.user import UserIdsRequest, UserNameUpdate, UserResponse, UserSummary
from travelflow.services.auth.user_service import UserService
from travelflow.services.workflow.access import is_privileged

router = APIRouter()

@router.get("/approvers", response_model=List[UserSummary])
async def list_approvers(
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Approvers an employee can route a new request to"""
    return await UserService(session).get_directory(UserRole.APPROVER)

@router.get("/users/employees", response_model=List[UserSummary])
async def list_employees(
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Employees that can be added to a group travel request"""
    return await UserService(session).get_directory(UserRole.EMPLOYEE)

@router.post("/users/by-ids", response_model=List[UserSummary])
async def get_users_by_ids(
    data: UserIdsRequest,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    return await UserService(session).get_by_ids(data.user_ids)

@router.get("/user/{user_id}/profile", response_model=UserResponse)
async def get_user_profile(
    user_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    if user_id != current_user.id and not is_privileged(current_user):
        raise PermissionDeniedError("You can only view your own profile")
    return await UserService(session).get_user(user_id)

@router.patch("/user/update-name", response_model=UserResponse)
async def update_own_name(
    data: UserNameUpdate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    return await UserService(session).update_name(current_user, data.name)
