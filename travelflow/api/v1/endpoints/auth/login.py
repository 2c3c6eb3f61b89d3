from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.api.dependencies import get_current_user
from travelflow.core.database import get_async_session
from travelflow.models.auth.user import User
from travelflow.schemas.auth.login import LoginRequest, LoginResponse
from travelflow.schemas.auth.user import UserResponse
from travelflow.services.auth.auth_service import AuthService

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    session: AsyncSession = Depends(get_async_session)
):
    """Exchange email and password for an access token"""
    service = AuthService(session)
    return await service.login(credentials.email, credentials.password)

@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
