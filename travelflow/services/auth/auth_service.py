import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow import crud
from travelflow.core.config import settings
from travelflow.core.exceptions import NotFoundError
from travelflow.core.logging import log_user_action
from travelflow.core.security import create_access_token, verify_password
from travelflow.models.auth.user import User
from travelflow.schemas.auth.login import LoginResponse
from travelflow.schemas.auth.user import UserResponse

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """Authenticate user with email and password"""
        try:
            user = await crud.user.get_by_email(self.session, email)
        except NotFoundError:
            logger.warning(f"Failed login for {email}: user not found")
            return None

        if not user.is_active:
            logger.warning(f"Failed login for {email}: account inactive")
            return None

        if not verify_password(password, user.hashed_password):
            logger.warning(f"Failed login for {email}: wrong password")
            return None

        return user

    async def login(self, email: str, password: str) -> LoginResponse:
        user = await self.authenticate_user(email, password)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
                headers={"WWW-Authenticate": "Bearer"},
            )

        role = user.role.value
        access_token = create_access_token(subject=user.id, claims={"role": role, "email": user.email})
        log_user_action(user.id, "login", "auth")

        return LoginResponse(
            user=UserResponse.model_validate(user, from_attributes=True),
            access_token=access_token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )
