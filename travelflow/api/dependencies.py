import logging
from typing import Callable

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow import crud
from travelflow.auth.jwt_handler import decode_access_token
from travelflow.core.database import get_async_session
from travelflow.core.exceptions import NotFoundError, PermissionDeniedError
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import UserRole

security = HTTPBearer()
logger = logging.getLogger(__name__)

def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    session: AsyncSession = Depends(get_async_session)
) -> User:
    """Get current authenticated user"""
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid authentication credentials")

    try:
        user = await crud.user.get(session, payload["sub"])
    except NotFoundError:
        raise _unauthorized("User not found or inactive")

    if not user.is_active:
        raise _unauthorized("User not found or inactive")

    request.state.current_user_id = user.id
    return user

def require_roles(*roles: UserRole) -> Callable:
    """Dependency factory allowing only users holding one of `roles`"""
    allowed = {UserRole(r) for r in roles}

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if UserRole(current_user.role) not in allowed:
            logger.warning(
                f"User {current_user.id} ({current_user.role.value}) denied; requires "
                f"{', '.join(sorted(r.value for r in allowed))}"
            )
            raise PermissionDeniedError()
        return current_user

    return role_checker

require_admin = require_roles(UserRole.ADMIN)
