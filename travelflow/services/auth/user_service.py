import logging
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from travelflow import crud
from travelflow.core.exceptions import ValidationError
from travelflow.core.logging import log_user_action
from travelflow.core.security import get_password_hash
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import UserRole
from travelflow.schemas.auth.user import UserCreate, UserResponse, UserSummary, UserUpdate

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_users(self, role: Optional[UserRole] = None, search: Optional[str] = None) -> List[UserResponse]:
        users = await crud.user.get_all(self.session, role=role, search=search)
        return [UserResponse.model_validate(u, from_attributes=True) for u in users]

    async def get_user(self, user_id: str) -> UserResponse:
        user = await crud.user.get(self.session, user_id)
        return UserResponse.model_validate(user, from_attributes=True)

    async def get_directory(self, role: UserRole) -> List[UserSummary]:
        users = await crud.user.get_by_role(self.session, role)
        return [UserSummary.model_validate(u, from_attributes=True) for u in users]

    async def get_by_ids(self, user_ids: Sequence[str]) -> List[UserSummary]:
        users = await crud.user.get_by_ids(self.session, user_ids)
        return [UserSummary.model_validate(u, from_attributes=True) for u in users]

    async def create_user(self, data: UserCreate, created_by: Optional[str] = None) -> UserResponse:
        if await crud.user.email_exists(self.session, data.email):
            raise ValidationError("A user with this email already exists")

        user = await crud.user.create(self.session, {
            "email": data.email.lower(),
            "name": data.name,
            "role": data.role,
            "department": data.department,
            "designation": data.designation,
            "hashed_password": get_password_hash(data.password),
            "is_active": True,
        })
        if created_by:
            log_user_action(created_by, "create", "user", user.id)
        logger.info(f"User created: {user.email} ({user.role.value})")
        return UserResponse.model_validate(user, from_attributes=True)

    async def update_user(self, user_id: str, data: UserUpdate, updated_by: Optional[str] = None) -> UserResponse:
        user = await crud.user.get(self.session, user_id)
        changes = data.model_dump(exclude_unset=True, exclude={"password"})

        if changes.get("email"):
            changes["email"] = changes["email"].lower()
            if changes["email"] != user.email and await crud.user.email_exists(self.session, changes["email"]):
                raise ValidationError("A user with this email already exists")
        if data.password:
            changes["hashed_password"] = get_password_hash(data.password)

        user = await crud.user.update(self.session, user, changes)
        if updated_by:
            log_user_action(updated_by, "update", "user", user_id)
        return UserResponse.model_validate(user, from_attributes=True)

    async def update_name(self, user: User, name: str) -> UserResponse:
        user = await crud.user.update(self.session, user, {"name": name})
        return UserResponse.model_validate(user, from_attributes=True)

    async def delete_user(self, user_id: str, deleted_by: str) -> None:
        """Delete a user who owns no requests"""
        if user_id == deleted_by:
            raise ValidationError("You cannot delete your own account")

        await crud.user.get(self.session, user_id)
        owned = (
            await crud.travel_request.count_by_employee_id(self.session, user_id)
            + await crud.valley_request.count_by_employee_id(self.session, user_id)
        )
        if owned:
            raise ValidationError(
                f"User has {owned} request(s); deactivate the account instead of deleting it"
            )

        await crud.user.delete(self.session, user_id)
        log_user_action(deleted_by, "delete", "user", user_id)
