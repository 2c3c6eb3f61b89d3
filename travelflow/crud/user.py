# travelflow/crud/user.py
from typing import List, Optional

from sqlalchemy import select, or_, func
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.core.exceptions import NotFoundError
from travelflow.crud.base import CRUDBase
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import UserRole


class CRUDUser(CRUDBase[User]):

    async def get_all(
        self, db: AsyncSession, role: Optional[UserRole] = None, search: Optional[str] = None
    ) -> List[User]:
        conditions = []
        if role:
            conditions.append(User.role == role)
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(or_(
                func.lower(User.name).like(pattern),
                func.lower(User.email).like(pattern),
                func.lower(User.department).like(pattern),
            ))

        async with self.guard(db, "list"):
            result = await db.execute(select(User).where(*conditions).order_by(User.name))
            return list(result.scalars().all())

    async def get_by_email(self, db: AsyncSession, email: str) -> User:
        async with self.guard(db, "load"):
            result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
            user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def email_exists(self, db: AsyncSession, email: str) -> bool:
        async with self.guard(db, "load"):
            result = await db.execute(select(User.id).where(func.lower(User.email) == email.lower()))
            return result.first() is not None

    async def get_by_role(self, db: AsyncSession, role: UserRole, active_only: bool = True) -> List[User]:
        conditions = [User.role == role]
        if active_only:
            conditions.append(User.is_active == True)

        async with self.guard(db, "list"):
            result = await db.execute(select(User).where(*conditions).order_by(User.name))
            return list(result.scalars().all())

    async def delete(self, db: AsyncSession, id: str) -> User:
        return await self.remove(db, id)


user = CRUDUser(User, "user")
