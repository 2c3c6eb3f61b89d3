# travelflow/crud/notification.py
from typing import List

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.crud.base import CRUDBase
from travelflow.models.system.notification import Notification


class CRUDNotification(CRUDBase[Notification]):

    async def get_by_user_id(self, db: AsyncSession, user_id: str, unread_only: bool = False) -> List[Notification]:
        conditions = [Notification.user_id == user_id]
        if unread_only:
            conditions.append(Notification.read == False)

        async with self.guard(db, "list"):
            result = await db.execute(
                select(Notification).where(*conditions).order_by(Notification.created_at.desc())
            )
            return list(result.scalars().all())

    async def get_by_request_id(self, db: AsyncSession, request_id: str) -> List[Notification]:
        async with self.guard(db, "list"):
            result = await db.execute(
                select(Notification)
                .where(Notification.request_id == request_id)
                .order_by(Notification.created_at)
            )
            return list(result.scalars().all())

    async def mark_as_read(self, db: AsyncSession, id: str) -> Notification:
        db_obj = await self.get(db, id)
        return await self.update(db, db_obj, {"read": True})

    async def delete_by_request_id(self, db: AsyncSession, request_id: str, commit: bool = True) -> int:
        async with self.guard(db, "delete"):
            result = await db.execute(delete(Notification).where(Notification.request_id == request_id))
            if commit:
                await db.commit()
            return result.rowcount


notification = CRUDNotification(Notification, "notification")
