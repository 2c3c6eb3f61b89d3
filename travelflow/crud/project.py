# travelflow/crud/project.py
from typing import List

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.crud.base import CRUDBase
from travelflow.models.finance.project import Project


class CRUDProject(CRUDBase[Project]):

    async def get_all(self, db: AsyncSession, include_inactive: bool = False) -> List[Project]:
        conditions = []
        if not include_inactive:
            conditions.append(Project.active == True)

        async with self.guard(db, "list"):
            result = await db.execute(select(Project).where(*conditions).order_by(Project.name))
            return list(result.scalars().all())

    async def name_exists(self, db: AsyncSession, name: str, exclude_id: str = None) -> bool:
        conditions = [func.lower(Project.name) == name.lower()]
        if exclude_id:
            conditions.append(Project.id != exclude_id)

        async with self.guard(db, "load"):
            result = await db.execute(select(Project.id).where(*conditions))
            return result.first() is not None


project = CRUDProject(Project, "project")
