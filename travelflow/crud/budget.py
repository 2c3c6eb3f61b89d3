# travelflow/crud/budget.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.core.exceptions import NotFoundError
from travelflow.crud.base import CRUDBase
from travelflow.models.finance.budget import Budget


class CRUDBudget(CRUDBase[Budget]):
    """Amount changes go through compare_and_swap, so loads always refresh from the database"""

    async def get(self, db: AsyncSession, id: str) -> Budget:
        async with self.guard(db, "load"):
            budget = await db.get(Budget, id, populate_existing=True)
        if budget is None:
            raise NotFoundError("Budget not found")
        return budget

    async def get_all(
        self, db: AsyncSession, project_id: Optional[str] = None, fiscal_year: Optional[int] = None
    ) -> List[Budget]:
        conditions = []
        if project_id:
            conditions.append(Budget.project_id == project_id)
        if fiscal_year is not None:
            conditions.append(Budget.fiscal_year == fiscal_year)

        async with self.guard(db, "list"):
            result = await db.execute(
                select(Budget).where(*conditions).order_by(Budget.fiscal_year.desc(), Budget.created_at.desc())
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().all())

    async def get_for_project(
        self, db: AsyncSession, project_id: str, fiscal_year: Optional[int] = None
    ) -> Budget:
        """Budget for the given fiscal year, or the latest one when omitted"""
        budgets = await self.get_all(db, project_id=project_id, fiscal_year=fiscal_year)
        if not budgets:
            if fiscal_year is not None:
                raise NotFoundError(f"No budget found for project in fiscal year {fiscal_year}")
            raise NotFoundError("No budget found for project")
        return budgets[0]

    async def read_snapshot(self, db: AsyncSession, id: str) -> Tuple[Decimal, int]:
        """Current (amount, version) straight from the database"""
        async with self.guard(db, "load"):
            result = await db.execute(
                select(Budget.amount, Budget.version).where(Budget.id == id)
            )
            row = result.first()
        if row is None:
            raise NotFoundError("Budget not found")
        return Decimal(str(row.amount)), row.version

    async def compare_and_swap(
        self,
        db: AsyncSession,
        id: str,
        expected_version: int,
        new_amount: Decimal,
        commit: bool = True,
    ) -> bool:
        """Write new_amount only if the row still carries expected_version"""
        async with self.guard(db, "update"):
            result = await db.execute(
                update(Budget)
                .where(Budget.id == id, Budget.version == expected_version)
                .values(
                    amount=new_amount,
                    version=Budget.version + 1,
                    updated_at=datetime.now(timezone.utc),
                )
                .execution_options(synchronize_session=False)
            )
            if commit:
                await db.commit()
            return result.rowcount == 1


budget = CRUDBudget(Budget, "budget")
