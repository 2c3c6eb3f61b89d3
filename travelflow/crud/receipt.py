# travelflow/crud/receipt.py
from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.crud.base import CRUDBase
from travelflow.models.travel.receipt import Receipt


class CRUDReceipt(CRUDBase[Receipt]):

    async def get_by_expense_item_id(self, db: AsyncSession, expense_item_id: str) -> List[Receipt]:
        return await self.get_by_expense_item_ids(db, [expense_item_id])

    async def get_by_expense_item_ids(self, db: AsyncSession, expense_item_ids: Sequence[str]) -> List[Receipt]:
        if not expense_item_ids:
            return []
        async with self.guard(db, "list"):
            result = await db.execute(
                select(Receipt)
                .where(Receipt.expense_item_id.in_(list(expense_item_ids)))
                .order_by(Receipt.upload_date)
            )
            return list(result.scalars().all())


receipt = CRUDReceipt(Receipt, "receipt")
