# travelflow/crud/expense_item.py
from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.crud.base import CRUDBase
from travelflow.models.shared.enums import RequestKind
from travelflow.models.travel.expense_item import ExpenseItem
from travelflow.models.travel.receipt import Receipt


class CRUDExpenseItem(CRUDBase[ExpenseItem]):

    async def get_by_request_id(
        self, db: AsyncSession, request_id: str, request_kind: Optional[RequestKind] = None
    ) -> List[ExpenseItem]:
        conditions = [ExpenseItem.request_id == request_id]
        if request_kind:
            conditions.append(ExpenseItem.request_kind == request_kind)

        async with self.guard(db, "list"):
            result = await db.execute(
                select(ExpenseItem).where(*conditions).order_by(ExpenseItem.created_at)
            )
            return list(result.scalars().all())

    async def delete_by_request_id(self, db: AsyncSession, request_id: str, commit: bool = True) -> int:
        """Delete a request's expense items together with their receipts"""
        item_ids = select(ExpenseItem.id).where(ExpenseItem.request_id == request_id)

        async with self.guard(db, "delete"):
            await db.execute(delete(Receipt).where(Receipt.expense_item_id.in_(item_ids)))
            result = await db.execute(delete(ExpenseItem).where(ExpenseItem.request_id == request_id))
            if commit:
                await db.commit()
            return result.rowcount


expense_item = CRUDExpenseItem(ExpenseItem, "expense item")
