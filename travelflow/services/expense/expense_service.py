import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from fastapi import HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow import crud
from travelflow.core.config import settings
from travelflow.core.exceptions import InvalidTransitionError, PersistenceError
from travelflow.crud.mappers import expense_item_from_row, receipt_from_row
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import RequestKind
from travelflow.schemas.travel.expense_schema import ExpenseItemCreate
from travelflow.services.workflow.access import ensure_can_view, ensure_owner
from travelflow.services.workflow.request_kinds import get_kind_config
from travelflow.services.workflow.transitions import expense_submission_states
from travelflow.utils.file_handler import ReceiptStorage

logger = logging.getLogger(__name__)

class ExpenseService:
    """Itemised expenses and their receipts for one kind of request"""

    def __init__(self, session: AsyncSession, kind: RequestKind = RequestKind.TRAVEL):
        self.session = session
        self.config = get_kind_config(kind)

    def ensure_accepts_expenses(self, request) -> None:
        allowed = expense_submission_states(self.config.kind, settings.ENFORCE_EXPENSE_SUBMISSION_GATE)
        if request.status not in allowed:
            states = " or ".join(s.value for s in allowed)
            raise InvalidTransitionError(
                f"Expenses can only be added while the {self.config.label} is {states} "
                f"(current status: {request.status.value})"
            )

    async def expenses_with_receipts(self, request_id: str) -> List[Dict[str, Any]]:
        items = await crud.expense_item.get_by_request_id(self.session, request_id, self.config.kind)
        receipts = await crud.receipt.get_by_expense_item_ids(self.session, [item.id for item in items])

        by_item: Dict[str, List[Dict[str, Any]]] = {}
        for receipt in receipts:
            by_item.setdefault(receipt.expense_item_id, []).append(receipt_from_row(receipt))

        expenses = []
        for item in items:
            record = expense_item_from_row(item)
            record["receipts"] = by_item.get(item.id, [])
            expenses.append(record)
        return expenses

    async def get_expenses(self, request_id: str, current_user: User) -> List[Dict[str, Any]]:
        request = await self.config.gateway.get(self.session, request_id)
        ensure_can_view(request, current_user)
        return await self.expenses_with_receipts(request_id)

    async def create_items(
        self, request_id: str, items: Sequence[ExpenseItemCreate], commit: bool = True
    ) -> List[Dict[str, Any]]:
        """Insert expense items without any workflow checks"""
        created = []
        for item in items:
            expense = await crud.expense_item.create(self.session, {
                "request_id": request_id,
                "request_kind": self.config.kind,
                "category": item.category,
                "amount": item.amount,
                "description": item.description,
            }, commit=False)
            created.append(expense)
        if commit:
            await self.session.commit()
        return [expense_item_from_row(e) for e in created]

    async def add_expense_items(
        self, request_id: str, items: Sequence[ExpenseItemCreate], current_user: User
    ) -> List[Dict[str, Any]]:
        request = await self.config.gateway.get(self.session, request_id)
        ensure_owner(request, current_user)
        self.ensure_accepts_expenses(request)

        try:
            created = await self.create_items(request_id, items)
        except HTTPException:
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error adding expenses to {self.config.label} {request_id}: {str(e)}")
            raise PersistenceError("Failed to save expense items")

        logger.info(f"{len(created)} expense item(s) added to {self.config.label} {request_id}")
        return created

    async def items_total(self, request_id: str) -> Optional[Decimal]:
        """Sum of the request's expense items, or None when it has none"""
        items = await crud.expense_item.get_by_request_id(self.session, request_id, self.config.kind)
        if not items:
            return None
        return sum((Decimal(str(item.amount)) for item in items), Decimal("0"))


class ReceiptService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.storage = ReceiptStorage()

    async def _load_parent(self, expense_item_id: str):
        item = await crud.expense_item.get(self.session, expense_item_id)
        config = get_kind_config(item.request_kind)
        request = await config.gateway.get(self.session, item.request_id)
        return item, request

    async def get_receipts(self, expense_item_id: str, current_user: User) -> List[Dict[str, Any]]:
        _, request = await self._load_parent(expense_item_id)
        ensure_can_view(request, current_user)
        receipts = await crud.receipt.get_by_expense_item_id(self.session, expense_item_id)
        return [receipt_from_row(r) for r in receipts]

    async def upload_receipt(self, file: UploadFile, expense_item_id: str, current_user: User) -> Dict[str, Any]:
        """Store one receipt file against an expense item owned by the caller"""
        item, request = await self._load_parent(expense_item_id)
        ensure_owner(request, current_user)

        stored = await self.storage.save_file(file)
        try:
            receipt = await crud.receipt.create(self.session, {"expense_item_id": item.id, **stored})
        except Exception:
            # Keep disk and database in step
            self.storage.delete_file(stored["storage_path"])
            raise

        logger.info(f"Receipt {receipt.stored_filename} uploaded for expense item {expense_item_id}")
        return receipt_from_row(receipt)
