from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.api.dependencies import get_current_user
from travelflow.core.database import get_async_session
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import RequestKind
from travelflow.schemas.travel.expense_schema import ExpenseItemResponse, ExpenseItemsCreate
from travelflow.services.expense.expense_service import ExpenseService


def build_router(kind: RequestKind) -> APIRouter:
    """Expense item routes for one kind of request"""
    router = APIRouter()

    @router.get("", response_model=List[ExpenseItemResponse])
    async def list_expenses(
        request_id: str = Query(..., alias="requestId"),
        session: AsyncSession = Depends(get_async_session),
        current_user: User = Depends(get_current_user)
    ):
        return await ExpenseService(session, kind).get_expenses(request_id, current_user)

    @router.post("", response_model=List[ExpenseItemResponse], status_code=status.HTTP_201_CREATED)
    async def create_expenses(
        data: ExpenseItemsCreate,
        session: AsyncSession = Depends(get_async_session),
        current_user: User = Depends(get_current_user)
    ):
        """Add expense items to a request awaiting its expenses"""
        return await ExpenseService(session, kind).add_expense_items(data.request_id, data.items, current_user)

    return router

travel_router = build_router(RequestKind.TRAVEL)
valley_router = build_router(RequestKind.VALLEY)
