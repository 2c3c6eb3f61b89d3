from typing import List
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.api.dependencies import get_current_user
from travelflow.core.database import get_async_session
from travelflow.models.auth.user import User
from travelflow.schemas.travel.expense_schema import ReceiptResponse
from travelflow.services.expense.expense_service import ReceiptService

router = APIRouter()

@router.get("", response_model=List[ReceiptResponse])
async def list_receipts(
    expense_item_id: str = Query(..., alias="expenseItemId"),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    return await ReceiptService(session).get_receipts(expense_item_id, current_user)

@router.post("/upload", response_model=ReceiptResponse, status_code=status.HTTP_201_CREATED)
async def upload_receipt(
    file: UploadFile = File(...),
    expense_item_id: str = Form(..., alias="expenseItemId"),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Upload a receipt (PDF, image or office document) for one expense item"""
    return await ReceiptService(session).upload_receipt(file, expense_item_id, current_user)
