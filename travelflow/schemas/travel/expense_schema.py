from typing import List, Optional
from datetime import datetime
from pydantic import Field

from travelflow.models.shared.enums import ExpenseCategory, RequestKind
from travelflow.schemas.common.base import Amount, CamelModel

class ExpenseItemCreate(CamelModel):
    category: ExpenseCategory
    amount: Amount = Field(..., ge=0)
    description: Optional[str] = None

class ExpenseItemsCreate(CamelModel):
    """Body of POST /expenses and /valley-expenses"""
    request_id: str
    items: List[ExpenseItemCreate] = Field(..., min_length=1)

class ExpenseSubmission(CamelModel):
    """Body of PATCH /{id}/expenses"""
    expenses: List[ExpenseItemCreate] = []
    total_amount: Optional[Amount] = Field(default=None, ge=0)
    previous_outstanding_advance: Amount = Field(default=0, ge=0)

class ReceiptResponse(CamelModel):
    id: str
    expense_item_id: str
    original_filename: str
    stored_filename: str
    file_type: str
    storage_path: str
    public_url: str
    upload_date: datetime

class ExpenseItemResponse(CamelModel):
    id: str
    request_id: str
    request_kind: RequestKind
    category: ExpenseCategory
    amount: Amount
    description: str
    created_at: datetime
    receipts: List[ReceiptResponse] = []
