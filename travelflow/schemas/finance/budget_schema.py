from typing import Optional
from datetime import datetime
from pydantic import Field

from travelflow.schemas.common.base import Amount, CamelModel

class BudgetCreate(CamelModel):
    project_id: str
    amount: Amount = Field(..., ge=0)
    fiscal_year: int = Field(..., ge=2000, le=2100)
    description: Optional[str] = None

class BudgetUpdate(CamelModel):
    amount: Optional[Amount] = Field(default=None, ge=0)
    fiscal_year: Optional[int] = Field(default=None, ge=2000, le=2100)
    description: Optional[str] = None
    # When set, the write only applies if the budget still carries this version
    version: Optional[int] = None

class BudgetAmountSet(CamelModel):
    """Body of POST /budgets: set a project's budget for a fiscal year"""
    project_id: str
    amount: Amount = Field(..., ge=0)
    fiscal_year: int = Field(..., ge=2000, le=2100)
    description: Optional[str] = None
    version: Optional[int] = None

class BudgetResponse(CamelModel):
    id: str
    project_id: str
    project_name: Optional[str] = None
    amount: Amount
    fiscal_year: int
    description: Optional[str] = None
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class BudgetDeduction(CamelModel):
    """Outcome of charging an approved request to a budget"""
    budget_id: str
    project_id: str
    previous_amount: Amount
    deducted_amount: Amount
    new_amount: Amount
    version: int
