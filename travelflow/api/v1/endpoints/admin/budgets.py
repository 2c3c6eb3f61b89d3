from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.api.dependencies import require_admin
from travelflow.core.database import get_async_session
from travelflow.models.auth.user import User
from travelflow.schemas.common.message import MessageResponse
from travelflow.schemas.finance.budget_schema import BudgetCreate, BudgetResponse, BudgetUpdate
from travelflow.services.finance.budget_service import BudgetService

router = APIRouter()

@router.get("", response_model=List[BudgetResponse])
async def list_all_budgets(
    project_id: Optional[str] = Query(None, alias="projectId"),
    fiscal_year: Optional[int] = Query(None, alias="fiscalYear"),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    return await BudgetService(session).get_budgets(project_id=project_id, fiscal_year=fiscal_year)

@router.post("", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    data: BudgetCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    return await BudgetService(session).create_budget(data)

@router.patch("/{budget_id}", response_model=BudgetResponse)
async def update_budget(
    data: BudgetUpdate,
    budget_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    return await BudgetService(session).update_budget(budget_id, data)

@router.delete("/{budget_id}", response_model=MessageResponse)
async def delete_budget(
    budget_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    await BudgetService(session).delete_budget(budget_id)
    return MessageResponse(message="Budget deleted successfully")

