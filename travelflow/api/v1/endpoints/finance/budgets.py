import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.api.dependencies import get_current_user, require_roles
from travelflow.core.database import get_async_session
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import UserRole
from travelflow.schemas.finance.budget_schema import BudgetAmountSet, BudgetResponse
from travelflow.services.finance.budget_service import BudgetService

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("", response_model=List[BudgetResponse])
async def list_budgets(
    project_id: Optional[str] = Query(None),
    fiscal_year: Optional[int] = Query(None),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    return await BudgetService(session).get_budgets(project_id=project_id, fiscal_year=fiscal_year)

@router.post("", response_model=BudgetResponse)
async def set_budget(
    data: BudgetAmountSet,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_roles(UserRole.CHECKER, UserRole.ADMIN))
):
    """Set a project's budget for a fiscal year; pass version to guard against concurrent edits"""
    budget = await BudgetService(session).set_budget(data)
    logger.info(f"Budget {budget.id} set to {budget.amount} by user {current_user.id}")
    return budget
