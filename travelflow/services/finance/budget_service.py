import logging
from decimal import Decimal
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow import crud
from travelflow.core.config import settings
from travelflow.core.exceptions import (
    BudgetConflictError, InsufficientBudgetError, PersistenceError, ValidationError
)
from travelflow.models.finance.budget import Budget
from travelflow.schemas.finance.budget_schema import (
    BudgetAmountSet, BudgetCreate, BudgetDeduction, BudgetResponse, BudgetUpdate
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

class BudgetService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _to_response(self, budget: Budget) -> BudgetResponse:
        project = await crud.project.get(self.session, budget.project_id)
        response = BudgetResponse.model_validate(budget, from_attributes=True)
        response.project_name = project.name
        return response

    # region ========== Budget Records ==========

    async def get_budgets(
        self, project_id: Optional[str] = None, fiscal_year: Optional[int] = None
    ) -> List[BudgetResponse]:
        budgets = await crud.budget.get_all(self.session, project_id=project_id, fiscal_year=fiscal_year)
        return [await self._to_response(b) for b in budgets]

    async def get_budget(self, budget_id: str) -> BudgetResponse:
        return await self._to_response(await crud.budget.get(self.session, budget_id))

    async def create_budget(self, data: BudgetCreate) -> BudgetResponse:
        project = await crud.project.get(self.session, data.project_id)
        existing = await crud.budget.get_all(self.session, project_id=project.id, fiscal_year=data.fiscal_year)
        if existing:
            raise ValidationError(f"Project already has a budget for fiscal year {data.fiscal_year}")

        budget = await crud.budget.create(self.session, {
            "project_id": project.id,
            "amount": data.amount,
            "fiscal_year": data.fiscal_year,
            "description": data.description,
            "version": 1,
        })
        logger.info(f"Budget {budget.id} created for project {project.name} FY{budget.fiscal_year}: {budget.amount}")
        return await self._to_response(budget)

    async def set_budget(self, data: BudgetAmountSet) -> BudgetResponse:
        """Create or overwrite a project's budget for a fiscal year"""
        project = await crud.project.get(self.session, data.project_id)
        existing = await crud.budget.get_all(self.session, project_id=project.id, fiscal_year=data.fiscal_year)
        if not existing:
            return await self.create_budget(BudgetCreate(
                project_id=project.id,
                amount=data.amount,
                fiscal_year=data.fiscal_year,
                description=data.description,
            ))

        return await self.update_budget(
            existing[0].id,
            BudgetUpdate(**data.model_dump(exclude_unset=True, include={"amount", "description", "version"})),
        )

    async def update_budget(self, budget_id: str, data: BudgetUpdate) -> BudgetResponse:
        budget = await crud.budget.get(self.session, budget_id)
        changes = data.model_dump(exclude_unset=True, exclude={"amount", "version"})
        if "fiscal_year" in changes and changes["fiscal_year"] != budget.fiscal_year:
            clash = await crud.budget.get_all(
                self.session, project_id=budget.project_id, fiscal_year=changes["fiscal_year"]
            )
            if clash:
                raise ValidationError(f"Project already has a budget for fiscal year {changes['fiscal_year']}")

        if data.amount is not None:
            await self._write_amount(budget_id, data.amount, expected_version=data.version)

        budget = await crud.budget.get(self.session, budget_id)
        if changes:
            budget = await crud.budget.update(self.session, budget, changes)
        return await self._to_response(budget)

    async def delete_budget(self, budget_id: str) -> None:
        budget = await crud.budget.remove(self.session, budget_id)
        logger.info(f"Budget {budget_id} deleted (project {budget.project_id}, FY{budget.fiscal_year})")

    async def _write_amount(self, budget_id: str, amount: Decimal, expected_version: Optional[int] = None) -> None:
        """Set the amount through the version check; without an expected version, the latest wins"""
        if expected_version is not None:
            if not await crud.budget.compare_and_swap(self.session, budget_id, expected_version, amount):
                raise BudgetConflictError()
            return

        for _ in range(settings.BUDGET_UPDATE_MAX_RETRIES):
            _, version = await crud.budget.read_snapshot(self.session, budget_id)
            if await crud.budget.compare_and_swap(self.session, budget_id, version, amount):
                return
        raise BudgetConflictError()

    # endregion

    # region ========== Allocation ==========

    async def deduct(
        self,
        project_id: str,
        expense_amount: Decimal,
        fiscal_year: Optional[int] = None,
        commit: bool = True,
    ) -> BudgetDeduction:
        """
        Charge `expense_amount` to the project's budget.

        The write is conditional on the version read just before it. When
        another approval got there first the amount is re-read and the
        deduction retried, so concurrent approvals add up instead of
        overwriting each other.
        """
        expense_amount = Decimal(str(expense_amount))
        if expense_amount < ZERO:
            raise ValidationError("Expense amount cannot be negative")

        project = await crud.project.get(self.session, project_id)
        if not project.active:
            raise ValidationError(f"Project '{project.name}' is not active")

        budget = await crud.budget.get_for_project(self.session, project.id, fiscal_year)
        budget_id = budget.id

        try:
            for attempt in range(1, settings.BUDGET_UPDATE_MAX_RETRIES + 1):
                current_amount, version = await crud.budget.read_snapshot(self.session, budget_id)
                if current_amount < expense_amount:
                    raise InsufficientBudgetError(
                        f"Insufficient budget: available {current_amount}, required {expense_amount}"
                    )

                new_amount = max(ZERO, current_amount - expense_amount)
                if await crud.budget.compare_and_swap(self.session, budget_id, version, new_amount, commit=commit):
                    logger.info(
                        f"Budget {budget_id} charged {expense_amount}: {current_amount} -> {new_amount}"
                    )
                    return BudgetDeduction(
                        budget_id=budget_id,
                        project_id=project_id,
                        previous_amount=current_amount,
                        deducted_amount=expense_amount,
                        new_amount=new_amount,
                        version=version + 1,
                    )

                logger.warning(f"Budget {budget_id} changed during deduction (attempt {attempt}), retrying")

        except HTTPException:
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error deducting from budget {budget_id}: {str(e)}")
            raise PersistenceError("Failed to update budget")

        raise BudgetConflictError()

    # endregion
