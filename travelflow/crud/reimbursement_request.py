# travelflow/crud/reimbursement_request.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select, func, or_, update
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.core.exceptions import InvalidTransitionError, NotFoundError
from travelflow.crud.base import CRUDBase, ModelType
from travelflow.models.shared.enums import RequestPhase, RequestStatus, RequestType


class CRUDReimbursementRequest(CRUDBase[ModelType]):
    """Operations shared by travel and in-valley requests"""

    async def get_by_employee_id(self, db: AsyncSession, employee_id: str) -> List[ModelType]:
        return await self.get_filtered(db, employee_id=employee_id)

    async def get_filtered(
        self,
        db: AsyncSession,
        employee_id: Optional[str] = None,
        statuses: Optional[Sequence[RequestStatus]] = None,
    ) -> List[ModelType]:
        conditions = []
        if employee_id:
            conditions.append(self.model.employee_id == employee_id)
        if statuses:
            conditions.append(self.model.status.in_(list(statuses)))

        async with self.guard(db, "list"):
            result = await db.execute(
                select(self.model).where(*conditions).order_by(self.model.created_at.desc())
            )
            return list(result.scalars().all())

    async def search(
        self,
        db: AsyncSession,
        statuses: Optional[Sequence[RequestStatus]] = None,
        request_type: Optional[RequestType] = None,
        department: Optional[str] = None,
        text: Optional[str] = None,
    ) -> List[ModelType]:
        """Admin listing filters; text matches employee, purpose or project"""
        conditions = []
        if statuses:
            conditions.append(self.model.status.in_(list(statuses)))
        if request_type:
            conditions.append(self.model.request_type == request_type)
        if department:
            conditions.append(func.lower(self.model.department) == department.lower())
        if text:
            pattern = f"%{text.lower()}%"
            conditions.append(or_(
                func.lower(self.model.employee_name).like(pattern),
                func.lower(self.model.purpose).like(pattern),
                func.lower(self.model.project).like(pattern),
                func.lower(self.model.id).like(pattern),
            ))

        async with self.guard(db, "list"):
            result = await db.execute(select(self.model).where(*conditions))
            return list(result.scalars().all())

    async def count_by_employee_id(self, db: AsyncSession, employee_id: str) -> int:
        async with self.guard(db, "count"):
            result = await db.execute(
                select(func.count(self.model.id)).where(self.model.employee_id == employee_id)
            )
            return result.scalar() or 0

    async def get_current(self, db: AsyncSession, id: str) -> ModelType:
        """Reload from the database, replacing any stale copy in the session"""
        async with self.guard(db, "load"):
            obj = await db.get(self.model, id, populate_existing=True)
        if obj is None:
            raise NotFoundError(f"{self.label.capitalize()} not found")
        return obj

    async def update_status(
        self,
        db: AsyncSession,
        id: str,
        status: RequestStatus,
        from_statuses: Sequence[RequestStatus],
        additional_data: Optional[Dict[str, Any]] = None,
        commit: bool = True,
    ) -> ModelType:
        """
        Move a request to `status` only while it is still in one of
        `from_statuses`.

        The check and the write are one UPDATE, so of two overlapping
        decisions on the same request only the first lands; the other gets
        InvalidTransitionError and its transaction (including any budget
        deduction made in it) is rolled back.
        """
        values = {**(additional_data or {}), "status": status}
        async with self.guard(db, "update"):
            result = await db.execute(
                update(self.model)
                .where(self.model.id == id, self.model.status.in_(list(from_statuses)))
                .values(**values)
                .execution_options(synchronize_session=False)
            )

        if result.rowcount != 1:
            await db.rollback()
            current = await self.get_current(db, id)
            raise InvalidTransitionError(
                f"{self.label.capitalize()} is now '{current.status.value}' and can no longer "
                f"move to '{RequestStatus(status).value}'"
            )

        if commit:
            async with self.guard(db, "update"):
                await db.commit()
        return await self.get_current(db, id)

    async def update_with_expenses(
        self,
        db: AsyncSession,
        id: str,
        total_amount: Decimal,
        previous_outstanding_advance: Decimal,
        from_statuses: Sequence[RequestStatus],
        commit: bool = True,
    ) -> ModelType:
        """Move a request into phase 2 with its submitted totals"""
        return await self.update_status(
            db,
            id,
            RequestStatus.PENDING_VERIFICATION,
            from_statuses,
            {
                "total_amount": total_amount,
                "previous_outstanding_advance": previous_outstanding_advance,
                "phase": int(RequestPhase.EXPENSES),
                "expenses_submitted_at": datetime.now(timezone.utc),
            },
            commit=commit,
        )

    async def delete(self, db: AsyncSession, id: str, commit: bool = True) -> ModelType:
        return await self.remove(db, id, commit=commit)
