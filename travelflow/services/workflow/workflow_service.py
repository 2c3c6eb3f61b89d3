import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Union

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow import crud
from travelflow.core.config import settings
from travelflow.core.exceptions import NotFoundError, PersistenceError, ValidationError
from travelflow.core.logging import log_user_action
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import (
    RequestKind, RequestPhase, RequestStatus, RequestType, UserRole
)
from travelflow.schemas.travel.expense_schema import ExpenseSubmission
from travelflow.schemas.travel.travel_request_schema import TravelRequestCreate
from travelflow.schemas.travel.valley_request_schema import ValleyRequestCreate
from travelflow.schemas.travel.workflow_schema import StatusUpdateRequest
from travelflow.services.expense.expense_service import ExpenseService
from travelflow.services.finance.budget_service import BudgetService
from travelflow.services.notification.notification_service import NotificationService
from travelflow.services.workflow.access import ensure_can_view, ensure_owner, is_privileged
from travelflow.services.workflow.request_kinds import get_kind_config
from travelflow.services.workflow.transitions import (
    COMMENT_FIELDS, Transition, expense_submission_states, resolve_transition
)
from travelflow.utils.file_handler import ReceiptStorage

logger = logging.getLogger(__name__)

class RequestWorkflowService:
    """
    Lifecycle of travel and in-valley requests.

    Every status change is committed before notifications go out; the
    notification fan-out is best effort and never undoes a transition.
    """

    def __init__(self, session: AsyncSession, kind: RequestKind = RequestKind.TRAVEL):
        self.session = session
        self.config = get_kind_config(kind)
        self.kind = self.config.kind
        self.gateway = self.config.gateway
        self.label = self.config.label
        self.notifications = NotificationService(session)
        self.expenses = ExpenseService(session, self.kind)

    # region ========== Queries ==========

    async def list_requests(
        self,
        current_user: User,
        employee_id: Optional[str] = None,
        statuses: Optional[Sequence[RequestStatus]] = None,
    ) -> List[Dict[str, Any]]:
        """Employees get their own requests; privileged roles may see everyone's"""
        if not is_privileged(current_user):
            employee_id = current_user.id

        requests = await self.gateway.get_filtered(self.session, employee_id=employee_id, statuses=statuses)
        return [self.config.from_row(r) for r in requests]

    async def get_request(self, request_id: str, current_user: User) -> Dict[str, Any]:
        request = await self.gateway.get(self.session, request_id)
        ensure_can_view(request, current_user)

        record = self.config.from_row(request)
        record["expenses"] = await self.expenses.expenses_with_receipts(request_id)
        return record

    # endregion

    # region ========== Submission ==========

    async def create_request(
        self, data: Union[TravelRequestCreate, ValleyRequestCreate], current_user: User
    ) -> Dict[str, Any]:
        employee_id = current_user.id
        approver_id = await self._validate_approver(data.approver_id)

        record = data.model_dump(by_alias=True)
        record.update({
            "employeeId": employee_id,
            "approverId": approver_id,
            "status": RequestStatus.PENDING,
            "phase": int(RequestPhase.TRAVEL_DETAILS),
            "totalAmount": Decimal("0"),
        })
        if self.kind == RequestKind.VALLEY:
            record["requestType"] = RequestType.IN_VALLEY
            record["travelDateFrom"] = data.expense_date
            record["travelDateTo"] = data.expense_date

        try:
            request = await self.gateway.create(self.session, self.config.to_row(record))
        except HTTPException:
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error creating {self.label}: {str(e)}")
            raise PersistenceError(f"Failed to create {self.label}")

        result = self.config.from_row(request)
        log_user_action(employee_id, "create", self.label, result["id"])

        await self.notifications.notify_user(
            employee_id, result["id"],
            f"Your {self.label} has been submitted and is awaiting approval"
        )
        approver_message = f"New {self.label} from {result['employeeName']} requires your approval"
        if approver_id:
            await self.notifications.notify_user(approver_id, result["id"], approver_message)
        else:
            await self.notifications.notify_role(UserRole.APPROVER, result["id"], approver_message)

        return result

    async def _validate_approver(self, approver_id: Optional[str]) -> Optional[str]:
        if not approver_id:
            return None
        try:
            approver = await crud.user.get(self.session, approver_id)
        except NotFoundError:
            raise ValidationError("Selected approver does not exist")
        if UserRole(approver.role) not in (UserRole.APPROVER, UserRole.ADMIN):
            raise ValidationError("Selected user is not an approver")
        return approver.id

    async def submit_expenses(
        self, request_id: str, submission: ExpenseSubmission, current_user: User
    ) -> Dict[str, Any]:
        """Owner submits expenses: the request moves to phase 2 awaiting verification"""
        actor_id = current_user.id
        request = await self.gateway.get(self.session, request_id)
        ensure_owner(request, current_user)
        self.expenses.ensure_accepts_expenses(request)
        previous_status = request.status
        accepting = expense_submission_states(self.kind, settings.ENFORCE_EXPENSE_SUBMISSION_GATE)

        try:
            if submission.expenses:
                await self.expenses.create_items(request_id, submission.expenses, commit=False)

            total_amount = await self.expenses.items_total(request_id)
            if total_amount is None:
                total_amount = Decimal(str(submission.total_amount or 0))

            request = await self.gateway.update_with_expenses(
                self.session,
                request_id,
                total_amount=total_amount,
                previous_outstanding_advance=submission.previous_outstanding_advance,
                from_statuses=accepting,
            )
        except HTTPException:
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error submitting expenses for {self.label} {request_id}: {str(e)}")
            raise PersistenceError("Failed to submit expenses")

        result = self.config.from_row(request)
        log_user_action(
            actor_id, f"{previous_status.value}->{RequestStatus.PENDING_VERIFICATION.value}", self.label, request_id
        )

        await self.notifications.notify_role(
            UserRole.CHECKER, request_id,
            f"{result['employeeName']} submitted expenses of {total_amount} for a {self.label}; verification needed"
        )
        await self.notifications.notify_user(
            result["employeeId"], request_id,
            f"Your expenses for the {self.label} have been submitted for verification"
        )
        return result

    # endregion

    # region ========== Decisions ==========

    async def update_status(
        self, request_id: str, data: StatusUpdateRequest, current_user: User
    ) -> Dict[str, Any]:
        """Apply an approver or checker decision derived from the caller's own role"""
        actor_id = current_user.id
        actor_role = UserRole(current_user.role)
        if data.role and data.role != actor_role.value:
            logger.warning(
                f"Ignoring client-supplied role '{data.role}' from user {actor_id} ({actor_role.value})"
            )

        request = await self.gateway.get(self.session, request_id)
        transition = resolve_transition(actor_role, request.status, data.status)

        changes: Dict[str, Any] = {}
        if data.comments is not None:
            changes[COMMENT_FIELDS[transition.actor]] = data.comments
        if transition.stamps_travel_approval:
            changes["travel_details_approved_at"] = datetime.now(timezone.utc)

        try:
            if transition.allocates_budget:
                changes.update(await self._allocate_budget(request, data))

            request = await self.gateway.update_status(
                self.session, request_id, transition.target, (transition.source,), changes
            )
        except HTTPException:
            await self.session.rollback()
            if "budget_deducted_amount" in changes:
                logger.warning(
                    f"Budget charge of {changes['budget_deducted_amount']} for {self.label} {request_id} rolled back"
                )
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error updating {self.label} {request_id}: {str(e)}")
            raise PersistenceError(f"Failed to update {self.label}")

        result = self.config.from_row(request)
        log_user_action(actor_id, f"{transition.source.value}->{transition.target.value}", self.label, request_id)

        await self._notify_decision(transition, result)
        return result

    async def _allocate_budget(self, request, data: StatusUpdateRequest) -> Dict[str, Any]:
        """Charge the request to the selected project's budget inside the caller's transaction"""
        if not data.project_id:
            raise ValidationError("Select a project to charge before approving expenses")

        expense_amount = Decimal(str(request.total_amount or 0))
        if data.include_outstanding_balance:
            expense_amount += Decimal(str(request.previous_outstanding_advance or 0))

        deduction = await BudgetService(self.session).deduct(
            data.project_id, expense_amount, fiscal_year=data.fiscal_year, commit=False
        )
        return {
            "project_id": deduction.project_id,
            "budget_deducted_amount": deduction.deducted_amount,
        }

    async def _notify_decision(self, transition: Transition, result: Dict[str, Any]) -> None:
        request_id = result["id"]
        employee_id = result["employeeId"]

        if transition.target == RequestStatus.TRAVEL_APPROVED:
            # Checkers hear about it once expenses are in
            await self.notifications.notify_user(
                employee_id, request_id,
                f"Your {self.label} has been approved. You can now submit your expenses"
            )
        elif transition.target == RequestStatus.REJECTED:
            await self.notifications.notify_user(employee_id, request_id, f"Your {self.label} has been rejected")
        elif transition.target == RequestStatus.APPROVED:
            await self.notifications.notify_user(
                employee_id, request_id, f"Your {self.label} expenses have been approved by finance"
            )
        elif transition.target == RequestStatus.REJECTED_BY_CHECKER:
            await self.notifications.notify_user(
                employee_id, request_id, f"Your {self.label} expenses have been rejected by finance"
            )

    async def add_finance_comment(self, request_id: str, comment: str, current_user: User) -> Dict[str, Any]:
        actor_id = current_user.id
        request = await self.gateway.get(self.session, request_id)
        request = await self.gateway.update(self.session, request, {"finance_comments": comment})

        result = self.config.from_row(request)
        log_user_action(actor_id, "finance_comment", self.label, request_id)

        limit = settings.NOTIFICATION_PREVIEW_LENGTH
        preview = comment if len(comment) <= limit else f"{comment[:limit]}..."
        await self.notifications.notify_user(
            result["employeeId"], request_id, f"Finance commented on your {self.label}: {preview}"
        )
        return result

    # endregion

    async def delete_request(self, request_id: str, current_user: User) -> None:
        """Remove a request with its expense items, receipts and notifications"""
        actor_id = current_user.id
        await self.gateway.get(self.session, request_id)

        items = await crud.expense_item.get_by_request_id(self.session, request_id)
        receipts = await crud.receipt.get_by_expense_item_ids(self.session, [i.id for i in items])
        stored_paths = [r.storage_path for r in receipts if r.storage_path]

        try:
            await crud.expense_item.delete_by_request_id(self.session, request_id, commit=False)
            await crud.notification.delete_by_request_id(self.session, request_id, commit=False)
            await self.gateway.delete(self.session, request_id)
        except HTTPException:
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error deleting {self.label} {request_id}: {str(e)}")
            raise PersistenceError(f"Failed to delete {self.label}")

        storage = ReceiptStorage()
        for path in stored_paths:
            storage.delete_file(path)

        log_user_action(actor_id, "delete", self.label, request_id)
