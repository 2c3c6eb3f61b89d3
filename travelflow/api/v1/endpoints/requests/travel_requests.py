from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.api.dependencies import get_current_user, require_admin, require_roles
from travelflow.core.database import get_async_session
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import RequestKind, RequestStatus, UserRole
from travelflow.schemas.common.message import MessageResponse
from travelflow.schemas.travel.expense_schema import ExpenseSubmission
from travelflow.schemas.travel.travel_request_schema import (
    TravelRequestCreate, TravelRequestDetail, TravelRequestResponse
)
from travelflow.schemas.travel.workflow_schema import FinanceCommentRequest, StatusUpdateRequest
from travelflow.services.workflow.workflow_service import RequestWorkflowService

router = APIRouter()

def get_service(session: AsyncSession) -> RequestWorkflowService:
    return RequestWorkflowService(session, RequestKind.TRAVEL)

@router.get("", response_model=List[TravelRequestResponse])
async def list_travel_requests(
    employee_id: Optional[str] = Query(None, alias="employeeId"),
    request_status: Optional[RequestStatus] = Query(None, alias="status"),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Employees see their own requests; approvers, checkers and admins see all"""
    return await get_service(session).list_requests(
        current_user,
        employee_id=employee_id,
        statuses=[request_status] if request_status else None,
    )

@router.post("", response_model=TravelRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_travel_request(
    data: TravelRequestCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    return await get_service(session).create_request(data, current_user)

@router.get("/{request_id}", response_model=TravelRequestDetail)
async def get_travel_request(
    request_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Get a travel request with its expenses and receipts"""
    return await get_service(session).get_request(request_id, current_user)

@router.patch("/{request_id}", response_model=TravelRequestResponse)
async def update_travel_request_status(
    data: StatusUpdateRequest,
    request_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Approve or reject a travel request as its current approver or checker"""
    return await get_service(session).update_status(request_id, data, current_user)

@router.delete("/{request_id}", response_model=MessageResponse)
async def delete_travel_request(
    request_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    await get_service(session).delete_request(request_id, current_user)
    return MessageResponse(message="Travel request deleted successfully")

@router.patch("/{request_id}/expenses", response_model=TravelRequestResponse)
async def submit_travel_expenses(
    submission: ExpenseSubmission,
    request_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """Submit expenses for an approved travel request"""
    return await get_service(session).submit_expenses(request_id, submission, current_user)

@router.post("/{request_id}/finance-comment", response_model=TravelRequestResponse)
async def add_travel_finance_comment(
    data: FinanceCommentRequest,
    request_id: str = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_roles(UserRole.CHECKER))
):
    return await get_service(session).add_finance_comment(request_id, data.comment, current_user)
