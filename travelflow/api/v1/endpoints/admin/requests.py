from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.api.dependencies import require_admin
from travelflow.core.database import get_async_session
from travelflow.models.auth.user import User
from travelflow.models.shared.enums import RequestKind, RequestStatus, RequestType
from travelflow.schemas.common.pagination import PaginatedResponse
from travelflow.schemas.report.listing_schema import AdminRequestRow
from travelflow.services.reporting.listing_service import RequestListingService

router = APIRouter()

@router.get("", response_model=PaginatedResponse[AdminRequestRow])
async def list_all_requests(
    request_status: Optional[RequestStatus] = Query(None, alias="status"),
    request_type: Optional[RequestType] = Query(None, alias="requestType"),
    kind: Optional[RequestKind] = Query(None),
    department: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    page_index: int = Query(1, ge=1, alias="pageIndex"),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    """Travel and in-valley requests in one filtered, sorted and paginated list"""
    return await RequestListingService(session).list_requests(
        status=request_status,
        request_type=request_type,
        kind=kind,
        department=department,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page_index=page_index,
        page_size=page_size,
    )
