from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.core.exceptions import ValidationError
from travelflow.models.shared.enums import RequestKind, RequestStatus, RequestType
from travelflow.schemas.common.pagination import PaginatedResponse
from travelflow.schemas.report.listing_schema import AdminRequestRow
from travelflow.services.workflow.request_kinds import REQUEST_KINDS


# Public sort keys and the record field each one reads
SORT_FIELDS = {
    "createdAt": "createdAt",
    "updatedAt": "updatedAt",
    "employeeName": "employeeName",
    "department": "department",
    "totalAmount": "totalAmount",
    "status": "status",
    "travelDateFrom": "travelDateFrom",
}

class RequestListingService:
    """Combined travel and in-valley listing for the admin console"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_requests(
        self,
        status: Optional[RequestStatus] = None,
        request_type: Optional[RequestType] = None,
        kind: Optional[RequestKind] = None,
        department: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
        page_index: int = 1,
        page_size: int = 10,
    ) -> PaginatedResponse[AdminRequestRow]:
        if sort_by not in SORT_FIELDS:
            raise ValidationError(f"Cannot sort by '{sort_by}'. Allowed: {', '.join(SORT_FIELDS)}")
        if sort_order not in ("asc", "desc"):
            raise ValidationError("sortOrder must be 'asc' or 'desc'")

        rows: List[Dict[str, Any]] = []
        for request_kind, config in REQUEST_KINDS.items():
            if kind and kind != request_kind:
                continue
            # In-valley requests only ever carry the in-valley type
            if request_type and (request_type == RequestType.IN_VALLEY) != (request_kind == RequestKind.VALLEY):
                continue

            requests = await config.gateway.search(
                self.session,
                statuses=[status] if status else None,
                request_type=request_type,
                department=department,
                text=search,
            )
            for request in requests:
                record = config.from_row(request)
                record["kind"] = request_kind
                rows.append(record)

        field = SORT_FIELDS[sort_by]
        # Missing values sort last in either direction
        present = [r for r in rows if r.get(field) not in (None, "")]
        missing = [r for r in rows if r.get(field) in (None, "")]
        present.sort(key=lambda r: r[field], reverse=sort_order == "desc")
        ordered = present + missing

        start = (page_index - 1) * page_size
        page = ordered[start:start + page_size]

        return PaginatedResponse[AdminRequestRow](
            page_index=page_index,
            page_size=page_size,
            count=len(ordered),
            data=[AdminRequestRow.model_validate(r) for r in page],
        )
