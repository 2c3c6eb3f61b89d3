from typing import Optional
from datetime import date, datetime

from travelflow.models.shared.enums import RequestKind, RequestStatus, RequestType
from travelflow.schemas.common.base import Amount, CamelModel

class AdminRequestRow(CamelModel):
    """One row of the combined travel and in-valley listing"""
    id: str
    kind: RequestKind
    employee_id: str
    employee_name: str
    department: str
    request_type: RequestType
    project: str
    purpose: str
    travel_date_from: Optional[date] = None
    travel_date_to: Optional[date] = None
    total_amount: Amount
    status: RequestStatus
    phase: int
    created_at: datetime
    updated_at: datetime
