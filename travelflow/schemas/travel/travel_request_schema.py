from typing import List, Optional
from datetime import date, datetime
from pydantic import Field, validator, model_validator

from travelflow.models.shared.enums import RequestStatus, RequestType, TransportMode
from travelflow.schemas.common.base import Amount, CamelModel
from travelflow.schemas.travel.expense_schema import ExpenseItemResponse

class EmployeeInfoMixin(CamelModel):
    employee_name: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    designation: str = Field(..., min_length=1)

class TravelRequestCreate(EmployeeInfoMixin):
    request_type: RequestType = RequestType.NORMAL
    project: str = Field(..., min_length=1)
    project_other: Optional[str] = None
    purpose: str = Field(..., min_length=1)
    purpose_other: Optional[str] = None
    location: Optional[str] = None
    location_other: Optional[str] = None
    travel_date_from: date
    travel_date_to: date

    transport_mode: Optional[TransportMode] = None
    station_pick_drop: Optional[str] = None
    local_conveyance: Optional[str] = None
    ride_share_used: bool = False
    own_vehicle_reimbursement: bool = False

    previous_outstanding_advance: Amount = Field(default=0, ge=0)
    approver_id: Optional[str] = None

    emergency_reason: Optional[str] = None
    emergency_reason_other: Optional[str] = None
    emergency_justification: Optional[str] = None
    emergency_amount: Optional[Amount] = Field(default=None, ge=0)

    estimated_amount: Optional[Amount] = Field(default=None, ge=0)
    advance_notes: Optional[str] = None

    is_group_travel: bool = False
    is_group_captain: bool = False
    group_size: Optional[int] = None
    group_members: List[str] = []
    group_description: Optional[str] = None

    @validator('request_type')
    def not_in_valley(cls, v):
        if v == RequestType.IN_VALLEY:
            raise ValueError('In-valley requests are submitted through /valley-requests')
        return v

    @validator('travel_date_to')
    def validate_date_range(cls, v, values):
        start = values.get('travel_date_from')
        if start and v < start:
            raise ValueError('Return date cannot be before departure date')
        return v

    @model_validator(mode="after")
    def validate_type_specific_fields(self):
        if self.project == "other" and not self.project_other:
            raise ValueError('Please specify the other project')
        if self.purpose == "other" and not self.purpose_other:
            raise ValueError('Please specify the other purpose')
        if self.location == "other" and not self.location_other:
            raise ValueError('Please specify the other location')
        if self.request_type == RequestType.EMERGENCY and not self.emergency_reason:
            raise ValueError('Emergency reason is required for emergency requests')
        if self.request_type == RequestType.GROUP or self.is_group_travel:
            if not self.group_size or self.group_size < 2:
                raise ValueError('Group travel requires a group size of at least 2')
            if not self.group_members:
                raise ValueError('Group travel requires at least one group member')
        return self

class TravelRequestResponse(CamelModel):
    id: str
    employee_id: str
    employee_name: str
    department: str
    designation: str
    request_type: RequestType
    project: str
    project_other: str
    purpose: str
    purpose_other: str
    location: str
    location_other: str
    travel_date_from: Optional[date] = None
    travel_date_to: Optional[date] = None
    transport_mode: str
    station_pick_drop: str
    local_conveyance: str
    ride_share_used: bool
    own_vehicle_reimbursement: bool
    total_amount: Amount
    previous_outstanding_advance: Amount
    status: RequestStatus
    phase: int
    approver_id: str
    approver_comments: str
    checker_comments: str
    finance_comments: str
    project_id: str
    budget_deducted_amount: Amount
    emergency_reason: str
    emergency_reason_other: str
    emergency_justification: str
    emergency_amount: Amount
    estimated_amount: Amount
    advance_notes: str
    is_group_travel: bool
    is_group_captain: bool
    group_size: int
    group_members: List[str]
    group_description: str
    created_at: datetime
    updated_at: datetime
    travel_details_approved_at: Optional[datetime] = None
    expenses_submitted_at: Optional[datetime] = None

class TravelRequestDetail(TravelRequestResponse):
    expenses: List[ExpenseItemResponse] = []
