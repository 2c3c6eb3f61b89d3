from typing import List, Optional
from datetime import date, datetime
from pydantic import Field, model_validator

from travelflow.models.shared.enums import RequestStatus, RequestType
from travelflow.schemas.common.base import Amount, CamelModel
from travelflow.schemas.travel.expense_schema import ExpenseItemResponse
from travelflow.schemas.travel.travel_request_schema import EmployeeInfoMixin

class ValleyRequestCreate(EmployeeInfoMixin):
    project: str = Field(..., min_length=1)
    project_other: Optional[str] = None
    purpose: str = Field(..., min_length=1)
    purpose_other: Optional[str] = None
    expense_date: date
    location: str = Field(..., min_length=1)
    location_other: Optional[str] = None
    description: str = Field(..., min_length=1)
    payment_method: str = Field(..., min_length=1)
    payment_method_other: Optional[str] = None
    meeting_type: Optional[str] = None
    meeting_type_other: Optional[str] = None
    meeting_participants: Optional[str] = None
    meeting_participants_other: Optional[str] = None
    previous_outstanding_advance: Amount = Field(default=0, ge=0)
    approver_id: Optional[str] = None

    @model_validator(mode="after")
    def validate_other_fields(self):
        if self.project == "other" and not self.project_other:
            raise ValueError('Please specify the other project')
        if self.purpose == "other" and not self.purpose_other:
            raise ValueError('Please specify the other purpose')
        if self.payment_method == "other" and not self.payment_method_other:
            raise ValueError('Please specify the other payment method')
        if self.purpose == "meeting" and not self.meeting_type:
            raise ValueError('Meeting type is required for meeting expenses')
        return self

class ValleyRequestResponse(CamelModel):
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
    expense_date: Optional[date] = None
    travel_date_from: Optional[date] = None
    travel_date_to: Optional[date] = None
    description: str
    payment_method: str
    payment_method_other: str
    meeting_type: str
    meeting_type_other: str
    meeting_participants: str
    meeting_participants_other: str
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
    created_at: datetime
    updated_at: datetime
    travel_details_approved_at: Optional[datetime] = None
    expenses_submitted_at: Optional[datetime] = None

class ValleyRequestDetail(ValleyRequestResponse):
    expenses: List[ExpenseItemResponse] = []
