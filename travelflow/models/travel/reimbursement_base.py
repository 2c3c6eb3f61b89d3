from sqlalchemy import Column, String, Text, Integer, Numeric, DateTime, Enum as SQLEnum
from travelflow.db.base import BaseModel
from travelflow.models.shared.enums import RequestStatus, RequestType, RequestPhase, enum_values


class ReimbursementRequestBase(BaseModel):
    """Columns shared by travel and in-valley requests"""
    __abstract__ = True

    employee_id = Column(String(36), nullable=False, index=True)
    employee_name = Column(String(255), nullable=False)
    department = Column(String(255))
    designation = Column(String(255))
    request_type = Column(
        SQLEnum(RequestType, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=RequestType.NORMAL,
    )
    project = Column(String(255))
    project_other = Column(String(255))
    purpose = Column(Text)
    purpose_other = Column(String(255))
    location = Column(String(255))
    location_other = Column(String(255))

    total_amount = Column(Numeric(14, 2), nullable=False, default=0)
    previous_outstanding_advance = Column(Numeric(14, 2), nullable=False, default=0)

    status = Column(
        SQLEnum(RequestStatus, values_callable=enum_values, native_enum=False, length=30),
        nullable=False,
        default=RequestStatus.PENDING,
        index=True,
    )
    phase = Column(Integer, nullable=False, default=int(RequestPhase.TRAVEL_DETAILS))

    approver_id = Column(String(36), index=True)
    approver_comments = Column(Text)
    checker_comments = Column(Text)
    finance_comments = Column(Text)

    travel_details_approved_at = Column(DateTime(timezone=True))
    expenses_submitted_at = Column(DateTime(timezone=True))

    # Set when a checker approval charges a project budget
    project_id = Column(String(36), index=True)
    budget_deducted_amount = Column(Numeric(14, 2))
