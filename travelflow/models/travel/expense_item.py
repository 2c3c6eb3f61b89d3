from sqlalchemy import Column, String, Text, Numeric, Enum as SQLEnum
from sqlalchemy.orm import relationship
from travelflow.db.base import BaseModel
from travelflow.models.shared.enums import ExpenseCategory, RequestKind, enum_values

class ExpenseItem(BaseModel):
    __tablename__ = "expense_items"

    # Points at travel_requests or valley_requests depending on request_kind
    request_id = Column(String(36), nullable=False, index=True)
    request_kind = Column(
        SQLEnum(RequestKind, values_callable=enum_values, native_enum=False, length=10),
        nullable=False,
        default=RequestKind.TRAVEL,
    )
    category = Column(
        SQLEnum(ExpenseCategory, values_callable=enum_values, native_enum=False, length=30),
        nullable=False,
    )
    amount = Column(Numeric(14, 2), nullable=False, default=0)
    description = Column(Text)

    receipts = relationship("Receipt", back_populates="expense_item", cascade="all, delete-orphan")
