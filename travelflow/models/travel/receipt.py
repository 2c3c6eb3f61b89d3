from sqlalchemy import Column, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from travelflow.db.base import BaseModel, utcnow

class Receipt(BaseModel):
    __tablename__ = "receipts"

    expense_item_id = Column(
        String(36), ForeignKey("expense_items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    original_filename = Column(String(255), nullable=False)
    stored_filename = Column(String(255), nullable=False)
    file_type = Column(String(100))
    storage_path = Column(String(500))
    public_url = Column(String(500))
    upload_date = Column(DateTime(timezone=True), default=utcnow)

    expense_item = relationship("ExpenseItem", back_populates="receipts")
