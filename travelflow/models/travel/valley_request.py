from sqlalchemy import Column, String, Text, Date
from travelflow.models.travel.reimbursement_base import ReimbursementRequestBase

class ValleyRequest(ReimbursementRequestBase):
    """Same-city reimbursement with a single expense date"""
    __tablename__ = "valley_requests"

    expense_date = Column(Date)
    # Mirrors of expense_date kept for dashboards that sort by travel dates
    travel_date_from = Column(Date)
    travel_date_to = Column(Date)

    description = Column(Text)
    payment_method = Column(String(50))
    payment_method_other = Column(String(255))
    meeting_type = Column(String(50))
    meeting_type_other = Column(String(255))
    meeting_participants = Column(String(50))
    meeting_participants_other = Column(String(255))

    def __repr__(self):
        return f"<ValleyRequest {self.id} {self.status}>"
