from sqlalchemy import Column, String, Text, Integer, Numeric, Boolean, Date
from travelflow.models.travel.reimbursement_base import ReimbursementRequestBase

class TravelRequest(ReimbursementRequestBase):
    __tablename__ = "travel_requests"

    travel_date_from = Column(Date)
    travel_date_to = Column(Date)

    # Transport logistics
    transport_mode = Column(String(30))
    station_pick_drop = Column(String(255))
    local_conveyance = Column(String(255))
    ride_share_used = Column(Boolean, default=False)
    own_vehicle_reimbursement = Column(Boolean, default=False)

    # Emergency requests
    emergency_reason = Column(String(255))
    emergency_reason_other = Column(String(255))
    emergency_justification = Column(Text)
    emergency_amount = Column(Numeric(14, 2))

    # Advance requests
    estimated_amount = Column(Numeric(14, 2))
    advance_notes = Column(Text)

    # Group travel
    is_group_travel = Column(Boolean, default=False)
    is_group_captain = Column(Boolean, default=False)
    group_size = Column(Integer)
    group_members = Column(Text)  # JSON encoded list of user ids
    group_description = Column(Text)

    def __repr__(self):
        return f"<TravelRequest {self.id} {self.status}>"
