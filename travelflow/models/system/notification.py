from sqlalchemy import Column, String, Text, Boolean
from travelflow.db.base import BaseModel

class Notification(BaseModel):
    __tablename__ = "notifications"

    user_id = Column(String(36), nullable=False, index=True)
    request_id = Column(String(36), index=True)
    message = Column(Text, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
