from typing import Optional
from datetime import datetime

from travelflow.schemas.common.base import CamelModel

class NotificationResponse(CamelModel):
    id: str
    user_id: str
    request_id: Optional[str] = None
    message: str
    read: bool
    created_at: datetime
