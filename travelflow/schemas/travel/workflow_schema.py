from typing import Optional
from pydantic import Field

from travelflow.models.shared.enums import Decision
from travelflow.schemas.common.base import CamelModel

class StatusUpdateRequest(CamelModel):
    """
    Approver/checker decision on a request.

    The actor's authority comes from the session. A `role` sent by older
    clients is accepted and ignored.
    """
    status: Decision
    comments: Optional[str] = None
    role: Optional[str] = None
    project_id: Optional[str] = None
    fiscal_year: Optional[int] = None
    include_outstanding_balance: bool = False

class FinanceCommentRequest(CamelModel):
    comment: str = Field(..., min_length=1)
