from typing import Optional
from datetime import datetime
from pydantic import Field

from travelflow.schemas.common.base import CamelModel

class ProjectCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    active: bool = True

class ProjectUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    active: Optional[bool] = None

class ProjectResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
