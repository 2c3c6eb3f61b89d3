from typing import List, Optional
from datetime import datetime
from pydantic import EmailStr, validator

from travelflow.models.shared.enums import UserRole
from travelflow.schemas.common.base import CamelModel

class UserBase(CamelModel):
    email: EmailStr
    name: str
    role: UserRole = UserRole.EMPLOYEE
    department: Optional[str] = None
    designation: Optional[str] = None

    @validator('name')
    def name_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('Name is required')
        return v.strip()

class UserCreate(UserBase):
    password: str

    @validator('password')
    def validate_password(cls, v):
        if len(v) < 6:
            raise ValueError('Password must be at least 6 characters')
        return v

class UserUpdate(CamelModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    role: Optional[UserRole] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    password: Optional[str] = None
    is_active: Optional[bool] = None

    @validator('password')
    def validate_password(cls, v):
        if v is not None and len(v) < 6:
            raise ValueError('Password must be at least 6 characters')
        return v

class UserNameUpdate(CamelModel):
    name: str

    @validator('name')
    def name_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('Name is required')
        return v.strip()

class UserResponse(CamelModel):
    id: str
    email: str
    name: str
    role: UserRole
    department: Optional[str] = None
    designation: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

class UserSummary(CamelModel):
    """Directory entry used by pickers"""
    id: str
    name: str
    email: str
    department: Optional[str] = None
    designation: Optional[str] = None

class UserIdsRequest(CamelModel):
    user_ids: List[str]
