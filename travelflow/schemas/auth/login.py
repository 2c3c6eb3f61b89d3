from pydantic import EmailStr

from travelflow.schemas.auth.user import UserResponse
from travelflow.schemas.common.base import CamelModel

class LoginRequest(CamelModel):
    email: EmailStr
    password: str

class LoginResponse(CamelModel):
    user: UserResponse
    access_token: str
    token_type: str = "bearer"
    expires_in: int
