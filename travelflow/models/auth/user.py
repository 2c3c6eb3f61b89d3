from sqlalchemy import Column, String, Boolean, Enum as SQLEnum
from travelflow.db.base import BaseModel
from travelflow.models.shared.enums import UserRole, enum_values

class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(
        SQLEnum(UserRole, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=UserRole.EMPLOYEE,
        index=True,
    )
    department = Column(String(255), nullable=True)
    designation = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
