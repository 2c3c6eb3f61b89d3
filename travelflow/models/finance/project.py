from sqlalchemy import Column, String, Text, Boolean
from sqlalchemy.orm import relationship
from travelflow.db.base import BaseModel

class Project(BaseModel):
    __tablename__ = "projects"

    name = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text)
    active = Column(Boolean, default=True, nullable=False)

    budgets = relationship("Budget", back_populates="project", cascade="all, delete-orphan")
