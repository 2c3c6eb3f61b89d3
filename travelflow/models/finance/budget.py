from sqlalchemy import Column, String, Text, Numeric, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from travelflow.db.base import BaseModel

class Budget(BaseModel):
    __tablename__ = "budgets"
    __table_args__ = (UniqueConstraint("project_id", "fiscal_year", name="uq_budget_project_year"),)

    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(14, 2), nullable=False, default=0)
    fiscal_year = Column(Integer, nullable=False)
    description = Column(Text)
    # Bumped on every amount change; writers compare it before updating
    version = Column(Integer, nullable=False, default=1)

    project = relationship("Project", back_populates="budgets")
