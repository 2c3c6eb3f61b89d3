import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, String
from travelflow.models.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Base):
    """Base model with common fields"""
    __abstract__ = True

    id = Column(String(36), primary_key=True, index=True, default=generate_uuid)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
