# travelflow/crud/base.py
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Generic, List, Sequence, Type, TypeVar

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.core.exceptions import NotFoundError, PersistenceError
from travelflow.models.base import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """
    Async data access for one model.

    Lookups return the record or raise NotFoundError. Any database error is
    rolled back, logged and raised as PersistenceError.
    """

    def __init__(self, model: Type[ModelType], label: str):
        self.model = model
        self.label = label

    @asynccontextmanager
    async def guard(self, db: AsyncSession, operation: str):
        try:
            yield
        except HTTPException:
            raise
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Failed to {operation} {self.label}: {str(e)}")
            raise PersistenceError(f"Failed to {operation} {self.label}")

    async def get(self, db: AsyncSession, id: str) -> ModelType:
        async with self.guard(db, "load"):
            obj = await db.get(self.model, id)
        if obj is None:
            raise NotFoundError(f"{self.label.capitalize()} not found")
        return obj

    async def get_all(self, db: AsyncSession) -> List[ModelType]:
        async with self.guard(db, "list"):
            result = await db.execute(
                select(self.model).order_by(self.model.created_at.desc())
            )
            return list(result.scalars().all())

    async def get_by_ids(self, db: AsyncSession, ids: Sequence[str]) -> List[ModelType]:
        if not ids:
            return []
        async with self.guard(db, "list"):
            result = await db.execute(select(self.model).where(self.model.id.in_(list(ids))))
            return list(result.scalars().all())

    async def create(self, db: AsyncSession, obj_in: Dict[str, Any], commit: bool = True) -> ModelType:
        async with self.guard(db, "create"):
            db_obj = self.model(**obj_in)
            db.add(db_obj)
            if commit:
                await db.commit()
                await db.refresh(db_obj)
            else:
                await db.flush()
            return db_obj

    async def update(
        self, db: AsyncSession, db_obj: ModelType, obj_in: Dict[str, Any], commit: bool = True
    ) -> ModelType:
        async with self.guard(db, "update"):
            for field, value in obj_in.items():
                setattr(db_obj, field, value)
            if commit:
                await db.commit()
                await db.refresh(db_obj)
            else:
                await db.flush()
            return db_obj

    async def remove(self, db: AsyncSession, id: str, commit: bool = True) -> ModelType:
        obj = await self.get(db, id)
        async with self.guard(db, "delete"):
            await db.delete(obj)
            if commit:
                await db.commit()
            else:
                await db.flush()
            return obj
