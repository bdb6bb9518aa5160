"""Vigil Maintenance — Base Service Interface.

Implements the Service Repository pattern to decouple business logic
from API routes. CRUD services inherit from this base class.

Features:
    - Generic read/create operations
    - Automatic logging with context
    - Database failures surfaced as StoreError
    - Type-safe session management

Usage:
    class EquipmentService(BaseService[Equipment, EquipmentCreate]):
        def __init__(self, db: AsyncSession):
            super().__init__(Equipment, db)
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ResourceNotFound, StoreError
from logger import get_logger

# Generics for strong typing
ModelType = TypeVar("ModelType")
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)

logger = get_logger(__name__)


class BaseService(Generic[ModelType, CreateSchemaType]):
    """Base class for record-store services.

    Provides standard read/create operations and session management.
    API routes should use these services instead of raw DB usage.
    """

    def __init__(self, model: type[ModelType], db: AsyncSession):
        """Initialize service with model class and database session.

        Args:
            model: The SQLAlchemy model class.
            db: The async database session.
        """
        self.model = model
        self.db = db
        self.logger = logger.bind(service=self.__class__.__name__)

    async def get(self, id: Any) -> ModelType | None:
        """Get a single record by primary key."""
        try:
            result = await self.db.execute(
                select(self.model).where(self.model.id == id)
            )
        except SQLAlchemyError as e:
            raise StoreError(f"get {self.model.__name__}", str(e)) from e
        return result.scalar_one_or_none()

    async def get_multi(
        self,
        *,
        skip: int = 0,
        limit: int = 100
    ) -> list[ModelType]:
        """Get multiple records with pagination."""
        order_column = getattr(self.model, "created_at", self.model.id)
        try:
            result = await self.db.execute(
                select(self.model)
                .order_by(order_column)
                .offset(skip)
                .limit(limit)
            )
        except SQLAlchemyError as e:
            raise StoreError(f"list {self.model.__name__}", str(e)) from e
        return list(result.scalars().all())

    async def get_or_404(self, id: Any) -> ModelType:
        """Get record or raise ResourceNotFound."""
        obj = await self.get(id)
        if obj is None:
            raise ResourceNotFound(self.model.__name__, id)
        return obj

    async def create(self, obj_in: CreateSchemaType | dict[str, Any]) -> ModelType:
        """Create and commit a new record."""
        if isinstance(obj_in, dict):
            obj_in_data = obj_in
        else:
            obj_in_data = obj_in.model_dump(exclude_none=True)

        db_obj = self.model(**obj_in_data)  # type: ignore

        self.db.add(db_obj)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            self.logger.warning(
                "Create failed",
                error=str(e),
                model=self.model.__name__,
            )
            raise StoreError(f"create {self.model.__name__}", str(e)) from e

        self.logger.info(
            "Created new record",
            id=str(getattr(db_obj, "id", None)),
            model=self.model.__name__
        )
        return db_obj
