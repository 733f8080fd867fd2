"""
Base CRUD operations for SQLAlchemy models.

Provides generic Create, Read, Update, Delete operations plus pagination
and uniqueness helpers that model-specific CRUD classes inherit.

Dependencies: sqlalchemy, uuid
System role: Foundation for all database CRUD operations
"""

import math
from typing import Any, Generic, TypeVar, Sequence
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show `total` rows `limit` at a time."""
    return math.ceil(total / limit) if limit else 0


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Provides standard database operations that work with any SQLAlchemy model.
    Subclasses specify the model class and add model-specific queries.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record in the database.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(
        self,
        session: AsyncSession,
        id: UUID,
        refresh: bool = False,
    ) -> ModelT | None:
        """
        Retrieve a single record by primary key.

        Args:
            session: Async database session
            id: UUID primary key
            refresh: Overwrite an already loaded identity with fresh
                column values and relationships

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_one_by(self, session: AsyncSession, **filters: Any) -> ModelT | None:
        """
        Retrieve the first record matching equality filters.

        Args:
            session: Async database session
            **filters: Column name to value equality filters

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).filter_by(**filters).limit(1)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def exists_by(
        self,
        session: AsyncSession,
        exclude_id: UUID | None = None,
        **filters: Any,
    ) -> bool:
        """
        Check whether any record matches equality filters.

        Args:
            session: Async database session
            exclude_id: Primary key to ignore (the row being updated)
            **filters: Column name to value equality filters

        Returns:
            True if a matching record exists, False otherwise
        """
        stmt = select(self.model.id).filter_by(**filters)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        result = await session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def update_instance(
        self,
        session: AsyncSession,
        instance: ModelT,
        **kwargs,
    ) -> ModelT:
        """
        Apply field values to a loaded instance and flush.

        Args:
            session: Async database session
            instance: Persistent model instance
            **kwargs: Fields to update with new values

        Returns:
            The same instance after flush
        """
        for field, value in kwargs.items():
            setattr(instance, field, value)
        await session.flush()
        return instance

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a record by primary key.

        Args:
            session: Async database session
            id: UUID primary key

        Returns:
            True if record was deleted, False if not found
        """
        stmt = delete(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: UUID) -> bool:
        """
        Check if a record exists by primary key.

        Args:
            session: Async database session
            id: UUID primary key

        Returns:
            True if record exists, False otherwise
        """
        stmt = select(self.model.id).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def count(self, session: AsyncSession, stmt: Select) -> int:
        """
        Count the rows a select statement would return.

        Args:
            session: Async database session
            stmt: Select statement (ordering is ignored)

        Returns:
            Row count
        """
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        result = await session.execute(count_stmt)
        return result.scalar_one()

    async def paginate(
        self,
        session: AsyncSession,
        stmt: Select,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[Sequence[ModelT], int]:
        """
        Execute a select statement one page at a time.

        Args:
            session: Async database session
            stmt: Filtered and ordered select statement
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (rows on the page, total matching rows)
        """
        total = await self.count(session, stmt)
        page_stmt = stmt.offset((page - 1) * limit).limit(limit)
        result = await session.execute(page_stmt)
        return result.scalars().all(), total
