"""
Base repository with common operations.

Provides generic database operations that can be inherited by specific repositories.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import Column, Table, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseRepository(ABC, Generic[ModelT]):
    """
    Base repository with common read/insert operations.

    Subclasses must implement:
    - table property: Return the SQLAlchemy Table
    - _row_to_model: Convert database row to Pydantic model
    - _model_to_dict: Convert Pydantic model to database dict
    """

    def __init__(self, session: Session):
        self.session = session

    @property
    @abstractmethod
    def table(self) -> Table:
        """SQLAlchemy table for this repository."""
        pass

    @abstractmethod
    def _row_to_model(self, row: Any) -> ModelT:
        """Convert database row to Pydantic model."""
        pass

    @abstractmethod
    def _model_to_dict(self, model: ModelT) -> dict:
        """Convert Pydantic model to database dict."""
        pass

    @property
    def primary_key(self) -> Column:
        return list(self.table.primary_key.columns)[0]

    def get(self, key: Any) -> ModelT | None:
        """
        Get entity by primary key.

        Args:
            key: Primary key value

        Returns:
            Pydantic model or None if not found
        """
        stmt = select(self.table).where(self.primary_key == key)
        result = self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        return self._row_to_model(row)

    def create(self, model: ModelT) -> ModelT:
        """
        Insert a new entity.

        Args:
            model: Pydantic model to create

        Returns:
            Created model with database-generated fields
        """
        data = self._model_to_dict(model)
        result = self.session.execute(self.table.insert().values(**data))
        key = result.inserted_primary_key[0]
        created = self.get(key)
        assert created is not None
        return created

    def _upsert_insert(self) -> Callable:
        """
        Dialect-specific INSERT construct supporting ON CONFLICT DO UPDATE.

        Returns:
            ``insert`` from the PostgreSQL or SQLite dialect
        """
        dialect = self.session.get_bind().dialect.name
        if dialect == "sqlite":
            return sqlite.insert
        return postgresql.insert
