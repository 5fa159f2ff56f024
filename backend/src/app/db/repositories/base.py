"""Base repository with common database operations."""

from __future__ import annotations

from typing import Any
from typing import Generic
from typing import Type
from typing import TypeVar

from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects import sqlite
from sqlalchemy.orm import Session

from app.db.base import Base
from app.exceptions import DatabaseError

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository shared by the entity-specific repositories.

    Type Parameters:
        T: The SQLAlchemy model type this repository manages.
    """

    def __init__(self, session: Session, model: Type[T]):
        """Initialize the repository.

        Args:
            session: SQLAlchemy session for database operations.
            model: The SQLAlchemy model class.
        """
        self._session = session
        self._model = model

    def _upsert_statement(self) -> Any:
        """Return a dialect-specific ``INSERT`` supporting ``ON CONFLICT``.

        Raises:
            DatabaseError: If the bound dialect has no upsert support.
        """
        dialect = self._session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(self._model)
        if dialect == "sqlite":
            return sqlite.insert(self._model)
        raise DatabaseError(f"Upsert is not supported on {dialect}")
