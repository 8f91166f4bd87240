"""
SQLAlchemy integration: key/value cart storage in a database table.

Usage:
    engine = create_engine("sqlite:///storefront.db")
    Base.metadata.create_all(engine)

    storage = SQLAlchemyStorage(sessionmaker(engine))
    store = CartStore.load(storage)
"""

from datetime import datetime

from sqlalchemy import String, Text, DateTime, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from kungfu import Result, Ok, Error

from storefront.cart._storage import StorageError


class Base(DeclarativeBase):
    pass


class StoredValue(Base):
    """One storage key."""

    __tablename__ = "storefront_storage"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.now,
        onupdate=datetime.now,
    )


class SQLAlchemyStorage:
    """
    Storage backed by the `storefront_storage` table.

    One short session per call; each write commits before returning.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> Result[str | None, StorageError]:
        try:
            with self._session_factory() as session:
                row = session.execute(
                    select(StoredValue.value).where(StoredValue.key == key)
                ).scalar_one_or_none()
                return Ok(row)
        except SQLAlchemyError as e:
            return Error(StorageError(f"Failed to get {key}: {e}", e))

    def set(self, key: str, value: str) -> Result[None, StorageError]:
        try:
            with self._session_factory() as session:
                row = session.get(StoredValue, key)
                if row is None:
                    session.add(StoredValue(key=key, value=value))
                else:
                    row.value = value
                session.commit()
                return Ok(None)
        except SQLAlchemyError as e:
            return Error(StorageError(f"Failed to set {key}: {e}", e))

    def delete(self, key: str) -> Result[bool, StorageError]:
        try:
            with self._session_factory() as session:
                row = session.get(StoredValue, key)
                if row is None:
                    return Ok(False)
                session.delete(row)
                session.commit()
                return Ok(True)
        except SQLAlchemyError as e:
            return Error(StorageError(f"Failed to delete {key}: {e}", e))


__all__ = ("Base", "StoredValue", "SQLAlchemyStorage")
