"""
Local persistent key/value storage used as the fallback tier of the sync
layer and for session state. Values are JSON strings, keyed by collection
name (or `currentUser`).
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from sqlalchemy import Column, Float, String, Text, create_engine, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker


class LocalCache(Protocol):
    """Interface for local persistent storage."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def keys(self) -> List[str]:
        ...


@dataclass
class InMemoryLocalCache:
    """Simple in-memory storage for development and tests."""

    items: Dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    def keys(self) -> List[str]:
        return list(self.items)

    def reset(self) -> None:
        self.items.clear()


class SqlLocalCache:
    """
    SQLAlchemy-backed storage. Accepts any SQLAlchemy URL (a SQLite file by
    default, `sqlite+pysqlite:///:memory:` for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("LOCAL_CACHE_URL is required for SqlLocalCache")
        self.engine = create_engine(database_url, future=True)
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def get_item(self, key: str) -> Optional[str]:
        with self.Session() as session:
            row = session.get(LocalItemRow, key)
            return row.value if row else None

    def set_item(self, key: str, value: str) -> None:
        with self.Session() as session:
            row = session.get(LocalItemRow, key)
            if row:
                row.value = value
                row.updated_at = time.time()
            else:
                session.add(LocalItemRow(key=key, value=value, updated_at=time.time()))
            session.commit()

    def remove_item(self, key: str) -> None:
        with self.Session() as session:
            row = session.get(LocalItemRow, key)
            if row:
                session.delete(row)
                session.commit()

    def keys(self) -> List[str]:
        with self.Session() as session:
            return list(session.execute(select(LocalItemRow.key)).scalars())


Base = declarative_base()


class LocalItemRow(Base):
    __tablename__ = "local_storage"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(Float, nullable=False)
