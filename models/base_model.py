"""
Shared SQLAlchemy base and mixin for the printing house models.

- created_at / updated_at timestamps with server-side defaults
- kwargs constructor that ignores a serialized "__class__" key
- utcnow() helper: every datetime we store is naive UTC

Notes:
- Keys differ per entity (ISBN, RG, integer ids) so the mixin does not
  declare a primary key; each model owns its own.
- For SQLite, func.now() maps to CURRENT_TIMESTAMP.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Declarative base for all models
Base = declarative_base()


def utcnow() -> datetime:
    """Current time as a naive UTC datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel:
    """
    Base mixin for all persistent models.

    Provides created_at/updated_at and a permissive constructor.
    """

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __init__(self, *args, **kwargs):
        """
        Allow attribute initialization via kwargs without requiring a session here.
        We do NOT force created_at/updated_at in __init__; DB defaults handle those on insert.
        """
        for key, value in kwargs.items():
            if key != "__class__":
                setattr(self, key, value)

    def __str__(self) -> str:
        """Human-friendly representation including the key and fields."""
        fields = {k: v for k, v in self.__dict__.items() if k != "_sa_instance_state"}
        return f"[{self.__class__.__name__}] {fields}"
