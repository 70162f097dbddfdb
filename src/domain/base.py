"""Shared base for domain entities"""

import uuid
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive values; backends without tz storage read them back naive"""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def timestamp_column(nullable: bool = False) -> Column:
    # Column objects can't be shared between tables, so build one per field
    return Column(DateTime(timezone=True), nullable=nullable)


class BaseModel(SQLModel):
    """Base class for all persisted domain entities"""
    pass
