"""Declarative base and shared column types."""

from sqlalchemy import ARRAY, JSON, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# text[] on PostgreSQL; SQLite has no arrays so the test database stores JSON
TextArray = ARRAY(Text).with_variant(JSON(), "sqlite")

JsonDocument = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Shared declarative base for all models."""
    pass
