"""Declarative base classes for ORM models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, MetaData, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base declarative class that centralises metadata."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class TenantMixin:
    """Adds the `account_id` column every HR record is scoped by."""

    account_id: Mapped[str] = mapped_column(String, nullable=False, index=True)


class CreatedAtMixin:
    """Stamps rows with their creation time."""

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
