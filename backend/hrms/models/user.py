"""Login accounts, optionally linked to an employee record."""
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..enums import Role
from .base import Base, TenantMixin


class User(TenantMixin, Base):
    """Application user with tenant scoping."""

    __tablename__ = "users"

    __table_args__ = (UniqueConstraint("account_id", "username", name="uq_users_account_username"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String, index=True)
    role: Mapped[str] = mapped_column(String, default=Role.EMPLOYEE.value)
    password_hash: Mapped[str] = mapped_column(String)
    email: Mapped[str] = mapped_column(String, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    employee_id: Mapped[int | None] = mapped_column(
        ForeignKey("employees.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
