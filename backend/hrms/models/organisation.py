"""Units (sites/branches) and the departments inside them."""
from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TenantMixin


class Unit(TenantMixin, Base):
    __tablename__ = "units"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String)
    code: Mapped[str] = mapped_column(String, default="")

    departments: Mapped[list["Department"]] = relationship(back_populates="unit")

    __table_args__ = (UniqueConstraint("account_id", "name", name="uq_units_account_name"),)


class Department(TenantMixin, Base):
    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, index=True)
    unit_id: Mapped[int | None] = mapped_column(ForeignKey("units.id", ondelete="SET NULL"), nullable=True)

    unit: Mapped[Unit | None] = relationship(back_populates="departments", lazy="joined")

    __table_args__ = (UniqueConstraint("account_id", "name", name="uq_departments_account_name"),)
