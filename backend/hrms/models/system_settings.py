"""Per-account salary component defaults."""
from sqlalchemy import Float, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TenantMixin


class SystemSettings(TenantMixin, Base):
    """Defaults shown on the salary structure page and used by payroll."""

    __tablename__ = "system_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    basic_salary_percentage: Mapped[float] = mapped_column(Float, default=50.0)
    hra_percentage: Mapped[float] = mapped_column(Float, default=20.0)
    da_percentage: Mapped[float] = mapped_column(Float, default=10.0)
    epf_percentage: Mapped[float] = mapped_column(Float, default=12.0)
    esic_percentage: Mapped[float] = mapped_column(Float, default=0.75)
    professional_tax: Mapped[float] = mapped_column(Float, default=200.0)

    __table_args__ = (UniqueConstraint("account_id", name="uq_system_settings_account"),)
