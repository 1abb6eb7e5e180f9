"""Daily attendance marks."""
import datetime as dt

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..enums import AttendanceStatus
from .base import Base, TenantMixin


class Attendance(TenantMixin, Base):
    __tablename__ = "attendance"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    employee_id: Mapped[int] = mapped_column(ForeignKey("employees.id", ondelete="CASCADE"), index=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True)
    check_in_time: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)
    check_out_time: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)
    status: Mapped[str] = mapped_column(String, default=AttendanceStatus.PRESENT.value)
    notes: Mapped[str] = mapped_column(Text, default="")

    __table_args__ = (UniqueConstraint("employee_id", "date", name="uq_attendance_employee_date"),)
