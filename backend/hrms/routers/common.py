"""Query parameters and loaders shared by the report endpoints."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from fastapi import Query
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..enums import ExportFormat, PeriodKind
from ..models import Department, Employee
from ..services.periods import ReportPeriod, report_period


@dataclass
class ReportParams:
    period: PeriodKind
    on_date: Optional[date]
    year: Optional[int]
    month: Optional[int]
    unit_id: Optional[int]
    department_id: Optional[int]
    search: Optional[str]
    format: ExportFormat

    def resolve_period(self) -> ReportPeriod:
        return report_period(self.period, on_date=self.on_date, year=self.year, month=self.month)


def report_params(
    period: PeriodKind = Query(default=PeriodKind.MONTH),
    on_date: Optional[date] = Query(default=None),
    year: Optional[int] = Query(default=None),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    unit_id: Optional[int] = Query(default=None),
    department_id: Optional[int] = Query(default=None),
    search: Optional[str] = Query(default=None),
    format: ExportFormat = Query(default=ExportFormat.JSON),
) -> ReportParams:
    return ReportParams(period, on_date, year, month, unit_id, department_id, search, format)


async def load_employees(
    session: AsyncSession,
    account_id: str,
    unit_id: Optional[int] = None,
    department_id: Optional[int] = None,
    search: Optional[str] = None,
) -> list[Employee]:
    """Tenant employees narrowed by unit, department and a name/code search."""

    query = select(Employee).where(Employee.account_id == account_id)
    if department_id is not None:
        query = query.where(Employee.department_id == department_id)
    if unit_id is not None:
        query = query.where(
            Employee.department_id.in_(select(Department.id).where(Department.unit_id == unit_id))
        )
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Employee.first_name.ilike(pattern),
                Employee.last_name.ilike(pattern),
                Employee.code.ilike(pattern),
            )
        )
    result = await session.execute(query.order_by(Employee.code))
    return list(result.scalars().unique().all())


def period_dict(period: ReportPeriod) -> dict:
    return {
        "kind": period.kind.value,
        "start": period.start.isoformat(),
        "end": period.end.isoformat(),
        "label": period.label(),
    }
