"""Statutory bonus register over an April-March fiscal year."""
from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from ..services.grouping import flatten, group_by_unit
from ..services.periods import MONTH_NAMES, fiscal_months
from .statutory import bonus_for_month

FISCAL_MONTH_NAMES = MONTH_NAMES[3:] + MONTH_NAMES[:3]


@dataclass
class BonusMonth:
    month: date
    wages: int = 0
    bonus: int = 0


@dataclass
class BonusRow:
    employee_id: int
    employee_code: str
    name: str
    designation: str
    department_name: str
    unit_name: str
    months: list[BonusMonth] = field(default_factory=list)

    @property
    def total_wages(self) -> int:
        return sum(m.wages for m in self.months)

    @property
    def total_bonus(self) -> int:
        return sum(m.bonus for m in self.months)


@dataclass
class BonusRegister:
    fiscal_year_start: int
    groups: dict[str, dict[str, list[BonusRow]]]

    @property
    def rows(self) -> list[BonusRow]:
        return flatten(self.groups)

    @property
    def total_bonus(self) -> int:
        return sum(r.total_bonus for r in self.rows)

    @property
    def total_wages(self) -> int:
        return sum(r.total_wages for r in self.rows)

    @property
    def label(self) -> str:
        return f"1st April {self.fiscal_year_start} to 31st March {self.fiscal_year_start + 1}"


def _employed_in(join_date: date | None, month_start: date) -> bool:
    if join_date is None:
        return True
    last_day = calendar.monthrange(month_start.year, month_start.month)[1]
    return join_date <= month_start.replace(day=last_day)


def bonus_row(employee, fiscal_year_start: int) -> BonusRow:
    monthly_basic, bonus = bonus_for_month(employee.salary)
    row = BonusRow(
        employee_id=employee.id,
        employee_code=employee.code,
        name=employee.full_name,
        designation=employee.position or "",
        department_name=employee.department_name,
        unit_name=employee.unit_name,
    )
    for month_start in fiscal_months(fiscal_year_start):
        if _employed_in(employee.join_date, month_start):
            row.months.append(BonusMonth(month_start, monthly_basic, bonus))
        else:
            row.months.append(BonusMonth(month_start))
    return row


def bonus_register(employees: Iterable, fiscal_year_start: int) -> BonusRegister:
    """Bonus register for active, salaried employees grouped by unit and department."""

    rows = [
        bonus_row(emp, fiscal_year_start)
        for emp in employees
        if emp.is_active and emp.salary and emp.salary > 0
    ]
    return BonusRegister(fiscal_year_start=fiscal_year_start, groups=group_by_unit(rows))


def bonus_export_rows(register: BonusRegister) -> list[dict]:
    return [
        {
            "Emp ID": r.employee_code,
            "Name": r.name,
            "Designation": r.designation,
            "Total Wages": r.total_wages,
            "Total Bonus": r.total_bonus,
            "Department": r.department_name,
            "Unit": r.unit_name,
        }
        for r in register.rows
    ]
