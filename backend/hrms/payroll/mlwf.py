"""Maharashtra Labour Welfare Fund summary statement."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..services.grouping import flatten, group_by_unit
from ..services.periods import ReportPeriod
from .statutory import MLWF_EMPLOYEE, MLWF_EMPLOYER, round_half_up

PAYROLL_MONTH_DAYS = 30


@dataclass
class MlwfRow:
    employee_id: int
    employee_code: str
    employee: str
    gross_salary: int
    employee_contrib: int
    employer_contrib: int
    department_name: str
    unit_name: str

    @property
    def total(self) -> int:
        return self.employee_contrib + self.employer_contrib


@dataclass
class MlwfStatement:
    period: ReportPeriod
    groups: dict[str, dict[str, list[MlwfRow]]]

    @property
    def rows(self) -> list[MlwfRow]:
        return flatten(self.groups)

    def totals(self) -> dict[str, int]:
        rows = self.rows
        return {
            "gross_salary": sum(r.gross_salary for r in rows),
            "employee_contrib": sum(r.employee_contrib for r in rows),
            "employer_contrib": sum(r.employer_contrib for r in rows),
            "total": sum(r.total for r in rows),
        }


def prorated_gross(monthly_ctc: float, period: ReportPeriod) -> int:
    """Gross wages for the period on a 30-day month, capped at a full month."""

    days = min(PAYROLL_MONTH_DAYS, period.days)
    return round_half_up(monthly_ctc / PAYROLL_MONTH_DAYS * days)


def mlwf_statement(employees: Iterable, period: ReportPeriod) -> MlwfStatement:
    """MLWF statement rows for active, salaried employees who joined by the period end.

    The statement always shows the half-yearly 25/75 contribution, whichever
    month it is generated for.
    """

    rows = []
    for emp in employees:
        if not emp.is_active or not emp.salary or emp.salary <= 0:
            continue
        if emp.join_date is not None and emp.join_date > period.end:
            continue
        rows.append(
            MlwfRow(
                employee_id=emp.id,
                employee_code=emp.code,
                employee=emp.full_name,
                gross_salary=prorated_gross(emp.salary, period),
                employee_contrib=MLWF_EMPLOYEE,
                employer_contrib=MLWF_EMPLOYER,
                department_name=emp.department_name,
                unit_name=emp.unit_name,
            )
        )
    return MlwfStatement(period=period, groups=group_by_unit(rows))


def mlwf_export_rows(statement: MlwfStatement) -> list[dict]:
    return [
        {
            "Employee ID": r.employee_code,
            "Employee": r.employee,
            "Gross Salary": r.gross_salary,
            "Employee Contribution": r.employee_contrib,
            "Employer Contribution": r.employer_contrib,
            "Total": r.total,
            "Department": r.department_name,
            "Unit": r.unit_name,
        }
        for r in statement.rows
    ]


TEMPLATE_HEADERS = ["Employee ID", "Full Name", "Gross Salary", "Employee Contrib", "Employer Contrib"]
TEMPLATE_SAMPLE = [["EMP001", "John Doe", 20000, MLWF_EMPLOYEE, MLWF_EMPLOYER]]
