"""Report periods, the bonus register and the MLWF statement."""
from datetime import date
from types import SimpleNamespace

import pytest

from hrms.enums import PeriodKind
from hrms.errors import ValidationError
from hrms.payroll.bonus import bonus_export_rows, bonus_register
from hrms.payroll.mlwf import mlwf_statement, prorated_gross
from hrms.services.periods import fiscal_months, fiscal_year, month_bounds, report_period


def make_employee(emp_id: int, salary: float = 20000, join_date=None, is_active: bool = True, **extra):
    data = dict(
        id=emp_id,
        code=f"E-{emp_id:03d}",
        full_name=f"Employee {emp_id}",
        position="Operator",
        department_name="Operations",
        unit_name="Pune",
        salary=salary,
        join_date=join_date,
        is_active=is_active,
    )
    data.update(extra)
    return SimpleNamespace(**data)


def test_week_period_starts_on_monday() -> None:
    period = report_period("week", on_date=date(2024, 5, 15))
    assert (period.start, period.end) == (date(2024, 5, 13), date(2024, 5, 19))
    assert period.days == 7


def test_month_period_in_leap_year() -> None:
    period = report_period(PeriodKind.MONTH, year=2024, month=2)
    assert period.end == date(2024, 2, 29)
    assert period.days == 29
    assert period.label() == "February 2024"


def test_day_and_year_periods() -> None:
    assert report_period("day", on_date=date(2024, 5, 15)).days == 1
    year = report_period("year", year=2023)
    assert (year.start, year.end) == (date(2023, 1, 1), date(2023, 12, 31))


def test_bad_period_selectors() -> None:
    with pytest.raises(ValidationError):
        report_period("quarter")
    with pytest.raises(ValidationError):
        month_bounds(2024, 13)


def test_fiscal_year_runs_april_to_march() -> None:
    months = fiscal_months(2024)
    assert len(months) == 12
    assert months[0] == date(2024, 4, 1)
    assert months[-1] == date(2025, 3, 1)
    assert fiscal_year(2024).end == date(2025, 3, 31)


def test_bonus_register_counts_months_from_joining() -> None:
    employees = [
        make_employee(1),
        make_employee(2, join_date=date(2024, 6, 15)),
        make_employee(3, is_active=False),
        make_employee(4, salary=0),
    ]
    register = bonus_register(employees, 2024)

    rows = {r.employee_id: r for r in register.rows}
    assert set(rows) == {1, 2}
    assert rows[1].total_wages == 12 * 10000
    assert rows[1].total_bonus == 12 * 583
    # April and May fall before the joining date
    assert [m.wages for m in rows[2].months[:3]] == [0, 0, 10000]
    assert rows[2].total_bonus == 10 * 583
    assert register.total_bonus == 22 * 583
    assert register.label == "1st April 2024 to 31st March 2025"


def test_bonus_register_groups_by_unit_then_department() -> None:
    employees = [
        make_employee(1),
        make_employee(2, unit_name="Mumbai", department_name="Sales"),
        make_employee(3, unit_name=None, department_name=None),
    ]
    register = bonus_register(employees, 2024)
    assert set(register.groups) == {"Pune", "Mumbai", "Unassigned"}
    assert list(register.groups["Mumbai"]) == ["Sales"]
    assert register.groups["Unassigned"]["Unassigned"][0].employee_id == 3

    export = bonus_export_rows(register)
    assert export[0]["Emp ID"] == "E-001"
    assert export[0]["Total Bonus"] == 12 * 583


def test_mlwf_gross_is_prorated_on_thirty_day_month() -> None:
    assert prorated_gross(30000, report_period("month", year=2024, month=2)) == 29000
    assert prorated_gross(30000, report_period("month", year=2024, month=3)) == 30000
    assert prorated_gross(30000, report_period("week", on_date=date(2024, 3, 6))) == 7000


def test_mlwf_statement_rows_and_totals() -> None:
    period = report_period("month", year=2024, month=6)
    employees = [
        make_employee(1, salary=30000, join_date=date(2023, 1, 1)),
        make_employee(2, salary=15000, join_date=date(2024, 6, 30)),
        make_employee(3, salary=15000, join_date=date(2024, 7, 1)),
        make_employee(4, salary=15000, is_active=False),
    ]
    statement = mlwf_statement(employees, period)

    assert [r.employee_id for r in statement.rows] == [1, 2]
    assert all((r.employee_contrib, r.employer_contrib, r.total) == (25, 75, 100) for r in statement.rows)
    assert statement.totals() == {
        "gross_salary": 45000,
        "employee_contrib": 50,
        "employer_contrib": 150,
        "total": 200,
    }
