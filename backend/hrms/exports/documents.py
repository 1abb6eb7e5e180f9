"""Printable statutory registers and attendance reports."""
from __future__ import annotations

from datetime import date
from typing import Optional

from reportlab.lib.units import mm

from ..config import Settings
from ..payroll.bonus import FISCAL_MONTH_NAMES, BonusRegister
from ..payroll.mlwf import MlwfStatement
from ..services.periods import ReportPeriod
from .pdf import LetterheadDocument


def _money(value: float) -> str:
    return f"{value:,.2f}"


def mlwf_statement_pdf(
    statement: MlwfStatement, settings: Optional[Settings] = None, today: Optional[date] = None
) -> bytes:
    doc = LetterheadDocument(
        "L.W.F. SUMMARY STATEMENT FOR THE MONTH OF",
        subtitle=statement.period.label(),
        ref_prefix="MLWF",
        landscape_mode=True,
        settings=settings,
        today=today,
    )
    rows = statement.rows
    totals = statement.totals()
    doc.table(
        ["Sr.No.", "Employee Name", "Gross Wages", "L.W.F. DEDUCTED", "Employer's Contr."],
        [
            [idx, r.employee, _money(r.gross_salary), _money(r.employee_contrib), _money(r.employer_contrib)]
            for idx, r in enumerate(rows, 1)
        ],
        totals=[
            "TOTALS",
            "",
            _money(totals["gross_salary"]),
            _money(totals["employee_contrib"]),
            _money(totals["employer_contrib"]),
        ],
        font_size=9,
    )
    doc.paragraph(f"<b>Total LWF (Employee's + Employer's) : {_money(totals['total'])}</b>")
    return doc.render()


def bonus_register_pdf(
    register: BonusRegister, settings: Optional[Settings] = None, today: Optional[date] = None
) -> bytes:
    doc = LetterheadDocument(
        "BONUS REGISTER",
        subtitle=register.label,
        ref_prefix="BON",
        landscape_mode=True,
        settings=settings,
        today=today,
    )
    rows = register.rows
    body = []
    for idx, r in enumerate(rows, 1):
        cells = [f"{m.wages} / {m.bonus}" if m.wages else "0 / 0" for m in r.months]
        body.append([idx, r.employee_code or "N/A", r.name, *cells, _money(r.total_wages), _money(r.total_bonus)])

    totals = ["TOTALS"] + [""] * (2 + len(FISCAL_MONTH_NAMES)) + [
        _money(register.total_wages),
        _money(register.total_bonus),
    ]
    widths = [8 * mm, 15 * mm, 35 * mm] + [14 * mm] * len(FISCAL_MONTH_NAMES) + [18 * mm, 15 * mm]
    doc.table(
        ["Sr.No.", "EmpCode", "Name of the Employee", *FISCAL_MONTH_NAMES, "Total", "Bonus"],
        body,
        totals=totals,
        col_widths=widths,
        font_size=5,
    )
    return doc.render()


ATTENDANCE_HEADERS = ["Emp ID", "Name", "Department", "Present", "Absent", "Leaves", "Half Day", "Late", "Payable Days"]


def attendance_report_pdf(
    rows: list[dict], period: ReportPeriod, settings: Optional[Settings] = None, today: Optional[date] = None
) -> bytes:
    doc = LetterheadDocument(
        "UNIT-WISE ATTENDANCE REPORT",
        subtitle=f"Period: {period.kind.value.upper()} ({period.start:%d/%m/%Y} - {period.end:%d/%m/%Y})",
        ref_prefix="ATT",
        landscape_mode=True,
        settings=settings,
        today=today,
    )
    doc.table(
        ATTENDANCE_HEADERS,
        [
            [
                r["employee_code"],
                r["name"],
                r["department"],
                r["present"],
                r["absent"],
                r["leaves"],
                r["halfday"],
                r["late"],
                r["payable_days"],
            ]
            for r in rows
        ],
    )
    return doc.render()


def individual_attendance_pdf(
    row: dict, period: ReportPeriod, settings: Optional[Settings] = None, today: Optional[date] = None
) -> bytes:
    doc = LetterheadDocument(
        "INDIVIDUAL ATTENDANCE REPORT",
        subtitle=f"{row['name']} | {period.label()}",
        ref_prefix="IND-ATT",
        settings=settings,
        today=today,
    )
    doc.key_values(
        [
            ("Employee Name", row["name"]),
            ("Employee ID", row["employee_code"]),
            ("Department", row["department"]),
            ("Present Days", row["present"]),
            ("Absent Days", row["absent"]),
            ("Leaves", row["leaves"]),
            ("Half Days", row["halfday"]),
            ("Late Arrivals", row["late"]),
            ("Payable Days", row["payable_days"]),
        ]
    )
    return doc.render()
