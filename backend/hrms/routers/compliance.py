"""Statutory registers: MLWF statement and bonus register."""
from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..dependencies import get_current_user, get_db_session, require_roles
from ..enums import APPROVER_ROLES, ExportFormat
from ..exports import documents
from ..exports.responses import download, export_response
from ..exports.tabular import template_workbook
from ..models import User
from ..payroll.bonus import bonus_export_rows, bonus_register
from ..payroll.mlwf import TEMPLATE_HEADERS, TEMPLATE_SAMPLE, mlwf_export_rows, mlwf_statement
from ..services.periods import MONTH_NAMES
from .common import ReportParams, load_employees, period_dict, report_params

router = APIRouter(prefix="/compliance", tags=["compliance"])


def current_fiscal_year(today: date | None = None) -> int:
    today = today or date.today()
    return today.year if today.month >= 4 else today.year - 1


def _grouped(groups: dict, row_to_dict) -> dict:
    return {
        unit: {dept: [row_to_dict(r) for r in rows] for dept, rows in depts.items()}
        for unit, depts in groups.items()
    }


def _mlwf_row(row) -> dict:
    return {**asdict(row), "total": row.total}


def _bonus_row(row) -> dict:
    data = asdict(row)
    data["months"] = [
        {"month": MONTH_NAMES[m.month.month - 1], "wages": m.wages, "bonus": m.bonus} for m in row.months
    ]
    data["total_wages"] = row.total_wages
    data["total_bonus"] = row.total_bonus
    return data


@router.get("/mlwf")
async def get_mlwf_statement(
    params: ReportParams = Depends(report_params),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """L.W.F. summary statement for the selected period."""

    require_roles(current_user, APPROVER_ROLES, "view compliance reports")
    period = params.resolve_period()
    employees = await load_employees(
        session, current_user.account_id, params.unit_id, params.department_id, params.search
    )
    statement = mlwf_statement(employees, period)

    if params.format is ExportFormat.JSON:
        return {
            "period": period_dict(period),
            "groups": _grouped(statement.groups, _mlwf_row),
            "totals": statement.totals(),
        }
    label = period.label().replace(" ", "-")
    return export_response(
        params.format,
        mlwf_export_rows(statement),
        filename=f"MLWF-Statement-{label}",
        title=f"MLWF Statement - {period.label()}",
        pdf=lambda: documents.mlwf_statement_pdf(statement, get_settings()),
        sheet_name="MLWF",
    )


@router.get("/mlwf/template")
async def get_mlwf_template(current_user: User = Depends(get_current_user)):
    """Blank workbook in the MLWF upload layout."""

    content = template_workbook(TEMPLATE_HEADERS, TEMPLATE_SAMPLE, sheet_name="MLWF")
    return download(content, ExportFormat.XLSX, "MLWF_Template")


@router.get("/bonus")
async def get_bonus_register(
    year: int | None = Query(default=None, description="Fiscal year start, e.g. 2024 for 2024-25"),
    unit_id: int | None = Query(default=None),
    department_id: int | None = Query(default=None),
    search: str | None = Query(default=None),
    format: ExportFormat = Query(default=ExportFormat.JSON),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Statutory bonus register for an April-March fiscal year."""

    require_roles(current_user, APPROVER_ROLES, "view compliance reports")
    start_year = year or current_fiscal_year()
    employees = await load_employees(session, current_user.account_id, unit_id, department_id, search)
    register = bonus_register(employees, start_year)

    if format is ExportFormat.JSON:
        return {
            "fiscal_year": register.label,
            "fiscal_year_start": start_year,
            "groups": _grouped(register.groups, _bonus_row),
            "total_wages": register.total_wages,
            "total_bonus": register.total_bonus,
            "eligible_employees": len(register.rows),
        }
    return export_response(
        format,
        bonus_export_rows(register),
        filename=f"Bonus-Register-{start_year}-{start_year + 1}",
        title=f"Bonus Register {register.label}",
        pdf=lambda: documents.bonus_register_pdf(register, get_settings()),
        sheet_name="Bonus",
    )
