"""Spreadsheet, text and PDF renderings."""
from datetime import date, datetime
import io
import random
import re
from types import SimpleNamespace

from openpyxl import load_workbook

from hrms.config import Settings
from hrms.exports import documents
from hrms.exports.pdf import LetterheadDocument, format_document_date, generate_reference_number
from hrms.exports.tabular import template_workbook, to_csv, to_excel, to_txt
from hrms.payroll.bonus import bonus_register
from hrms.payroll.mlwf import mlwf_statement
from hrms.services.periods import report_period

ROWS = [{"Name": "Asha", "Days": 2}, {"Name": "Ravi", "Days": 0}]


def test_csv_quotes_text_and_handles_empty_input() -> None:
    assert to_csv(ROWS) == '"Name","Days"\n"Asha",2\n"Ravi",0\n'
    assert to_csv([]) == ""


def test_txt_record_blocks() -> None:
    text = to_txt(ROWS, "Leave Report", generated_at=datetime(2024, 5, 1, 9, 30))
    lines = text.splitlines()
    assert lines[:3] == ["Leave Report", "Generated on: 01/05/2024 09:30:00", "=" * len("Leave Report")]
    assert "Record 2:" in lines
    assert "Name: Ravi" in lines
    assert lines.count("-" * 20) == 2
    assert to_txt([], "Empty") == ""


def test_excel_has_title_and_frozen_header() -> None:
    wb = load_workbook(io.BytesIO(to_excel(ROWS, sheet_name="Leaves", title="Leave Report")))
    ws = wb["Leaves"]
    assert ws["A1"].value == "Leave Report"
    assert [c.value for c in ws[3]] == ["Name", "Days"]
    assert ws["A3"].font.bold
    assert ws.freeze_panes == "A4"
    assert ws["B4"].value == 2


def test_excel_without_title() -> None:
    ws = load_workbook(io.BytesIO(to_excel(ROWS))).active
    assert ws.title == "Report"
    assert ws["A1"].value == "Name"
    assert ws.freeze_panes == "A2"


def test_template_workbook() -> None:
    ws = load_workbook(io.BytesIO(template_workbook(["Employee ID", "Gross"], [["EMP001", 20000]]))).active
    assert [c.value for c in ws[1]] == ["Employee ID", "Gross"]
    assert ws["B2"].value == 20000


def test_reference_number_format() -> None:
    ref = generate_reference_number("MLWF", today=date(2024, 5, 1), rng=random.Random(1))
    assert re.fullmatch(r"MLWF/2405/\d{4}", ref)
    assert format_document_date(date(2024, 5, 1)) == "01 May 2024"


def test_letterhead_document_renders_pdf() -> None:
    settings = Settings(company_name="Test Co", hr_name="Priya", company_email="hr@test.example")
    doc = LetterheadDocument("TEST REPORT", subtitle="May 2024", settings=settings, reference="CYB/2405/0001")
    doc.table(["A", "B"], [[1, 2]], totals=["Total", 2])
    assert doc.footer_text() == "Test Co | Email: hr@test.example | Website: www.asnhrconsultancy.com"
    assert doc.render().startswith(b"%PDF")


def test_statutory_documents_render() -> None:
    employee = SimpleNamespace(
        id=1,
        code="E-001",
        full_name="Asha Patil",
        position="Operator",
        department_name="Ops",
        unit_name="Pune",
        salary=30000,
        join_date=date(2023, 1, 1),
        is_active=True,
    )
    period = report_period("month", year=2024, month=6)
    assert documents.mlwf_statement_pdf(mlwf_statement([employee], period)).startswith(b"%PDF")
    assert documents.bonus_register_pdf(bonus_register([employee], 2024)).startswith(b"%PDF")

    row = {
        "employee_code": "E-001",
        "name": "Asha Patil",
        "department": "Ops",
        "present": 20,
        "absent": 1,
        "leaves": 1,
        "halfday": 0,
        "late": 2,
        "payable_days": 19,
    }
    assert documents.attendance_report_pdf([row], period).startswith(b"%PDF")
    assert documents.individual_attendance_pdf(row, period).startswith(b"%PDF")
