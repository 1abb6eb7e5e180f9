"""Excel, CSV and plain-text renderings of report rows.

Rows are lists of dicts sharing the same keys; the first row's keys are the
column headers.
"""
from __future__ import annotations

import csv
from datetime import datetime
import io
from typing import Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

HEADER_FILL = PatternFill(start_color="D1D5DB", end_color="D1D5DB", fill_type="solid")
THIN = Side(style="thin")
BORDER = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)
MAX_COLUMN_WIDTH = 50


def _headers(rows: Sequence[dict]) -> list[str]:
    return list(rows[0].keys()) if rows else []


def _style_header(ws, row_idx: int, headers: Sequence[str]) -> None:
    for col_idx, _ in enumerate(headers, 1):
        cell = ws.cell(row_idx, col_idx)
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL
        cell.border = BORDER
        cell.alignment = Alignment(horizontal="center")


def _fit_columns(ws, headers: Sequence[str], rows: Sequence[Sequence]) -> None:
    for col_idx, header in enumerate(headers, 1):
        longest = max([len(str(header))] + [len(str(r[col_idx - 1])) for r in rows if len(r) >= col_idx])
        ws.column_dimensions[get_column_letter(col_idx)].width = min(longest + 2, MAX_COLUMN_WIDTH)


def _save(wb: Workbook) -> bytes:
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def to_excel(rows: Sequence[dict], sheet_name: str = "Report", title: Optional[str] = None) -> bytes:
    """Workbook with an optional merged title line above a bold, frozen header row."""

    headers = _headers(rows)
    values = [[row.get(h) for h in headers] for row in rows]

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]

    header_row = 1
    if title and headers:
        ws.cell(1, 1).value = title
        ws.cell(1, 1).font = Font(size=14, bold=True)
        ws.cell(1, 1).alignment = Alignment(horizontal="center")
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(headers))
        header_row = 3

    if headers:
        for col_idx, header in enumerate(headers, 1):
            ws.cell(header_row, col_idx).value = header
        _style_header(ws, header_row, headers)
        for offset, row in enumerate(values, 1):
            for col_idx, value in enumerate(row, 1):
                cell = ws.cell(header_row + offset, col_idx)
                cell.value = value
                cell.border = BORDER
        _fit_columns(ws, headers, values)
        ws.freeze_panes = ws.cell(header_row + 1, 1).coordinate
    return _save(wb)


def template_workbook(headers: Sequence[str], sample_rows: Sequence[Sequence], sheet_name: str = "Template") -> bytes:
    """Blank upload template: header row plus example rows."""

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    ws.append(list(headers))
    for row in sample_rows:
        ws.append(list(row))
    _style_header(ws, 1, headers)
    _fit_columns(ws, headers, sample_rows)
    ws.freeze_panes = "A2"
    return _save(wb)


def to_csv(rows: Sequence[dict]) -> str:
    if not rows:
        return ""
    headers = _headers(rows)
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=headers, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({h: row.get(h) for h in headers})
    return buf.getvalue()


def to_txt(rows: Sequence[dict], title: str, generated_at: Optional[datetime] = None) -> str:
    """Record-per-block text report."""

    if not rows:
        return ""
    generated_at = generated_at or datetime.now()
    headers = _headers(rows)
    lines = [title, f"Generated on: {generated_at:%d/%m/%Y %H:%M:%S}", "=" * len(title), ""]
    for idx, row in enumerate(rows, 1):
        lines.append(f"Record {idx}:")
        lines.extend(f"{h}: {row.get(h)}" for h in headers)
        lines.append("-" * 20)
    return "\n".join(lines) + "\n"
