"""Letterhead PDF documents built with reportlab.

Every page gets the company header, a faint diagonal watermark and the
contact footer; the story carries the title block, reference number,
date, tables and the HR signature block.
"""
from __future__ import annotations

from datetime import date
import io
import random
from typing import Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..config import Settings, get_settings

HEADER_HEIGHT = 32 * mm
FOOTER_HEIGHT = 18 * mm
BRAND_BLUE = colors.Color(0, 51 / 255, 102 / 255)
WATERMARK_TEXT = "ASN"


def generate_reference_number(prefix: str = "CYB", today: Optional[date] = None, rng: Optional[random.Random] = None) -> str:
    """``PREFIX/YYMM/NNNN`` with a random four-digit serial."""

    today = today or date.today()
    rng = rng or random
    return f"{prefix}/{today:%y%m}/{rng.randrange(10000):04d}"


def format_document_date(value: Optional[date] = None) -> str:
    return f"{(value or date.today()):%d %B %Y}"


class LetterheadDocument:
    """Collects flowables for one document and renders them to PDF bytes."""

    def __init__(
        self,
        title: str,
        subtitle: Optional[str] = None,
        ref_prefix: str = "CYB",
        landscape_mode: bool = False,
        settings: Optional[Settings] = None,
        today: Optional[date] = None,
        reference: Optional[str] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.title = title
        self.subtitle = subtitle
        self.pagesize = landscape(A4) if landscape_mode else A4
        self.today = today or date.today()
        self.reference = reference or generate_reference_number(ref_prefix, self.today)
        self.styles = getSampleStyleSheet()
        self.story: list = []
        self._title_block()

    # page decorations

    def _draw_header(self, canv) -> None:
        width, height = self.pagesize
        s = self.settings
        canv.setFillColor(BRAND_BLUE)
        canv.setFont("Helvetica-Bold", 22)
        canv.drawString(15 * mm, height - 20 * mm, WATERMARK_TEXT)
        canv.setFont("Helvetica-Bold", 14)
        canv.drawRightString(width - 15 * mm, height - 16 * mm, s.company_name)
        canv.setFillColor(colors.Color(80 / 255, 80 / 255, 80 / 255))
        canv.setFont("Helvetica", 9)
        canv.drawRightString(width - 15 * mm, height - 22 * mm, s.company_tagline)
        canv.drawRightString(width - 15 * mm, height - 27 * mm, s.company_address)
        canv.setStrokeColor(colors.Color(0.78, 0.78, 0.78))
        canv.setLineWidth(0.3)
        canv.line(15 * mm, height - HEADER_HEIGHT, width - 15 * mm, height - HEADER_HEIGHT)

    def _draw_watermark(self, canv) -> None:
        width, height = self.pagesize
        canv.saveState()
        canv.setFillColor(colors.Color(0.96, 0.96, 0.96))
        canv.setFont("Helvetica-Bold", 50)
        canv.translate(width / 2, height / 2)
        canv.rotate(45)
        canv.drawCentredString(0, 0, WATERMARK_TEXT)
        canv.restoreState()

    def _draw_footer(self, canv) -> None:
        width, _ = self.pagesize
        canv.setStrokeColor(colors.Color(0.78, 0.78, 0.78))
        canv.setLineWidth(0.3)
        canv.line(15 * mm, 15 * mm, width - 15 * mm, 15 * mm)
        canv.setFillColor(colors.Color(0.4, 0.4, 0.4))
        canv.setFont("Helvetica", 8)
        canv.drawCentredString(width / 2, 10 * mm, self.footer_text())

    def footer_text(self) -> str:
        s = self.settings
        return f"{s.company_name} | Email: {s.company_email} | Website: {s.company_website}"

    def _decorate(self, canv, doc) -> None:
        canv.saveState()
        self._draw_watermark(canv)
        self._draw_header(canv)
        self._draw_footer(canv)
        canv.restoreState()

    # story

    def _title_block(self) -> None:
        title_style = ParagraphStyle(
            "DocTitle", parent=self.styles["Heading2"], alignment=TA_CENTER, fontSize=12, spaceAfter=2
        )
        sub_style = ParagraphStyle("DocSubtitle", parent=self.styles["Normal"], alignment=TA_CENTER, fontSize=9)
        self.story.append(Paragraph(escape(self.title), title_style))
        if self.subtitle:
            self.story.append(Paragraph(escape(self.subtitle), sub_style))
        self.story.append(Spacer(1, 6))

        width = self.pagesize[0] - 30 * mm
        meta = Table(
            [[f"Ref No: {self.reference}", f"Date: {format_document_date(self.today)}"]],
            colWidths=[width / 2, width / 2],
        )
        meta.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (-1, -1), colors.Color(80 / 255, 80 / 255, 80 / 255)),
                    ("ALIGN", (0, 0), (0, 0), "LEFT"),
                    ("ALIGN", (1, 0), (1, 0), "RIGHT"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 0),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 0),
                ]
            )
        )
        self.story.append(meta)
        self.story.append(Spacer(1, 10))

    def paragraph(self, text: str) -> None:
        self.story.append(Paragraph(text, self.styles["Normal"]))

    def table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence],
        totals: Optional[Sequence] = None,
        col_widths: Optional[Sequence[float]] = None,
        font_size: int = 8,
    ) -> None:
        """Grid table with a shaded header and an optional bold totals row."""

        data = [list(headers)] + [["" if v is None else str(v) for v in row] for row in rows]
        if totals is not None:
            data.append(["" if v is None else str(v) for v in totals])
        tbl = Table(data, colWidths=col_widths, repeatRows=1)
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), BRAND_BLUE),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), font_size),
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]
        if totals is not None:
            style += [
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("BACKGROUND", (0, -1), (-1, -1), colors.Color(0.94, 0.94, 0.94)),
            ]
        tbl.setStyle(TableStyle(style))
        self.story.append(tbl)
        self.story.append(Spacer(1, 10))

    def key_values(self, pairs: Sequence[tuple[str, object]]) -> None:
        tbl = Table([[k, str(v)] for k, v in pairs], colWidths=[50 * mm, 80 * mm])
        tbl.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (0, -1), colors.lightgrey),
                    ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
                    ("FONTSIZE", (0, 0), (-1, -1), 9),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ]
            )
        )
        self.story.append(tbl)
        self.story.append(Spacer(1, 10))

    def _signature_block(self) -> None:
        s = self.settings
        width = self.pagesize[0] - 30 * mm
        sig = Table(
            [
                ["_" * 28, "", "_" * 28],
                ["Authorized Signatory", "", "Company Seal"],
                [s.hr_name, "", ""],
                [s.hr_designation, "", ""],
            ],
            colWidths=[70 * mm, width - 140 * mm, 70 * mm],
        )
        sig.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
                    ("FONTNAME", (0, 2), (0, 2), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ]
            )
        )
        self.story.append(Spacer(1, 30))
        self.story.append(sig)

    def render(self, signature: bool = True) -> bytes:
        if signature:
            self._signature_block()
        buf = io.BytesIO()
        doc = SimpleDocTemplate(
            buf,
            pagesize=self.pagesize,
            leftMargin=15 * mm,
            rightMargin=15 * mm,
            topMargin=HEADER_HEIGHT + 6 * mm,
            bottomMargin=FOOTER_HEIGHT + 4 * mm,
            title=self.title,
            author=self.settings.company_name,
        )
        doc.build(self.story, onFirstPage=self._decorate, onLaterPages=self._decorate)
        return buf.getvalue()
