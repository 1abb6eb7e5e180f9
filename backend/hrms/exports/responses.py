"""Turn report rows into JSON or file download responses."""
from __future__ import annotations

import logging
import re
from typing import Callable, Optional, Sequence
from urllib.parse import quote

from fastapi import Response

from ..enums import ExportFormat
from ..errors import ValidationError
from .tabular import to_csv, to_excel, to_txt

_logger = logging.getLogger(__name__)

MEDIA_TYPES = {
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.CSV: "text/csv; charset=utf-8",
    ExportFormat.TXT: "text/plain; charset=utf-8",
    ExportFormat.PDF: "application/pdf",
}

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def content_disposition(filename: str, fallback: Optional[str] = None) -> str:
    """``attachment`` header value.

    Names outside plain ASCII are sent as an RFC 5987 ``filename*`` next to an
    ASCII ``filename``, built from ``fallback`` when given.
    """

    safe = _UNSAFE_FILENAME_CHARS.sub("_", filename).strip("_") or "download"
    if safe == filename:
        return f'attachment; filename="{filename}"'
    if fallback:
        safe = _UNSAFE_FILENAME_CHARS.sub("_", fallback).strip("_") or safe
    return f"attachment; filename=\"{safe}\"; filename*=UTF-8''{quote(filename, safe='')}"


def download(
    content: bytes | str, fmt: ExportFormat, filename: str, fallback_filename: Optional[str] = None
) -> Response:
    body = content.encode("utf-8") if isinstance(content, str) else content
    fallback = f"{fallback_filename}.{fmt.value}" if fallback_filename else None
    return Response(
        content=body,
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": content_disposition(f"{filename}.{fmt.value}", fallback)},
    )


def export_response(
    fmt: ExportFormat,
    rows: Sequence[dict],
    filename: str,
    title: str,
    pdf: Optional[Callable[[], bytes]] = None,
    sheet_name: str = "Report",
    fallback_filename: Optional[str] = None,
) -> Response:
    """Render non-JSON report formats; ``pdf`` builds the letterhead document lazily."""

    fmt = ExportFormat(fmt)
    if fmt is ExportFormat.JSON:
        raise ValidationError("JSON reports are returned directly")
    if fmt is ExportFormat.XLSX:
        content: bytes | str = to_excel(rows, sheet_name=sheet_name, title=title)
    elif fmt is ExportFormat.CSV:
        content = to_csv(rows)
    elif fmt is ExportFormat.TXT:
        content = to_txt(rows, title)
    else:
        if pdf is None:
            raise ValidationError("PDF is not available for this report")
        content = pdf()
    _logger.info("Generated %s export %s with %d rows", fmt.value, filename, len(rows))
    return download(content, fmt, filename, fallback_filename)
