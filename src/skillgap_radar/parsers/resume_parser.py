"""Turn an uploaded résumé file into a ResumePayload."""

from __future__ import annotations

import base64
import logging
import mimetypes
from io import BytesIO
from pathlib import Path

from skillgap_radar.errors import IngestionError
from skillgap_radar.models.resume import PDF_MIME_TYPE, TEXT_MIME_TYPE, ResumePayload

logger = logging.getLogger(__name__)

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

ACCEPTED_EXTENSIONS = ("pdf", "docx", "txt")

# Browsers and OSes report these when they cannot tell the type
_GENERIC_MIME_TYPES = {"", "application/octet-stream", "binary/octet-stream"}

_EXTENSION_MIME_TYPES = {
    ".pdf": PDF_MIME_TYPE,
    ".docx": DOCX_MIME_TYPE,
    ".txt": TEXT_MIME_TYPE,
}


def ingest_resume(
    filename: str,
    data: bytes,
    mime_type: str | None = None,
    *,
    max_bytes: int | None = None,
) -> ResumePayload:
    """Build a ResumePayload from raw upload bytes.

    PDFs are passed through base64-encoded for the model to read directly,
    DOCX files are reduced to their text, and everything else is decoded as
    plain text.
    """
    if max_bytes is not None and len(data) > max_bytes:
        raise IngestionError(
            f"{filename} is {len(data) / (1024 * 1024):.1f}MB, "
            f"over the {max_bytes // (1024 * 1024)}MB upload limit"
        )

    kind = _resolve_mime_type(filename, mime_type)
    logger.debug("Ingesting %s as %s (%d bytes)", filename, kind, len(data))

    if kind == PDF_MIME_TYPE:
        return ResumePayload(
            content=base64.b64encode(data).decode("ascii"),
            mime_type=PDF_MIME_TYPE,
            is_base64=True,
        )
    if kind == DOCX_MIME_TYPE:
        text = extract_docx_text(data)
        if not text.strip():
            raise IngestionError(f"No text could be extracted from {filename}")
        return ResumePayload(content=text, mime_type=TEXT_MIME_TYPE, is_base64=False)

    return ResumePayload(content=_decode_text(data), mime_type=TEXT_MIME_TYPE, is_base64=False)


def ingest_path(path: str | Path, *, max_bytes: int | None = None) -> ResumePayload:
    """Read a résumé from disk and ingest it."""
    path = Path(path)
    if not path.exists():
        raise IngestionError(f"Résumé file not found: {path}")
    guessed, _ = mimetypes.guess_type(path.name)
    return ingest_resume(path.name, path.read_bytes(), guessed, max_bytes=max_bytes)


def extract_docx_text(data: bytes) -> str:
    """Extract raw text from DOCX bytes: paragraphs first, then table cells."""
    from docx import Document

    try:
        doc = Document(BytesIO(data))
    except Exception as exc:
        logger.error("Failed to parse docx", exc_info=True)
        raise IngestionError("Failed to parse .docx file") from exc

    lines = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = []
            for cell in row.cells:
                # merged cells repeat the same object across the row
                if cell.text.strip() and cell.text not in cells:
                    cells.append(cell.text.strip())
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines)


def _resolve_mime_type(filename: str, mime_type: str | None) -> str:
    reported = (mime_type or "").split(";")[0].strip().lower()
    if reported in (PDF_MIME_TYPE, DOCX_MIME_TYPE):
        return reported
    if reported not in _GENERIC_MIME_TYPES:
        # text/* and anything unrecognized: best-effort plain text
        return TEXT_MIME_TYPE
    suffix = Path(filename).suffix.lower()
    return _EXTENSION_MIME_TYPES.get(suffix, TEXT_MIME_TYPE)


def _decode_text(data: bytes) -> str:
    return data.decode("utf-8-sig", errors="replace")
