"""Document information shown before converting a PDF."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from .exceptions import InvalidInputError
from .filetypes import is_pdf
from .utils import PathLike, resolve_path

_LOGGER = logging.getLogger("cyanpdf.info")


@dataclass(frozen=True)
class PDFInfo:
    """Summary information describing a PDF document."""

    path: Path
    title: str
    num_pages: int
    subject: Optional[str] = None
    author: Optional[str] = None
    producer: Optional[str] = None
    creator: Optional[str] = None


def _text(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def get_pdf_info(path: PathLike) -> PDFInfo:
    """Return :class:`PDFInfo` for the PDF located at *path*.

    The title falls back to the file name when the document has none.
    """

    pdf_path = resolve_path(path)
    if not is_pdf(pdf_path):
        raise InvalidInputError(f"Not a PDF document: {pdf_path}")
    try:
        reader = PdfReader(str(pdf_path))
        metadata = reader.metadata or {}
        num_pages = len(reader.pages)
    except (PyPdfError, OSError, ValueError) as exc:
        _LOGGER.error("Failed to read PDF %s: %s", pdf_path, exc)
        raise InvalidInputError(f"Unable to read PDF: {pdf_path}") from exc

    info = PDFInfo(
        path=pdf_path,
        title=_text(metadata.get("/Title")) or pdf_path.name,
        num_pages=num_pages,
        subject=_text(metadata.get("/Subject")),
        author=_text(metadata.get("/Author")),
        producer=_text(metadata.get("/Producer")),
        creator=_text(metadata.get("/Creator")),
    )
    _LOGGER.debug("PDF info for %s: %s", pdf_path, info)
    return info


__all__ = ["PDFInfo", "get_pdf_info"]
