"""Content-type sniffing for the documents and profiles handled by :mod:`cyanpdf`.

Only the bytes of a file are inspected; the file name and extension are never
consulted. The rules follow the freedesktop shared-mime-info magic for the two
media types we care about.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .utils import PathLike

_LOGGER = logging.getLogger("cyanpdf.filetypes")

PDF_MEDIA_TYPE = "application/pdf"
ICC_MEDIA_TYPE = "application/vnd.iccprofile"
OCTET_STREAM = "application/octet-stream"

_PDF_MAGIC = b"%PDF-"
_PDF_SEARCH_WINDOW = 1024
_ICC_MAGIC = b"acsp"
_ICC_MAGIC_OFFSET = 36


@dataclass(frozen=True)
class FileKind:
    """Result of classifying a file by its content."""

    is_pdf: bool = False
    is_icc: bool = False


def sniff_media_type(path: PathLike) -> str | None:
    """Return the media type of *path* or ``None`` if it is not a readable file."""

    file_path = Path(path)
    if not file_path.is_file():
        return None
    try:
        with file_path.open("rb") as stream:
            head = stream.read(_PDF_SEARCH_WINDOW)
    except OSError as exc:
        _LOGGER.debug("Unable to read %s for sniffing: %s", file_path, exc)
        return None

    if head[_ICC_MAGIC_OFFSET:_ICC_MAGIC_OFFSET + len(_ICC_MAGIC)] == _ICC_MAGIC:
        return ICC_MEDIA_TYPE
    if _PDF_MAGIC in head:
        return PDF_MEDIA_TYPE
    return OCTET_STREAM


def is_file_type(path: PathLike, media_type: str, *, starts_with: bool = False) -> bool:
    """Return ``True`` if the sniffed type of *path* matches *media_type*."""

    sniffed = sniff_media_type(path)
    if sniffed is None:
        return False
    return sniffed.startswith(media_type) if starts_with else sniffed == media_type


def is_pdf(path: PathLike) -> bool:
    return is_file_type(path, PDF_MEDIA_TYPE)


def is_icc(path: PathLike) -> bool:
    return is_file_type(path, ICC_MEDIA_TYPE)


def classify(path: PathLike) -> FileKind:
    """Classify *path* as PDF document and/or ICC profile."""

    sniffed = sniff_media_type(path)
    kind = FileKind(is_pdf=sniffed == PDF_MEDIA_TYPE, is_icc=sniffed == ICC_MEDIA_TYPE)
    _LOGGER.debug("Classified %s as %s (%s)", path, kind, sniffed)
    return kind


__all__ = [
    "PDF_MEDIA_TYPE",
    "ICC_MEDIA_TYPE",
    "OCTET_STREAM",
    "FileKind",
    "sniff_media_type",
    "is_file_type",
    "is_pdf",
    "is_icc",
    "classify",
]
