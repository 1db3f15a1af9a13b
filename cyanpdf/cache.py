"""Cache of PDF/X definition files patched with a conversion's output profile.

Ghostscript's ``PDFX_def.ps`` names the output intent profile in a single
``/ICCProfile (...) def`` statement. Every conversion rewrites that statement
and stores the result under the cache directory, named after the source
document's fingerprint.
"""

from __future__ import annotations

import hashlib
import logging
import re
import tempfile
from enum import Enum
from pathlib import Path

from .filetypes import is_icc, is_pdf
from .fingerprint import fingerprint
from .ghostscript import Ghostscript
from .platforms import Platform, current_platform
from .utils import PathLike, resolve_path

_LOGGER = logging.getLogger("cyanpdf.cache")

CACHE_SUBDIR = "cyanpdf"
_ICC_PROFILE_STATEMENT = re.compile(r"/ICCProfile \([^)]*\) def")
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class CacheKeyPolicy(str, Enum):
    """How cache entries are named."""

    # One entry per source document; a new output profile overwrites it.
    DOCUMENT = "document"
    # One entry per (source document, output profile) pair.
    DOCUMENT_AND_PROFILE = "document-profile"


def cache_directory(platform: Platform | None = None) -> Path | None:
    """Return the cyanpdf cache directory, creating it if needed."""

    platform = platform or current_platform()
    base = platform.cache_location()
    if base is None:
        base = Path(tempfile.gettempdir())
    directory = base / CACHE_SUBDIR
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        _LOGGER.warning("Unable to create cache directory %s: %s", directory, exc)
        return None
    return directory


def _postscript_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def patch_template(content: str, profile: PathLike) -> str | None:
    """Point the ``/ICCProfile`` statement in *content* at *profile*.

    Returns ``None`` when *content* has no such statement.
    """

    statement = f"/ICCProfile ({_postscript_string(str(profile))}) def"
    patched, count = _ICC_PROFILE_STATEMENT.subn(lambda _match: statement, content)
    if count == 0:
        _LOGGER.warning("No /ICCProfile statement found in PDF/X template")
        return None
    if count > 1:
        _LOGGER.warning("PDF/X template declares /ICCProfile %d times, all were replaced", count)
    return patched


def cache_key(pdf_path: PathLike, profile: PathLike, policy: CacheKeyPolicy = CacheKeyPolicy.DOCUMENT) -> str:
    """Return the cache entry name for *pdf_path* converted with *profile*."""

    document_key = fingerprint(pdf_path)
    if not document_key or policy is CacheKeyPolicy.DOCUMENT:
        return document_key
    combined = f"{document_key}\n{resolve_path(profile)}"
    return hashlib.sha256(combined.encode(_ENCODING, _ERRORS)).hexdigest()


def read_template(ghostscript: Ghostscript | None) -> str:
    """Return the installed PDF/X template of *ghostscript*, or ``""``."""

    if ghostscript is None or not ghostscript.install_dir.is_dir():
        _LOGGER.debug("Ghostscript installation not available")
        return ""
    version = ghostscript.version()
    if not version:
        _LOGGER.debug("Ghostscript version unavailable for %s", ghostscript.executable)
        return ""
    template = ghostscript.template_path(version)
    try:
        with template.open("r", encoding=_ENCODING, errors=_ERRORS, newline="") as stream:
            return stream.read()
    except OSError as exc:
        _LOGGER.warning("Unable to read PDF/X template %s: %s", template, exc)
        return ""


def patched_template(
    pdf_path: PathLike,
    profile: PathLike,
    ghostscript: Ghostscript | None,
    *,
    cache_dir: PathLike | None = None,
    policy: CacheKeyPolicy = CacheKeyPolicy.DOCUMENT,
) -> Path | None:
    """Write the PDF/X template patched for *profile* and return its path.

    ``None`` is returned if any input is invalid, the template is missing or
    the cache entry cannot be written.
    """

    if not is_pdf(pdf_path) or not is_icc(profile):
        _LOGGER.debug("Refusing to patch template for %s with %s", pdf_path, profile)
        return None

    content = read_template(ghostscript)
    if not content:
        return None

    patched = patch_template(content, resolve_path(profile))
    if patched is None:
        return None

    directory = Path(cache_dir) if cache_dir is not None else cache_directory()
    if directory is None:
        return None
    key = cache_key(pdf_path, profile, policy)
    if not key:
        return None

    output = directory / f"{key}.ps"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with output.open("w", encoding=_ENCODING, errors=_ERRORS, newline="") as stream:
            stream.write(patched)
    except OSError as exc:
        _LOGGER.warning("Unable to write patched template %s: %s", output, exc)
        return None
    _LOGGER.debug("Patched PDF/X template written to %s", output)
    return output


__all__ = [
    "CACHE_SUBDIR",
    "CacheKeyPolicy",
    "cache_directory",
    "patch_template",
    "cache_key",
    "read_template",
    "patched_template",
]
