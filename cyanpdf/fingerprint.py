"""Content fingerprints used to key cached conversion templates."""

from __future__ import annotations

import hashlib
import logging

from .filetypes import is_pdf
from .utils import PathLike

_LOGGER = logging.getLogger("cyanpdf.fingerprint")

_CHUNK_SIZE = 1024 * 1024


def fingerprint(path: PathLike) -> str:
    """Return the lowercase SHA-256 hex digest of the PDF at *path*.

    An empty string is returned when *path* is not a PDF or cannot be read.
    """

    if not is_pdf(path):
        return ""
    digest = hashlib.sha256()
    try:
        with open(path, "rb") as stream:
            for chunk in iter(lambda: stream.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        _LOGGER.warning("Unable to fingerprint %s: %s", path, exc)
        return ""
    return digest.hexdigest()


__all__ = ["fingerprint"]
