"""Custom exception types for :mod:`cyanpdf`.

The core helpers report precondition failures with empty results; these
exceptions are raised by the conversion layer that turns such results into
user-facing errors.
"""

from __future__ import annotations


class CyanPDFError(Exception):
    """Base exception for all cyanpdf related errors."""


class InvalidInputError(CyanPDFError):
    """Raised when a document or profile supplied by the user is missing or of the wrong type."""


class GhostscriptNotFoundError(CyanPDFError):
    """Raised when no usable Ghostscript installation could be found."""

    def __init__(self, message: str = "Ghostscript not found, please install.") -> None:
        super().__init__(message)


class TemplateError(CyanPDFError):
    """Raised when the patched PDF/X definition file cannot be produced."""

    def __init__(self, message: str = "Unable to create postscript file.") -> None:
        super().__init__(message)


class JobRefusedError(CyanPDFError):
    """Raised when the conversion job fails validation and no arguments were built."""

    def __init__(self, message: str = "Unable to generate Ghostscript arguments.") -> None:
        super().__init__(message)


class ConversionFailedError(CyanPDFError):
    """Raised when Ghostscript ran but exited with a non-zero status."""

    def __init__(self, returncode: int, output: str) -> None:
        self.returncode = returncode
        self.output = output
        super().__init__(f"Failed converting PDF (exit code {returncode}).")


__all__ = [
    "CyanPDFError",
    "InvalidInputError",
    "GhostscriptNotFoundError",
    "TemplateError",
    "JobRefusedError",
    "ConversionFailedError",
]
