"""
Cyan PDF - prepare PDF documents for CMYK and grayscale print output.

Ghostscript performs the conversion; this package classifies ICC profiles,
patches Ghostscript's PDF/X definition file with the output profile and
builds the validated Ghostscript argument list.

Quick Start:
    >>> from cyanpdf import ConversionJob, build_args, current_platform
    >>> job = ConversionJob.create("in.pdf", "out.pdf", "coated.icc",
    ...                            "srgb.icc", "gray.icc", "coated.icc")
    >>> args = build_args(job, current_platform().find_ghostscript())

For CLI usage, use the 'cyanpdf' command after installation.
"""

__version__ = "1.0.0"

from cyanpdf.cache import CacheKeyPolicy, cache_directory, patched_template
from cyanpdf.converter import ConversionResult, convert_pdf
from cyanpdf.exceptions import (
    ConversionFailedError,
    CyanPDFError,
    GhostscriptNotFoundError,
    InvalidInputError,
    JobRefusedError,
    TemplateError,
)
from cyanpdf.filetypes import FileKind, classify, is_icc, is_pdf
from cyanpdf.fingerprint import fingerprint
from cyanpdf.ghostscript import Ghostscript, TemplateLayout
from cyanpdf.info import PDFInfo, get_pdf_info
from cyanpdf.job import ConversionJob, RenderIntent, assemble_args, build_args
from cyanpdf.platforms import Platform, current_platform
from cyanpdf.profiles import ColorSpace, ICCProfile, color_space_of, describe, find_profiles, load_profile

__all__ = [
    # Core
    "ColorSpace",
    "ICCProfile",
    "RenderIntent",
    "ConversionJob",
    "FileKind",
    "CacheKeyPolicy",
    "classify",
    "is_pdf",
    "is_icc",
    "color_space_of",
    "describe",
    "load_profile",
    "find_profiles",
    "fingerprint",
    "patched_template",
    "cache_directory",
    "build_args",
    "assemble_args",
    # Environment and execution
    "Ghostscript",
    "TemplateLayout",
    "Platform",
    "current_platform",
    "ConversionResult",
    "convert_pdf",
    "PDFInfo",
    "get_pdf_info",
    # Exceptions
    "CyanPDFError",
    "InvalidInputError",
    "GhostscriptNotFoundError",
    "TemplateError",
    "JobRefusedError",
    "ConversionFailedError",
    "__version__",
]
