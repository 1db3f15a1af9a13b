"""Validation of conversion jobs and construction of Ghostscript arguments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from .cache import CacheKeyPolicy, patched_template
from .filetypes import is_icc, is_pdf
from .ghostscript import Ghostscript
from .profiles import ColorSpace, color_space_of
from .utils import PathLike

_LOGGER = logging.getLogger("cyanpdf.job")

OUTPUT_COLOR_SPACES = (ColorSpace.CMYK, ColorSpace.GRAY)


class RenderIntent(IntEnum):
    """Rendering intents in Ghostscript's ``-dRenderIntent`` encoding."""

    PERCEPTUAL = 0
    RELATIVE_COLORIMETRIC = 1
    SATURATION = 2
    ABSOLUTE_COLORIMETRIC = 3

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True)
class ConversionJob:
    """Everything needed to convert one PDF for print output."""

    input_pdf: Path
    output_pdf: Path
    output_icc: Path
    default_rgb: Path
    default_gray: Path
    default_cmyk: Path
    color_space: ColorSpace = ColorSpace.CMYK
    render_intent: RenderIntent = RenderIntent.RELATIVE_COLORIMETRIC
    black_point: bool = True

    @classmethod
    def create(
        cls,
        input_pdf: PathLike,
        output_pdf: PathLike,
        output_icc: PathLike,
        default_rgb: PathLike,
        default_gray: PathLike,
        default_cmyk: PathLike,
        *,
        color_space: ColorSpace = ColorSpace.CMYK,
        render_intent: RenderIntent | int = RenderIntent.RELATIVE_COLORIMETRIC,
        black_point: bool = True,
    ) -> "ConversionJob":
        return cls(
            input_pdf=Path(input_pdf),
            output_pdf=Path(output_pdf),
            output_icc=Path(output_icc),
            default_rgb=Path(default_rgb),
            default_gray=Path(default_gray),
            default_cmyk=Path(default_cmyk),
            color_space=ColorSpace(color_space),
            render_intent=RenderIntent(render_intent),
            black_point=black_point,
        )


def _color_model(color_space: ColorSpace) -> str:
    return "CMYK" if color_space is ColorSpace.CMYK else "GRAY"


def _profiles_match(job: ConversionJob) -> bool:
    expected = (
        (job.default_rgb, ColorSpace.RGB),
        (job.default_gray, ColorSpace.GRAY),
        (job.default_cmyk, ColorSpace.CMYK),
        (job.output_icc, job.color_space),
    )
    for profile, color_space in expected:
        actual = color_space_of(profile)
        if actual is not color_space:
            _LOGGER.debug("Profile %s is %s, expected %s", profile, actual.value, color_space.value)
            return False
    return True


def build_args(
    job: ConversionJob,
    ghostscript: Ghostscript | None,
    *,
    cache_dir: PathLike | None = None,
    policy: CacheKeyPolicy = CacheKeyPolicy.DOCUMENT,
) -> list[str]:
    """Return the Ghostscript argument list for *job*, or ``[]`` if it is invalid.

    The PDF/X template is patched before the profiles are checked, so a cache
    entry may be written even for a job that is refused. The trailing
    template and input arguments are positional and must stay last.
    """

    template = patched_template(job.input_pdf, job.output_icc, ghostscript, cache_dir=cache_dir, policy=policy)
    return assemble_args(job, template)


def assemble_args(job: ConversionJob, template: PathLike | None) -> list[str]:
    """Validate *job* and return its arguments using an already patched *template*."""

    if template is None or not Path(template).is_file():
        _LOGGER.debug("No PDF/X template for %s", job.input_pdf)
        return []

    profiles = (job.default_rgb, job.default_gray, job.default_cmyk, job.output_icc)
    if not all(is_icc(profile) for profile in profiles):
        _LOGGER.debug("Job %s references a file that is not an ICC profile", job)
        return []
    if not is_pdf(job.input_pdf):
        _LOGGER.debug("Job input %s is not a PDF", job.input_pdf)
        return []
    if job.color_space not in OUTPUT_COLOR_SPACES:
        _LOGGER.debug("Unsupported output color space %s", job.color_space.value)
        return []
    if not _profiles_match(job):
        return []

    model = _color_model(job.color_space)
    return [
        "-dPDFX",
        "-dBATCH",
        "-dNOPAUSE",
        "-dNOSAFER",
        "-sDEVICE=pdfwrite",
        "-dOverrideICC=true",
        "-dEncodeColorImages=true",
        "-dEmbedAllFonts=true",
        f"-sProcessColorModel=Device{model}",
        f"-sColorConversionStrategy={model}",
        f"-sColorConversionStrategyForImages={model}",
        f"-dRenderIntent={int(job.render_intent)}",
        f"-dPreserveBlack={'true' if job.black_point else 'false'}",
        f"-sDefaultRGBProfile={job.default_rgb}",
        f"-sDefaultGrayProfile={job.default_gray}",
        f"-sDefaultCMYKProfile={job.default_cmyk}",
        f"-sOutputICCProfile={job.output_icc}",
        f"-sOutputFile={job.output_pdf}",
        str(template),
        str(job.input_pdf),
    ]


__all__ = ["OUTPUT_COLOR_SPACES", "RenderIntent", "ConversionJob", "build_args", "assemble_args"]
