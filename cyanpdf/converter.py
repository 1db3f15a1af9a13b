"""Run validated conversion jobs through Ghostscript."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from .cache import CacheKeyPolicy, patched_template
from .exceptions import (
    ConversionFailedError,
    GhostscriptNotFoundError,
    InvalidInputError,
    JobRefusedError,
    TemplateError,
)
from .filetypes import is_icc, is_pdf
from .ghostscript import Ghostscript
from .job import ConversionJob, assemble_args
from .utils import PathLike, run_subprocess

_LOGGER = logging.getLogger("cyanpdf.converter")

Runner = Callable[[Sequence[str]], "subprocess.CompletedProcess[str]"]


@dataclass(frozen=True)
class ConversionResult:
    """Represents the outcome of a successful conversion."""

    input_path: Path
    output_path: Path
    arguments: list[str]
    output: str


def _run(command: Sequence[str]) -> subprocess.CompletedProcess[str]:
    return run_subprocess(command, check=False)


def _check_inputs(job: ConversionJob) -> None:
    if not str(job.output_pdf).strip():
        raise InvalidInputError("Missing output filename.")
    if not is_pdf(job.input_pdf):
        raise InvalidInputError("No PDF document loaded.")
    profiles = (
        (job.default_rgb, "Missing default RGB profile."),
        (job.default_cmyk, "Missing default CMYK profile."),
        (job.default_gray, "Missing default GRAY profile."),
        (job.output_icc, "Missing output (CMYK/GRAY) profile."),
    )
    for profile, message in profiles:
        if not is_icc(profile):
            raise InvalidInputError(message)


def convert_pdf(
    job: ConversionJob,
    ghostscript: Ghostscript | None,
    *,
    cache_dir: PathLike | None = None,
    policy: CacheKeyPolicy = CacheKeyPolicy.DOCUMENT,
    runner: Runner | None = None,
) -> ConversionResult:
    """Convert ``job.input_pdf`` into ``job.output_pdf`` using *ghostscript*.

    Raises a :class:`~cyanpdf.exceptions.CyanPDFError` subclass describing the
    first problem found. Ghostscript runs once and to completion; its captured
    output is attached to :class:`ConversionFailedError` on a non-zero exit.
    """

    _check_inputs(job)

    if ghostscript is None or not ghostscript.executable.is_file() or not ghostscript.version():
        raise GhostscriptNotFoundError()

    template = patched_template(job.input_pdf, job.output_icc, ghostscript, cache_dir=cache_dir, policy=policy)
    if template is None or not template.is_file():
        raise TemplateError()

    arguments = assemble_args(job, template)
    if not arguments:
        raise JobRefusedError()

    _LOGGER.info("Converting %s to %s", job.input_pdf, job.output_pdf)
    try:
        completed = (runner or _run)([str(ghostscript.executable), *arguments])
    except OSError as exc:
        raise ConversionFailedError(-1, str(exc)) from exc

    output = "".join(part for part in (completed.stdout, completed.stderr) if part)
    if completed.returncode != 0:
        _LOGGER.warning("Ghostscript exited with %s converting %s", completed.returncode, job.input_pdf)
        raise ConversionFailedError(completed.returncode, output)

    _LOGGER.info("Converted %s to %s", job.input_pdf, job.output_pdf)
    return ConversionResult(
        input_path=job.input_pdf,
        output_path=job.output_pdf,
        arguments=arguments,
        output=output,
    )


__all__ = ["ConversionResult", "Runner", "convert_pdf"]
