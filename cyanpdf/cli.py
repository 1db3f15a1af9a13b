"""
Command-line interface for cyanpdf.
"""

from __future__ import annotations

import logging
import shlex
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cyanpdf import __version__
from cyanpdf.cache import CacheKeyPolicy, cache_directory
from cyanpdf.converter import convert_pdf
from cyanpdf.exceptions import ConversionFailedError, CyanPDFError, JobRefusedError
from cyanpdf.filetypes import classify, is_icc
from cyanpdf.ghostscript import Ghostscript
from cyanpdf.info import get_pdf_info
from cyanpdf.job import ConversionJob, RenderIntent, build_args
from cyanpdf.platforms import current_platform
from cyanpdf.profiles import PREFERRED_PROFILES, ColorSpace, color_space_of, describe, find_profiles, pick_default
from cyanpdf.settings import SettingsStore
from cyanpdf.utils import get_logger

console = Console()

INTENT_CHOICES = {
    "0": RenderIntent.PERCEPTUAL,
    "1": RenderIntent.RELATIVE_COLORIMETRIC,
    "2": RenderIntent.SATURATION,
    "3": RenderIntent.ABSOLUTE_COLORIMETRIC,
    "perceptual": RenderIntent.PERCEPTUAL,
    "relative": RenderIntent.RELATIVE_COLORIMETRIC,
    "saturation": RenderIntent.SATURATION,
    "absolute": RenderIntent.ABSOLUTE_COLORIMETRIC,
}

COLOR_SPACE_CHOICES = {
    "rgb": ColorSpace.RGB,
    "cmyk": ColorSpace.CMYK,
    "gray": ColorSpace.GRAY,
}


def _fail(message: str) -> NoReturn:
    console.print(f"\n[bold red]✗ Error:[/bold red] {escape(message)}")
    sys.exit(1)


def _choose_profile(
    explicit: Path | None,
    remembered: str | None,
    color_space: ColorSpace,
    roots: tuple[Path, ...],
) -> Path | None:
    if explicit is not None:
        return explicit.resolve()
    if remembered and is_icc(remembered):
        return Path(remembered)
    return pick_default(find_profiles(color_space, roots or None), PREFERRED_PROFILES[color_space])


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--settings-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="CYANPDF_SETTINGS",
    help="Settings file to read and update",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, settings_file: Path | None) -> None:
    """
    Cyan PDF - Convert PDF documents to CMYK or grayscale for print.
    """
    logger = get_logger("cyanpdf")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    store = SettingsStore(settings_file)
    store.load()
    ctx.obj = store


@cli.command(name="convert")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_pdf", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--output-profile", "-o", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Output (CMYK or GRAY) ICC profile")
@click.option("--rgb", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Default RGB profile")
@click.option("--cmyk", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Default CMYK profile")
@click.option("--gray", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Default GRAY profile")
@click.option("--color-space", type=click.Choice(["cmyk", "gray"]),
              help="Target color space (defaults to the output profile's)")
@click.option("--intent", "-i", type=click.Choice(list(INTENT_CHOICES)), help="Rendering intent")
@click.option("--black-point/--no-black-point", default=None, help="Preserve black point")
@click.option("--gs", "gs_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Ghostscript executable to use")
@click.option("--profile-dir", "profile_dirs", multiple=True, type=click.Path(file_okay=False, path_type=Path),
              help="Directory searched for default profiles (repeatable)")
@click.option("--cache-dir", type=click.Path(file_okay=False, path_type=Path), help="Template cache directory")
@click.option("--cache-key", type=click.Choice([policy.value for policy in CacheKeyPolicy]),
              help="Name cache entries by document only or by document and profile")
@click.option("--dry-run", is_flag=True, help="Print the Ghostscript command without running it")
@click.option("--open", "open_result", is_flag=True, help="Open the converted PDF when done")
@click.pass_obj
def convert(
    store: SettingsStore,
    input_pdf: Path,
    output_pdf: Path,
    output_profile: Path | None,
    rgb: Path | None,
    cmyk: Path | None,
    gray: Path | None,
    color_space: str | None,
    intent: str | None,
    black_point: bool | None,
    gs_path: Path | None,
    profile_dirs: tuple[Path, ...],
    cache_dir: Path | None,
    cache_key: str | None,
    dry_run: bool,
    open_result: bool,
) -> None:
    """
    Convert INPUT_PDF into a PDF/X document at OUTPUT_PDF.

    Examples:

        cyanpdf convert input.pdf print.pdf

        cyanpdf convert input.pdf print.pdf -o ISOcoated_v2_eci.icc --intent perceptual
    """
    settings = store.settings
    default_rgb = _choose_profile(rgb, settings.rgb, ColorSpace.RGB, profile_dirs)
    default_cmyk = _choose_profile(cmyk, settings.cmyk, ColorSpace.CMYK, profile_dirs)
    default_gray = _choose_profile(gray, settings.gray, ColorSpace.GRAY, profile_dirs)
    output_icc = output_profile.resolve() if output_profile else None
    if output_icc is None:
        output_icc = Path(settings.output) if settings.output and is_icc(settings.output) else default_cmyk

    target = COLOR_SPACE_CHOICES[color_space] if color_space else color_space_of(output_icc or "")
    render_intent = INTENT_CHOICES[intent] if intent else RenderIntent(settings.intent)
    preserve_black = settings.black_point if black_point is None else black_point
    policy = CacheKeyPolicy(cache_key or settings.cache_key)

    job = ConversionJob.create(
        input_pdf=input_pdf.resolve(),
        output_pdf=output_pdf.expanduser().resolve(),
        output_icc=output_icc or "",
        default_rgb=default_rgb or "",
        default_gray=default_gray or "",
        default_cmyk=default_cmyk or "",
        color_space=target,
        render_intent=render_intent,
        black_point=preserve_black,
    )
    ghostscript = Ghostscript.from_executable(gs_path) if gs_path else current_platform().find_ghostscript()

    try:
        if dry_run:
            arguments = build_args(job, ghostscript, cache_dir=cache_dir, policy=policy)
            if not arguments:
                raise JobRefusedError()
            executable = str(ghostscript.executable) if ghostscript else "gs"
            click.echo(shlex.join([executable, *arguments]))
            return

        console.print(f"\n[bold cyan]Converting {escape(input_pdf.name)}...[/bold cyan]")
        result = convert_pdf(job, ghostscript, cache_dir=cache_dir, policy=policy)
    except ConversionFailedError as exc:
        console.print(f"\n[bold red]✗ Error:[/bold red] {escape(str(exc))}")
        if exc.output:
            console.print(exc.output, markup=False, highlight=False)
        sys.exit(1)
    except CyanPDFError as exc:
        _fail(str(exc))

    store.update(
        rgb=str(job.default_rgb),
        cmyk=str(job.default_cmyk),
        gray=str(job.default_gray),
        output=str(job.output_icc),
        intent=int(job.render_intent),
        black_point=job.black_point,
        cache_key=policy.value,
    )

    console.print(f"\n[bold green]✓ Successfully created:[/bold green] {escape(str(result.output_path))}")
    console.print()
    if open_result:
        click.launch(str(result.output_path))


@cli.command(name="profiles")
@click.option("--color-space", "-c", "color_spaces", multiple=True, type=click.Choice(list(COLOR_SPACE_CHOICES)),
              help="Only list profiles of this color space (repeatable)")
@click.option("--profile-dir", "profile_dirs", multiple=True, type=click.Path(file_okay=False, path_type=Path),
              help="Directory to search instead of the system locations (repeatable)")
def list_profiles(color_spaces: tuple[str, ...], profile_dirs: tuple[Path, ...]) -> None:
    """
    List installed ICC profiles usable for conversion.
    """
    selected = [COLOR_SPACE_CHOICES[name] for name in color_spaces] or list(COLOR_SPACE_CHOICES.values())

    table = Table(title="ICC Profiles")
    table.add_column("Color Space", style="cyan", no_wrap=True)
    table.add_column("Description", style="green")
    table.add_column("Path", style="dim")

    count = 0
    for color_space in selected:
        for profile in find_profiles(color_space, profile_dirs or None):
            table.add_row(color_space.value, escape(describe(profile)), escape(str(profile)))
            count += 1

    if count == 0:
        console.print("\n[bold yellow]⚠ No ICC profiles found[/bold yellow]")
        return
    console.print()
    console.print(table)
    console.print()


@cli.command(name="identify")
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
def identify(files: tuple[Path, ...]) -> None:
    """
    Show whether FILES are PDF documents or ICC profiles.
    """
    table = Table(title="File Types")
    table.add_column("File", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Color Space")
    table.add_column("Description")

    for path in files:
        kind = classify(path)
        if kind.is_icc:
            table.add_row(escape(str(path)), "ICC profile", color_space_of(path).value, escape(describe(path)))
        elif kind.is_pdf:
            table.add_row(escape(str(path)), "PDF document", "", "")
        else:
            table.add_row(escape(str(path)), "unknown", "", "")

    console.print()
    console.print(table)
    console.print()


@cli.command(name="info")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def show_info(input_pdf: Path) -> None:
    """
    Display information about a PDF file.
    """
    try:
        info = get_pdf_info(input_pdf)
    except CyanPDFError as exc:
        _fail(str(exc))

    table = Table(title=f"PDF Information: {escape(input_pdf.name)}", show_header=False)
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("Title", escape(info.title))
    for label, value in (
        ("Subject", info.subject),
        ("Author", info.author),
        ("Producer", info.producer),
        ("Creator", info.creator),
    ):
        if value:
            table.add_row(label, escape(value))
    table.add_row("Pages", str(info.num_pages))

    console.print()
    console.print(table)
    console.print()


@cli.command(name="cache-dir")
def show_cache_dir() -> None:
    """
    Print the directory holding patched PDF/X templates.
    """
    directory = cache_directory()
    if directory is None:
        _fail("Unable to create the cache directory.")
    click.echo(str(directory))


if __name__ == "__main__":
    cli()
