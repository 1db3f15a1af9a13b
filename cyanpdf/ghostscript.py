"""Description of a Ghostscript installation used by :mod:`cyanpdf`."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .utils import PathLike, resolve_path, run_subprocess

_LOGGER = logging.getLogger("cyanpdf.ghostscript")

TEMPLATE_NAME = "PDFX_def.ps"


class TemplateLayout(str, Enum):
    """Where an installation keeps its version specific ``lib`` directory."""

    # <bin>/../share/ghostscript/<version>/lib
    SHARE = "share"
    # <install root>/lib
    ROOT = "root"


@dataclass
class Ghostscript:
    """A located Ghostscript executable and the directory its resources hang off.

    ``install_dir`` is the ``bin`` directory for :attr:`TemplateLayout.SHARE`
    installs and the installation root for :attr:`TemplateLayout.ROOT`.
    """

    executable: Path
    install_dir: Path
    layout: TemplateLayout = TemplateLayout.SHARE
    reported_version: str | None = field(default=None, repr=False)

    @classmethod
    def from_executable(cls, executable: PathLike) -> "Ghostscript":
        """Build an installation from an explicit executable path."""

        path = resolve_path(executable)
        return cls(executable=path, install_dir=path.parent)

    def version(self) -> str:
        """Return the ``gs --version`` string, or ``""`` if it cannot be read."""

        if self.reported_version is None:
            self.reported_version = self._query_version()
        return self.reported_version

    def _query_version(self) -> str:
        if not self.executable.is_file():
            return ""
        try:
            completed = run_subprocess([str(self.executable), "--version"], check=False)
        except (OSError, subprocess.SubprocessError) as exc:
            _LOGGER.warning("Unable to query Ghostscript version from %s: %s", self.executable, exc)
            return ""
        if completed.returncode != 0:
            _LOGGER.warning(
                "Ghostscript at %s exited with %s when asked for its version",
                self.executable,
                completed.returncode,
            )
            return ""
        return completed.stdout.strip()

    def template_path(self, version: str | None = None) -> Path:
        """Return the location of the installed ``PDFX_def.ps`` for *version*."""

        if self.layout is TemplateLayout.ROOT:
            return self.install_dir / "lib" / TEMPLATE_NAME
        version = self.version() if version is None else version
        return self.install_dir / ".." / "share" / "ghostscript" / version / "lib" / TEMPLATE_NAME


__all__ = ["TEMPLATE_NAME", "TemplateLayout", "Ghostscript"]
