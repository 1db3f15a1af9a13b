"""Utility helpers shared by :mod:`cyanpdf` modules."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, MutableMapping, Sequence, Union

PathLike = Union[str, os.PathLike[str]]

_LOGGER = logging.getLogger("cyanpdf.utils")


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def resolve_path(path: PathLike) -> Path:
    """Resolve *path* into an absolute :class:`~pathlib.Path`."""

    resolved = Path(path).expanduser().resolve()
    _LOGGER.debug("Resolved path '%s' to '%s'", path, resolved)
    return resolved


def which(executables: Sequence[str], search_dirs: Iterable[PathLike] | None = None) -> str | None:
    """Return the first executable from *executables* found on ``PATH``.

    When *search_dirs* is given, only those directories are searched.
    """

    path = os.pathsep.join(str(directory) for directory in search_dirs) if search_dirs else None
    for candidate in executables:
        found = shutil.which(candidate, path=path)
        if found:
            _LOGGER.debug("Detected external tool: %s -> %s", candidate, found)
            return found
    return None


def run_subprocess(
    command: Sequence[str],
    *,
    env: MutableMapping[str, str] | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run *command* capturing output.

    Parameters
    ----------
    command:
        Command and arguments to execute.
    env:
        Optional environment overrides.
    check:
        Whether to raise :class:`subprocess.CalledProcessError` on non-zero exit.
    """

    _LOGGER.debug("Executing command: %s", " ".join(command))
    completed = subprocess.run(
        command,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        check=check,
        text=True,
    )
    _LOGGER.debug(
        "Command finished with exit code %s\nstdout: %s\nstderr: %s",
        completed.returncode,
        completed.stdout,
        completed.stderr,
    )
    return completed


__all__ = ["PathLike", "get_logger", "resolve_path", "which", "run_subprocess"]
