"""ICC profile inspection built on Pillow's littleCMS bindings."""

from __future__ import annotations

import io
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from PIL import ImageCms

from .filetypes import is_icc
from .platforms import current_platform
from .utils import PathLike

_LOGGER = logging.getLogger("cyanpdf.profiles")


class ColorSpace(str, Enum):
    """Color spaces relevant for print conversion."""

    RGB = "RGB"
    CMYK = "CMYK"
    GRAY = "GRAY"
    UNKNOWN = "Unknown"


# Header color space signatures, see ICC.1 section 7.2.6.
_SIGNATURES: dict[str, ColorSpace] = {
    "RGB": ColorSpace.RGB,
    "CMYK": ColorSpace.CMYK,
    "GRAY": ColorSpace.GRAY,
}

PREFERRED_PROFILES: dict[ColorSpace, tuple[str, ...]] = {
    ColorSpace.RGB: ("Adobe RGB (1998)", "sRGB", "Artifex PS RGB Profile"),
    ColorSpace.CMYK: ("ISO Coated v2 (ECI)", "U.S. Web Coated (SWOP) v2", "Artifex PS CMYK Profile"),
    ColorSpace.GRAY: ("Gray", "Artifex PS Gray Profile"),
}

PROFILE_PATTERN = "*.icc"


@dataclass(frozen=True)
class ICCProfile:
    """An ICC profile on disk together with its derived attributes."""

    path: Path
    color_space: ColorSpace
    description: str

    def __str__(self) -> str:
        return self.description


@contextmanager
def open_profile(path: PathLike) -> Iterator[ImageCms.ImageCmsProfile]:
    """Open the profile at *path* read-only for the duration of the block.

    The file is read and closed before littleCMS parses it; the parsed
    profile is released when the block exits.
    """

    with open(path, "rb") as stream:
        data = stream.read()
    profile = ImageCms.getOpenProfile(io.BytesIO(data))
    try:
        yield profile
    finally:
        del profile


def color_space_of(path: PathLike) -> ColorSpace:
    """Return the :class:`ColorSpace` declared in the header of the profile at *path*."""

    if not is_icc(path):
        return ColorSpace.UNKNOWN
    try:
        with open_profile(path) as profile:
            signature = profile.profile.xcolor_space
    except (OSError, ImageCms.PyCMSError) as exc:
        _LOGGER.debug("Unable to open ICC profile %s: %s", path, exc)
        return ColorSpace.UNKNOWN
    return _SIGNATURES.get(signature.strip(), ColorSpace.UNKNOWN)


def describe(path: PathLike) -> str:
    """Return the English description of the profile at *path*.

    Profiles without a usable description are described by their path. Files
    that are not ICC profiles yield an empty string.
    """

    if not is_icc(path):
        return ""
    description = ""
    try:
        with open_profile(path) as profile:
            description = (profile.profile.profile_description or "").strip()
    except (OSError, ImageCms.PyCMSError) as exc:
        _LOGGER.debug("Unable to read description of %s: %s", path, exc)
    return description or str(path)


def load_profile(path: PathLike) -> ICCProfile | None:
    if not is_icc(path):
        return None
    return ICCProfile(path=Path(path), color_space=color_space_of(path), description=describe(path))


def _iter_profile_files(roots: Iterable[Path]) -> Iterator[Path]:
    for root in roots:
        if not root.is_dir():
            continue
        for candidate in root.rglob(PROFILE_PATTERN):
            if candidate.is_file() and os.access(candidate, os.R_OK):
                yield candidate.resolve()


def find_profiles(color_space: ColorSpace, roots: Iterable[PathLike] | None = None) -> list[Path]:
    """Return installed profiles under *roots* whose color space is *color_space*.

    When *roots* is omitted the profile directories of the current platform
    are searched.
    """

    if roots is None:
        search_roots = current_platform().profile_dirs()
    else:
        search_roots = [Path(root) for root in roots]

    matches = sorted({path for path in _iter_profile_files(search_roots) if color_space_of(path) is color_space})
    _LOGGER.debug("Found %d %s profiles under %s", len(matches), color_space.value, search_roots)
    return matches


def pick_default(profiles: Iterable[PathLike], preferred: Sequence[str]) -> Path | None:
    """Return the first of *profiles* described by a name in *preferred*, in preference order."""

    by_description: dict[str, Path] = {}
    for profile in profiles:
        by_description.setdefault(describe(profile), Path(profile))
    for name in preferred:
        if name in by_description:
            return by_description[name]
    return None


__all__ = [
    "ColorSpace",
    "ICCProfile",
    "PREFERRED_PROFILES",
    "open_profile",
    "color_space_of",
    "describe",
    "load_profile",
    "find_profiles",
    "pick_default",
]
