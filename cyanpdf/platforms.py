"""Operating system specific discovery of Ghostscript, ICC profiles and caches.

Each supported operating system registers a :class:`Platform` variant; the
rest of the package asks :func:`current_platform` once and never branches on
``sys.platform`` itself.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Dict, Iterable, Sequence

from .ghostscript import Ghostscript, TemplateLayout
from .utils import which

_LOGGER = logging.getLogger("cyanpdf.platforms")


class Platform:
    """Capabilities the conversion core needs from the host system."""

    name: str
    ghostscript_names: Sequence[str] = ("gs",)

    def find_ghostscript(self) -> Ghostscript | None:  # pragma: no cover - overridden
        raise NotImplementedError

    def system_profile_dirs(self) -> list[Path]:  # pragma: no cover - overridden
        raise NotImplementedError

    def cache_location(self) -> Path | None:  # pragma: no cover - overridden
        raise NotImplementedError

    def profile_dirs(self) -> list[Path]:
        """Return every directory searched for installed ICC profiles."""

        return [*self.system_profile_dirs(), Path.home() / ".color" / "icc"]


class PlatformRegistry:
    """Registry storing available platform variants."""

    def __init__(self) -> None:
        self._platforms: Dict[str, type[Platform]] = {}

    def register(self, name: str, platform_class: type[Platform]) -> None:
        if name in self._platforms:
            raise ValueError(f"Platform '{name}' is already registered")
        self._platforms[name] = platform_class

    def create(self, name: str) -> Platform:
        try:
            platform_class = self._platforms[name]
        except KeyError as exc:
            raise KeyError(f"Platform '{name}' is not registered") from exc
        return platform_class()

    def names(self) -> Iterable[str]:
        return sorted(self._platforms.keys())


registry = PlatformRegistry()


def register_platform(name: str):
    def decorator(cls: type[Platform]) -> type[Platform]:
        cls.name = name
        registry.register(name, cls)
        return cls

    return decorator


def _env_path(name: str) -> Path | None:
    value = os.environ.get(name, "").strip()
    return Path(value) if value else None


@register_platform("linux")
class LinuxPlatform(Platform):
    """Freedesktop conventions: XDG base directories and ``gs`` on ``PATH``."""

    fallback_bin_dirs = ("/opt/local/bin", "/usr/local/bin")

    def find_ghostscript(self) -> Ghostscript | None:
        found = which(self.ghostscript_names)
        if found is None:
            found = which(self.ghostscript_names, search_dirs=self.fallback_bin_dirs)
        if found is None:
            _LOGGER.debug("Ghostscript executable not found")
            return None
        return Ghostscript.from_executable(found)

    def data_dirs(self) -> list[Path]:
        data_home = _env_path("XDG_DATA_HOME") or Path.home() / ".local" / "share"
        data_dirs = os.environ.get("XDG_DATA_DIRS", "").strip() or "/usr/local/share:/usr/share"
        return [data_home, *(Path(entry) for entry in data_dirs.split(":") if entry)]

    def system_profile_dirs(self) -> list[Path]:
        return [directory / "color" / "icc" for directory in self.data_dirs()]

    def cache_location(self) -> Path | None:
        return _env_path("XDG_CACHE_HOME") or Path.home() / ".cache"


@register_platform("darwin")
class MacPlatform(LinuxPlatform):
    """macOS keeps profiles in ColorSync folders and caches under ``~/Library``."""

    def system_profile_dirs(self) -> list[Path]:
        return [
            Path("/Library/ColorSync/Profiles"),
            Path.home() / "Library" / "ColorSync" / "Profiles",
        ]

    def cache_location(self) -> Path | None:
        return Path.home() / "Library" / "Caches"


@register_platform("win32")
class WindowsPlatform(Platform):
    """Windows installs ship ``gswin64c.exe``/``gswin32c.exe`` under an install root."""

    ghostscript_names = ("gswin64c.exe", "gswin32c.exe")

    def bundled_root(self) -> Path:
        return Path(sys.executable).resolve().parent / "gs"

    def install_roots(self) -> list[Path]:
        roots = [self.bundled_root()]
        program_files = _env_path("PROGRAMFILES")
        if program_files is not None and (program_files / "gs").is_dir():
            roots.extend(sorted(path for path in (program_files / "gs").iterdir() if path.is_dir()))
        return roots

    def find_ghostscript(self) -> Ghostscript | None:
        for root in self.install_roots():
            for name in self.ghostscript_names:
                candidate = root / "bin" / name
                if candidate.is_file():
                    return Ghostscript(executable=candidate, install_dir=root, layout=TemplateLayout.ROOT)
        _LOGGER.debug("Ghostscript executable not found")
        return None

    def system_profile_dirs(self) -> list[Path]:
        system_root = _env_path("SystemRoot") or Path("C:/Windows")
        return [system_root / "System32" / "spool" / "drivers" / "color"]

    def cache_location(self) -> Path | None:
        local = _env_path("LOCALAPPDATA")
        return local / "cache" if local is not None else None


def current_platform() -> Platform:
    """Return the :class:`Platform` variant matching the running interpreter."""

    if sys.platform.startswith("win"):
        return registry.create("win32")
    if sys.platform == "darwin":
        return registry.create("darwin")
    return registry.create("linux")


__all__ = [
    "Platform",
    "PlatformRegistry",
    "registry",
    "register_platform",
    "LinuxPlatform",
    "MacPlatform",
    "WindowsPlatform",
    "current_platform",
]
