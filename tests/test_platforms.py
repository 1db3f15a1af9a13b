from __future__ import annotations

import sys
from pathlib import Path

import pytest

from cyanpdf.ghostscript import TemplateLayout
from cyanpdf.platforms import (
    LinuxPlatform,
    MacPlatform,
    Platform,
    PlatformRegistry,
    WindowsPlatform,
    current_platform,
    registry,
)


@pytest.mark.parametrize(
    ("platform_name", "expected"),
    [("linux", LinuxPlatform), ("darwin", MacPlatform), ("win32", WindowsPlatform), ("freebsd13", LinuxPlatform)],
)
def test_current_platform(monkeypatch: pytest.MonkeyPatch, platform_name: str, expected: type) -> None:
    monkeypatch.setattr(sys, "platform", platform_name)

    assert type(current_platform()) is expected


def test_registry_names() -> None:
    assert list(registry.names()) == ["darwin", "linux", "win32"]
    assert registry.create("linux").name == "linux"


def test_registry_rejects_duplicates() -> None:
    local = PlatformRegistry()
    local.register("linux", LinuxPlatform)

    with pytest.raises(ValueError):
        local.register("linux", LinuxPlatform)
    with pytest.raises(KeyError):
        local.create("plan9")


def test_linux_profile_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_DATA_DIRS", "/usr/local/share:/usr/share")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))

    assert LinuxPlatform().profile_dirs() == [
        tmp_path / "data" / "color" / "icc",
        Path("/usr/local/share/color/icc"),
        Path("/usr/share/color/icc"),
        tmp_path / "home" / ".color" / "icc",
    ]


def test_linux_cache_location(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
    assert LinuxPlatform().cache_location() == tmp_path / ".cache"

    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))
    assert LinuxPlatform().cache_location() == tmp_path / "xdg"


def test_mac_locations(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    mac = MacPlatform()

    assert Path("/Library/ColorSync/Profiles") in mac.system_profile_dirs()
    assert mac.cache_location() == tmp_path / "Library" / "Caches"


@pytest.mark.skipif(sys.platform.startswith("win"), reason="uses POSIX executables")
def test_linux_finds_ghostscript_on_path(gs_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATH", str(gs_root / "bin"))

    found = LinuxPlatform().find_ghostscript()

    assert found is not None
    assert found.executable == (gs_root / "bin" / "gs").resolve()
    assert found.version() == "10.05.0"
    assert found.template_path().is_file()


def test_linux_without_ghostscript(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATH", str(tmp_path))
    monkeypatch.setattr(LinuxPlatform, "fallback_bin_dirs", (str(tmp_path / "none"),))

    assert LinuxPlatform().find_ghostscript() is None


def test_windows_finds_program_files_install(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    install = tmp_path / "Program Files" / "gs" / "gs10.02.1"
    (install / "bin").mkdir(parents=True)
    (install / "bin" / "gswin64c.exe").write_bytes(b"MZ")
    monkeypatch.setenv("PROGRAMFILES", str(tmp_path / "Program Files"))
    monkeypatch.setattr(WindowsPlatform, "bundled_root", lambda self: tmp_path / "bundled")

    found = WindowsPlatform().find_ghostscript()

    assert found is not None
    assert found.executable == install / "bin" / "gswin64c.exe"
    assert found.install_dir == install
    assert found.layout is TemplateLayout.ROOT


def test_windows_locations(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SystemRoot", str(tmp_path / "Windows"))
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path / "Local"))

    windows = WindowsPlatform()

    assert windows.system_profile_dirs() == [tmp_path / "Windows" / "System32" / "spool" / "drivers" / "color"]
    assert windows.cache_location() == tmp_path / "Local" / "cache"


def test_platform_base_is_abstract() -> None:
    with pytest.raises(NotImplementedError):
        Platform().find_ghostscript()
