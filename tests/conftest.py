from __future__ import annotations

import stat
import struct
import sys
from pathlib import Path
from typing import Callable

import pytest
from PIL import ImageCms
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cyanpdf.ghostscript import Ghostscript  # noqa: E402

GS_VERSION = "10.05.0"

PDFX_TEMPLATE = """%!
% This is a sample prefix file for creating a PDF/X-3 document.
% Users should modify the value of /ICCProfile below.

systemdict /ProductName get (PDFill) search {
  pop pop pop
} {
  pop
} ifelse

/ICCProfile (ISO Coated sb.icc) def  % Customize or remove.

/OutputIntentSubtype /GTS_PDFX def
[ /_objdef {icc_PDFX} /type /stream /OBJ pdfmark
[{icc_PDFX} ICCProfile (r) file /PUT pdfmark
"""

FAKE_GS_SCRIPT = """#!/bin/sh
if [ "$1" = "--version" ]; then
  echo "{version}"
  exit 0
fi
out=""
last=""
for arg in "$@"; do
  case "$arg" in
    -sOutputFile=*) out="${{arg#-sOutputFile=}}" ;;
  esac
  last="$arg"
done
if [ -n "$FAKE_GS_FAIL" ]; then
  echo "Error: /undefinedfilename in --file--"
  exit 1
fi
cp "$last" "$out"
"""

_DEVICE_CLASSES = {"RGB ": b"mntr", "CMYK": b"prtr", "GRAY": b"mntr", "Lab ": b"spac"}


def _text_description(description: str) -> bytes:
    ascii_text = description.encode("ascii") + b"\x00"
    data = b"desc" + b"\x00" * 4 + struct.pack(">I", len(ascii_text)) + ascii_text
    # Empty Unicode and ScriptCode records.
    data += struct.pack(">II", 0, 0) + struct.pack(">HB", 0, 0) + b"\x00" * 67
    return data + b"\x00" * (-len(data) % 4)


def build_icc_profile(signature: str, description: str | None = None) -> bytes:
    """Return a minimal ICC v2 profile with *signature* and an optional description tag."""

    tags = b""
    directory = struct.pack(">I", 0)
    if description is not None:
        tags = _text_description(description)
        directory = struct.pack(">I", 1) + b"desc" + struct.pack(">II", 128 + 4 + 12, len(tags))
    size = 128 + len(directory) + len(tags)
    pcs = b"Lab " if signature == "Lab " else b"XYZ "
    header = (
        struct.pack(">I", size)
        + b"\x00" * 4
        + struct.pack(">I", 0x02100000)
        + _DEVICE_CLASSES[signature]
        + signature.encode("ascii")
        + pcs
        + b"\x00" * 12
        + b"acsp"
        + b"\x00" * 28
        + struct.pack(">iii", 0x0000F6D6, 0x00010000, 0x0000D32D)
        + b"\x00" * 48
    )
    assert len(header) == 128
    return header + directory + tags


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(3):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "cyanpdf-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, title: str | None = None) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        writer.add_blank_page(width=72, height=72)
        if title is not None:
            writer.add_metadata({"/Title": title})
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def icc_factory(tmp_path: Path) -> Callable[..., Path]:
    profile_dir = tmp_path / "profiles"

    def _create(filename: str, signature: str = "CMYK", description: str | None = "Test Profile") -> Path:
        profile_dir.mkdir(exist_ok=True)
        path = profile_dir / filename
        path.write_bytes(build_icc_profile(signature, description))
        return path

    return _create


@pytest.fixture()
def srgb_profile(tmp_path: Path) -> Path:
    path = tmp_path / "srgb.icc"
    path.write_bytes(ImageCms.ImageCmsProfile(ImageCms.createProfile("sRGB")).tobytes())
    return path


@pytest.fixture()
def profiles(icc_factory: Callable[..., Path], srgb_profile: Path) -> dict[str, Path]:
    return {
        "rgb": srgb_profile,
        "gray": icc_factory("gray.icc", "GRAY", "Gray"),
        "cmyk": icc_factory("coated.icc", "CMYK", "ISO Coated v2 (ECI)"),
        "output": icc_factory("output.icc", "CMYK", "Output CMYK"),
        "output_gray": icc_factory("output-gray.icc", "GRAY", "Output Gray"),
        "lab": icc_factory("lab.icc", "Lab ", "Lab D50"),
    }


@pytest.fixture()
def gs_root(tmp_path: Path) -> Path:
    """Create an installation tree with a fake ``gs`` and a PDF/X template."""

    root = tmp_path / "ghostscript"
    bin_dir = root / "bin"
    bin_dir.mkdir(parents=True)
    executable = bin_dir / "gs"
    executable.write_text(FAKE_GS_SCRIPT.format(version=GS_VERSION))
    executable.chmod(executable.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    lib_dir = root / "share" / "ghostscript" / GS_VERSION / "lib"
    lib_dir.mkdir(parents=True)
    (lib_dir / "PDFX_def.ps").write_text(PDFX_TEMPLATE)
    return root


@pytest.fixture()
def ghostscript(gs_root: Path) -> Ghostscript:
    bin_dir = gs_root / "bin"
    return Ghostscript(executable=bin_dir / "gs", install_dir=bin_dir, reported_version=GS_VERSION)


@pytest.fixture()
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"

