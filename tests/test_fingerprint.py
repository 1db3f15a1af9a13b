from __future__ import annotations

import hashlib
from pathlib import Path

from cyanpdf.fingerprint import fingerprint


def test_fingerprint_is_sha256_of_content(sample_pdf: Path) -> None:
    expected = hashlib.sha256(sample_pdf.read_bytes()).hexdigest()

    assert fingerprint(sample_pdf) == expected
    assert len(fingerprint(sample_pdf)) == 64


def test_identical_content_gives_identical_fingerprint(sample_pdf: Path, tmp_path: Path) -> None:
    copy = tmp_path / "elsewhere" / "copy.pdf"
    copy.parent.mkdir()
    copy.write_bytes(sample_pdf.read_bytes())

    assert fingerprint(copy) == fingerprint(sample_pdf)


def test_changed_byte_changes_fingerprint(sample_pdf: Path, tmp_path: Path) -> None:
    data = bytearray(sample_pdf.read_bytes())
    data[-2] ^= 0x01
    changed = tmp_path / "changed.pdf"
    changed.write_bytes(bytes(data))

    assert fingerprint(changed)
    assert fingerprint(changed) != fingerprint(sample_pdf)


def test_non_pdf_has_no_fingerprint(icc_factory, tmp_path: Path) -> None:
    assert fingerprint(icc_factory("coated.icc")) == ""
    assert fingerprint(tmp_path / "missing.pdf") == ""
    assert fingerprint(tmp_path) == ""
