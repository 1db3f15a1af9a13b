from __future__ import annotations

from pathlib import Path

import pytest

from cyanpdf.exceptions import InvalidInputError
from cyanpdf.info import get_pdf_info


def test_get_pdf_info(sample_pdf: Path) -> None:
    info = get_pdf_info(sample_pdf)

    assert info.path == sample_pdf.resolve()
    assert info.title == "Sample"
    assert info.num_pages == 3
    assert info.producer == "cyanpdf-tests"
    assert info.author is None


def test_title_falls_back_to_file_name(pdf_factory) -> None:
    path = pdf_factory("untitled.pdf")

    assert get_pdf_info(path).title == "untitled.pdf"


def test_non_pdf_is_rejected(icc_factory, tmp_path: Path) -> None:
    with pytest.raises(InvalidInputError):
        get_pdf_info(icc_factory("coated.icc"))
    with pytest.raises(InvalidInputError):
        get_pdf_info(tmp_path / "missing.pdf")
