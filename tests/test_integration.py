"""
End-to-end tests against the real pdftk and Ghostscript binaries.

Skipped when the tools are not installed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfReader, PdfWriter

from winpdfmerge.config import MergeSettings
from winpdfmerge.exceptions import StageFailedError
from winpdfmerge.locator import SystemToolLocator, Tool
from winpdfmerge.pipeline import MergePipeline
from winpdfmerge.utils import format_command

LOCATOR = SystemToolLocator()
PDFTK = LOCATOR.locate(Tool.CONCATENATOR)
GHOSTSCRIPT = LOCATOR.locate(Tool.COMPRESSOR)

requires_pdftk = pytest.mark.skipif(PDFTK is None, reason="pdftk not installed")
requires_ghostscript = pytest.mark.skipif(GHOSTSCRIPT is None, reason="Ghostscript not installed")


@requires_pdftk
@requires_ghostscript
def test_merge_two_blank_pdfs(
    tmp_path: Path, pdf_factory: Callable[..., Path], output_dir: Path
) -> None:
    folder = tmp_path / "Blank Pages"
    pdf_factory(folder, "a.pdf")
    pdf_factory(folder, "b.pdf")

    result = MergePipeline(settings=MergeSettings(output_dir=output_dir)).run(folder)

    assert result.master_path.name.startswith("WinPDFMerge_Blank Pages_")
    assert len(PdfReader(str(result.master_path)).pages) == 2
    assert result.email_status == "created"
    assert result.email_path is not None and result.email_path.exists()
    log_text = result.log_path.read_text(encoding="utf-8")
    assert "pdftk exit code: 0" in log_text
    assert "Ghostscript exit code: 0" in log_text


@requires_pdftk
def test_encrypted_pdf_is_rejected(tmp_path: Path, pdf_factory: Callable[..., Path], output_dir: Path) -> None:
    folder = tmp_path / "Locked"
    pdf_factory(folder, "a.pdf")
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    writer.encrypt(user_password="secret", owner_password="owner")
    with (folder / "b.pdf").open("wb") as handle:
        writer.write(handle)

    with pytest.raises(StageFailedError) as excinfo:
        MergePipeline(settings=MergeSettings(output_dir=output_dir, email_copy=False)).run(folder)

    assert excinfo.value.returncode not in (0, None)
    log_text = excinfo.value.log_path.read_text(encoding="utf-8")
    assert format_command(excinfo.value.command) in log_text
    assert f"pdftk exit code: {excinfo.value.returncode}" in log_text
