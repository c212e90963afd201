from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace
from typing import Callable, Dict, List, Optional
import os
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from winpdfmerge.config import MergeSettings  # noqa: E402
from winpdfmerge.locator import Tool  # noqa: E402

RUN_TIME = datetime(2024, 3, 5, 14, 7, 9)
RUN_STAMP = "20240305_140709"


class FakeLocator:
    def __init__(self, tools: Dict[Tool, Optional[Path]]) -> None:
        self.tools = tools
        self.requested: List[Tool] = []

    def locate(self, tool: Tool) -> Optional[Path]:
        self.requested.append(tool)
        return self.tools.get(tool)


class FakeTools:
    """Stands in for ``subprocess.run`` and imitates pdftk and Ghostscript."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.pdftk_returncode = 0
        self.pdftk_writes_output = True
        self.gs_returncode = 0
        self.gs_writes_output = True
        self.gs_options_seen: List[Optional[str]] = []

    @property
    def pdftk_calls(self) -> List[List[str]]:
        return [call for call in self.calls if "-sDEVICE=pdfwrite" not in call]

    @property
    def gs_calls(self) -> List[List[str]]:
        return [call for call in self.calls if "-sDEVICE=pdfwrite" in call]

    def __call__(self, command, stdin=None, stdout=None, stderr=None, check=False):
        command = list(command)
        self.calls.append(command)
        if "-sDEVICE=pdfwrite" in command:
            return self._ghostscript(command, stdout, stderr)
        return self._pdftk(command, stdout, stderr)

    def _pdftk(self, command, stdout, stderr):
        inputs = command[1:command.index("cat")]
        output = Path(command[command.index("output") + 1])
        if self.pdftk_returncode != 0:
            stderr.write(b"Error: Failed to open PDF file:\n   input.pdf\n")
        if self.pdftk_writes_output:
            writer = PdfWriter()
            for path in inputs:
                writer.append(path)
            with output.open("wb") as handle:
                writer.write(handle)
        return SimpleNamespace(returncode=self.pdftk_returncode)

    def _ghostscript(self, command, stdout, stderr):
        self.gs_options_seen.append(os.environ.get("GS_OPTIONS"))
        output = Path(command[command.index("-o") + 1].replace("%%", "%"))
        source = Path(command[command.index("-f") + 1])
        stdout.write(b"GPL Ghostscript 10.02.1 (2023-11-01)\n")
        if self.gs_returncode != 0:
            stderr.write(b"**** Unable to open the initial device, quitting.\n")
        if self.gs_writes_output:
            output.write_bytes(source.read_bytes())
        return SimpleNamespace(returncode=self.gs_returncode)


@pytest.fixture()
def pdf_factory() -> Callable[..., Path]:
    def _create(folder: Path, filename: str, pages: int = 1) -> Path:
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / filename
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=72, height=72)
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def source_folder(tmp_path: Path, pdf_factory: Callable[..., Path]) -> Path:
    folder = tmp_path / "Scans"
    pdf_factory(folder, "a.pdf")
    pdf_factory(folder, "b.pdf")
    return folder


@pytest.fixture()
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture()
def settings(output_dir: Path) -> MergeSettings:
    return MergeSettings(output_dir=output_dir)


@pytest.fixture()
def fake_tools(monkeypatch: pytest.MonkeyPatch) -> FakeTools:
    tools = FakeTools()
    monkeypatch.setattr("winpdfmerge.utils.subprocess.run", tools)
    return tools


@pytest.fixture()
def locator(tmp_path: Path) -> FakeLocator:
    return FakeLocator(
        {
            Tool.CONCATENATOR: tmp_path / "bin" / "pdftk",
            Tool.COMPRESSOR: tmp_path / "bin" / "gswin64c",
        }
    )
