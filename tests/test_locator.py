from __future__ import annotations

from pathlib import Path

import pytest

from winpdfmerge.locator import SystemToolLocator, Tool


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")
    return path


@pytest.fixture()
def empty_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("winpdfmerge.locator.shutil.which", lambda name: None)


def test_override_path_wins(tmp_path: Path, empty_path: None) -> None:
    executable = _touch(tmp_path / "custom" / "pdftk.exe")
    locator = SystemToolLocator(overrides={Tool.CONCATENATOR: str(executable)}, search_roots=[])

    assert locator.locate(Tool.CONCATENATOR) == executable.resolve()


def test_missing_override_does_not_fall_back(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr("winpdfmerge.locator.shutil.which", lambda name: None)
    _touch(tmp_path / "gs" / "gs10.02.1" / "bin" / "gswin64c.exe")
    locator = SystemToolLocator(
        overrides={Tool.COMPRESSOR: str(tmp_path / "nowhere" / "gs")},
        search_roots=[tmp_path],
    )

    assert locator.locate(Tool.COMPRESSOR) is None


def test_path_lookup_prefers_first_candidate(monkeypatch: pytest.MonkeyPatch) -> None:
    found = {"gswin32c": "/opt/gs/gswin32c", "gs": "/usr/bin/gs"}
    monkeypatch.setattr("winpdfmerge.locator.shutil.which", found.get)

    locator = SystemToolLocator(search_roots=[])

    assert locator.locate(Tool.COMPRESSOR) == Path("/opt/gs/gswin32c")


def test_install_folder_fallback(tmp_path: Path, empty_path: None) -> None:
    pdftk = _touch(tmp_path / "PDFtk Server" / "bin" / "pdftk.exe")
    locator = SystemToolLocator(search_roots=[tmp_path])

    assert locator.locate(Tool.CONCATENATOR) == pdftk


def test_install_folder_prefers_newest_ghostscript(tmp_path: Path, empty_path: None) -> None:
    _touch(tmp_path / "gs" / "gs9.56.1" / "bin" / "gswin64c.exe")
    newest = _touch(tmp_path / "gs" / "gs10.02.1" / "bin" / "gswin64c.exe")
    locator = SystemToolLocator(search_roots=[tmp_path])

    assert locator.locate(Tool.COMPRESSOR) == newest


def test_not_found(tmp_path: Path, empty_path: None) -> None:
    locator = SystemToolLocator(search_roots=[tmp_path])

    assert locator.locate(Tool.CONCATENATOR) is None
    assert locator.locate(Tool.COMPRESSOR) is None


def test_default_search_roots_come_from_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("ProgramFiles", str(tmp_path / "pf"))
    monkeypatch.setenv("ProgramFiles(x86)", str(tmp_path / "pf86"))
    monkeypatch.delenv("ProgramW6432", raising=False)

    locator = SystemToolLocator()

    assert locator.search_roots == [tmp_path / "pf", tmp_path / "pf86"]
