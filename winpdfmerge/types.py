"""
Type definitions and dataclasses for WinPDFMerge.

This module defines data structures passed between the pipeline stages.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class PdfEntry:
    """
    A top-level PDF file discovered in the source folder.

    Attributes:
        base_name: File name without its extension, used for ordering
        full_path: Absolute path to the file
    """
    base_name: str
    full_path: Path


@dataclass(frozen=True)
class StageResult:
    """
    Outcome of one external tool invocation.

    Attributes:
        returncode: Exit status of the process, ``None`` if it never started
        output_exists: Whether the expected output file exists afterwards
        stdout: Captured standard output
        stderr: Captured standard error
    """
    returncode: Optional[int]
    output_exists: bool
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0 and self.output_exists


@dataclass
class ArtifactInfo:
    """Size and page count of a produced PDF."""

    path: Path
    size_bytes: int
    num_pages: Optional[int] = None


@dataclass
class RunResult:
    """
    Result of a completed run.

    Attributes:
        master_path: The lossless merged PDF
        email_path: The email copy, ``None`` when it was skipped or failed
        log_path: The run log
        inputs: Files merged, in merge order
        email_status: ``created``, ``failed``, ``tool-missing`` or ``disabled``
    """
    master_path: Path
    email_path: Optional[Path]
    log_path: Path
    inputs: List[Path]
    email_status: str

    def __str__(self) -> str:
        return (
            f"RunResult(master={self.master_path.name}, "
            f"files={len(self.inputs)}, email={self.email_status})"
        )
