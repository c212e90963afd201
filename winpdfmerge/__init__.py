"""
WinPDFMerge - merge every PDF of a folder into one file plus an email copy.

The top-level PDFs of a folder are ordered naturally (``doc2`` before
``doc10``), concatenated losslessly with pdftk and then re-encoded into a
smaller copy with Ghostscript. Every command issued is recorded in a
timestamped run log next to the program.

Quick Start:
    >>> from winpdfmerge import run_merge
    >>> result = run_merge('scans/')
    >>> result.master_path

For CLI usage, use the 'winpdfmerge' command after installation.
"""

__version__ = "1.0.0"
__license__ = "MIT"

# Core classes
from winpdfmerge.pipeline import MergePipeline, run_merge
from winpdfmerge.config import MergeSettings, PRESETS
from winpdfmerge.context import RunContext, RunLog, sanitize_folder_name
from winpdfmerge.locator import SystemToolLocator, Tool, ToolLocator

# Data types
from winpdfmerge.types import ArtifactInfo, PdfEntry, RunResult, StageResult

# Exceptions
from winpdfmerge.exceptions import (
    WinPDFMergeError,
    InvalidInputError,
    NoFilesFoundError,
    ToolNotFoundError,
    StageFailedError,
)

# Utility functions
from winpdfmerge.discovery import discover_pdfs
from winpdfmerge.sorting import natural_sort_key

__all__ = [
    # Main classes
    "MergePipeline",
    "MergeSettings",
    "RunContext",
    "RunLog",
    "SystemToolLocator",
    "Tool",
    "ToolLocator",
    # Data types
    "ArtifactInfo",
    "PdfEntry",
    "RunResult",
    "StageResult",
    # Exceptions
    "WinPDFMergeError",
    "InvalidInputError",
    "NoFilesFoundError",
    "ToolNotFoundError",
    "StageFailedError",
    # Functions
    "discover_pdfs",
    "natural_sort_key",
    "run_merge",
    "sanitize_folder_name",
    "PRESETS",
    # Version info
    "__version__",
]
