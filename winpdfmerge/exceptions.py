"""
Custom exceptions for WinPDFMerge.

Every fatal condition of a run maps onto one of these classes. Each carries
the process exit code the command line reports for it.
"""

from __future__ import annotations

from typing import Optional, Sequence


class WinPDFMergeError(Exception):
    """Base exception for all WinPDFMerge errors."""

    exit_code = 1
    log_path = None

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown WinPDFMerge error occurred."


class InvalidInputError(WinPDFMergeError):
    """Raised when the folder argument is missing or is not a directory."""

    exit_code = 1

    @property
    def default_message(self) -> str:
        return "The source folder is missing or is not a directory."


class NoFilesFoundError(WinPDFMergeError):
    """Raised when the source folder holds no top-level PDF files."""

    exit_code = 2

    @property
    def default_message(self) -> str:
        return "No PDF files found in the source folder."


class ToolNotFoundError(WinPDFMergeError):
    """Raised when a required external tool cannot be located."""

    exit_code = 3

    def __init__(self, tool: str, message: str = "") -> None:
        self.tool = tool
        super().__init__(message or f"Required tool not found: {tool}")


class StageFailedError(WinPDFMergeError):
    """Raised when an external tool invocation fails."""

    exit_code = 4

    def __init__(
        self,
        stage: str,
        *,
        returncode: Optional[int] = None,
        command: Optional[Sequence[str]] = None,
        message: str = "",
    ) -> None:
        self.stage = stage
        self.returncode = returncode
        self.command = list(command) if command is not None else None
        if not message:
            if returncode is None:
                message = f"{stage} stage failed to start"
            else:
                message = f"{stage} stage failed with exit code {returncode}"
        super().__init__(message)
