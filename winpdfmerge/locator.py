"""Location of the external tools used by a run."""

from __future__ import annotations

import glob
import logging
import os
import shutil
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from .sorting import natural_sort_key

LOGGER = logging.getLogger("winpdfmerge.locator")


class Tool(str, Enum):
    """External tools driven by the pipeline."""

    CONCATENATOR = "pdftk"
    COMPRESSOR = "ghostscript"


_EXECUTABLES: Dict[Tool, Sequence[str]] = {
    Tool.CONCATENATOR: ("pdftk",),
    Tool.COMPRESSOR: ("gswin64c", "gswin32c", "gs"),
}

# Glob patterns relative to the Windows program folders.
_INSTALL_PATTERNS: Dict[Tool, Sequence[str]] = {
    Tool.CONCATENATOR: (
        "PDFtk Server/bin/pdftk.exe",
        "PDFtk/bin/pdftk.exe",
    ),
    Tool.COMPRESSOR: (
        "gs/gs*/bin/gswin64c.exe",
        "gs/gs*/bin/gswin32c.exe",
    ),
}


class ToolLocator(Protocol):
    """Anything able to turn a :class:`Tool` into an executable path."""

    def locate(self, tool: Tool) -> Optional[Path]:
        ...


def _program_folders() -> List[Path]:
    folders = []
    for variable in ("ProgramFiles", "ProgramFiles(x86)", "ProgramW6432"):
        value = os.environ.get(variable)
        if value and Path(value) not in folders:
            folders.append(Path(value))
    return folders


class SystemToolLocator:
    """Find tools via explicit overrides, ``PATH``, then install folders.

    Args:
        overrides: Optional mapping of tool to an executable name or path
            that takes precedence over every other lookup.
        search_roots: Folders searched with the well-known install patterns.
            Defaults to the Windows program folders of the host.
    """

    def __init__(
        self,
        overrides: Optional[Mapping[Tool, str]] = None,
        search_roots: Optional[Iterable[Path]] = None,
    ) -> None:
        self.overrides = {tool: value for tool, value in (overrides or {}).items() if value}
        self.search_roots = list(search_roots) if search_roots is not None else _program_folders()

    def locate(self, tool: Tool) -> Optional[Path]:
        override = self.overrides.get(tool)
        if override:
            return self._locate_override(tool, override)

        for candidate in _EXECUTABLES[tool]:
            found = shutil.which(candidate)
            if found:
                LOGGER.debug("Detected %s on PATH: %s", tool.value, found)
                return Path(found)

        for root in self.search_roots:
            for pattern in _INSTALL_PATTERNS[tool]:
                # Newest Ghostscript release first.
                matches = sorted(
                    glob.glob(str(root / pattern)), key=natural_sort_key, reverse=True
                )
                for match in matches:
                    if Path(match).is_file():
                        LOGGER.debug("Detected %s in %s: %s", tool.value, root, match)
                        return Path(match)

        LOGGER.debug("%s not found", tool.value)
        return None

    def _locate_override(self, tool: Tool, override: str) -> Optional[Path]:
        candidate = Path(override).expanduser()
        if candidate.is_file():
            return candidate.resolve()
        found = shutil.which(override)
        if found:
            return Path(found)
        LOGGER.warning("Configured %s executable not found: %s", tool.value, override)
        return None


__all__ = ["SystemToolLocator", "Tool", "ToolLocator"]
