"""Run context: output naming, program location and the run log."""

from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .exceptions import InvalidInputError
from .utils import PathLike, resolve_path

LOGGER = logging.getLogger("winpdfmerge.context")

OUTPUT_PREFIX = "WinPDFMerge"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
LOG_LINE_FORMAT = "%Y-%m-%d %H:%M:%S"
FALLBACK_FOLDER_NAME = "Folder"

# Characters Windows rejects in file names, plus ASCII control characters.
_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_PACKAGE_DIR = Path(__file__).resolve().parent


def sanitize_folder_name(name: str) -> str:
    """Make *name* usable verbatim inside an output file name.

    Invalid characters become underscores. Trailing dots and surrounding
    whitespace are dropped since Windows strips them silently.
    """

    cleaned = _INVALID_FILENAME_CHARS.sub("_", name).strip().rstrip(". ")
    return cleaned or FALLBACK_FOLDER_NAME


def get_app_directory() -> Path:
    """Return the directory holding the running program.

    A frozen executable resolves to its own folder, otherwise the folder of
    the launched script (``sys.argv[0]``), falling back to the current
    working directory when neither is known. Under ``python -m winpdfmerge``
    the script is this package's ``__main__.py``, which would place outputs
    in site-packages, so the current working directory is used instead.
    """

    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    argv0 = sys.argv[0] if sys.argv else ""
    if argv0 and argv0 != "-c":
        candidate = Path(argv0)
        if candidate.exists():
            script_dir = candidate.resolve().parent
            if script_dir != _PACKAGE_DIR:
                return script_dir
    return Path.cwd()


@dataclass(frozen=True)
class RunContext:
    """Canonical names and locations of every artifact of one run."""

    source_folder: Path
    folder_name: str
    timestamp: datetime
    output_dir: Path

    @classmethod
    def create(
        cls,
        source_folder: PathLike,
        *,
        timestamp: Optional[datetime] = None,
        output_dir: Optional[PathLike] = None,
    ) -> "RunContext":
        source = resolve_path(source_folder)
        target = resolve_path(output_dir) if output_dir is not None else get_app_directory()
        if target == source or source in target.parents:
            raise InvalidInputError(
                f"Output folder must not be inside the source folder: {source}"
            )
        return cls(
            source_folder=source,
            folder_name=sanitize_folder_name(source.name),
            timestamp=(timestamp or datetime.now()).replace(microsecond=0),
            output_dir=target,
        )

    @property
    def stem(self) -> str:
        stamp = self.timestamp.strftime(TIMESTAMP_FORMAT)
        return f"{OUTPUT_PREFIX}_{self.folder_name}_{stamp}"

    @property
    def lossless_path(self) -> Path:
        return self.output_dir / f"{self.stem}.pdf"

    @property
    def email_path(self) -> Path:
        return self.output_dir / f"{self.stem}_email.pdf"

    @property
    def log_path(self) -> Path:
        return self.output_dir / f"{self.stem}.log"


class RunLog:
    """Append-only text log of a single run.

    The file is opened on construction and every :meth:`write` is flushed
    immediately, so an interrupted run still leaves a readable trail.
    """

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("a", encoding="utf-8")

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def write(self, message: str = "") -> None:
        stamp = datetime.now().strftime(LOG_LINE_FORMAT)
        for line in message.splitlines() or [""]:
            self._handle.write(f"{stamp}  {line}\n")
            LOGGER.info(line)
        self._handle.flush()

    def write_output(self, label: str, text: str) -> None:
        """Append captured process output under a *label* heading."""

        text = text.rstrip()
        if not text:
            self.write(f"{label}: <empty>")
            return
        self.write(f"{label}:")
        for line in text.splitlines():
            self.write(f"    {line}")

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.flush()
            self._handle.close()

    def __enter__(self) -> "RunLog":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


__all__ = [
    "OUTPUT_PREFIX",
    "RunContext",
    "RunLog",
    "get_app_directory",
    "sanitize_folder_name",
]
