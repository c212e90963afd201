"""Orchestration of a complete merge run."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Tuple

from . import __version__
from .config import MergeSettings
from .context import RunContext, RunLog
from .discovery import discover_pdfs
from .exceptions import ToolNotFoundError, WinPDFMergeError
from .info import get_artifact_info
from .locator import SystemToolLocator, Tool, ToolLocator
from .stages import email_copy_stage, merge_stage
from .types import RunResult
from .utils import PathLike

LOGGER = logging.getLogger("winpdfmerge.pipeline")


class MergePipeline:
    """Run discovery, the lossless merge and the email copy in sequence.

    Args:
        settings: Run settings, defaults to :class:`MergeSettings`.
        locator: Tool locator, defaults to a :class:`SystemToolLocator`
            honouring the explicit paths in *settings*.
        clock: Returns the run timestamp; replaceable in tests.
    """

    def __init__(
        self,
        settings: Optional[MergeSettings] = None,
        locator: Optional[ToolLocator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings or MergeSettings()
        if locator is None:
            locator = SystemToolLocator(
                overrides={
                    Tool.CONCATENATOR: self.settings.pdftk_path,
                    Tool.COMPRESSOR: self.settings.gs_path,
                }
            )
        self.locator = locator
        self.clock = clock

    def run(self, folder: PathLike) -> RunResult:
        """Merge every top-level PDF of *folder*.

        Raises:
            InvalidInputError: *folder* is not a directory.
            NoFilesFoundError: *folder* holds no PDF. No log is written.
            ToolNotFoundError: pdftk cannot be located.
            StageFailedError: pdftk failed.
        """

        started = self.clock()
        entries = discover_pdfs(folder)
        context = RunContext.create(
            folder, timestamp=started, output_dir=self.settings.output_dir
        )

        with RunLog(context.log_path) as log:
            try:
                log.write(f"WinPDFMerge {__version__} run started")
                log.write(f"Source folder: {context.source_folder}")
                log.write(f"Output folder: {context.output_dir}")
                log.write(f"Found {len(entries)} PDF file(s), merge order:")
                for index, entry in enumerate(entries, 1):
                    log.write(f"  {index:>3}. {entry.full_path.name}")

                concatenator = self.locator.locate(Tool.CONCATENATOR)
                if concatenator is None:
                    log.write("pdftk not found on PATH or in the usual install folders.")
                    raise ToolNotFoundError(Tool.CONCATENATOR.value)
                log.write(f"Using pdftk: {concatenator}")

                master = merge_stage(entries, context, log, concatenator)
                info = get_artifact_info(master)
                if info.num_pages is not None:
                    log.write(f"Lossless PDF has {info.num_pages} page(s)")

                email_path, email_status = self._email_copy(master, context, log)
                log.write(f"Run finished successfully (email copy: {email_status})")
            except WinPDFMergeError as exc:
                log.write(f"FATAL: {exc.message}")
                exc.log_path = context.log_path
                raise

        LOGGER.info("Merged %d PDFs into %s", len(entries), master)
        return RunResult(
            master_path=master,
            email_path=email_path,
            log_path=context.log_path,
            inputs=[entry.full_path for entry in entries],
            email_status=email_status,
        )

    def _email_copy(
        self, master: Path, context: RunContext, log: RunLog
    ) -> Tuple[Optional[Path], str]:
        if not self.settings.email_copy:
            log.write("Email copy disabled; skipping email copy.")
            return None, "disabled"

        compressor = self.locator.locate(Tool.COMPRESSOR)
        if compressor is None:
            log.write("Ghostscript not found; skipping email copy.")
            return None, "tool-missing"
        log.write(f"Using Ghostscript: {compressor}")

        email_path = email_copy_stage(master, context, log, compressor, self.settings)
        if email_path is None:
            return None, "failed"
        return email_path, "created"


def run_merge(
    folder: PathLike,
    settings: Optional[MergeSettings] = None,
    locator: Optional[ToolLocator] = None,
) -> RunResult:
    """Convenience wrapper running a :class:`MergePipeline` once."""

    return MergePipeline(settings=settings, locator=locator).run(folder)


__all__ = ["MergePipeline", "run_merge"]
