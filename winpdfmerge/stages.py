"""The two external tool stages of a run."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .config import MergeSettings
from .context import RunContext, RunLog
from .exceptions import StageFailedError
from .types import PdfEntry, StageResult
from .utils import format_command, neutralized_environment, run_captured, sizeof_fmt

LOGGER = logging.getLogger("winpdfmerge.stages")

MERGE_STAGE = "Merge"
EMAIL_STAGE = "EmailCopy"


def build_pdftk_command(executable: Path, inputs: Sequence[Path], output: Path) -> List[str]:
    """Construct the lossless concatenation command."""

    return [
        str(executable),
        *(str(path) for path in inputs),
        "cat",
        "output",
        str(output),
        "compress",
    ]


def build_ghostscript_command(
    executable: Path, source: Path, output: Path, settings: MergeSettings
) -> List[str]:
    """Construct the email copy command.

    Paths go through ``-o`` and ``-f`` so that no file name can be read as
    an option. Ghostscript expands ``%`` in the output name as a page
    template, so it is doubled there.
    """

    duplicates = "true" if settings.detect_duplicate_images else "false"
    return [
        str(executable),
        "-dBATCH",
        "-dNOPAUSE",
        "-dSAFER",
        "-sDEVICE=pdfwrite",
        f"-dCompatibilityLevel={settings.compatibility_level}",
        f"-dPDFSETTINGS=/{settings.preset}",
        f"-dDetectDuplicateImages={duplicates}",
        "-o",
        str(output).replace("%", "%%"),
        "-f",
        str(source),
    ]


def _invoke(command: Sequence[str], output: Path, log: RunLog) -> StageResult:
    try:
        returncode, stdout, stderr = run_captured(command)
    except OSError as exc:
        LOGGER.error("Failed to execute %s: %s", command[0], exc)
        log.write(f"Failed to start process: {exc}")
        return StageResult(returncode=None, output_exists=output.is_file())
    return StageResult(
        returncode=returncode,
        output_exists=output.is_file(),
        stdout=stdout,
        stderr=stderr,
    )


def merge_stage(
    entries: Sequence[PdfEntry], context: RunContext, log: RunLog, executable: Path
) -> Path:
    """Concatenate *entries* losslessly into the master PDF.

    Raises:
        StageFailedError: If the tool exits non-zero or writes no output.
    """

    output = context.lossless_path
    command = build_pdftk_command(executable, [entry.full_path for entry in entries], output)
    log.write(f"Merging {len(entries)} file(s) with pdftk")
    log.write(f"Command: {format_command(command)}")

    result = _invoke(command, output, log)
    log.write(f"pdftk exit code: {result.returncode}")
    if result.stdout.strip() or result.stderr.strip():
        log.write_output("pdftk stdout", result.stdout)
        log.write_output("pdftk stderr", result.stderr)

    if not result.succeeded:
        if result.returncode == 0:
            log.write(f"pdftk reported success but did not create {output}")
        log.write(f"Merge failed. Attempted command: {format_command(command)}")
        raise StageFailedError(MERGE_STAGE, returncode=result.returncode, command=command)

    log.write(f"Lossless PDF created: {output} ({sizeof_fmt(output.stat().st_size)})")
    return output


def _remove_email_copy(output: Path, log: RunLog) -> bool:
    try:
        output.unlink()
    except OSError as exc:
        LOGGER.warning("Failed to remove %s: %s", output, exc)
        log.write(f"Could not remove {output}: {exc}")
        log.write("Email copy failed; skipping email copy. The lossless PDF is unaffected.")
        return False
    return True


def email_copy_stage(
    master: Path, context: RunContext, log: RunLog, executable: Path, settings: MergeSettings
) -> Optional[Path]:
    """Re-encode *master* into the email copy.

    Failures are logged and reported by returning ``None``; they never end
    the run.
    """

    output = context.email_path
    if output.exists():
        log.write(f"Removing previous email copy: {output}")
        if not _remove_email_copy(output, log):
            return None

    command = build_ghostscript_command(executable, master, output, settings)
    log.write(f"Creating email copy with Ghostscript (preset: {settings.preset})")
    log.write(f"Command: {format_command(command)}")

    with neutralized_environment(settings.neutralized_env):
        result = _invoke(command, output, log)

    log.write(f"Ghostscript exit code: {result.returncode}")
    log.write_output("Ghostscript stdout", result.stdout)
    log.write_output("Ghostscript stderr", result.stderr)

    if not result.succeeded:
        if output.exists():
            if not _remove_email_copy(output, log):
                return None
            log.write(f"Removed incomplete email copy: {output}")
        log.write("Email copy failed; skipping email copy. The lossless PDF is unaffected.")
        return None

    master_size = master.stat().st_size
    email_size = output.stat().st_size
    ratio = (email_size / master_size * 100.0) if master_size else 100.0
    log.write(
        f"Email copy created: {output} ({sizeof_fmt(email_size)}, {ratio:.0f}% of lossless)"
    )
    return output


__all__ = [
    "EMAIL_STAGE",
    "MERGE_STAGE",
    "build_ghostscript_command",
    "build_pdftk_command",
    "email_copy_stage",
    "merge_stage",
]
