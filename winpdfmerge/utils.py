"""Utility helpers for :mod:`winpdfmerge`."""

from __future__ import annotations

import contextlib
import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Iterable, Iterator, Sequence, Tuple, Union

PathLike = Union[str, Path]

_LOGGER = logging.getLogger("winpdfmerge")


def resolve_path(path: PathLike) -> Path:
    """Resolve *path* into an absolute :class:`~pathlib.Path`."""

    resolved = Path(path).expanduser().resolve()
    _LOGGER.debug("Resolved path '%s' to '%s'", path, resolved)
    return resolved


def format_command(command: Sequence[str]) -> str:
    """Render *command* as a single line a user could paste into a shell."""

    parts = [str(part) for part in command]
    if os.name == "nt":
        return subprocess.list2cmdline(parts)
    return shlex.join(parts)


def _read_capture(handle) -> str:
    handle.seek(0)
    return handle.read().decode("utf-8", errors="replace")


def run_captured(command: Sequence[str]) -> Tuple[int, str, str]:
    """Run *command* with its output redirected to temporary files.

    Arguments are passed as a list, never through a shell, so any
    filesystem-legal file name reaches the tool unchanged. Returns the exit
    code with the decoded standard output and standard error. The capture
    files are removed before returning.
    """

    _LOGGER.debug("Executing command: %s", format_command(command))
    with tempfile.TemporaryFile(prefix="winpdfmerge-out-") as out, tempfile.TemporaryFile(
        prefix="winpdfmerge-err-"
    ) as err:
        completed = subprocess.run(
            [str(part) for part in command],
            stdin=subprocess.DEVNULL,
            stdout=out,
            stderr=err,
            check=False,
        )
        stdout = _read_capture(out)
        stderr = _read_capture(err)
    _LOGGER.debug("Command finished with exit code %s", completed.returncode)
    return completed.returncode, stdout, stderr


@contextlib.contextmanager
def neutralized_environment(names: Iterable[str]) -> Iterator[None]:
    """Remove environment variables *names* for the duration of the block.

    Previous values are restored on every exit path, including exceptions.
    """

    saved = {}
    for name in names:
        if name in os.environ:
            saved[name] = os.environ.pop(name)
            _LOGGER.debug("Cleared environment variable %s", name)
    try:
        yield
    finally:
        for name, value in saved.items():
            os.environ[name] = value


def sizeof_fmt(num_bytes: float) -> str:
    """Format *num_bytes* into a human-friendly string."""

    step_unit = 1024.0
    for unit in ("bytes", "KiB", "MiB", "GiB"):
        if abs(num_bytes) < step_unit:
            return f"{num_bytes:3.1f} {unit}"
        num_bytes /= step_unit
    return f"{num_bytes:.1f} TiB"


__all__ = [
    "PathLike",
    "format_command",
    "neutralized_environment",
    "resolve_path",
    "run_captured",
    "sizeof_fmt",
]
