"""Discovery and ordering of the PDFs to merge."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from .exceptions import InvalidInputError, NoFilesFoundError
from .sorting import natural_sort_key
from .types import PdfEntry
from .utils import PathLike, resolve_path

LOGGER = logging.getLogger("winpdfmerge.discovery")

PDF_EXTENSION = ".pdf"


def validate_source_folder(folder: PathLike) -> Path:
    """Return *folder* as an absolute path, or raise if it is not a directory."""

    if folder is None or not str(folder).strip():
        raise InvalidInputError("No source folder given.")
    source = resolve_path(folder)
    if not source.exists():
        raise InvalidInputError(f"Folder does not exist: {source}")
    if not source.is_dir():
        raise InvalidInputError(f"Path is not a folder: {source}")
    return source


def _entry_sort_key(entry: PdfEntry):
    return natural_sort_key(entry.base_name), str(entry.full_path)


def order_entries(entries: List[PdfEntry]) -> List[PdfEntry]:
    """Sort *entries* naturally by base name, breaking ties on full path."""

    return sorted(entries, key=_entry_sort_key)


def discover_pdfs(folder: PathLike) -> List[PdfEntry]:
    """List the top-level PDFs of *folder* in merge order.

    Only direct children that are regular files with a ``.pdf`` extension
    (any case) are returned. Subdirectories are not searched.

    Raises:
        InvalidInputError: If *folder* is not an existing directory.
        NoFilesFoundError: If no PDF file is found.
    """

    source = validate_source_folder(folder)
    entries = []
    for child in source.iterdir():
        if child.suffix.lower() != PDF_EXTENSION:
            continue
        if not child.is_file():
            LOGGER.debug("Skipping non-file entry %s", child)
            continue
        entries.append(PdfEntry(base_name=child.stem, full_path=child))

    if not entries:
        raise NoFilesFoundError(f"No PDF files found in {source}")

    ordered = order_entries(entries)
    LOGGER.debug("Discovered %d PDF(s) in %s", len(ordered), source)
    return ordered


__all__ = ["PDF_EXTENSION", "discover_pdfs", "order_entries", "validate_source_folder"]
