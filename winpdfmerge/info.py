"""Information utilities for produced artifacts."""

from __future__ import annotations

import logging

from pypdf import PdfReader

from .types import ArtifactInfo
from .utils import PathLike, resolve_path

_LOGGER = logging.getLogger("winpdfmerge.info")


def count_pages(path: PathLike) -> int:
    """Return the number of pages of the PDF at *path*."""

    reader = PdfReader(str(resolve_path(path)))
    return len(reader.pages)


def get_artifact_info(path: PathLike) -> ArtifactInfo:
    """Return :class:`ArtifactInfo` for the PDF located at *path*.

    An unreadable page tree leaves ``num_pages`` unset rather than failing,
    since the external tools, not this package, vouch for the output.
    """

    pdf_path = resolve_path(path)
    if not pdf_path.exists():
        raise FileNotFoundError(pdf_path)

    info = ArtifactInfo(path=pdf_path, size_bytes=pdf_path.stat().st_size)
    try:
        info.num_pages = count_pages(pdf_path)
    except Exception as exc:  # page count is advisory
        _LOGGER.warning("Could not count pages of %s: %s", pdf_path, exc)
    _LOGGER.debug("Artifact info for %s: %s", pdf_path, info)
    return info


__all__ = ["count_pages", "get_artifact_info"]
