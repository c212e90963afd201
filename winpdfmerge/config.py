"""Run settings for :mod:`winpdfmerge`."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Optional, Tuple

# Ghostscript -dPDFSETTINGS presets, smallest output first.
PRESETS: Tuple[str, ...] = ("screen", "ebook", "printer", "prepress", "default")
DEFAULT_PRESET = "screen"
DEFAULT_COMPATIBILITY_LEVEL = "1.6"

# Inherited defaults Ghostscript reads from the environment.
NEUTRALIZED_ENV_VARS: Tuple[str, ...] = ("GS_OPTIONS",)


@dataclasses.dataclass(frozen=True)
class MergeSettings:
    """Behavioural toggles for a run.

    Attributes:
        preset: Ghostscript ``PDFSETTINGS`` preset for the email copy
        compatibility_level: PDF version written by Ghostscript
        detect_duplicate_images: Let Ghostscript share identical images
        email_copy: Produce the email copy at all
        output_dir: Folder for every artifact, the program folder if ``None``
        pdftk_path: Explicit concatenator executable
        gs_path: Explicit compressor executable
        neutralized_env: Environment variables cleared around the compressor
    """

    preset: str = DEFAULT_PRESET
    compatibility_level: str = DEFAULT_COMPATIBILITY_LEVEL
    detect_duplicate_images: bool = True
    email_copy: bool = True
    output_dir: Optional[Path] = None
    pdftk_path: Optional[str] = None
    gs_path: Optional[str] = None
    neutralized_env: Tuple[str, ...] = NEUTRALIZED_ENV_VARS

    def __post_init__(self) -> None:
        preset = self.preset.lstrip("/").lower()
        if preset not in PRESETS:
            raise ValueError(f"Unknown preset: {self.preset}")
        object.__setattr__(self, "preset", preset)


__all__ = [
    "DEFAULT_COMPATIBILITY_LEVEL",
    "DEFAULT_PRESET",
    "MergeSettings",
    "NEUTRALIZED_ENV_VARS",
    "PRESETS",
]
