"""Natural ordering of file names."""

from __future__ import annotations

import re
from typing import Tuple, Union

_DIGIT_RUN = re.compile(r"([0-9]+)")

NaturalKey = Tuple[Union[str, int], ...]


def natural_sort_key(name: str) -> NaturalKey:
    """Split *name* into alternating text and integer tokens.

    Digit runs become Python integers, so arbitrarily long runs compare by
    value. Text runs keep their code points and compare ordinally, never by
    locale or normalization.

    Even positions always hold text and odd positions integers: a name that
    starts with a digit gets an empty leading text token, so a number sorts
    before text at the same position.

    >>> sorted(["file10", "file2", "file1"], key=natural_sort_key)
    ['file1', 'file2', 'file10']
    """

    parts = _DIGIT_RUN.split(name)
    if len(parts) > 1 and parts[-1] == "":
        parts.pop()
    return tuple(int(part) if index % 2 else part for index, part in enumerate(parts))


__all__ = ["NaturalKey", "natural_sort_key"]
