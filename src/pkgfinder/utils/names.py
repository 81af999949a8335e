"""Package name helpers."""

from __future__ import annotations

import re
from typing import Iterable

__all__ = ["COMMON_DELIMITERS", "split_package_names", "to_resource_path"]

COMMON_DELIMITERS = " ,;\n\t\r"

_DELIMITER_RE = re.compile(f"[{re.escape(COMMON_DELIMITERS)}]+")


def split_package_names(values: str | Iterable[str], delimiters: str = COMMON_DELIMITERS) -> list[str]:
    """Split one or more delimited strings into a flat list of package names.

    Empty elements are dropped and order is preserved::

        >>> split_package_names(["a.b, c.d", "e;f"])
        ['a.b', 'c.d', 'e', 'f']
    """
    if isinstance(values, str):
        values = [values]
    pattern = _DELIMITER_RE if delimiters == COMMON_DELIMITERS else re.compile(f"[{re.escape(delimiters)}]+")
    names: list[str] = []
    for value in values:
        names.extend(part for part in pattern.split(value) if part)
    return names


def to_resource_path(package: str) -> str:
    """Convert a dotted package name to a ``/``-separated resource path."""
    return package.strip().replace(".", "/")
