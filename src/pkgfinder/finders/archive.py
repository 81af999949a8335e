"""Finder for zip archives addressed by ``jar:``, ``zip:`` and ``wsjar:`` locations.

Locations name the archive file, any archives nested inside it, and the
entry prefix to enumerate, separated by ``!/``::

    jar:file:/opt/app/lib.zip!/com/example
    jar:file:/opt/app/app.zip!/lib/inner.zip!/com/example
    zip:/opt/app/lib.zip!/com/example
"""

from __future__ import annotations

import io
import logging
import re
import zipfile
from pathlib import Path
from typing import IO, Iterator
from urllib.parse import unquote

from pkgfinder.errors import UnsupportedSchemeError
from pkgfinder.finders.base import LazyResourceFinder
from pkgfinder.finders.directory import to_local_path
from pkgfinder.location import LocationIdentifier, parse_location

logger = logging.getLogger(__name__)

__all__ = ["ArchiveFinder", "ArchiveFinderFactory"]

_SEPARATOR = "!/"
# At least two characters, so a Windows drive letter is not taken for a scheme.
_INNER_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]+:")


def _split_archive_location(location: LocationIdentifier) -> tuple[Path, list[str], str]:
    segments = location.path.split(_SEPARATOR)
    outer = segments[0]

    if _INNER_SCHEME_RE.match(outer):
        inner = parse_location(outer)
        if inner.scheme.lower() != "file":
            raise UnsupportedSchemeError(inner.scheme, str(location))
        archive_path = to_local_path(inner)
    else:
        archive_path = Path(unquote(outer))

    nested = [unquote(segment) for segment in segments[1:-1]]
    prefix = unquote(segments[-1]).strip("/") if len(segments) > 1 else ""
    return archive_path, nested, prefix


class ArchiveFinder(LazyResourceFinder):
    """Enumerates archive entries below a prefix, in archive order."""

    def __init__(self, location: LocationIdentifier, recursive: bool = True) -> None:
        super().__init__(location, recursive)
        self.archive_path, self.nested, self.prefix = _split_archive_location(location)

    def _open_archive(self) -> zipfile.ZipFile:
        archive = zipfile.ZipFile(self.archive_path)
        for inner in self.nested:
            try:
                data = archive.read(inner)
            finally:
                archive.close()
            archive = zipfile.ZipFile(io.BytesIO(data))
        return archive

    def _entry_prefix(self) -> str:
        return f"{self.prefix}/" if self.prefix else ""

    def _iter_names(self) -> Iterator[str]:
        try:
            archive = self._open_archive()
        except (OSError, KeyError, zipfile.BadZipFile) as e:
            logger.error("Cannot read archive %s: %s", self.location, e)
            return

        prefix = self._entry_prefix()
        with archive:
            for info in archive.infolist():
                if info.is_dir() or not info.filename.startswith(prefix):
                    continue
                name = info.filename[len(prefix) :]
                if not name:
                    continue
                if not self.recursive and "/" in name:
                    continue
                yield name

    def _open_name(self, name: str) -> IO[bytes]:
        with self._open_archive() as archive:
            return io.BytesIO(archive.read(self._entry_prefix() + name))


class ArchiveFinderFactory:
    """Creates ArchiveFinder instances for archive locations."""

    schemes = frozenset({"jar", "zip", "wsjar"})

    def create(self, location: LocationIdentifier, recursive: bool = True) -> ArchiveFinder:
        return ArchiveFinder(location, recursive=recursive)

    def __repr__(self) -> str:
        return "ArchiveFinderFactory()"
