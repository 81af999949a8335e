"""Finder for plain directories addressed by ``file:`` locations."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Iterator

from pkgfinder.finders.base import LazyResourceFinder
from pkgfinder.location import LocationIdentifier

logger = logging.getLogger(__name__)

__all__ = ["DirectoryFinder", "DirectoryFinderFactory", "to_local_path"]


def to_local_path(location: LocationIdentifier) -> Path:
    """Convert a ``file:`` identifier into a local filesystem path."""
    path = location.decoded_path
    # file:/C:/dir on Windows
    if len(path) > 2 and path[0] == "/" and path[2] == ":" and path[1].isalpha():
        path = path[1:]
    if location.authority and location.authority != "localhost":
        path = f"//{location.authority}{path}"
    return Path(path)


class DirectoryFinder(LazyResourceFinder):
    """Walks a directory tree in name order, yielding paths relative to the root."""

    read_only = False

    def __init__(self, location: LocationIdentifier, recursive: bool = True) -> None:
        super().__init__(location, recursive)
        self.root = to_local_path(location)

    def _iter_names(self) -> Iterator[str]:
        if not self.root.is_dir():
            logger.warning("Directory %s does not exist, no resources found", self.root)
            return
        visited_real_paths: set[Path] = {self.root.resolve()}
        yield from self._scan_dir(self.root, "", visited_real_paths)

    def _scan_dir(self, dir_path: Path, prefix: str, visited_real_paths: set[Path]) -> Iterator[str]:
        try:
            with os.scandir(dir_path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except PermissionError as e:
            logger.error("Permission denied scanning %s: %s", dir_path, e)
            return
        except OSError as e:
            logger.error("OS error scanning %s: %s", dir_path, e)
            return

        for entry in entries:
            try:
                is_dir = entry.is_dir()
                is_file = entry.is_file()
                is_symlink = entry.is_symlink()
            except OSError as e:
                logger.error("OS error accessing %s: %s", entry.path, e)
                continue

            name = prefix + entry.name
            if is_dir:
                if not self.recursive:
                    continue
                entry_path = Path(entry.path)
                if is_symlink:
                    real = entry_path.resolve()
                    if real in visited_real_paths:
                        logger.warning("Symlink cycle detected at %s -> %s, skipping", entry_path, real)
                        continue
                    visited_real_paths.add(real)
                yield from self._scan_dir(entry_path, name + "/", visited_real_paths)
            elif is_file:
                yield name

    def _open_name(self, name: str) -> IO[bytes]:
        return (self.root / name).open("rb")

    def _remove_name(self, name: str) -> None:
        (self.root / name).unlink()
        logger.debug("Removed %s from %s", name, self.root)


class DirectoryFinderFactory:
    """Creates DirectoryFinder instances for ``file:`` locations."""

    schemes = frozenset({"file"})

    def create(self, location: LocationIdentifier, recursive: bool = True) -> DirectoryFinder:
        return DirectoryFinder(location, recursive=recursive)

    def __repr__(self) -> str:
        return "DirectoryFinderFactory()"
