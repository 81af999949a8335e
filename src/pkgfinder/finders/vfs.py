"""Finder for virtual filesystem mounts addressed by ``vfs://<mount>/<path>``.

A mount is any :class:`importlib.resources.abc.Traversable` root. Mounts not
registered on the factory fall back to ``importlib.resources.files(<mount>)``,
so the resources of any importable package can be walked regardless of the
loader that serves it.
"""

from __future__ import annotations

import importlib.resources
import logging
from importlib.resources.abc import Traversable
from typing import IO, Iterator, Mapping

from pkgfinder.errors import MalformedLocationError
from pkgfinder.finders.base import LazyResourceFinder
from pkgfinder.location import LocationIdentifier

logger = logging.getLogger(__name__)

__all__ = ["VfsFinder", "VfsFinderFactory"]


def _join(node: Traversable, path: str) -> Traversable:
    for part in path.split("/"):
        if part:
            node = node.joinpath(part)
    return node


class VfsFinder(LazyResourceFinder):
    """Walks a Traversable tree in name order, yielding paths relative to the root."""

    def __init__(self, location: LocationIdentifier, root: Traversable, recursive: bool = True) -> None:
        super().__init__(location, recursive)
        self.root = root

    def _iter_names(self) -> Iterator[str]:
        if not self.root.is_dir():
            logger.warning("Virtual directory %s does not exist, no resources found", self.location)
            return
        yield from self._walk(self.root, "")

    def _walk(self, node: Traversable, prefix: str) -> Iterator[str]:
        for child in sorted(node.iterdir(), key=lambda c: c.name):
            name = prefix + child.name
            if child.is_dir():
                if self.recursive:
                    yield from self._walk(child, name + "/")
            elif child.is_file():
                yield name

    def _open_name(self, name: str) -> IO[bytes]:
        return _join(self.root, name).open("rb")


class VfsFinderFactory:
    """Creates VfsFinder instances for ``vfs:`` locations."""

    schemes = frozenset({"vfs"})

    def __init__(self, mounts: Mapping[str, Traversable] | None = None) -> None:
        self._mounts: dict[str, Traversable] = dict(mounts or {})

    def mount(self, name: str, root: Traversable) -> None:
        """Register ``root`` under the mount ``name``, replacing any previous mount."""
        self._mounts[name] = root

    def _resolve_mount(self, location: LocationIdentifier) -> Traversable:
        name = location.authority
        if not name:
            raise MalformedLocationError(str(location), reason="missing vfs mount name")
        root = self._mounts.get(name)
        if root is not None:
            return root
        if not all(part.isidentifier() for part in name.split(".")):
            raise MalformedLocationError(str(location), reason=f"invalid vfs mount name '{name}'")
        try:
            return importlib.resources.files(name)
        except (ImportError, TypeError, ValueError) as exc:
            raise MalformedLocationError(str(location), reason=f"unknown vfs mount '{name}'", cause=exc) from exc

    def create(self, location: LocationIdentifier, recursive: bool = True) -> VfsFinder:
        root = _join(self._resolve_mount(location), location.decoded_path)
        return VfsFinder(location, root, recursive=recursive)

    def __repr__(self) -> str:
        return f"VfsFinderFactory(mounts={sorted(self._mounts)})"
