"""Resources providers: map a package resource path to raw location strings.

The provider is a process-wide singleton. ``get_provider()`` lazily installs
:class:`SearchPathResourcesProvider` on first use; ``set_provider()`` replaces
it and should be called before any package scanning starts. Scans already in
progress keep the provider they started with.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
import zipfile
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from pkgfinder.errors import ProviderPermissionError
from pkgfinder.location import quote_path

logger = logging.getLogger(__name__)

__all__ = [
    "ResourcesProvider",
    "SearchPathResourcesProvider",
    "get_provider",
    "set_provider",
    "AUDIT_EVENT",
]

AUDIT_EVENT = "pkgfinder.set_provider"


class ResourcesProvider:
    """Finds all locations of a resource path within a loading context.

    Subclass and override :meth:`get_resources`.
    """

    def get_resources(self, name: str, loading_context: Sequence[str] | None) -> Iterable[str]:
        """Find all locations of the resource ``name``.

        Args:
            name: ``/``-separated resource path, e.g. ``com/example/resources``.
            loading_context: Search path entries to look in; None means ``sys.path``.

        Returns:
            Raw location strings. Empty if the resource could not be found.

        Raises:
            OSError: If an I/O error occurs while looking for the resource.
        """
        raise NotImplementedError


def _file_location(path: Path) -> str:
    posix = path.resolve().as_posix()
    if not posix.startswith("/"):
        posix = "/" + posix
    return f"file:{quote_path(posix)}"


class SearchPathResourcesProvider(ResourcesProvider):
    """Looks for the resource path in each directory and zip archive of a search path."""

    def get_resources(self, name: str, loading_context: Sequence[str] | None) -> Iterator[str]:
        entries = sys.path if loading_context is None else loading_context
        name = name.strip("/")
        for entry in list(entries):
            base = Path(entry or os.curdir)
            if base.is_dir():
                candidate = base / name if name else base
                if candidate.is_dir():
                    yield _file_location(candidate)
            elif base.is_file() and zipfile.is_zipfile(base):
                with zipfile.ZipFile(base) as archive:
                    found = self._archive_contains(archive, name)
                if found:
                    # "!/" separates the archive from the entry name.
                    archive_location = _file_location(base).replace("!", "%21")
                    yield f"jar:{archive_location}!/{quote_path(name)}"
            else:
                logger.debug("Search path entry %s is not a directory or archive, skipping", entry)

    @staticmethod
    def _archive_contains(archive: zipfile.ZipFile, name: str) -> bool:
        if not name:
            return True
        prefix = name + "/"
        return any(entry.startswith(prefix) for entry in archive.namelist())

    def __repr__(self) -> str:
        return "SearchPathResourcesProvider()"


_provider: ResourcesProvider | None = None
_provider_lock = threading.Lock()


def get_provider() -> ResourcesProvider:
    """Return the process-wide provider, creating the default on first use."""
    result = _provider
    if result is None:
        with _provider_lock:
            result = _provider
            if result is None:
                result = _install_default()
    return result


def _install_default() -> ResourcesProvider:
    global _provider
    _provider = SearchPathResourcesProvider()
    logger.debug("Installed default resources provider %r", _provider)
    return _provider


def set_provider(provider: ResourcesProvider) -> None:
    """Replace the process-wide provider.

    Raises the ``pkgfinder.set_provider`` audit event first; an audit hook
    that raises rejects the replacement.

    Raises:
        ProviderPermissionError: If an audit hook rejects the replacement.
    """
    global _provider
    try:
        sys.audit(AUDIT_EVENT, provider)
    except Exception as exc:
        raise ProviderPermissionError(repr(provider), cause=exc) from exc

    with _provider_lock:
        _provider = provider
    logger.info("Resources provider replaced with %r", provider)
