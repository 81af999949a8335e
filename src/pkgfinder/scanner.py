"""Package names scanner: discover and iterate all resources of a set of packages."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, TYPE_CHECKING, Iterable, Sequence

from pkgfinder.errors import DiscoveryIOError, UnsupportedSchemeError
from pkgfinder.finders.archive import ArchiveFinderFactory
from pkgfinder.finders.base import ResourceFinder, SchemeFinderFactory
from pkgfinder.finders.directory import DirectoryFinderFactory
from pkgfinder.finders.registry import SchemeRegistry
from pkgfinder.finders.stack import FinderStack
from pkgfinder.finders.vfs import VfsFinderFactory
from pkgfinder.location import to_location_identifier
from pkgfinder.provider import get_provider
from pkgfinder.utils.names import split_package_names, to_resource_path

if TYPE_CHECKING:
    from pkgfinder.config import Config

logger = logging.getLogger(__name__)

__all__ = ["PackageNamesScanner"]


class PackageNamesScanner(ResourceFinder):
    """Iterates every resource found under a set of packages.

    Each package is looked up through the process-wide resources provider.
    Every location found is turned into a finder by the factory registered
    for its scheme, and the finders are stacked in discovery order.

    Discovery happens on construction and again on each :meth:`reset`. Any
    discovery failure aborts the whole pass; no partial cursor is exposed.

    Not thread-safe. Use one scanner per consumer.
    """

    def __init__(
        self,
        packages: Iterable[str],
        loading_context: Sequence[str] | None = None,
        factories: Iterable[SchemeFinderFactory] | None = None,
        recursive: bool = True,
    ) -> None:
        """Initialize the scanner and run the first discovery pass.

        Args:
            packages: Dotted package names, already split on delimiters.
            loading_context: Search path entries passed to the provider; None
                means ``sys.path``.
            factories: Extra finder factories, registered after the built-ins
                so they take over any scheme they share with them.
            recursive: If False, only direct children of each location are listed.

        Raises:
            DiscoveryIOError: If listing the locations of a package fails.
            MalformedLocationError: If a location cannot be parsed or repaired.
            UnsupportedSchemeError: If a location's scheme has no factory.
        """
        self._packages: list[str] = list(packages)
        self._loading_context = loading_context
        self._recursive = recursive

        self._registry = SchemeRegistry()
        self._registry.register(ArchiveFinderFactory())
        self._registry.register(DirectoryFinderFactory())
        self._registry.register(VfsFinderFactory())
        for factory in factories or ():
            self._registry.register(factory)

        self._stack = FinderStack()
        self._stack = self._discover()

    @classmethod
    def from_string(
        cls,
        packages: str | Iterable[str],
        loading_context: Sequence[str] | None = None,
        factories: Iterable[SchemeFinderFactory] | None = None,
        recursive: bool = True,
    ) -> PackageNamesScanner:
        """Create a scanner from delimited package strings, e.g. ``"a.b, c.d; e"``."""
        return cls(
            split_package_names(packages),
            loading_context=loading_context,
            factories=factories,
            recursive=recursive,
        )

    @classmethod
    def from_config(
        cls,
        config: Config,
        factories: Iterable[SchemeFinderFactory] | None = None,
    ) -> PackageNamesScanner:
        """Create a scanner from the ``scanner`` section of a Config.

        Raises:
            ConfigError: If the scanner section is invalid.
            FactoryLoadError: If a configured factory cannot be loaded.
        """
        from pkgfinder.config import load_factory

        settings = config.scanner_settings()
        all_factories: list[SchemeFinderFactory] = []
        if settings.vfs_mounts:
            all_factories.append(
                VfsFinderFactory({name: Path(root) for name, root in settings.vfs_mounts.items()})
            )
        all_factories.extend(load_factory(target) for target in settings.factories)
        all_factories.extend(factories or ())

        return cls.from_string(
            settings.packages,
            loading_context=settings.search_path,
            factories=all_factories,
            recursive=settings.recursive,
        )

    @property
    def packages(self) -> list[str]:
        """The package names scanned by each discovery pass."""
        return list(self._packages)

    @property
    def schemes(self) -> list[str]:
        """Sorted list of location schemes this scanner can handle."""
        return self._registry.schemes

    # ----- Discovery -----

    def _discover(self) -> FinderStack:
        stack = FinderStack()
        provider = get_provider()
        try:
            for package in self._packages:
                path = to_resource_path(package)
                try:
                    locations = list(provider.get_resources(path, self._loading_context))
                except OSError as e:
                    raise DiscoveryIOError(package, cause=e) from e

                if not locations:
                    logger.debug("No locations found for package '%s'", package)
                for raw in locations:
                    stack.push(self._create_finder(raw))
        except BaseException:
            stack.close()
            raise

        logger.info("Discovered %d location(s) for %d package(s)", len(stack), len(self._packages))
        return stack

    def _create_finder(self, raw: str) -> ResourceFinder:
        location = to_location_identifier(raw)
        factory = self._registry.lookup(location.scheme)
        if factory is None:
            raise UnsupportedSchemeError(location.scheme, str(location))
        logger.debug("Scanning %s with %s", location, type(factory).__name__)
        return factory.create(location, recursive=self._recursive)

    # ----- Cursor -----

    def has_next(self) -> bool:
        return self._stack.has_next()

    def next(self) -> str:
        return self._stack.next()

    def open(self) -> IO[bytes]:
        return self._stack.open()

    def remove(self) -> None:
        self._stack.remove()

    def reset(self) -> None:
        """Discard the current cursor and repeat the discovery pass from scratch.

        If the new pass fails the scanner is left with an empty cursor.
        """
        self._stack.close()
        self._stack = FinderStack()
        self._stack = self._discover()

    def close(self) -> None:
        self._stack.close()

    def __enter__(self) -> PackageNamesScanner:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"PackageNamesScanner(packages={self._packages!r})"
