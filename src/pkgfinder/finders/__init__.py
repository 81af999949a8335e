"""Resource finders: per-scheme finders, the scheme registry, and the finder stack."""

from pkgfinder.finders.archive import ArchiveFinder, ArchiveFinderFactory
from pkgfinder.finders.base import LazyResourceFinder, ResourceFinder, SchemeFinderFactory
from pkgfinder.finders.directory import DirectoryFinder, DirectoryFinderFactory
from pkgfinder.finders.registry import SchemeRegistry
from pkgfinder.finders.stack import FinderStack
from pkgfinder.finders.vfs import VfsFinder, VfsFinderFactory

__all__ = [
    "ResourceFinder",
    "LazyResourceFinder",
    "SchemeFinderFactory",
    "SchemeRegistry",
    "FinderStack",
    "ArchiveFinder",
    "ArchiveFinderFactory",
    "DirectoryFinder",
    "DirectoryFinderFactory",
    "VfsFinder",
    "VfsFinderFactory",
]
