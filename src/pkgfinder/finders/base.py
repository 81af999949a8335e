"""Finder base classes and the scheme finder factory protocol."""

from __future__ import annotations

from typing import IO, Iterator, Protocol, runtime_checkable

from pkgfinder.errors import ExhaustedSequenceError, StaleCursorError, UnsupportedOperationError
from pkgfinder.location import LocationIdentifier

__all__ = ["ResourceFinder", "LazyResourceFinder", "SchemeFinderFactory"]


class ResourceFinder:
    """Cursor over resource names.

    Subclass and override the cursor methods. ``remove()`` and ``reset()``
    are unsupported by default, and ``close()`` is a no-op.
    """

    def has_next(self) -> bool:
        """Return True if another resource name is pending."""
        raise NotImplementedError

    def next(self) -> str:
        """Return the next resource name."""
        raise NotImplementedError

    def open(self) -> IO[bytes]:
        """Open the resource most recently returned by next()."""
        raise NotImplementedError

    def remove(self) -> None:
        """Delete the resource most recently returned by next()."""
        raise UnsupportedOperationError("remove", type(self).__name__)

    def reset(self) -> None:
        """Restart enumeration from the beginning."""
        raise UnsupportedOperationError("reset", type(self).__name__)

    def close(self) -> None:
        """Release any resources held by the finder."""
        return None

    def __iter__(self) -> Iterator[str]:
        while self.has_next():
            yield self.next()


class LazyResourceFinder(ResourceFinder):
    """Finder over a lazily generated sequence of names below one location.

    Subclasses implement ``_iter_names()`` and ``_open_name()``. Writable
    finders set ``read_only = False`` and implement ``_remove_name()``.
    """

    read_only = True

    def __init__(self, location: LocationIdentifier, recursive: bool = True) -> None:
        self.location = location
        self.recursive = recursive
        self._names: Iterator[str] | None = None
        self._pending: str | None = None
        self._current: str | None = None

    def _iter_names(self) -> Iterator[str]:
        raise NotImplementedError

    def _open_name(self, name: str) -> IO[bytes]:
        raise NotImplementedError

    def _remove_name(self, name: str) -> None:
        raise UnsupportedOperationError("remove", type(self).__name__)

    def has_next(self) -> bool:
        if self._pending is not None:
            return True
        if self._names is None:
            self._names = self._iter_names()
        self._pending = next(self._names, None)
        return self._pending is not None

    def next(self) -> str:
        self.has_next()
        name = self._pending
        if name is None:
            raise ExhaustedSequenceError(f"No more resources under {self.location}")
        self._pending = None
        self._current = name
        return name

    def open(self) -> IO[bytes]:
        if self._current is None:
            raise StaleCursorError("open")
        return self._open_name(self._current)

    def remove(self) -> None:
        if self.read_only:
            raise UnsupportedOperationError("remove", type(self).__name__)
        if self._current is None:
            raise StaleCursorError("remove")
        self._remove_name(self._current)
        self._current = None

    def reset(self) -> None:
        self.close()
        self._pending = None
        self._current = None

    def close(self) -> None:
        names, self._names = self._names, None
        if names is not None and hasattr(names, "close"):
            names.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.location})"


@runtime_checkable
class SchemeFinderFactory(Protocol):
    """Builds finders for locations whose scheme is in ``schemes``."""

    schemes: frozenset[str]

    def create(self, location: LocationIdentifier, recursive: bool = True) -> ResourceFinder:
        """Create a finder rooted at ``location``."""
        ...
