"""FinderStack -- composes several finders into one flattened cursor."""

from __future__ import annotations

from typing import IO

from pkgfinder.errors import ExhaustedSequenceError, StaleCursorError, UnsupportedOperationError
from pkgfinder.finders.base import ResourceFinder

__all__ = ["FinderStack"]


class FinderStack(ResourceFinder):
    """Ordered stack of finders exposed as a single cursor.

    All names of the first pushed finder are returned before any name of the
    second, and so on. The active index only moves forward: once a finder is
    exhausted it is never consulted again.

    Not thread-safe. A stack must be driven by one consumer at a time.
    """

    def __init__(self) -> None:
        self._finders: list[ResourceFinder] = []
        self._index = 0
        self._current: ResourceFinder | None = None

    def push(self, finder: ResourceFinder) -> None:
        """Append a finder. It becomes active once all earlier finders are exhausted."""
        self._finders.append(finder)

    def __len__(self) -> int:
        return len(self._finders)

    def has_next(self) -> bool:
        while self._index < len(self._finders):
            if self._finders[self._index].has_next():
                return True
            # Moving past the active finder invalidates its current resource.
            self._index += 1
            self._current = None
        return False

    def next(self) -> str:
        if not self.has_next():
            raise ExhaustedSequenceError()
        finder = self._finders[self._index]
        name = finder.next()
        self._current = finder
        return name

    def open(self) -> IO[bytes]:
        if self._current is None:
            raise StaleCursorError("open")
        return self._current.open()

    def remove(self) -> None:
        if self._current is None:
            raise StaleCursorError("remove")
        self._current.remove()

    def reset(self) -> None:
        raise UnsupportedOperationError("reset", type(self).__name__)

    def close(self) -> None:
        for finder in self._finders:
            finder.close()
        self._current = None
