"""Fake finders, factories and providers shared by the pkgfinder tests."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import IO, Iterable, Sequence

from pkgfinder.errors import ExhaustedSequenceError, StaleCursorError, UnsupportedOperationError
from pkgfinder.finders.base import ResourceFinder
from pkgfinder.location import LocationIdentifier
from pkgfinder.provider import ResourcesProvider


# === Fakes ===


class FakeFinder(ResourceFinder):
    """In-memory finder over a fixed name -> content mapping."""

    def __init__(self, contents: dict[str, bytes], writable: bool = False) -> None:
        self.contents = dict(contents)
        self.writable = writable
        self.closed = False
        self._names = list(contents)
        self._pos = 0
        self._current: str | None = None

    def has_next(self) -> bool:
        return self._pos < len(self._names)

    def next(self) -> str:
        if not self.has_next():
            raise ExhaustedSequenceError()
        self._current = self._names[self._pos]
        self._pos += 1
        return self._current

    def open(self) -> IO[bytes]:
        if self._current is None:
            raise StaleCursorError("open")
        return io.BytesIO(self.contents[self._current])

    def remove(self) -> None:
        if not self.writable:
            raise UnsupportedOperationError("remove", "FakeFinder")
        if self._current is None:
            raise StaleCursorError("remove")
        del self.contents[self._current]
        self._current = None

    def reset(self) -> None:
        self._pos = 0
        self._current = None

    def close(self) -> None:
        self.closed = True


class FakeFactory:
    """Finder factory serving FakeFinders from a location -> contents mapping."""

    def __init__(self, schemes: Iterable[str], contents: dict[str, dict[str, bytes]] | None = None) -> None:
        self.schemes = frozenset(schemes)
        self.contents = contents or {}
        self.created: list[LocationIdentifier] = []

    def create(self, location: LocationIdentifier, recursive: bool = True) -> FakeFinder:
        self.created.append(location)
        return FakeFinder(self.contents.get(str(location), {}))


class FakeProvider(ResourcesProvider):
    """Provider answering from a resource path -> raw locations mapping."""

    def __init__(self, locations: dict[str, list[str]], failing: Iterable[str] = ()) -> None:
        self.locations = locations
        self.failing = set(failing)
        self.calls: list[tuple[str, Sequence[str] | None]] = []

    def get_resources(self, name: str, loading_context: Sequence[str] | None) -> list[str]:
        self.calls.append((name, loading_context))
        if name in self.failing:
            raise OSError(f"cannot list {name}")
        return list(self.locations.get(name, []))


# === Helpers ===


def drain(finder: ResourceFinder) -> list[str]:
    """Collect every remaining name of a finder."""
    names = []
    while finder.has_next():
        names.append(finder.next())
    return names


def write_zip(path: Path, entries: dict[str, bytes]) -> Path:
    """Write a zip archive with the given entries and return its path."""
    with zipfile.ZipFile(path, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return path


def zip_bytes(entries: dict[str, bytes]) -> bytes:
    """Return the bytes of an in-memory zip archive with the given entries."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return buffer.getvalue()


class CustomSchemeFactory(FakeFactory):
    """No-argument factory for the ``custom`` scheme, loadable from configuration."""

    def __init__(self) -> None:
        super().__init__({"custom"})


class NotAFactory:
    """Instantiable, but declares neither ``schemes`` nor ``create``."""
