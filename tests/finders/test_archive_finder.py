"""Tests for ArchiveFinder and ArchiveFinderFactory."""

from __future__ import annotations

from pathlib import Path

import pytest

from pkgfinder.errors import StaleCursorError, UnsupportedOperationError, UnsupportedSchemeError
from pkgfinder.finders.archive import ArchiveFinder, ArchiveFinderFactory
from pkgfinder.location import to_location_identifier

from finder_helpers import drain, write_zip, zip_bytes


def _finder(location: str, recursive: bool = True) -> ArchiveFinder:
    return ArchiveFinderFactory().create(to_location_identifier(location), recursive=recursive)


@pytest.fixture
def archive(tmp_path: Path) -> Path:
    return write_zip(
        tmp_path / "lib.zip",
        {
            "com/example/a.txt": b"a",
            "com/example/sub/b.txt": b"b",
            "com/examples/other.txt": b"not in package",
            "org/x.txt": b"x",
        },
    )


# === Location parsing ===


class TestArchiveLocation:
    def test_jar_file_location(self, archive: Path) -> None:
        """jar:file: locations name the archive and the entry prefix."""
        finder = _finder(f"jar:file:{archive.as_posix()}!/com/example")
        assert finder.archive_path == archive
        assert finder.nested == []
        assert finder.prefix == "com/example"

    def test_zip_location_without_file_prefix(self, archive: Path) -> None:
        """zip: locations may carry the archive path directly."""
        finder = _finder(f"zip:{archive.as_posix()}!/com/example/")
        assert finder.archive_path == archive
        assert finder.prefix == "com/example"

    def test_whole_archive(self, archive: Path) -> None:
        """A location without a separator covers the whole archive."""
        finder = _finder(f"jar:file:{archive.as_posix()}")
        assert finder.prefix == ""
        assert len(drain(finder)) == 4

    def test_non_file_locator_unsupported(self) -> None:
        """Archives behind remote locators are rejected."""
        with pytest.raises(UnsupportedSchemeError) as exc_info:
            _finder("jar:http://example.com/lib.zip!/com/example")
        assert exc_info.value.scheme == "http"

    def test_factory_schemes(self) -> None:
        """The factory handles jar, zip and wsjar."""
        assert ArchiveFinderFactory.schemes == frozenset({"jar", "zip", "wsjar"})


# === Enumeration ===


class TestArchiveFinderEnumeration:
    def test_entries_under_prefix(self, archive: Path) -> None:
        """Only entries below the prefix are listed, relative to it."""
        names = drain(_finder(f"jar:file:{archive.as_posix()}!/com/example"))
        assert names == ["a.txt", "sub/b.txt"]

    def test_non_recursive(self, archive: Path) -> None:
        """recursive=False lists direct children only."""
        names = drain(_finder(f"jar:file:{archive.as_posix()}!/com/example", recursive=False))
        assert names == ["a.txt"]

    def test_directory_entries_skipped(self, tmp_path: Path) -> None:
        """Explicit directory entries are not reported as resources."""
        path = write_zip(tmp_path / "dirs.zip", {"pkg/": b"", "pkg/r.txt": b"r"})
        assert drain(_finder(f"jar:file:{path.as_posix()}!/pkg")) == ["r.txt"]

    def test_space_in_archive_path(self, tmp_path: Path) -> None:
        """Archive paths with spaces work once the location is repaired."""
        folder = tmp_path / "my libs"
        folder.mkdir()
        path = write_zip(folder / "lib.zip", {"pkg/r.txt": b"r"})
        assert drain(_finder(f"jar:file:{path.as_posix()}!/pkg")) == ["r.txt"]

    def test_nested_archive(self, tmp_path: Path) -> None:
        """Archives nested inside the outer archive are opened in memory."""
        inner = zip_bytes({"com/example/inner.txt": b"inner"})
        outer = write_zip(tmp_path / "app.zip", {"lib/inner.zip": inner, "com/example/outer.txt": b"outer"})
        finder = _finder(f"jar:file:{outer.as_posix()}!/lib/inner.zip!/com/example")
        assert finder.nested == ["lib/inner.zip"]
        assert drain(finder) == ["inner.txt"]
        assert finder.open().read() == b"inner"

    def test_missing_archive_yields_nothing(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """An archive that cannot be read is logged and yields no names."""
        assert drain(_finder(f"jar:file:{(tmp_path / 'gone.zip').as_posix()}!/pkg")) == []
        assert "Cannot read archive" in caplog.text

    def test_corrupt_archive_yields_nothing(self, tmp_path: Path) -> None:
        """A file that is not a zip archive yields no names."""
        path = tmp_path / "bad.zip"
        path.write_bytes(b"not a zip")
        assert drain(_finder(f"jar:file:{path.as_posix()}!/pkg")) == []


# === Cursor ===


class TestArchiveFinderCursor:
    def test_open_returns_entry_content(self, archive: Path) -> None:
        """open() returns the bytes of the entry just named."""
        finder = _finder(f"jar:file:{archive.as_posix()}!/com/example")
        assert finder.next() == "a.txt"
        assert finder.open().read() == b"a"
        assert finder.next() == "sub/b.txt"
        assert finder.open().read() == b"b"

    def test_open_before_next_raises(self, archive: Path) -> None:
        """open() without a current entry raises StaleCursorError."""
        with pytest.raises(StaleCursorError):
            _finder(f"jar:file:{archive.as_posix()}!/com/example").open()

    def test_remove_unsupported(self, archive: Path) -> None:
        """Archives are read-only."""
        finder = _finder(f"jar:file:{archive.as_posix()}!/com/example")
        finder.next()
        with pytest.raises(UnsupportedOperationError):
            finder.remove()

    def test_reset_and_close(self, archive: Path) -> None:
        """reset() restarts enumeration; close() mid-walk releases the archive."""
        finder = _finder(f"jar:file:{archive.as_posix()}!/com/example")
        assert finder.next() == "a.txt"
        finder.reset()
        assert drain(finder) == ["a.txt", "sub/b.txt"]
        finder.reset()
        finder.next()
        finder.close()
