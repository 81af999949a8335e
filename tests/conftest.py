"""Shared test fixtures for the pkgfinder test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

import pkgfinder.provider as provider_module
from pkgfinder.provider import ResourcesProvider

from finder_helpers import write_zip


@pytest.fixture(autouse=True)
def _isolated_provider(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test with an uninitialized provider singleton."""
    monkeypatch.setattr(provider_module, "_provider", None)


@pytest.fixture
def install_provider(monkeypatch: pytest.MonkeyPatch):
    """Install a provider as the singleton without going through set_provider()."""

    def install(provider: ResourcesProvider) -> ResourcesProvider:
        monkeypatch.setattr(provider_module, "_provider", provider)
        return provider

    return install


@pytest.fixture
def search_root(tmp_path: Path) -> Path:
    """A search path directory holding two packages.

    Layout::

        classes/com/example/a.txt
        classes/com/example/sub/b.txt
        classes/org/other/c.txt
    """
    root = tmp_path / "classes"
    (root / "com" / "example" / "sub").mkdir(parents=True)
    (root / "org" / "other").mkdir(parents=True)
    (root / "com" / "example" / "a.txt").write_bytes(b"alpha")
    (root / "com" / "example" / "sub" / "b.txt").write_bytes(b"beta")
    (root / "org" / "other" / "c.txt").write_bytes(b"gamma")
    return root


@pytest.fixture
def search_archive(tmp_path: Path) -> Path:
    """A zip archive contributing more resources to com.example."""
    return write_zip(
        tmp_path / "lib.zip",
        {
            "com/example/z1.txt": b"zip one",
            "com/example/deep/z2.txt": b"zip two",
            "net/unrelated/x.txt": b"x",
        },
    )
