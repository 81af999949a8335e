"""pkgfinder - Scheme-extensible discovery of package resources."""

from __future__ import annotations

# Core
from pkgfinder.scanner import PackageNamesScanner
from pkgfinder.location import LocationIdentifier, parse_location, to_location_identifier

# Providers
from pkgfinder.provider import (
    ResourcesProvider,
    SearchPathResourcesProvider,
    get_provider,
    set_provider,
)

# Finders
from pkgfinder.finders import (
    ArchiveFinderFactory,
    DirectoryFinderFactory,
    FinderStack,
    LazyResourceFinder,
    ResourceFinder,
    SchemeFinderFactory,
    SchemeRegistry,
    VfsFinderFactory,
)

# Config
from pkgfinder.config import Config, ScannerSettings

# Errors
from pkgfinder.errors import (
    ConfigError,
    ConfigNotFoundError,
    DiscoveryIOError,
    ErrorCodes,
    ExhaustedSequenceError,
    FactoryLoadError,
    FinderError,
    MalformedLocationError,
    ProviderPermissionError,
    StaleCursorError,
    UnsupportedOperationError,
    UnsupportedSchemeError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "PackageNamesScanner",
    "LocationIdentifier",
    "parse_location",
    "to_location_identifier",
    # Providers
    "ResourcesProvider",
    "SearchPathResourcesProvider",
    "get_provider",
    "set_provider",
    # Finders
    "ResourceFinder",
    "LazyResourceFinder",
    "SchemeFinderFactory",
    "SchemeRegistry",
    "FinderStack",
    "ArchiveFinderFactory",
    "DirectoryFinderFactory",
    "VfsFinderFactory",
    # Config
    "Config",
    "ScannerSettings",
    # Errors
    "ErrorCodes",
    "FinderError",
    "ConfigError",
    "ConfigNotFoundError",
    "FactoryLoadError",
    "DiscoveryIOError",
    "MalformedLocationError",
    "UnsupportedSchemeError",
    "ExhaustedSequenceError",
    "StaleCursorError",
    "UnsupportedOperationError",
    "ProviderPermissionError",
]
