"""Error hierarchy for the pkgfinder resource discovery library."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "FinderError",
    "ConfigNotFoundError",
    "ConfigError",
    "FactoryLoadError",
    "DiscoveryIOError",
    "MalformedLocationError",
    "UnsupportedSchemeError",
    "ExhaustedSequenceError",
    "StaleCursorError",
    "UnsupportedOperationError",
    "ProviderPermissionError",
    "ErrorCodes",
]


class FinderError(Exception):
    """Base error for all pkgfinder errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(FinderError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(FinderError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class FactoryLoadError(FinderError):
    """Raised when a configured finder factory target cannot be imported or built."""

    def __init__(self, *, target: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="FACTORY_LOAD_ERROR",
            message=f"Cannot load finder factory '{target}': {reason}",
            details={"target": target, "reason": reason},
            **kwargs,
        )


class DiscoveryIOError(FinderError):
    """Raised when the host fails while listing locations for a package."""

    def __init__(self, package: str, **kwargs: Any) -> None:
        super().__init__(
            code="DISCOVERY_IO_ERROR",
            message=f"I/O error while scanning package '{package}'",
            details={"package": package},
            **kwargs,
        )

    @property
    def package(self) -> str:
        """The package name whose locations could not be listed."""
        return self.details["package"]


class MalformedLocationError(FinderError):
    """Raised when a raw location cannot be parsed or repaired into an identifier."""

    def __init__(self, location: str, reason: str = "", **kwargs: Any) -> None:
        message = f"Malformed location: {location!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            code="MALFORMED_LOCATION",
            message=message,
            details={"location": location, "reason": reason},
            **kwargs,
        )

    @property
    def location(self) -> str:
        """The raw location string that failed to parse."""
        return self.details["location"]


class UnsupportedSchemeError(FinderError):
    """Raised when no finder factory is registered for a location's scheme."""

    def __init__(self, scheme: str, location: str, **kwargs: Any) -> None:
        super().__init__(
            code="UNSUPPORTED_SCHEME",
            message=(
                f"The URI scheme '{scheme}' of the location '{location}' is not supported. "
                "Package scanning is not supported for such locations; register a finder "
                "factory for the scheme or list the resources explicitly."
            ),
            details={"scheme": scheme, "location": location},
            **kwargs,
        )

    @property
    def scheme(self) -> str:
        """The unsupported scheme token."""
        return self.details["scheme"]

    @property
    def location(self) -> str:
        """The full location identifier carrying the scheme."""
        return self.details["location"]


class ExhaustedSequenceError(FinderError):
    """Raised when next() is called with no remaining resources."""

    def __init__(self, message: str = "No more resources", **kwargs: Any) -> None:
        super().__init__(code="EXHAUSTED_SEQUENCE", message=message, **kwargs)


class StaleCursorError(FinderError):
    """Raised when open() or remove() has no valid preceding next() result."""

    def __init__(self, operation: str, **kwargs: Any) -> None:
        super().__init__(
            code="STALE_CURSOR",
            message=f"Cannot {operation}(): no current resource, call next() first",
            details={"operation": operation},
            **kwargs,
        )


class UnsupportedOperationError(FinderError):
    """Raised when a finder does not support the requested operation."""

    def __init__(self, operation: str, finder: str, **kwargs: Any) -> None:
        super().__init__(
            code="UNSUPPORTED_OPERATION",
            message=f"{finder} does not support {operation}()",
            details={"operation": operation, "finder": finder},
            **kwargs,
        )


class ProviderPermissionError(FinderError):
    """Raised when replacing the resources provider is rejected by an audit hook."""

    def __init__(self, provider: str, **kwargs: Any) -> None:
        super().__init__(
            code="PROVIDER_PERMISSION_DENIED",
            message=f"Not permitted to replace the resources provider with {provider}",
            details={"provider": provider},
            **kwargs,
        )


class ErrorCodes:
    """All pkgfinder error codes as constants.

    Example:
        if error.code == ErrorCodes.UNSUPPORTED_SCHEME:
            register_missing_factory(error.details["scheme"])
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    FACTORY_LOAD_ERROR = "FACTORY_LOAD_ERROR"
    DISCOVERY_IO_ERROR = "DISCOVERY_IO_ERROR"
    MALFORMED_LOCATION = "MALFORMED_LOCATION"
    UNSUPPORTED_SCHEME = "UNSUPPORTED_SCHEME"
    EXHAUSTED_SEQUENCE = "EXHAUSTED_SEQUENCE"
    STALE_CURSOR = "STALE_CURSOR"
    UNSUPPORTED_OPERATION = "UNSUPPORTED_OPERATION"
    PROVIDER_PERMISSION_DENIED = "PROVIDER_PERMISSION_DENIED"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
