"""Scheme registry mapping URI scheme tokens to finder factories."""

from __future__ import annotations

import logging

from pkgfinder.finders.base import SchemeFinderFactory

logger = logging.getLogger(__name__)

__all__ = ["SchemeRegistry"]


class SchemeRegistry:
    """Case-insensitive scheme to factory mapping.

    Registration is append/overwrite only: a later factory declaring a scheme
    replaces the earlier one for that scheme.
    """

    def __init__(self) -> None:
        self._factories: dict[str, SchemeFinderFactory] = {}

    def register(self, factory: SchemeFinderFactory) -> None:
        """Register ``factory`` for every scheme it declares."""
        for scheme in factory.schemes:
            key = scheme.lower()
            previous = self._factories.get(key)
            if previous is not None and previous is not factory:
                logger.debug(
                    "Scheme '%s' handled by %s is now handled by %s",
                    key,
                    type(previous).__name__,
                    type(factory).__name__,
                )
            self._factories[key] = factory

    def lookup(self, scheme: str) -> SchemeFinderFactory | None:
        """Return the factory for ``scheme``, or None if it is not registered."""
        return self._factories.get(scheme.lower())

    def __contains__(self, scheme: object) -> bool:
        return isinstance(scheme, str) and scheme.lower() in self._factories

    @property
    def schemes(self) -> list[str]:
        """Sorted list of registered scheme tokens."""
        return sorted(self._factories)
