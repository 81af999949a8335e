"""Location identifiers: strict parsing and repair of raw resource locations."""

from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass
from urllib.parse import quote, unquote

from pkgfinder.errors import MalformedLocationError

logger = logging.getLogger(__name__)

__all__ = [
    "LocationIdentifier",
    "parse_location",
    "to_location_identifier",
    "encode_component",
    "quote_path",
]

# RFC 3986, appendix B. Every group is optional so the split always matches.
_SPLIT_RE = re.compile(r"^(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?(?:#(.*))?$", re.DOTALL)
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_PCT_RE = re.compile(r"%[0-9A-Fa-f]{2}")

_UNRESERVED = string.ascii_letters + string.digits + "-._~"
_SUB_DELIMS = "!$&'()*+,;="
_PCHAR = _UNRESERVED + _SUB_DELIMS + ":@"

_COMPONENT_CHARS = {
    "authority": frozenset(_UNRESERVED + _SUB_DELIMS + ":@[]"),
    "path": frozenset(_PCHAR + "/"),
    "query": frozenset(_PCHAR + "/?"),
    "fragment": frozenset(_PCHAR + "/?"),
}


@dataclass(frozen=True)
class LocationIdentifier:
    """Canonical URI-shaped name of one physical resource root."""

    scheme: str
    path: str
    authority: str | None = None
    query: str | None = None
    fragment: str | None = None

    @property
    def decoded_path(self) -> str:
        """The path with percent-escapes decoded."""
        return unquote(self.path)

    def __str__(self) -> str:
        parts = [self.scheme, ":"]
        if self.authority is not None:
            parts.extend(("//", self.authority))
        parts.append(self.path)
        if self.query is not None:
            parts.extend(("?", self.query))
        if self.fragment is not None:
            parts.extend(("#", self.fragment))
        return "".join(parts)


def _split(value: str) -> tuple[str | None, str | None, str, str | None, str | None]:
    match = _SPLIT_RE.match(value)
    assert match is not None
    scheme, authority, path, query, fragment = match.groups()
    return scheme, authority, path or "", query, fragment


def _first_illegal(value: str, component: str) -> str | None:
    allowed = _COMPONENT_CHARS[component]
    for ch in _PCT_RE.sub("", value):
        if ch not in allowed:
            return ch
    return None


def parse_location(value: str) -> LocationIdentifier:
    """Strictly parse an RFC 3986 location with a mandatory scheme.

    Raises:
        ValueError: If the scheme is missing or invalid, or any component
            carries a character that must be percent-encoded.
    """
    scheme, authority, path, query, fragment = _split(value)
    if not scheme:
        raise ValueError(f"Missing scheme in location: {value!r}")
    if not _SCHEME_RE.match(scheme):
        raise ValueError(f"Illegal scheme {scheme!r} in location: {value!r}")
    if authority is None and not path:
        raise ValueError(f"Expected scheme-specific part in location: {value!r}")

    for component, part in (
        ("authority", authority),
        ("path", path),
        ("query", query),
        ("fragment", fragment),
    ):
        if part is None:
            continue
        illegal = _first_illegal(part, component)
        if illegal is not None:
            raise ValueError(f"Illegal character {illegal!r} in {component} of location: {value!r}")

    return LocationIdentifier(
        scheme=scheme,
        authority=authority,
        path=path,
        query=query,
        fragment=fragment,
    )


def encode_component(value: str, component: str) -> str:
    """Percent-encode characters that are illegal in a URI component.

    Existing valid ``%HH`` escapes are preserved so that partially encoded
    input is not double-encoded.
    """
    safe = "".join(sorted(_COMPONENT_CHARS[component]))
    parts: list[str] = []
    pos = 0
    for match in _PCT_RE.finditer(value):
        parts.append(quote(value[pos : match.start()], safe=safe))
        parts.append(match.group(0))
        pos = match.end()
    parts.append(quote(value[pos:], safe=safe))
    return "".join(parts)


def quote_path(value: str) -> str:
    """Percent-encode a literal filesystem path for use as a location path.

    Unlike :func:`encode_component`, a ``%`` in ``value`` is always encoded,
    as are ``?`` and ``#``, so the path survives a strict parse unchanged.
    """
    return quote(value, safe="".join(sorted(_COMPONENT_CHARS["path"])))


def _rebuild(value: str) -> str:
    scheme, authority, path, query, fragment = _split(value)
    parts: list[str] = []
    if scheme is not None:
        parts.extend((scheme, ":"))
    if authority:
        parts.extend(("//", authority))
    parts.append(encode_component(path, "path"))
    if query is not None:
        parts.extend(("?", encode_component(query, "query")))
    # The fragment is carried over unescaped.
    if fragment is not None:
        parts.extend(("#", fragment))
    return "".join(parts)


def to_location_identifier(raw: str) -> LocationIdentifier:
    """Convert a raw location string into a canonical identifier.

    Some resource loaders hand out locations that are not correctly
    percent-encoded (``file:/a dir/pkg``). When the strict parse fails the
    path and query are re-encoded and parsed once more. The fragment is left
    as given, so an invalid fragment still fails.

    Raises:
        MalformedLocationError: If the repaired location still fails to parse.
    """
    try:
        return parse_location(raw)
    except ValueError as exc:
        first_error = exc

    repaired = _rebuild(raw)
    try:
        identifier = parse_location(repaired)
    except ValueError as exc:
        raise MalformedLocationError(raw, reason=str(first_error), cause=first_error) from exc

    logger.debug("Repaired location %r as %s", raw, identifier)
    return identifier
