"""Immutable issuer allow-list: absolute issuer URI -> IssuerOptions."""
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Optional

from issuer_trust.common.protocol import IssuerOptions
from issuer_trust.common.uri import AbsoluteUri


class ConfigurationError(Exception):
    """Issuer registry configuration is invalid. Nothing is loaded."""

    def __init__(self, message: str, element: str = ""):
        self.message = message
        self.element = element
        super().__init__(f"{message} ({element})" if element else message)

    @classmethod
    def unknown_element(cls, element: str) -> "ConfigurationError":
        return cls("Only `<add>` elements are allowed.", element)

    @classmethod
    def missing_issuer_uri(cls, element: str) -> "ConfigurationError":
        return cls("`<add>` element requires attribute `issuerUri`", element)

    @classmethod
    def invalid_issuer_uri(cls, element: str) -> "ConfigurationError":
        return cls("`issuerUri` must be a valid absolute URI", element)

    @classmethod
    def duplicate_issuer(cls, element: str) -> "ConfigurationError":
        return cls("`issuerUri` is already registered", element)


class IssuerRegistry(Mapping):
    """
    Read-only mapping of issuer URI to options.

    Built in one go from (uri, options) pairs; a duplicate key aborts the
    build. Instances are never modified, so any number of readers may share
    one without locking. Reconfiguration builds a new registry.
    """

    def __init__(self, entries: Iterable[tuple[AbsoluteUri, IssuerOptions]] = ()):
        issuers: dict[AbsoluteUri, IssuerOptions] = {}
        for uri, options in entries:
            if uri in issuers:
                raise ConfigurationError.duplicate_issuer(_describe(uri))
            issuers[uri] = options
        self._issuers = MappingProxyType(issuers)

    def __getitem__(self, uri: AbsoluteUri) -> IssuerOptions:
        return self._issuers[uri]

    def __iter__(self) -> Iterator[AbsoluteUri]:
        return iter(self._issuers)

    def __len__(self) -> int:
        return len(self._issuers)

    def lookup(self, uri: AbsoluteUri) -> Optional[IssuerOptions]:
        return self._issuers.get(uri)

    def __repr__(self) -> str:
        return f"IssuerRegistry({[_describe(uri) for uri in self._issuers]})"


def _describe(uri: AbsoluteUri) -> str:
    port = f":{uri.port}" if uri.port is not None else ""
    query = f"?{uri.query}" if uri.query else ""
    authority = f"//{uri.host}{port}" if uri.host else ""
    return f"{uri.scheme}:{authority}{uri.path}{query}"
