"""Absolute URI parsing, registry equality and base-URI checks."""
import ipaddress
import re
from typing import Optional, Union
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict


_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
    "ldap": 389,
}


class AbsoluteUri(BaseModel):
    """
    Comparable form of an absolute URI.

    Two URIs are equal when scheme, host, effective port, path and query
    are equal. Fragment and user-info are dropped.
    """
    model_config = ConfigDict(frozen=True)

    scheme: str
    host: str = ""
    port: Optional[int] = None
    path: str = ""
    query: str = ""

    @property
    def has_authority(self) -> bool:
        return bool(self.host)


def parse_absolute_uri(text: str) -> Optional[AbsoluteUri]:
    """
    Parse text as an absolute URI.

    Args:
        text: Candidate URI string

    Returns:
        AbsoluteUri, or None if text is not an absolute URI
    """
    if not text or text != text.strip() or any(c.isspace() for c in text):
        return None
    try:
        parts = urlsplit(text)
        port = parts.port
    except ValueError:
        return None
    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return None

    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if parts.netloc and not host:
        return None
    if port is None:
        port = DEFAULT_PORTS.get(scheme)
    path = parts.path
    if host and not path:
        path = "/"
    return AbsoluteUri(scheme=scheme, host=host, port=port, path=path, query=parts.query)


def is_base_of(base: AbsoluteUri, target: AbsoluteUri) -> bool:
    """
    Check whether base is an ancestor of target.

    Scheme, host and port must be equal, and target's path must start with
    base's path cut back to its last '/'. A base without a host is never
    an ancestor.
    """
    if not base.has_authority:
        return False
    if (base.scheme, base.host, base.port) != (target.scheme, target.host, target.port):
        return False
    directory = base.path[:base.path.rfind("/") + 1]
    return bool(directory) and target.path.startswith(directory)


def parse_ip_host(host: str) -> Optional[Union[ipaddress.IPv4Address, ipaddress.IPv6Address]]:
    """Return the host as an IP address, or None if it is a name."""
    try:
        return ipaddress.ip_address(host)
    except ValueError:
        return None
