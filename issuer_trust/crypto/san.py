"""Subject Alternative Name scanner: walks GeneralNames and keeps dns/uri/ip entries."""
import logging
from ipaddress import ip_address

from issuer_trust.common.protocol import DomainEntry, IpEntry, IssuerOptions, SanEntry, UriEntry
from issuer_trust.common.uri import parse_absolute_uri
from issuer_trust.crypto.der import SEQUENCE_TAG, decode_length

logger = logging.getLogger(__name__)

# GeneralName context-specific tags of interest (all primitive)
DNS_TAG = 0x82
URI_TAG = 0x86
IP_TAG = 0x87

# Entries start right after the outer SEQUENCE tag and a short-form length.
# A SAN long enough to need a long-form outer length is misaligned by this.
SCAN_START = 2


def _ascii(value: bytes) -> str:
    # Out-of-range octets become U+FFFD; such names never match a host
    return value.decode("ascii", errors="replace")


def scan_san(data: bytes, options: IssuerOptions) -> list[SanEntry]:
    """
    Scan raw SAN extension bytes.

    Scanning is best effort: on the first malformed length the scan stops
    and the entries collected so far are returned.

    Args:
        data: DER encoding of the SubjectAltName extension value
        options: Issuer options; URI and IP entries are only kept when the
            matching flag is enabled

    Returns:
        Ordered list of DomainEntry, UriEntry and IpEntry
    """
    entries: list[SanEntry] = []
    if not data or data[0] != SEQUENCE_TAG:
        return entries

    cursor = SCAN_START
    while cursor < len(data):
        tag = data[cursor]
        decoded = decode_length(data, cursor + 1)
        if decoded is None:
            logger.debug("SAN scan stopped: bad length at offset %d", cursor + 1)
            break
        length, cursor = decoded
        if cursor + length > len(data):
            logger.debug("SAN scan stopped: value at offset %d overruns extension", cursor)
            break
        value = data[cursor:cursor + length]

        if tag == DNS_TAG:
            entries.append(DomainEntry(value=_ascii(value)))
        elif tag == URI_TAG:
            if options.allow_uri_match:
                uri = parse_absolute_uri(_ascii(value))
                if uri is not None:
                    entries.append(UriEntry(value=uri))
        elif tag == IP_TAG:
            if options.allow_ip_match and length in (4, 16):
                entries.append(IpEntry(value=ip_address(bytes(value))))

        cursor += length
    return entries
