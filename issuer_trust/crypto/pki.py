"""X.509 issuer matching: SAN dns/uri/ip against the requested issuer URI."""
import logging
from typing import Optional, Protocol

from cryptography import x509
from cryptography.x509.oid import ExtensionOID, NameOID

from issuer_trust.common.protocol import IssuerOptions
from issuer_trust.common.uri import AbsoluteUri, is_base_of, parse_ip_host
from issuer_trust.crypto.san import scan_san

logger = logging.getLogger(__name__)


class CertificateSource(Protocol):
    """What the matcher needs from a certificate."""

    def extension_bytes(self, oid: x509.ObjectIdentifier) -> Optional[bytes]:
        """Raw DER of the extension value, or None if absent."""
        ...

    def dns_name(self) -> str:
        """Primary DNS name, or subject CN, or empty string."""
        ...


class X509CertificateSource:
    """CertificateSource backed by a cryptography.x509.Certificate."""

    def __init__(self, certificate: x509.Certificate):
        self.certificate = certificate

    @classmethod
    def from_pem(cls, cert_pem: bytes) -> "X509CertificateSource":
        return cls(x509.load_pem_x509_certificate(cert_pem))

    def extension_bytes(self, oid: x509.ObjectIdentifier) -> Optional[bytes]:
        try:
            extension = self.certificate.extensions.get_extension_for_oid(oid)
        except x509.ExtensionNotFound:
            return None
        except ValueError as e:
            # cryptography refuses to parse the extension block
            logger.debug("Unparseable extensions treated as absent: %s", e)
            return None
        return extension.value.public_bytes()

    def dns_name(self) -> str:
        try:
            san_ext = self.certificate.extensions.get_extension_for_oid(
                ExtensionOID.SUBJECT_ALTERNATIVE_NAME
            )
            dns_names = san_ext.value.get_values_for_type(x509.DNSName)
            if dns_names:
                return dns_names[0]
        except (x509.ExtensionNotFound, ValueError):
            pass

        cn_attrs = self.certificate.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
        if cn_attrs:
            return str(cn_attrs[0].value)
        return ""


def matches_domain(host: str, domain: str) -> bool:
    """
    Compare a request host with a SAN domain.

    Exact match ignoring case, or a leading "*." wildcard standing for
    exactly one label of the host.

    Args:
        host: Host part of the requested issuer URI
        domain: dNSName from the certificate

    Returns:
        True if the host is covered by the domain
    """
    if not host:
        return False
    if domain.startswith("*."):
        separator = host.find(".")
        suffix = domain[2:]
        if separator == -1 or not suffix:
            return False
        return host[separator + 1:].lower() == suffix.lower()
    return host.lower() == domain.lower()


def matches_ip(host: str, address) -> bool:
    """Host is a literal IP equal to address (same family, same octets)."""
    requested = parse_ip_host(host)
    return requested is not None and requested == address


def certificate_matches_issuer(
    certificate: CertificateSource,
    issuer_uri: AbsoluteUri,
    options: IssuerOptions
) -> bool:
    """
    Check that the certificate's SAN vouches for the issuer URI.

    Checks, first success wins:
    - dNSName covers the URI host (always)
    - URI entry is a base of the issuer URI (allow_uri_match)
    - iPAddress equals the URI host (allow_ip_match)

    If the SAN yields no dNSName, the certificate's own DNS name (or CN)
    is used as the single domain candidate.

    Args:
        certificate: Certificate to inspect
        issuer_uri: Parsed requested issuer
        options: Registry options for that issuer

    Returns:
        True if any check succeeded
    """
    raw = certificate.extension_bytes(ExtensionOID.SUBJECT_ALTERNATIVE_NAME) or b""
    entries = scan_san(raw, options)

    domains = [e.value for e in entries if e.kind == "dns"]
    uris = [e.value for e in entries if e.kind == "uri"]
    addresses = [e.value for e in entries if e.kind == "ip"]

    if not domains:
        # No usable dNSName: fall back to what the certificate reports itself
        domains.append(certificate.dns_name())

    host = issuer_uri.host
    if any(matches_domain(host, d) for d in domains):
        return True
    if options.allow_uri_match and any(is_base_of(u, issuer_uri) for u in uris):
        return True
    if options.allow_ip_match and any(matches_ip(host, a) for a in addresses):
        return True
    return False
