"""Issuer name registry that validates the requested issuer against the signing certificate's SAN."""
import logging
from typing import Optional

from issuer_trust.common.tokens import SecurityToken, X509SecurityToken
from issuer_trust.common.uri import parse_absolute_uri
from issuer_trust.crypto.pki import certificate_matches_issuer
from issuer_trust.storage.registry import IssuerRegistry

logger = logging.getLogger(__name__)


class SanValidatingIssuerNameRegistry:
    """
    Accepts an issuer name only if it is a configured issuer URI and the
    token's X.509 certificate carries a matching Subject Alternative Name.

    The registry is injected and only ever replaced as a whole, see reload().
    """

    def __init__(self, registry: IssuerRegistry):
        self._registry = registry

    @property
    def registry(self) -> IssuerRegistry:
        return self._registry

    def reload(self, registry: IssuerRegistry):
        """
        Replace the registry. Callers already running keep the one they
        started with.

        Args:
            registry: Fully built replacement
        """
        self._registry = registry
        logger.info("Issuer registry replaced (%d issuer(s))", len(registry))

    def get_issuer_name(
        self,
        token: SecurityToken,
        requested_issuer_name: Optional[str] = None
    ) -> Optional[str]:
        """
        Validate the requested issuer name for a token.

        Which check failed is not reported to the caller.

        Args:
            token: Presented security token
            requested_issuer_name: Issuer to test. Issuers cannot be
                enumerated from a certificate, so omitting it never validates.

        Returns:
            requested_issuer_name unchanged if valid, otherwise None
        """
        if requested_issuer_name is None:
            logger.debug("Issuer rejected: no issuer name requested")
            return None
        if not isinstance(token, X509SecurityToken) or token.certificate is None:
            logger.debug("Issuer rejected: token carries no X.509 certificate")
            return None

        issuer_uri = parse_absolute_uri(requested_issuer_name)
        if issuer_uri is None:
            logger.debug("Issuer rejected: %r is not an absolute URI", requested_issuer_name)
            return None

        # Read once so a concurrent reload() cannot mix two registries
        registry = self._registry
        options = registry.lookup(issuer_uri)
        if options is None:
            logger.debug("Issuer rejected: %r is not registered", requested_issuer_name)
            return None

        if not certificate_matches_issuer(token.certificate, issuer_uri, options):
            logger.debug("Issuer rejected: certificate SAN does not match %r", requested_issuer_name)
            return None
        return requested_issuer_name
