"""Check whether a signing certificate vouches for an issuer per the registry config."""
import argparse
import sys

from issuer_trust.common.tokens import X509SecurityToken
from issuer_trust.crypto.pki import X509CertificateSource
from issuer_trust.logging_config import configure_logging
from issuer_trust.storage.config import load_registry_file, load_registry_from_env
from issuer_trust.storage.registry import ConfigurationError
from issuer_trust.validator import SanValidatingIssuerNameRegistry


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate an issuer name against a certificate's SAN")
    parser.add_argument("issuer", help="Requested issuer URI")
    parser.add_argument("--cert", required=True, help="Signing certificate (PEM)")
    parser.add_argument(
        "--config",
        help="Registry XML (default: $ISSUER_REGISTRY_CONFIG)"
    )
    args = parser.parse_args()
    configure_logging()

    try:
        registry = load_registry_file(args.config) if args.config else load_registry_from_env()
    except ConfigurationError as e:
        print(f"[!] Configuration error: {e}", file=sys.stderr)
        return 2

    with open(args.cert, "rb") as f:
        certificate = X509CertificateSource.from_pem(f.read())

    validator = SanValidatingIssuerNameRegistry(registry)
    issuer = validator.get_issuer_name(X509SecurityToken(certificate), args.issuer)
    if issuer is None:
        print(f"[-] Issuer '{args.issuer}' not accepted for this certificate")
        return 1
    print(f"[+] Issuer '{issuer}' accepted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
