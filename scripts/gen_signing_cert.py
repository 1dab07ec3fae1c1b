"""Issue a self-signed token signing cert carrying SAN dns/uri/ip entries."""
import argparse
import ipaddress
import os
from datetime import datetime, timedelta, timezone
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID


def build_san(dns_names: list[str], uris: list[str], ips: list[str]) -> x509.SubjectAlternativeName:
    """
    Build the SAN extension.

    Args:
        dns_names: dNSName values (wildcards like "*.example.com" allowed)
        uris: uniformResourceIdentifier values
        ips: iPAddress values (IPv4 or IPv6 text)

    Returns:
        SubjectAlternativeName extension value
    """
    names: list[x509.GeneralName] = [x509.DNSName(d) for d in dns_names]
    names += [x509.UniformResourceIdentifier(u) for u in uris]
    names += [x509.IPAddress(ipaddress.ip_address(ip)) for ip in ips]
    return x509.SubjectAlternativeName(names)


def generate_signing_cert(
    cn: str,
    output_prefix: str,
    dns_names: list[str],
    uris: list[str],
    ips: list[str],
    key_size: int = 2048,
    validity_days: int = 365
):
    """
    Generate a self-signed signing certificate and private key.

    Args:
        cn: Common Name, also the fallback name when the SAN has no dNSName
        output_prefix: Output file prefix (e.g., "certs/issuer")
        dns_names: SAN dNSName entries
        uris: SAN URI entries
        ips: SAN IP address entries
        key_size: RSA key size in bits
        validity_days: Certificate validity period in days
    """
    print(f"[*] Generating {key_size}-bit RSA key pair for '{cn}'...")
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)

    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, cn)])
    now = datetime.now(timezone.utc)
    builder = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=validity_days))
        .add_extension(
            x509.KeyUsage(
                digital_signature=True,
                key_encipherment=False,
                content_commitment=False,
                data_encipherment=False,
                key_agreement=False,
                key_cert_sign=False,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ),
            critical=True,
        )
    )
    if dns_names or uris or ips:
        builder = builder.add_extension(build_san(dns_names, uris, ips), critical=False)
    cert = builder.sign(private_key, hashes.SHA256())

    os.makedirs(os.path.dirname(output_prefix) or ".", exist_ok=True)
    key_path = f"{output_prefix}-key.pem"
    cert_path = f"{output_prefix}-cert.pem"

    print(f"[*] Saving private key to {key_path}")
    with open(key_path, "wb") as f:
        f.write(
            private_key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.TraditionalOpenSSL,
                encryption_algorithm=serialization.NoEncryption(),
            )
        )

    print(f"[*] Saving certificate to {cert_path}")
    with open(cert_path, "wb") as f:
        f.write(cert.public_bytes(serialization.Encoding.PEM))

    print(f"\n[+] Signing certificate generated")
    print(f"    CN: {cn}")
    for label, values in (("DNS", dns_names), ("URI", uris), ("IP", ips)):
        for value in values:
            print(f"    SAN {label}: {value}")
    print(f"\n[!] WARNING: Keep private key secure and do NOT commit to git!")


def main():
    parser = argparse.ArgumentParser(description="Generate a self-signed token signing certificate")
    parser.add_argument("--cn", required=True, help="Common Name (e.g., issuer.example.com)")
    parser.add_argument("--out", required=True, help="Output file prefix (e.g., certs/issuer)")
    parser.add_argument("--dns", action="append", default=[], help="SAN DNS name (repeatable)")
    parser.add_argument("--uri", action="append", default=[], help="SAN URI (repeatable)")
    parser.add_argument("--ip", action="append", default=[], help="SAN IP address (repeatable)")
    parser.add_argument(
        "--keysize",
        type=int,
        default=2048,
        help="RSA key size in bits (default: 2048)"
    )
    parser.add_argument(
        "--days",
        type=int,
        default=365,
        help="Validity period in days (default: 365)"
    )

    args = parser.parse_args()
    generate_signing_cert(
        args.cn,
        args.out,
        args.dns,
        args.uri,
        args.ip,
        args.keysize,
        args.days
    )


if __name__ == "__main__":
    main()
