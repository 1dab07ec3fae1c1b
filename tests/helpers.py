"""Raw SAN builders and a fake certificate for malformed-extension tests."""
from cryptography.x509.oid import ExtensionOID


def tlv(tag: int, value: bytes) -> bytes:
    """Short-form DER TLV."""
    assert len(value) < 0x80
    return bytes([tag, len(value)]) + value


def san_bytes(*entries: bytes) -> bytes:
    """GeneralNames SEQUENCE with a short-form outer length."""
    return tlv(0x30, b"".join(entries))


class FakeCertificate:
    """CertificateSource serving fixed SAN bytes."""

    def __init__(self, san: bytes = None, name: str = ""):
        self.san = san
        self.name = name

    def extension_bytes(self, oid):
        if oid == ExtensionOID.SUBJECT_ALTERNATIVE_NAME:
            return self.san
        return None

    def dns_name(self) -> str:
        return self.name
