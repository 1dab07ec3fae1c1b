"""Security tokens handed in by the authentication pipeline."""


class SecurityToken:
    """Base class for credentials presented with a request."""
    pass


class X509SecurityToken(SecurityToken):
    """Token backed by an X.509 signing certificate."""

    def __init__(self, certificate):
        """
        Args:
            certificate: Object implementing CertificateSource
        """
        self.certificate = certificate


class UserNameSecurityToken(SecurityToken):
    """Username/password token. Carries no certificate, so never validates an issuer."""

    def __init__(self, username: str, password: str = ""):
        self.username = username
        self.password = password
