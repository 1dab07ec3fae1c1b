"""Pydantic models: issuer options, registry entries, SAN entries (dns, uri, ip)."""
from ipaddress import IPv4Address, IPv6Address
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from issuer_trust.common.uri import AbsoluteUri


class IssuerOptions(BaseModel):
    """Per-issuer switches. Domain matching is always on."""
    model_config = ConfigDict(frozen=True)

    allow_uri_match: bool = False
    allow_ip_match: bool = False


class IssuerEntry(BaseModel):
    """One `<add>` element of the registry configuration."""
    model_config = ConfigDict(populate_by_name=True)

    issuer_uri: str = Field(alias="issuerUri", min_length=1)
    allow_uri_validation: bool = Field(default=False, alias="allowUriValidation")
    allow_ip_validation: bool = Field(default=False, alias="allowIpValidation")

    @field_validator("allow_uri_validation", "allow_ip_validation", mode="before")
    @classmethod
    def _true_literal(cls, value) -> bool:
        # Only the literal "true" (any case) switches a flag on
        if isinstance(value, bool):
            return value
        return isinstance(value, str) and value.lower() == "true"

    def options(self) -> IssuerOptions:
        return IssuerOptions(
            allow_uri_match=self.allow_uri_validation,
            allow_ip_match=self.allow_ip_validation,
        )


class DomainEntry(BaseModel):
    """dNSName (context tag 2)."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["dns"] = "dns"
    value: str


class UriEntry(BaseModel):
    """uniformResourceIdentifier (context tag 6), already parsed."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["uri"] = "uri"
    value: AbsoluteUri


class IpEntry(BaseModel):
    """iPAddress (context tag 7), 4 or 16 octets."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["ip"] = "ip"
    value: Union[IPv4Address, IPv6Address]


SanEntry = Annotated[Union[DomainEntry, UriEntry, IpEntry], Field(discriminator="kind")]
