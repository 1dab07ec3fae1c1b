"""Load the issuer registry from `<add issuerUri=... />` XML configuration."""
import logging
import os
import xml.etree.ElementTree as ET

from dotenv import load_dotenv
from pydantic import ValidationError

from issuer_trust.common.protocol import IssuerEntry
from issuer_trust.common.uri import parse_absolute_uri
from issuer_trust.storage.registry import ConfigurationError, IssuerRegistry

load_dotenv()

logger = logging.getLogger(__name__)


def _element_text(element: ET.Element) -> str:
    return ET.tostring(element, encoding="unicode").strip()


def _parse_entry(element: ET.Element):
    description = _element_text(element)
    if element.tag.rsplit("}", 1)[-1] != "add":
        raise ConfigurationError.unknown_element(description)
    if not element.get("issuerUri"):
        raise ConfigurationError.missing_issuer_uri(description)
    try:
        entry = IssuerEntry.model_validate(dict(element.attrib))
    except ValidationError as e:
        raise ConfigurationError(str(e), description) from e

    issuer_uri = parse_absolute_uri(entry.issuer_uri)
    if issuer_uri is None:
        raise ConfigurationError.invalid_issuer_uri(description)
    return issuer_uri, entry.options()


def load_registry_xml(xml_text: str) -> IssuerRegistry:
    """
    Build a registry from XML.

    The children of the root element are the entries, in order:

        <issuerNameRegistry>
          <add issuerUri="https://issuer.example.com" />
          <add issuerUri="https://idp.example.org/federation" allowUriValidation="true" />
        </issuerNameRegistry>

    Args:
        xml_text: XML document

    Returns:
        Fully built IssuerRegistry

    Raises:
        ConfigurationError: On unparseable XML, an unknown element, a missing
            or invalid issuerUri, or a duplicate issuer
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise ConfigurationError(f"Registry configuration is not valid XML: {e}") from e

    registry = IssuerRegistry(_parse_entry(child) for child in root)
    logger.info("Loaded issuer registry with %d issuer(s)", len(registry))
    return registry


def load_registry_file(path: str) -> IssuerRegistry:
    """
    Build a registry from an XML file.

    Args:
        path: Path to the configuration file

    Returns:
        Fully built IssuerRegistry
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            xml_text = f.read()
    except OSError as e:
        raise ConfigurationError(f"Cannot read registry configuration: {e}", path) from e
    return load_registry_xml(xml_text)


def load_registry_from_env() -> IssuerRegistry:
    """Build the registry from the file named by ISSUER_REGISTRY_CONFIG."""
    path = os.getenv("ISSUER_REGISTRY_CONFIG")
    if not path:
        raise ConfigurationError("ISSUER_REGISTRY_CONFIG is not set")
    return load_registry_file(path)
