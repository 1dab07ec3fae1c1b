"""Tests for loading the issuer registry from XML configuration."""

import pytest

from issuer_trust.common.protocol import IssuerOptions
from issuer_trust.common.uri import parse_absolute_uri
from issuer_trust.storage.config import load_registry_file, load_registry_from_env, load_registry_xml
from issuer_trust.storage.registry import ConfigurationError


CONFIG = """
<issuerNameRegistry>
  <!-- production issuers -->
  <add issuerUri="https://issuer.example.com" />
  <add issuerUri="https://idp.example.org/federation" allowUriValidation="TRUE" />
  <add issuerUri="https://192.0.2.10/" allowIpValidation="true" allowUriValidation="yes" />
</issuerNameRegistry>
"""


def test_load_entries_and_flags():
    registry = load_registry_xml(CONFIG)
    assert len(registry) == 3
    assert registry.lookup(parse_absolute_uri("https://issuer.example.com/")) == IssuerOptions()
    assert registry.lookup(parse_absolute_uri("https://idp.example.org/federation")) == IssuerOptions(
        allow_uri_match=True
    )
    assert registry.lookup(parse_absolute_uri("https://192.0.2.10/")) == IssuerOptions(allow_ip_match=True)


def test_empty_configuration():
    assert len(load_registry_xml("<issuerNameRegistry />")) == 0


@pytest.mark.parametrize("xml_text,message", [
    ('<r><remove issuerUri="https://a.example.com" /></r>', "Only `<add>`"),
    ("<r><add /></r>", "requires attribute"),
    ('<r><add issuerUri="" /></r>', "requires attribute"),
    ('<r><add issuerUri="issuer.example.com" /></r>', "valid absolute URI"),
    ('<r><add issuerUri="https://a.example.com" /><add issuerUri="https://a.example.com/" /></r>', "already registered"),
    ("<r><add issuerUri=", "not valid XML"),
])
def test_configuration_errors(xml_text, message):
    with pytest.raises(ConfigurationError, match=message):
        load_registry_xml(xml_text)


def test_error_aborts_whole_load():
    xml_text = '<r><add issuerUri="https://a.example.com" /><bogus /></r>'
    with pytest.raises(ConfigurationError):
        load_registry_xml(xml_text)


def test_error_names_offending_element():
    with pytest.raises(ConfigurationError) as exc_info:
        load_registry_xml('<r><add issuerUri="relative/path" /></r>')
    assert "relative/path" in exc_info.value.element


def test_load_registry_file(tmp_path):
    path = tmp_path / "issuers.xml"
    path.write_text(CONFIG, encoding="utf-8")
    assert len(load_registry_file(str(path))) == 3


def test_load_registry_file_missing(tmp_path):
    with pytest.raises(ConfigurationError, match="Cannot read"):
        load_registry_file(str(tmp_path / "missing.xml"))


def test_load_registry_from_env(tmp_path, monkeypatch):
    path = tmp_path / "issuers.xml"
    path.write_text(CONFIG, encoding="utf-8")
    monkeypatch.setenv("ISSUER_REGISTRY_CONFIG", str(path))
    assert len(load_registry_from_env()) == 3


def test_load_registry_from_env_unset(monkeypatch):
    monkeypatch.delenv("ISSUER_REGISTRY_CONFIG", raising=False)
    with pytest.raises(ConfigurationError, match="ISSUER_REGISTRY_CONFIG"):
        load_registry_from_env()
