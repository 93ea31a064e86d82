"""Unit tests for the typed configuration schema helpers."""

from __future__ import annotations

import pytest

from jmxelastic.config.schema import ElasticWriterSettings


def build_payload(**overrides):
    payload = {
        "connection_url": "http://elastic.local:9200",
        "root_prefix": "metrics",
        "verify_ssl": "false",
        "boolean_as_number": "sí",
    }
    payload.update(overrides)
    return payload


def test_settings_parse_and_coerce_values():
    settings = ElasticWriterSettings.from_mapping(build_payload())

    assert settings.connection_url == "http://elastic.local:9200"
    assert settings.root_prefix == "metrics"
    assert settings.verify_ssl is False
    assert settings.boolean_as_number is True
    assert settings.debug is False


def test_settings_default_root_prefix():
    settings = ElasticWriterSettings.from_mapping({"connection_url": "https://es:9200"})

    assert settings.root_prefix == "jmxtrans"


def test_settings_accept_camel_case_keys():
    settings = ElasticWriterSettings.from_mapping(
        {"connectionUrl": "http://es:9200", "rootPrefix": "jvm-", "booleanAsNumber": True}
    )

    assert settings.connection_url == "http://es:9200"
    assert settings.root_prefix == "jvm-"
    assert settings.boolean_as_number is True


def test_settings_require_connection_url():
    with pytest.raises(ValueError, match="'connection_url' es obligatorio"):
        ElasticWriterSettings.from_mapping({"root_prefix": "metrics"})


def test_settings_reject_url_without_scheme():
    with pytest.raises(ValueError, match="http:// o https://"):
        ElasticWriterSettings.from_mapping(build_payload(connection_url="elastic.local:9200"))


def test_settings_password_requires_username():
    with pytest.raises(ValueError, match="password requiere username"):
        ElasticWriterSettings.from_mapping(build_payload(password="secret"))


def test_settings_round_trip_through_dict():
    settings = ElasticWriterSettings.from_mapping(build_payload(username="elastic", password="secret"))

    assert ElasticWriterSettings.from_mapping(settings.to_dict()) == settings
