import logging

import pytest

from secure_hello.config import (
    DEFAULT_PORT,
    HARDCODED_API_KEY,
    UNSET_API_KEY,
    Settings,
    resolve_api_key,
)


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})
    assert settings.port == DEFAULT_PORT == "8080"
    assert settings.address == ":8080"
    assert settings.tls_enabled is False
    assert settings.api_key is None
    assert settings.secret_source == "env"
    assert settings.log_level == "INFO"


def test_empty_port_uses_default():
    assert Settings.from_env({"PORT": ""}).port == "8080"


def test_port_is_kept_verbatim():
    settings = Settings.from_env({"PORT": "9090"})
    assert settings.port == "9090"
    assert settings.address == ":9090"


@pytest.mark.parametrize(
    "cert, key, expected",
    [
        ("cert.pem", "key.pem", True),
        ("cert.pem", "", False),
        ("", "key.pem", False),
        ("", "", False),
    ],
)
def test_tls_requires_cert_and_key(cert, key, expected):
    settings = Settings.from_env({"TLS_CERT_FILE": cert, "TLS_KEY_FILE": key})
    assert settings.tls_enabled is expected


def test_settings_are_frozen():
    settings = Settings.from_env({})
    with pytest.raises(AttributeError):
        settings.port = "1"


def test_unset_api_key_warns_and_substitutes(caplog):
    caplog.set_level(logging.WARNING, logger="secure_hello")
    assert resolve_api_key(Settings.from_env({})) == UNSET_API_KEY == "not-set"
    assert "API_KEY environment variable not set." in caplog.text


def test_api_key_from_environment(caplog):
    caplog.set_level(logging.WARNING, logger="secure_hello")
    assert resolve_api_key(Settings.from_env({"API_KEY": "xyz"})) == "xyz"
    assert caplog.records == []


def test_hardcoded_source_ignores_environment():
    settings = Settings.from_env({"SECRET_SOURCE": "Hardcoded", "API_KEY": "xyz"})
    assert settings.secret_source == "hardcoded"
    assert resolve_api_key(settings) == HARDCODED_API_KEY == "dummy-go-key-9876"


def test_unknown_secret_source_falls_back_to_env(caplog):
    caplog.set_level(logging.WARNING, logger="secure_hello")
    settings = Settings.from_env({"SECRET_SOURCE": "vault"})
    assert settings.secret_source == "env"
    assert "Unknown SECRET_SOURCE" in caplog.text


def test_log_level_is_normalised():
    assert Settings.from_env({"LOG_LEVEL": "debug"}).log_level == "DEBUG"
    assert Settings.from_env({"LOG_LEVEL": "loud"}).log_level == "INFO"
