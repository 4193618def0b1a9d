"""Test class Settings."""
from pydantic import ValidationError
import pytest

from calculator_client_server.common.config import Settings


def test_settings_defaults() -> None:
    """An empty environment gives the documented defaults."""
    settings = Settings.from_env({})
    assert settings.api_url is None
    assert settings.api_timeout_ms == 3000
    assert settings.api_timeout == 3.0
    assert (settings.basic_auth_user, settings.basic_auth_pass) == ("admin", "admin")
    assert settings.port == 3000
    assert settings.frontend_origins == ["http://localhost:3001"]
    assert settings.log_level == "INFO"


def test_settings_from_env() -> None:
    """Environment variables override the defaults."""
    settings = Settings.from_env({
        "API_URL": "http://backend:3000",
        "API_TIMEOUT_MS": "500",
        "BASIC_AUTH_USER": "alice",
        "BASIC_AUTH_PASS": "secret",
        "SERVER_HOST": "0.0.0.0",
        "SERVER_PORT": "8080",
        "FRONTEND_ORIGINS": "http://a.test, http://b.test,",
        "LOG_LEVEL": "debug",
    })
    assert str(settings.api_url).startswith("http://backend:3000")
    assert settings.api_timeout == 0.5
    assert settings.basic_auth_user == "alice"
    assert settings.basic_auth_pass == "secret"
    assert settings.host == "0.0.0.0"
    assert settings.port == 8080
    assert settings.frontend_origins == ["http://a.test", "http://b.test"]
    assert settings.log_level == "DEBUG"


def test_settings_empty_variable_keeps_default() -> None:
    """An empty API_URL means no endpoint."""
    assert Settings.from_env({"API_URL": ""}).api_url is None


def test_settings_reads_os_environ(monkeypatch) -> None:
    """from_env reads os.environ when no mapping is given."""
    monkeypatch.setenv("BASIC_AUTH_USER", "bob")
    assert Settings.from_env().basic_auth_user == "bob"


@pytest.mark.parametrize("env", [
    {"SERVER_PORT": "70000"},
    {"SERVER_PORT": "http"},
    {"API_TIMEOUT_MS": "0"},
    {"API_URL": "not a url"},
    {"LOG_LEVEL": "LOUD"},
])
def test_settings_invalid_values(env) -> None:
    """Invalid values raise a ValidationError."""
    with pytest.raises(ValidationError):
        Settings.from_env(env)


def test_settings_are_frozen() -> None:
    """Settings cannot change once built."""
    settings = Settings.from_env({})
    with pytest.raises(ValidationError):
        settings.port = 1
