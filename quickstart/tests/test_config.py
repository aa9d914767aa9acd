"""
Configuration Tests

Settings validation, computed Auth0 endpoints and the startup report.
"""

import pytest
from pydantic import ValidationError

from quickstart.config import Settings, validate_configuration


def make_settings(**overrides):
    values = {
        "AUTH0_DOMAIN": "tenant.eu.auth0.com",
        "AUTH0_CLIENT_ID": "client-id",
        "SESSION_SECRET": "s" * 32,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestDomain:
    @pytest.mark.parametrize(
        "raw",
        [
            "tenant.eu.auth0.com",
            "https://tenant.eu.auth0.com",
            "https://tenant.eu.auth0.com/",
            "  tenant.eu.auth0.com  ",
        ],
    )
    def test_domain_is_normalized(self, raw):
        settings = make_settings(AUTH0_DOMAIN=raw)
        assert settings.AUTH0_DOMAIN == "tenant.eu.auth0.com"

    def test_domain_with_path_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(AUTH0_DOMAIN="tenant.eu.auth0.com/authorize")

    def test_endpoints(self):
        settings = make_settings()

        assert settings.auth0_authority == "https://tenant.eu.auth0.com"
        assert settings.server_metadata_url == (
            "https://tenant.eu.auth0.com/.well-known/openid-configuration"
        )
        assert settings.logout_endpoint == "https://tenant.eu.auth0.com/v2/logout"


class TestScope:
    def test_default_scope(self):
        assert make_settings().requested_scope == "openid profile email"

    def test_scope_must_include_openid(self):
        with pytest.raises(ValidationError):
            make_settings(AUTH0_SCOPE="profile email")

    def test_refresh_tokens_add_offline_access(self):
        settings = make_settings(AUTH0_USE_REFRESH_TOKENS=True)
        assert settings.scope_list == ["openid", "profile", "email", "offline_access"]

    def test_duplicate_scopes_collapsed(self):
        settings = make_settings(
            AUTH0_SCOPE="openid profile openid offline_access",
            AUTH0_USE_REFRESH_TOKENS=True,
        )
        assert settings.requested_scope == "openid profile offline_access"


class TestSecrets:
    def test_short_session_secret_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(SESSION_SECRET="too-short")

    def test_log_level_is_upper_cased(self):
        assert make_settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(LOG_LEVEL="chatty")


class TestValidateConfiguration:
    def test_public_client_warns(self):
        status = validate_configuration(make_settings())

        assert status["valid"]
        assert any("AUTH0_CLIENT_SECRET" in w for w in status["warnings"])

    def test_forecast_api_without_audience_warns(self):
        status = validate_configuration(
            make_settings(
                AUTH0_CLIENT_SECRET="secret",
                FORECAST_API_URL="http://localhost:5001/weatherforecast",
            )
        )

        assert any("AUTH0_AUDIENCE" in w for w in status["warnings"])

    def test_localhost_domain_is_an_error(self):
        status = validate_configuration(make_settings(AUTH0_DOMAIN="localhost:8443"))

        assert not status["valid"]
        assert status["errors"]
