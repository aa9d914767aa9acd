"""
Auth0 Client Registration Tests

The registered client must point at the tenant's discovery document and
request PKCE with the configured scopes.
"""

from unittest.mock import patch

from quickstart.auth.oidc import AUTH0_CLIENT_NAME, build_oauth


def test_registers_confidential_client(mock_settings):
    client = build_oauth(mock_settings).create_client(AUTH0_CLIENT_NAME)

    assert client.client_id == "test-client-id"
    assert client.client_secret == "test-client-secret"
    assert client.client_kwargs["scope"] == "openid profile email"
    assert client.client_kwargs["code_challenge_method"] == "S256"
    assert "token_endpoint_auth_method" not in client.client_kwargs


def test_registers_public_client_without_secret(mock_settings):
    settings = mock_settings.model_copy(update={"AUTH0_CLIENT_SECRET": None})

    client = build_oauth(settings).create_client(AUTH0_CLIENT_NAME)

    assert client.client_secret is None
    assert client.client_kwargs["token_endpoint_auth_method"] == "none"
    assert client.client_kwargs["code_challenge_method"] == "S256"


def test_refresh_tokens_request_offline_access(mock_settings):
    settings = mock_settings.model_copy(update={"AUTH0_USE_REFRESH_TOKENS": True})

    client = build_oauth(settings).create_client(AUTH0_CLIENT_NAME)

    assert client.client_kwargs["scope"].split() == ["openid", "profile", "email", "offline_access"]


def test_registration_uses_discovery_document(mock_settings):
    with patch("quickstart.auth.oidc.OAuth") as oauth_cls:
        oauth = build_oauth(mock_settings)

    assert oauth is oauth_cls.return_value
    oauth.register.assert_called_once()
    kwargs = oauth.register.call_args.kwargs
    assert kwargs["name"] == AUTH0_CLIENT_NAME
    assert kwargs["client_id"] == "test-client-id"
    assert kwargs["server_metadata_url"] == (
        "https://quickstart-test.us.auth0.com/.well-known/openid-configuration"
    )


def test_each_application_gets_its_own_registry(mock_settings):
    assert build_oauth(mock_settings) is not build_oauth(mock_settings)
