"""
Auth0 OIDC scheme registration.

The authorization-code flow (discovery, PKCE, token exchange, ID token
validation) is handled by Authlib's Starlette client. This module only
registers the Auth0 client with the settings the application needs.
"""

import logging

from authlib.integrations.starlette_client import OAuth, StarletteOAuth2App
from fastapi import Request

from quickstart.config import Settings


logger = logging.getLogger("quickstart.auth.oidc")

# Scheme names used by the login/logout handlers
AUTH0_SCHEME = "Auth0"
COOKIE_SCHEME = "Cookies"

# Name of the client in the Authlib registry
AUTH0_CLIENT_NAME = "auth0"


def build_oauth(settings: Settings) -> OAuth:
    """
    Create an OAuth registry with the Auth0 client registered.

    A new registry is created per application because Authlib caches
    clients by name.

    Args:
        settings: Application settings (domain, client id, scopes)

    Returns:
        OAuth registry holding the 'auth0' client
    """
    oauth = OAuth()

    client_kwargs = {
        "scope": settings.requested_scope,
        "code_challenge_method": "S256",
    }
    if not settings.AUTH0_CLIENT_SECRET:
        client_kwargs["token_endpoint_auth_method"] = "none"

    oauth.register(
        name=AUTH0_CLIENT_NAME,
        client_id=settings.AUTH0_CLIENT_ID,
        client_secret=settings.AUTH0_CLIENT_SECRET,
        server_metadata_url=settings.server_metadata_url,
        client_kwargs=client_kwargs,
    )

    logger.info(
        f"Registered {AUTH0_SCHEME} scheme for {settings.AUTH0_DOMAIN}",
        extra={"scope": settings.requested_scope},
    )

    return oauth


def get_auth0_client(request: Request) -> StarletteOAuth2App:
    """Resolve the registered Auth0 client for the current application."""
    oauth: OAuth = request.app.state.oauth
    return oauth.create_client(AUTH0_CLIENT_NAME)
