"""
Cookie Session Scheme
=====================

Keeps the signed-in user between requests. The session itself is a cookie
signed by Starlette's SessionMiddleware; this module decides what goes into
it and exposes FastAPI dependencies to read it back.

Session layout:
    user           - claims of the signed-in user
    tokens         - id_token / access_token / refresh_token
    auth_properties - redirect target kept across the OIDC challenge
"""

import logging
from typing import Any, Dict, Mapping, Optional

from fastapi import Request
from pydantic import BaseModel, Field

from quickstart.auth.claims import (
    EMAIL_CLAIM,
    NAME_CLAIM,
    PICTURE_CLAIM,
    SUBJECT_CLAIM,
    UserClaims,
)


logger = logging.getLogger("quickstart.auth.session")

USER_SESSION_KEY = "user"
TOKENS_SESSION_KEY = "tokens"
PROPERTIES_SESSION_KEY = "auth_properties"

TOKEN_NAMES = ("id_token", "access_token", "refresh_token")

# Claims kept in the cookie; the rest stay inside the id_token.
# Browsers drop cookies over 4096 bytes.
SESSION_CLAIMS = (SUBJECT_CLAIM, NAME_CLAIM, EMAIL_CLAIM, PICTURE_CLAIM)


# =============================================================================
# Exceptions
# =============================================================================

class NotAuthenticatedError(Exception):
    """Raised when a route requiring a signed-in user is hit anonymously."""

    def __init__(self, return_url: str = "/"):
        super().__init__(f"Authentication required for {return_url}")
        self.return_url = return_url


# =============================================================================
# Authentication Properties
# =============================================================================

class AuthenticationProperties(BaseModel):
    """Property bag carried through a login challenge or a sign-out."""
    redirect_uri: str = Field(default="/", description="Where to send the user afterwards")
    items: Dict[str, str] = Field(default_factory=dict, description="Extra values kept with the request")


def is_local_url(url: Optional[str]) -> bool:
    """
    Check that a redirect target stays on this site.

    Accepts absolute paths ('/profile') and rejects scheme-relative
    ('//evil.com') or backslash variants browsers treat the same way.
    """
    if not url or not url.startswith("/"):
        return False
    if len(url) > 1 and url[1] in ("/", "\\"):
        return False
    return True


def build_properties(redirect_uri: Optional[str]) -> AuthenticationProperties:
    """Build a property bag, falling back to '/' for non-local targets."""
    if not is_local_url(redirect_uri):
        if redirect_uri:
            logger.warning("Ignoring non-local redirect target")
        return AuthenticationProperties(redirect_uri="/")
    return AuthenticationProperties(redirect_uri=redirect_uri)


def store_properties(request: Request, properties: AuthenticationProperties) -> None:
    request.session[PROPERTIES_SESSION_KEY] = properties.model_dump()


def pop_properties(request: Request) -> AuthenticationProperties:
    """Take the property bag stored at login, or a default one."""
    data = request.session.pop(PROPERTIES_SESSION_KEY, None)
    if not data:
        return AuthenticationProperties()
    return AuthenticationProperties(**data)


# =============================================================================
# Sign In / Sign Out
# =============================================================================

def sign_in(request: Request, claims: Mapping[str, Any], token: Mapping[str, Any]) -> UserClaims:
    """
    Sign a user in with the cookie scheme.

    Args:
        request: Current request (session must be installed)
        claims: Claims of the authenticated user
        token: Token response from the OIDC scheme

    Returns:
        UserClaims for the signed-in user
    """
    user_claims = {
        key: claims[key] for key in SESSION_CLAIMS if claims.get(key) is not None
    }

    request.session[USER_SESSION_KEY] = user_claims
    request.session[TOKENS_SESSION_KEY] = {
        name: token.get(name) for name in TOKEN_NAMES
    }

    user = UserClaims(user_claims)
    logger.info(
        "User signed in",
        extra={
            "user_id": user.subject,
            "has_refresh_token": bool(token.get("refresh_token")),
        },
    )
    return user


def sign_out(request: Request) -> None:
    """Remove the signed-in user and their tokens from the session."""
    user = get_current_user(request)
    request.session.pop(USER_SESSION_KEY, None)
    request.session.pop(TOKENS_SESSION_KEY, None)

    if user is not None:
        logger.info("User signed out", extra={"user_id": user.subject})


def get_token(request: Request, name: str) -> Optional[str]:
    """
    Read a stored token by name.

    Args:
        request: Current request
        name: One of 'id_token', 'access_token', 'refresh_token'

    Returns:
        The token, or None when not signed in or not issued
    """
    if name not in TOKEN_NAMES:
        raise ValueError(f"Unknown token name: {name}")

    tokens = request.session.get(TOKENS_SESSION_KEY) or {}
    return tokens.get(name)


# =============================================================================
# FastAPI Dependencies
# =============================================================================

def get_current_user(request: Request) -> Optional[UserClaims]:
    """
    Dependency for optional authentication.

    Returns:
        UserClaims of the signed-in user, None for anonymous requests
    """
    claims = request.session.get(USER_SESSION_KEY)
    if not claims:
        return None
    return UserClaims(claims)


def require_user(request: Request) -> UserClaims:
    """
    Dependency for routes that need a signed-in user.

    Raises:
        NotAuthenticatedError: When nobody is signed in; the application
            turns this into a redirect to the login route.
    """
    user = get_current_user(request)
    if user is None:
        return_url = request.url.path
        if request.url.query:
            return_url = f"{return_url}?{request.url.query}"
        raise NotAuthenticatedError(return_url)
    return user


__all__ = [
    "AuthenticationProperties",
    "NotAuthenticatedError",
    "build_properties",
    "get_current_user",
    "get_token",
    "is_local_url",
    "pop_properties",
    "require_user",
    "sign_in",
    "sign_out",
    "store_properties",
    "TOKEN_NAMES",
]
