"""
Account routes for Auth0 login, callback and logout.

The OIDC challenge and code exchange are performed by the registered
Authlib client; these handlers only build the redirect-target property bag,
trigger the challenge and sign the user in or out of the cookie scheme.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx
from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from quickstart.auth.claims import UserClaims
from quickstart.auth.oidc import AUTH0_SCHEME, COOKIE_SCHEME, get_auth0_client
from quickstart.auth.session import (
    build_properties,
    pop_properties,
    require_user,
    sign_in,
    sign_out,
    store_properties,
)
from quickstart.config import get_request_settings
from quickstart.pages.layout import render_error_page


logger = logging.getLogger("quickstart.auth.routes")

POST_LOGOUT_REDIRECT = "/"


# =============================================================================
# Router Setup
# =============================================================================

account_router = APIRouter(tags=["authentication"])


# =============================================================================
# Login Endpoint
# =============================================================================

@account_router.get("/login", name="login")
async def login(
    request: Request,
    redirect_uri: Optional[str] = Query(
        "/",
        alias="redirectUri",
        description="Local path to return to after login",
    ),
):
    """
    Challenge the Auth0 scheme.

    Stores the redirect target in the session and redirects the browser
    to the Auth0 authorization endpoint.

    Query Parameters:
        redirectUri: Local path to return to once signed in

    Returns:
        RedirectResponse to Auth0
    """
    settings = get_request_settings(request)

    properties = build_properties(redirect_uri)
    store_properties(request, properties)

    callback_url = str(request.url_for("callback"))

    authorize_params = {}
    if settings.AUTH0_AUDIENCE:
        authorize_params["audience"] = settings.AUTH0_AUDIENCE

    logger.debug(
        f"Challenging {AUTH0_SCHEME} scheme",
        extra={"redirect_uri": properties.redirect_uri},
    )

    client = get_auth0_client(request)
    return await client.authorize_redirect(request, callback_url, **authorize_params)


# =============================================================================
# Callback Endpoint
# =============================================================================

@account_router.get("/callback", name="callback")
async def callback(request: Request):
    """
    Complete the Auth0 login.

    Exchanges the authorization code for tokens, signs the user in with the
    cookie scheme and returns them to the page they started from.

    Returns:
        RedirectResponse to the stored redirect target, or an error page
    """
    client = get_auth0_client(request)

    try:
        token = await client.authorize_access_token(request)

        claims = token.get("userinfo")
        if not claims:
            claims = await client.userinfo(token=token)
    except OAuthError as e:
        logger.warning(
            f"{AUTH0_SCHEME} login failed: {e.error}",
            extra={"description": e.description},
        )
        return render_error_page(
            title="Authentication Failed",
            message=f"Unable to authenticate: {e.description or e.error}",
        )
    except httpx.HTTPError as e:
        logger.error(f"Unable to reach {AUTH0_SCHEME}: {e}")
        return render_error_page(
            title="Authentication Failed",
            message="Unable to communicate with the authentication service. Please try again.",
        )

    sign_in(request, claims, token)

    properties = pop_properties(request)
    return RedirectResponse(url=properties.redirect_uri, status_code=302)


# =============================================================================
# Logout Endpoint
# =============================================================================

@account_router.get("/logout", name="logout")
async def logout(request: Request, user: UserClaims = Depends(require_user)):
    """
    Sign out of both schemes.

    Clears the cookie session, then redirects to Auth0 so the session at the
    identity provider ends as well. Auth0 sends the browser back to '/'.

    Returns:
        RedirectResponse to the Auth0 logout endpoint
    """
    settings = get_request_settings(request)

    properties = build_properties(POST_LOGOUT_REDIRECT)
    return_to = str(request.base_url).rstrip("/") + properties.redirect_uri

    sign_out(request)
    logger.debug(f"Signed out of {COOKIE_SCHEME} scheme", extra={"user_id": user.subject})

    params = {
        "client_id": settings.AUTH0_CLIENT_ID,
        "returnTo": return_to,
    }
    logout_url = f"{settings.logout_endpoint}?{urlencode(params)}"

    return RedirectResponse(url=logout_url, status_code=302)
