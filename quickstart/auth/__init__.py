"""
Authentication Package

This package wires Auth0 (OpenID Connect) into the application.

Modules:
- oidc: Registration of the Auth0 scheme with Authlib
- session: Cookie session scheme (sign in/out, current user dependencies)
- claims: Well-known claim names and profile extraction
- tokens: InitialApplicationState / TokenProvider dependencies
- routes: /login, /callback and /logout

The authentication flow:
1. A page links to /login?redirectUri=<path>
2. The Auth0 scheme is challenged and the user signs in at Auth0
3. /callback exchanges the code for tokens and signs the user in
4. The user is sent back to <path>
5. /logout clears the session and ends the Auth0 session
"""

from .routes import account_router
from .session import NotAuthenticatedError

__all__ = [
    "account_router",
    "NotAuthenticatedError",
]
