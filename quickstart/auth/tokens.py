"""
Token propagation from the authenticated HTTP context to page components.

The tokens stored by the cookie scheme are read once per request into an
InitialApplicationState, which then seeds the TokenProvider that pages and
services receive through dependency injection.
"""

from fastapi import Depends, Request

from quickstart.auth.session import get_token
from quickstart.models import InitialApplicationState, TokenProvider


def get_initial_state(request: Request) -> InitialApplicationState:
    """Read the three named tokens off the current session."""
    return InitialApplicationState(
        id_token=get_token(request, "id_token"),
        access_token=get_token(request, "access_token"),
        refresh_token=get_token(request, "refresh_token"),
    )


def get_token_provider(
    request: Request,
    initial_state: InitialApplicationState = Depends(get_initial_state),
) -> TokenProvider:
    """
    Dependency returning the request's TokenProvider.

    The provider is seeded on first use and cached on request.state so every
    component rendered for the same request shares one instance.
    """
    provider = getattr(request.state, "token_provider", None)
    if provider is None:
        provider = TokenProvider().seed(initial_state)
        request.state.token_provider = provider
    return provider
