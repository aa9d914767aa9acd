"""
Auth0 quickstart for a server-rendered FastAPI application.

Shows how to register an OIDC scheme, handle login/logout, read profile
claims and pass the user's tokens to page components.
"""

__version__ = "1.0.0"
