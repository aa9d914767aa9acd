"""
Configuration module for the Auth0 quickstart application.

This module uses Pydantic Settings to load and validate environment variables
for the Auth0 (OIDC) scheme, the session cookie scheme, the optional
protected forecast API, and server/logging settings.

Environment variables are loaded from .env file or system environment.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from fastapi import Request
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Everything the Auth0 scheme needs (domain, client id, scopes) and the
    session cookie that carries the signed-in user between requests.
    """

    # =========================================================================
    # Auth0 Configuration (OIDC Authentication)
    # =========================================================================

    AUTH0_DOMAIN: str = Field(
        ...,
        description="Auth0 tenant domain (e.g., 'dev-abc123.us.auth0.com')",
        min_length=1,
    )

    AUTH0_CLIENT_ID: str = Field(
        ...,
        description="Auth0 application Client ID",
        min_length=1,
    )

    AUTH0_CLIENT_SECRET: Optional[str] = Field(
        None,
        description="Auth0 application Client Secret (optional for public clients using PKCE)",
    )

    AUTH0_SCOPE: str = Field(
        default="openid profile email",
        description="Space-separated scopes requested at login",
    )

    AUTH0_AUDIENCE: Optional[str] = Field(
        None,
        description="API identifier to request an access token for (optional)",
    )

    AUTH0_USE_REFRESH_TOKENS: bool = Field(
        default=False,
        description="Request the offline_access scope so Auth0 issues a refresh token",
    )

    # =========================================================================
    # Session Cookie Configuration
    # =========================================================================

    SESSION_SECRET: str = Field(
        ...,
        description="Secret key used to sign the session cookie",
        min_length=32,
    )

    SESSION_COOKIE_NAME: str = Field(
        default="quickstart.session",
        description="Name of the session cookie",
    )

    SESSION_MAX_AGE_SECONDS: int = Field(
        default=8 * 60 * 60,
        description="Session cookie lifetime in seconds",
        ge=300,
        le=14 * 24 * 60 * 60,
    )

    SESSION_HTTPS_ONLY: bool = Field(
        default=False,
        description="Mark the session cookie Secure (enable behind HTTPS)",
    )

    # =========================================================================
    # Protected API Configuration
    # =========================================================================

    FORECAST_API_URL: Optional[str] = Field(
        None,
        description="Weather forecast API called with the user's access token (optional)",
    )

    FORECAST_API_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Timeout for forecast API requests",
        gt=0,
    )

    # =========================================================================
    # Server Configuration
    # =========================================================================

    APP_HOST: str = Field(
        default="127.0.0.1",
        description="Host to bind the web server",
    )

    APP_PORT: int = Field(
        default=3000,
        description="Port to bind the web server",
        ge=1,
        le=65535,
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # =========================================================================
    # Pydantic Settings Configuration
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def auth0_authority(self) -> str:
        """
        Construct the Auth0 authority URL.

        Returns:
            Base URL of the tenant, without trailing slash.
        """
        return f"https://{self.AUTH0_DOMAIN}"

    @property
    def server_metadata_url(self) -> str:
        """OpenID discovery document for the tenant."""
        return f"{self.auth0_authority}/.well-known/openid-configuration"

    @property
    def logout_endpoint(self) -> str:
        """Auth0 endpoint that ends the session at the identity provider."""
        return f"{self.auth0_authority}/v2/logout"

    @property
    def scope_list(self) -> List[str]:
        """
        Parse AUTH0_SCOPE into a de-duplicated list, adding offline_access
        when refresh tokens are enabled.
        """
        scopes: List[str] = []
        for scope in self.AUTH0_SCOPE.split():
            if scope not in scopes:
                scopes.append(scope)

        if self.AUTH0_USE_REFRESH_TOKENS and "offline_access" not in scopes:
            scopes.append("offline_access")

        return scopes

    @property
    def requested_scope(self) -> str:
        """Scope string sent in the authorization request."""
        return " ".join(self.scope_list)

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("AUTH0_DOMAIN")
    @classmethod
    def normalize_domain(cls, v: str) -> str:
        """
        Accept either a bare domain or a URL and keep only the host.

        Raises:
            ValueError: If the domain is empty or contains a path
        """
        domain = v.strip()
        for prefix in ("https://", "http://"):
            if domain.lower().startswith(prefix):
                domain = domain[len(prefix):]
        domain = domain.rstrip("/")

        if not domain:
            raise ValueError("AUTH0_DOMAIN must not be empty")

        if "/" in domain or " " in domain:
            raise ValueError(
                f"Invalid domain format: '{v}'. "
                "Expected format: 'tenant.region.auth0.com'"
            )

        return domain

    @field_validator("AUTH0_SCOPE")
    @classmethod
    def validate_scope(cls, v: str) -> str:
        """The OIDC scheme needs the openid scope to receive an ID token."""
        if "openid" not in v.split():
            raise ValueError("AUTH0_SCOPE must include 'openid'")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

        if level not in allowed_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of {allowed_levels}, got: {v}"
            )

        return level


# =============================================================================
# Settings Singleton
# =============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get or create a singleton Settings instance.

    This function is cached so that the settings are loaded only once
    during the application lifecycle.

    Returns:
        Settings instance with all configuration loaded and validated.

    Raises:
        ValidationError: If required environment variables are missing
                        or invalid.
    """
    return Settings()


# =============================================================================
# Configuration Helpers
# =============================================================================

def validate_configuration(settings: Optional[Settings] = None) -> dict:
    """
    Validate critical configuration settings and return a status report.

    Called during application startup so misconfiguration shows up in the
    logs before the first login attempt.

    Returns:
        Dictionary with validation status and any warnings.
    """
    settings = settings or get_settings()
    errors = []
    warnings = []

    if settings.AUTH0_DOMAIN.startswith(("localhost", "127.0.0.1")):
        errors.append("AUTH0_DOMAIN points to localhost")

    if not settings.AUTH0_CLIENT_SECRET:
        warnings.append(
            "AUTH0_CLIENT_SECRET is not set (application must be configured as a public client)"
        )

    if not settings.SESSION_HTTPS_ONLY:
        warnings.append("SESSION_HTTPS_ONLY is disabled (session cookie sent over plain HTTP)")

    if settings.FORECAST_API_URL and not settings.AUTH0_AUDIENCE:
        warnings.append(
            "FORECAST_API_URL is set without AUTH0_AUDIENCE (access token may not be accepted by the API)"
        )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
        "domain": settings.AUTH0_DOMAIN,
        "scope": settings.requested_scope,
    }


def log_configuration_status(settings: Settings, logger: logging.Logger) -> None:
    """Log the result of validate_configuration() at the appropriate level."""
    status = validate_configuration(settings)

    for error in status["errors"]:
        logger.error(f"Configuration error: {error}")

    for warning in status["warnings"]:
        logger.warning(f"Configuration warning: {warning}")


def get_request_settings(request: Request) -> Settings:
    """
    Settings of the application serving the request.

    create_app() stores its settings on app.state; fall back to the cached
    singleton when none were given.
    """
    settings = getattr(request.app.state, "settings", None)
    return settings or get_settings()
