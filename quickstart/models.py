"""
Data Models Module

This module defines Pydantic models used across the quickstart application.

Models are organized by functional area:
- Token models (initial render state, injectable token holder)
- Profile models (claims shown on the profile page)
- Forecast models (sample data for the authorized page)
- Service models (health and error responses)
"""

import datetime as dt
from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, Field, computed_field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Token Models
# ============================================================================

class InitialApplicationState(BaseModel):
    """Tokens read from the authenticated HTTP context to seed a page render."""
    id_token: Optional[str] = Field(None, description="OIDC identity token")
    access_token: Optional[str] = Field(None, description="OAuth2 access token")
    refresh_token: Optional[str] = Field(None, description="OAuth2 refresh token")


class TokenProvider(BaseModel):
    """
    Injectable token holder consumed by UI components and services.

    Populated once per request from an InitialApplicationState; components
    depend on this instead of reaching into the session themselves.
    """
    id_token: Optional[str] = Field(None, description="OIDC identity token")
    access_token: Optional[str] = Field(None, description="OAuth2 access token")
    refresh_token: Optional[str] = Field(None, description="OAuth2 refresh token")

    def seed(self, state: InitialApplicationState) -> "TokenProvider":
        self.id_token = state.id_token
        self.access_token = state.access_token
        self.refresh_token = state.refresh_token
        return self

    @property
    def has_access_token(self) -> bool:
        return bool(self.access_token)

    def authorization_header(self) -> Dict[str, str]:
        """
        Bearer header for calling a protected API.

        Returns:
            {"Authorization": "Bearer <access_token>"} or an empty dict
            when no access token is held.
        """
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}


# ============================================================================
# Profile Models
# ============================================================================

class UserProfile(BaseModel):
    """User profile information read from the signed-in user's claims."""
    name: str = Field(default="", description="User display name")
    email: str = Field(default="", description="User email address")
    picture: str = Field(default="", description="Avatar URL")


# ============================================================================
# Forecast Models
# ============================================================================

class WeatherForecast(BaseModel):
    """A single day of forecast data."""
    date: dt.date = Field(..., description="Forecast date")
    temperature_c: int = Field(..., description="Temperature in Celsius")
    summary: Optional[str] = Field(None, description="Short description")

    @computed_field
    @property
    def temperature_f(self) -> int:
        return 32 + int(self.temperature_c / 0.5556)


# ============================================================================
# Health Check Models
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service health status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp")


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standardized error response model."""
    error: str = Field(..., description="Error type or code")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[str] = Field(None, description="Exception detail (debug only)")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")
