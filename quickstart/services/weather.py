"""
Weather forecast services for the authorized fetch-data page.

WeatherForecastService produces sample data locally. ForecastApiClient calls
a protected API instead, authenticating with the access token held by the
request's TokenProvider.
"""

import logging
import random
from datetime import date, timedelta
from typing import List, Optional

import httpx

from quickstart.models import TokenProvider, WeatherForecast


logger = logging.getLogger("quickstart.services.weather")

SUMMARIES = [
    "Freezing", "Bracing", "Chilly", "Cool", "Mild",
    "Warm", "Balmy", "Hot", "Sweltering", "Scorching",
]


class ForecastApiError(Exception):
    """Raised when the protected forecast API cannot be used."""
    pass


class WeatherForecastService:
    """Generates five days of sample forecasts."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    async def get_forecast(self, start_date: date, days: int = 5) -> List[WeatherForecast]:
        return [
            WeatherForecast(
                date=start_date + timedelta(days=index),
                temperature_c=self._rng.randint(-20, 55),
                summary=self._rng.choice(SUMMARIES),
            )
            for index in range(1, days + 1)
        ]


class ForecastApiClient:
    """
    Client for a forecast API protected by Auth0 access tokens.

    Args:
        base_url: Forecast endpoint URL
        timeout: Request timeout in seconds
        transport: Optional httpx transport (used by tests)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def get_forecast(self, token_provider: TokenProvider) -> List[WeatherForecast]:
        """
        Fetch forecasts on behalf of the signed-in user.

        Args:
            token_provider: Token holder for the current request

        Returns:
            List of forecasts returned by the API

        Raises:
            ForecastApiError: If no access token is held, the request fails
                or the API answers with an error status
        """
        if not token_provider.has_access_token:
            raise ForecastApiError("No access token available for the forecast API")

        headers = {"Accept": "application/json"}
        headers.update(token_provider.authorization_header())

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.get(self.base_url, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Forecast API request failed: {e}")
            raise ForecastApiError(f"Unable to reach forecast API: {e}") from e

        if response.status_code in (401, 403):
            logger.warning(f"Forecast API rejected access token: {response.status_code}")
            raise ForecastApiError("The forecast API rejected the access token")

        if not response.is_success:
            logger.error(f"Forecast API returned {response.status_code}")
            raise ForecastApiError(f"Forecast API returned status {response.status_code}")

        try:
            return [WeatherForecast(**item) for item in response.json()]
        except (ValueError, TypeError) as e:
            raise ForecastApiError(f"Invalid forecast API response: {e}") from e


# Global singleton instance
_forecast_service: Optional[WeatherForecastService] = None


def get_forecast_service() -> WeatherForecastService:
    """Get or create the sample forecast service instance"""
    global _forecast_service
    if _forecast_service is None:
        _forecast_service = WeatherForecastService()
    return _forecast_service
