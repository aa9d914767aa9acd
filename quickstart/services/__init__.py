"""Services used by pages."""

from .weather import (
    ForecastApiClient,
    ForecastApiError,
    WeatherForecastService,
    get_forecast_service,
)

__all__ = [
    "ForecastApiClient",
    "ForecastApiError",
    "WeatherForecastService",
    "get_forecast_service",
]
