"""
Unit Tests for Weather Services
"""

import random
from datetime import date

import httpx
import pytest

from quickstart.models import TokenProvider, WeatherForecast
from quickstart.services.weather import (
    SUMMARIES,
    ForecastApiClient,
    ForecastApiError,
    WeatherForecastService,
)


API_URL = "http://api.example.com/weatherforecast"


def make_client(handler) -> ForecastApiClient:
    return ForecastApiClient(API_URL, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_sample_forecast_starts_tomorrow():
    service = WeatherForecastService(random.Random(1))

    forecasts = await service.get_forecast(date(2026, 10, 16))

    assert len(forecasts) == 5
    assert forecasts[0].date == date(2026, 10, 17)
    assert forecasts[-1].date == date(2026, 10, 21)
    for forecast in forecasts:
        assert -20 <= forecast.temperature_c <= 55
        assert forecast.summary in SUMMARIES


def test_fahrenheit_conversion():
    assert WeatherForecast(date=date(2026, 1, 1), temperature_c=0).temperature_f == 32
    assert WeatherForecast(date=date(2026, 1, 1), temperature_c=100).temperature_f == 211


@pytest.mark.asyncio
async def test_api_client_requires_access_token():
    client = make_client(lambda request: httpx.Response(200, json=[]))

    with pytest.raises(ForecastApiError):
        await client.get_forecast(TokenProvider(id_token="id-only"))


@pytest.mark.asyncio
async def test_api_client_sends_bearer_token():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer access-123"
        return httpx.Response(200, json=[{"date": "2026-10-17", "temperature_c": 5}])

    forecasts = await make_client(handler).get_forecast(TokenProvider(access_token="access-123"))

    assert forecasts == [WeatherForecast(date=date(2026, 10, 17), temperature_c=5)]


@pytest.mark.asyncio
async def test_api_client_server_error():
    client = make_client(lambda request: httpx.Response(503))

    with pytest.raises(ForecastApiError) as exc_info:
        await client.get_forecast(TokenProvider(access_token="access-123"))

    assert "503" in str(exc_info.value)


@pytest.mark.asyncio
async def test_api_client_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ForecastApiError) as exc_info:
        await make_client(handler).get_forecast(TokenProvider(access_token="access-123"))

    assert "Unable to reach" in str(exc_info.value)


@pytest.mark.asyncio
async def test_api_client_invalid_payload():
    client = make_client(lambda request: httpx.Response(200, json=[{"unexpected": True}]))

    with pytest.raises(ForecastApiError):
        await client.get_forecast(TokenProvider(access_token="access-123"))
