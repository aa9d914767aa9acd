"""
Page routes: home, profile and fetch data.

Profile and fetch data require a signed-in user. The fetch data page is the
consumer of the TokenProvider: when a forecast API is configured it calls it
with the user's access token.
"""

import logging
from datetime import date
from html import escape
from typing import List, Optional

from fastapi import APIRouter, Depends, Request

from quickstart.auth.claims import UserClaims, get_user_profile
from quickstart.auth.session import get_current_user, require_user
from quickstart.auth.tokens import get_token_provider
from quickstart.config import get_request_settings
from quickstart.models import TokenProvider, WeatherForecast
from quickstart.pages.layout import render_error_page, render_page
from quickstart.services.weather import (
    ForecastApiClient,
    ForecastApiError,
    WeatherForecastService,
    get_forecast_service,
)


logger = logging.getLogger("quickstart.pages")

pages_router = APIRouter(tags=["pages"])


def get_forecast_api_client(request: Request) -> Optional[ForecastApiClient]:
    """Forecast API client when FORECAST_API_URL is configured, else None."""
    settings = get_request_settings(request)
    if not settings.FORECAST_API_URL:
        return None
    return ForecastApiClient(
        settings.FORECAST_API_URL,
        timeout=settings.FORECAST_API_TIMEOUT_SECONDS,
    )


@pages_router.get("/", name="index")
async def index(user: Optional[UserClaims] = Depends(get_current_user)):
    if user is None:
        body = """
            <h1>Hello, world!</h1>
            <p>Welcome to your new app.</p>
            <p>Log in to see your profile and the weather forecast.</p>
        """
    else:
        body = f"""
            <h1>Hello, {escape(user.name)}!</h1>
            <p>Welcome to your new app.</p>
        """
    return render_page("Home", body, user=user, current_path="/")


@pages_router.get("/profile", name="profile")
async def profile(user: UserClaims = Depends(require_user)):
    """Show the picture, name and email claims of the signed-in user."""
    user_profile = get_user_profile(user)

    picture = ""
    if user_profile.picture:
        picture = f'<img class="avatar" src="{escape(user_profile.picture)}" alt="Avatar">'

    body = f"""
            <h1>User Profile</h1>
            {picture}
            <h2>{escape(user_profile.name)}</h2>
            <p>{escape(user_profile.email)}</p>
    """
    return render_page("Profile", body, user=user, current_path="/profile")


def _render_forecast_table(forecasts: List[WeatherForecast]) -> str:
    rows = "\n".join(
        f"<tr><td>{forecast.date.isoformat()}</td>"
        f"<td>{forecast.temperature_c}</td>"
        f"<td>{forecast.temperature_f}</td>"
        f"<td>{escape(forecast.summary or '')}</td></tr>"
        for forecast in forecasts
    )
    return f"""
            <table>
                <thead>
                    <tr><th>Date</th><th>Temp. (C)</th><th>Temp. (F)</th><th>Summary</th></tr>
                </thead>
                <tbody>
                {rows}
                </tbody>
            </table>
    """


@pages_router.get("/fetchdata", name="fetchdata")
async def fetch_data(
    user: UserClaims = Depends(require_user),
    token_provider: TokenProvider = Depends(get_token_provider),
    forecast_service: WeatherForecastService = Depends(get_forecast_service),
    api_client: Optional[ForecastApiClient] = Depends(get_forecast_api_client),
):
    """Weather forecast, from the protected API when one is configured."""
    if api_client is not None:
        try:
            forecasts = await api_client.get_forecast(token_provider)
        except ForecastApiError as e:
            logger.warning(f"Forecast API unavailable: {e}", extra={"user_id": user.subject})
            return render_error_page(
                title="Weather forecast unavailable",
                message=str(e),
                user=user,
                show_retry=False,
                status_code=502,
            )
        source = "the forecast API"
    else:
        forecasts = await forecast_service.get_forecast(date.today())
        source = "sample data"

    body = f"""
            <h1>Weather forecast</h1>
            <p>This component demonstrates fetching data from {source}.</p>
            {_render_forecast_table(forecasts)}
    """
    return render_page("Weather forecast", body, user=user, current_path="/fetchdata")
