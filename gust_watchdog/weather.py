"""Weather forecast module for fetching and processing weather data."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import pandas as pd
import requests

from gust_watchdog.config import Config
from gust_watchdog.errors import DecodeError, FetchError, LocationNotFoundError
from gust_watchdog.url_builder import build_forecast_url, build_geocoding_url

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 20  # seconds

FORECAST_COLUMNS = [
    "Time",
    "Wind Gust (m/s)",
    "Wind Speed (m/s)",
    "Temperature (°C)",
    "Description",
]


@dataclass(frozen=True)
class GeoLocation:
    name: str
    lat: float
    lon: float
    country: str = ""
    state: str = ""


def _get_json(url: str, api_key: str, session: Optional[requests.Session] = None):
    http = session or requests
    logger.debug("GET %s", url.replace(api_key, "***") if api_key else url)
    try:
        r = http.get(url, timeout=REQUEST_TIMEOUT)
        r.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Request to weather API failed: {e}") from e
    try:
        return r.json()
    except ValueError as e:
        raise DecodeError(f"Weather API returned invalid JSON: {e}") from e


def resolve_coordinates(config: Config, session: Optional[requests.Session] = None) -> GeoLocation:
    """
    Resolve the configured city to coordinates with the Geocoding API.

    Args:
        config (Config): Loaded configuration (city and API key are used)
        session (requests.Session, optional): Session to reuse for the request

    Returns:
        GeoLocation: The first match returned by the geocoder

    Raises:
        LocationNotFoundError: If the geocoder returned no results
        FetchError: On transport or HTTP status failures
        DecodeError: If the payload is not a list of locations
    """
    data = _get_json(build_geocoding_url(config.city, config.api_key), config.api_key, session)
    if not isinstance(data, list):
        raise DecodeError(f"Unexpected geocoding payload: {type(data).__name__}")
    if not data:
        raise LocationNotFoundError(f"No coordinates found for city: {config.city}")

    first = data[0]
    try:
        return GeoLocation(
            name=first.get("name") or config.city,
            lat=float(first["lat"]),
            lon=float(first["lon"]),
            country=first.get("country") or "",
            state=first.get("state") or "",
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"Missing coordinates in geocoding response: {e}") from e


def fetch_forecast(
    lat: float,
    lon: float,
    config: Config,
    session: Optional[requests.Session] = None,
) -> pd.DataFrame:
    """
    Fetch the multi-point forecast for a location.

    Args:
        lat (float): Latitude of the location
        lon (float): Longitude of the location
        config (Config): Loaded configuration (API key and timezone are used)
        session (requests.Session, optional): Session to reuse for the request

    Returns:
        pd.DataFrame: One row per forecast point in API order with columns
            Time (tz-aware, configured zone), Wind Gust (m/s), Wind Speed (m/s),
            Temperature (°C), Description
    """
    data = _get_json(build_forecast_url(lat, lon, config.api_key), config.api_key, session)

    try:
        entries = data["list"]
        times = [int(e["dt"]) for e in entries]

        gusts, speeds, temps, descriptions = [], [], [], []
        for e in entries:
            wind = e.get("wind") or {}
            # the provider leaves gust out in calm conditions
            gusts.append(float(wind.get("gust") or 0.0))
            speeds.append(float(wind.get("speed") or 0.0))
            temps.append((e.get("main") or {}).get("temp"))
            weather = e.get("weather") or [{}]
            descriptions.append(weather[0].get("description", ""))

        df = pd.DataFrame(
            {
                "Time": pd.to_datetime(pd.Series(times, dtype="int64"), unit="s", utc=True).dt.tz_convert(config.tz),
                "Wind Gust (m/s)": pd.Series(gusts, dtype="float64"),
                "Wind Speed (m/s)": pd.Series(speeds, dtype="float64"),
                "Temperature (°C)": pd.Series(temps, dtype="float64"),
                "Description": pd.Series(descriptions, dtype="object"),
            },
            columns=FORECAST_COLUMNS,
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"Malformed forecast response: {e}") from e
    return df


def get_weather_forecast(
    config: Config,
    session: Optional[requests.Session] = None,
) -> Tuple[GeoLocation, pd.DataFrame]:
    """Geocode the configured city, then fetch its forecast."""
    location = resolve_coordinates(config, session)
    logger.info(
        "Resolved coordinates for %s: lat %.4f, lon %.4f",
        location.name, location.lat, location.lon,
    )
    df = fetch_forecast(location.lat, location.lon, config, session)
    logger.debug("Forecast points received: %d", len(df))
    return location, df
